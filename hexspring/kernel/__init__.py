# hexspring/kernel - Mass-spring simulation core
"""
KERNEL: THE MASS-SPRING ENGINE
==============================

    vector.py      Vector3 arithmetic
    topology.py    Hexahedral elements -> unique edge set -> springs
    integrate.py   Per-step impulse accumulation, Euler integration, driver loop

topology and integrate depend on hexspring.model, which itself depends on
vector, so only vector is re-exported here. Import the other two by module:

    from hexspring.kernel.topology import build_edge_set, build_springs
    from hexspring.kernel.integrate import run_simulation
"""

from .vector import Vector3, distance

__all__ = ['Vector3', 'distance']

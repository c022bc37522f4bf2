# hexspring/simulation.py
"""
MASS-SPRING SYSTEM: Mesh In, Relaxed Positions Out
==================================================

Glue between the file-shaped data (HexMesh, BoundaryConditions) and the
kernel. Typical use:

    mesh = read_hex_mesh("sphere.hex")
    bc = read_boundary_conditions("input1.txt")

    system = MassSpringSystem.from_mesh(mesh)
    system.apply(bc)
    result = system.run()

    write_obj("sphere.obj", system.positions(), system.edges())
"""

import logging
from typing import List, Optional, Tuple

import numpy as np

from .boundary import BoundaryConditions, BoundarySummary, apply_boundary_conditions
from .config import SimulationConfig, DEFAULT_CONFIG
from .kernel.integrate import SimulationResult, run_simulation, simulation_step
from .kernel.topology import build_edge_set, build_springs
from .model import HexMesh, Point, Spring, make_points

logger = logging.getLogger(__name__)


class MassSpringSystem:
    """
    Points, springs and the constants that drive them.

    The points list is built once and never reordered; springs refer to
    points by index.
    """

    def __init__(
        self,
        points: List[Point],
        springs: List[Spring],
        config: SimulationConfig = DEFAULT_CONFIG,
    ):
        self.points = points
        self.springs = springs
        self.config = config
        self._initial = np.array([p.position.as_tuple() for p in points], dtype=float).reshape(-1, 3)
        self.boundary: Optional[BoundarySummary] = None

    @classmethod
    def from_mesh(cls, mesh: HexMesh, config: SimulationConfig = DEFAULT_CONFIG) -> "MassSpringSystem":
        """Create a point per vertex and a spring per unique element edge."""
        points = make_points(mesh.vertices)
        springs = build_springs(points, build_edge_set(mesh.elements))
        return cls(points, springs, config)

    def apply(self, bc: BoundaryConditions) -> BoundarySummary:
        """
        Apply boundary conditions. displacements() is measured from the mesh
        as loaded, so pulled vertices report the pull offset.
        """
        self.boundary = apply_boundary_conditions(self.points, bc, self.config)
        return self.boundary

    def step(self) -> float:
        return simulation_step(self.points, self.springs, self.config)

    def run(self, progress: bool = False) -> SimulationResult:
        return run_simulation(self.points, self.springs, self.config, progress=progress)

    # ------------------------------------------------------------------
    # Views
    # ------------------------------------------------------------------

    @property
    def n_points(self) -> int:
        return len(self.points)

    @property
    def n_springs(self) -> int:
        return len(self.springs)

    def positions(self) -> np.ndarray:
        """Current positions as an (N, 3) array."""
        return np.array([p.position.as_tuple() for p in self.points], dtype=float).reshape(-1, 3)

    def velocities(self) -> np.ndarray:
        return np.array([p.velocity.as_tuple() for p in self.points], dtype=float).reshape(-1, 3)

    def initial_positions(self) -> np.ndarray:
        """Positions as loaded from the mesh, before any boundary condition."""
        return self._initial.copy()

    def displacements(self) -> np.ndarray:
        """Current minus initial position for every point."""
        return self.positions() - self._initial

    def fixed_mask(self) -> np.ndarray:
        return np.array([p.fixed for p in self.points], dtype=bool)

    def degrees(self) -> np.ndarray:
        return np.array([p.degree for p in self.points], dtype=int)

    def edges(self, one_based: bool = True) -> List[Tuple[int, int]]:
        """Endpoint index pairs of every spring, 1-based by default."""
        off = 1 if one_based else 0
        return [(s.i + off, s.j + off) for s in self.springs]

    def spring_strains(self) -> np.ndarray:
        """(cur_len - rest_len) / rest_len per spring, as of the last step."""
        return np.array([(s.cur_len - s.rest_len) / s.rest_len for s in self.springs], dtype=float)

# hexspring - Mass-spring relaxation of hexahedral meshes
"""
HEXSPRING: Mass-Spring Deformation of Hexahedral Meshes
=======================================================

Every mesh vertex is a point mass, every unique element edge a damped
spring. A few vertices are pulled, the rest relax by explicit time stepping.

ARCHITECTURE:
-------------
    kernel/         The engine (Vector3, topology builder, time stepping)
    model.py        Point, Spring, HexMesh
    boundary.py     Fixed / fallback / pulled vertex rules
    simulation.py   MassSpringSystem: mesh + BCs -> relaxed positions
    io.py           .hex / boundary-condition readers, .obj writer
    config.py       SimulationConfig (physical constants, iteration budget)
    post.py         Results tables and summary metrics (pandas)
    generative/     Structured block meshes
    viz/            Plotly wireframe viewer
    cli.py          Command-line entry point
"""

from .config import SimulationConfig, DEFAULT_CONFIG
from .errors import HexSpringError, MeshFormatError, VertexIndexError, DegenerateSpringError
from .model import Point, Spring, HexMesh
from .boundary import BoundaryConditions, apply_boundary_conditions
from .simulation import MassSpringSystem

__version__ = "0.1.0"

# hexspring/model.py
"""
MODEL DEFINITIONS: Point and Spring
===================================

PURPOSE:
--------
The two pieces of mutable simulation state:
- Point: a mesh vertex treated as a point mass
- Spring: a damped connector between two points

A Point's identity is its index in the points list. The list is created once
at load time and never reordered, so Springs store the two integer indices of
their endpoints instead of references to the Point objects.

LIFECYCLE:
----------
    points = [Point.at(x, y, z) for ...]       degree 0, not fixed
    springs = build_springs(points, edges)     rest_len measured, degrees += 1
    ... every step ...
    spring.cur_len = distance(...)             only cur_len changes on a Spring
"""

from dataclasses import dataclass, field
from typing import List

import numpy as np

from .kernel.vector import Vector3


@dataclass
class Point:
    """
    A mesh vertex modelled as a point mass.

    Attributes:
    -----------
    position : Vector3
        Current location
    velocity : Vector3
        Current velocity, zero at load time
    impulse : Vector3
        Accumulated spring impulse for the current step, reset every step
    fixed : bool
        Pinned points are never moved by the integrator
    degree : int
        Number of springs attached to this point. Set while building the
        topology and not touched afterwards.
    """
    position: Vector3
    velocity: Vector3 = field(default_factory=Vector3)
    impulse: Vector3 = field(default_factory=Vector3)
    fixed: bool = False
    degree: int = 0

    @classmethod
    def at(cls, x: float, y: float, z: float) -> "Point":
        return cls(position=Vector3(float(x), float(y), float(z)))


@dataclass
class Spring:
    """
    A damped spring between points i and j.

    rest_len is the distance between the endpoints when the spring is built.
    Neither the endpoints nor rest_len change afterwards; cur_len is
    refreshed by every simulation step.

    Mesh springs come from kernel.topology.build_springs(), which is also the
    only place Point.degree is incremented.
    """
    i: int
    j: int
    rest_len: float
    cur_len: float


def make_points(coords) -> List[Point]:
    """Create one Point per (x, y, z) row."""
    return [Point.at(x, y, z) for x, y, z in coords]


@dataclass
class HexMesh:
    """
    A hexahedral mesh as read from disk or generated.

    vertices : np.ndarray
        (N, 3) float array of initial vertex coordinates
    elements : np.ndarray
        (M, 8) int array of 0-based vertex indices per hexahedron
    """
    vertices: np.ndarray
    elements: np.ndarray

    @property
    def n_vertices(self) -> int:
        return int(self.vertices.shape[0])

    @property
    def n_elements(self) -> int:
        return int(self.elements.shape[0])

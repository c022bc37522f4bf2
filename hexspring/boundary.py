# hexspring/boundary.py
"""
BOUNDARY CONDITIONS: Pinning and Pulling Vertices
=================================================

Three rules are applied after the springs exist, strictly in this order:

1. EXPLICIT: every vertex in the fixed list is pinned.
2. FALLBACK: only if the fixed list is empty, every vertex with fewer than
   config.min_degree springs is pinned. Under-connected vertices sit on the
   mesh boundary and would otherwise fly off.
3. PULL: every vertex in the displaced list is moved by config.pull_offset
   and then pinned. This is the prescribed displacement that the rest of the
   mesh relaxes towards.

A rule can pin a vertex that is already pinned. No rule ever unpins one.
"""

import logging
from dataclasses import dataclass, field
from typing import List, Sequence

from .config import SimulationConfig, DEFAULT_CONFIG
from .errors import VertexIndexError
from .kernel.vector import Vector3
from .model import Point

logger = logging.getLogger(__name__)


@dataclass
class BoundaryConditions:
    """
    Vertex lists read from the boundary-condition file (0-based indices).

    Parameters:
    -----------
    fixed : List[int]
        Vertices pinned in place. May be empty, which enables the fallback rule.
    displaced : List[int]
        Vertices moved by the configured offset and then pinned.
    """
    fixed: List[int] = field(default_factory=list)
    displaced: List[int] = field(default_factory=list)


@dataclass(frozen=True)
class BoundarySummary:
    """How many vertices each rule touched."""
    n_explicit: int
    n_fallback: int
    n_displaced: int
    n_fixed_total: int


def _check_indices(indices: Sequence[int], n_points: int, what: str) -> None:
    for idx in indices:
        if not 0 <= idx < n_points:
            raise VertexIndexError(
                f"{what} vertex {idx + 1} out of range (mesh has {n_points} vertices)"
            )


def apply_boundary_conditions(
    points: Sequence[Point],
    bc: BoundaryConditions,
    config: SimulationConfig = DEFAULT_CONFIG,
) -> BoundarySummary:
    """
    Apply the explicit, fallback and pull rules to the points in place.

    Must be called after build_springs(), since the fallback rule reads the
    spring degree of each point.

    Raises:
    -------
    VertexIndexError
        If any index in bc.fixed or bc.displaced is out of range. Nothing is
        modified in that case.
    """
    n = len(points)
    _check_indices(bc.fixed, n, "Fixed")
    _check_indices(bc.displaced, n, "Displaced")

    for idx in bc.fixed:
        points[idx].fixed = True

    n_fallback = 0
    if not bc.fixed:
        for p in points:
            if p.degree < config.min_degree:
                p.fixed = True
                n_fallback += 1
        logger.info(
            "No fixed vertices given: pinned %d vertices with fewer than %d springs",
            n_fallback, config.min_degree,
        )

    offset = Vector3(*config.pull_offset)
    for idx in bc.displaced:
        p = points[idx]
        p.position = p.position + offset
        p.fixed = True

    summary = BoundarySummary(
        n_explicit=len(set(bc.fixed)),
        n_fallback=n_fallback,
        n_displaced=len(bc.displaced),
        n_fixed_total=sum(1 for p in points if p.fixed),
    )
    logger.info(
        "Boundary conditions applied: %d fixed in total (%d displaced by %s)",
        summary.n_fixed_total, summary.n_displaced, config.pull_offset,
    )
    return summary

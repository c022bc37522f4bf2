# hexspring/kernel/topology.py
"""
TOPOLOGY: Hexahedral Elements to a Unique Spring Set
====================================================

PURPOSE:
--------
Turn an element list into the spring graph. Every hexahedron contributes the
12 edges of a cube:

         7-------6
        /|      /|        bottom face:  0-1, 1-2, 2-3, 3-0
       4-------5 |        top face:     4-5, 5-6, 6-7, 7-4
       | 3-----|-2        verticals:    0-4, 1-5, 2-6, 3-7
       |/      |/
       0-------1

Neighbouring elements share faces, so the same physical edge is produced by
up to four elements. Each edge is stored under its canonical EdgeKey (lo, hi)
in a set, so it becomes exactly one Spring no matter how many elements
reference it.

All indices in this module are 0-based.
"""

import logging
from dataclasses import dataclass
from typing import Iterable, List, Optional, Sequence, Set

from ..errors import DegenerateSpringError, MeshFormatError, VertexIndexError
from ..model import Point, Spring
from .vector import distance

logger = logging.getLogger(__name__)

NODES_PER_HEX = 8


@dataclass(frozen=True, order=True)
class EdgeKey:
    """
    Undirected edge between two vertices in canonical (lo, hi) order.

    Examples:
    ---------
    >>> EdgeKey.of(5, 2) == EdgeKey.of(2, 5)
    True
    >>> EdgeKey.of(5, 2)
    EdgeKey(lo=2, hi=5)
    """
    lo: int
    hi: int

    @classmethod
    def of(cls, a: int, b: int) -> "EdgeKey":
        a, b = int(a), int(b)
        return cls(a, b) if a <= b else cls(b, a)

    @property
    def is_loop(self) -> bool:
        return self.lo == self.hi


def hex_element_edges(element: Sequence[int]) -> List[EdgeKey]:
    """
    The 12 edges of one hexahedral element.

    Parameters:
    -----------
    element : Sequence[int]
        At least 8 vertex indices (bottom face 0..3, top face 4..7).
        Anything after the 8th value is ignored.

    Returns:
    --------
    List[EdgeKey]
        Bottom, top and vertical edge for each corner in turn. Degenerate
        elements may yield loops (lo == hi); build_edge_set() drops them.
    """
    if len(element) < NODES_PER_HEX:
        raise MeshFormatError(
            f"Hexahedral element needs {NODES_PER_HEX} vertex indices, got {len(element)}"
        )
    e = element
    edges = []
    for c in range(4):
        edges.append(EdgeKey.of(e[c], e[(c + 1) % 4]))
        edges.append(EdgeKey.of(e[c + 4], e[(c + 1) % 4 + 4]))
        edges.append(EdgeKey.of(e[c], e[c + 4]))
    return edges


def build_edge_set(elements: Iterable[Sequence[int]]) -> Set[EdgeKey]:
    """
    Deduplicated edge set of a hexahedral mesh.

    Adding an edge that is already present is a no-op. Loops produced by
    elements with repeated indices are discarded and reported.
    """
    edges: Set[EdgeKey] = set()
    n_loops = 0
    for element in elements:
        for edge in hex_element_edges(element):
            if edge.is_loop:
                n_loops += 1
                continue
            edges.add(edge)

    if n_loops:
        logger.warning("Dropped %d self-edges from degenerate elements", n_loops)
    return edges


def _connect(points: Sequence[Point], edge: EdgeKey) -> Optional[Spring]:
    """
    Spring for one edge, or None when its endpoints coincide.

    Degrees are only incremented for a spring that is actually built.
    """
    n = len(points)
    for idx in (edge.lo, edge.hi):
        if not 0 <= idx < n:
            raise VertexIndexError(f"Spring endpoint {idx} out of range for {n} points")
    if edge.is_loop:
        raise DegenerateSpringError(f"Spring from point {edge.lo} to itself")

    p1, p2 = points[edge.lo], points[edge.hi]
    rest_len = distance(p1.position, p2.position)
    if rest_len <= 0.0:
        logger.debug(
            "Edge %d-%d has zero length (points at %s)",
            edge.lo, edge.hi, p1.position.as_tuple(),
        )
        return None

    p1.degree += 1
    p2.degree += 1
    return Spring(i=edge.lo, j=edge.hi, rest_len=rest_len, cur_len=rest_len)


def build_springs(points: Sequence[Point], edges: Iterable[EdgeKey]) -> List[Spring]:
    """
    One Spring per edge, in ascending edge order.

    Edges between two vertices at the same location have no rest length and
    are dropped with a warning; the rest of the mesh is still built. After
    this returns every point's degree equals the number of springs that
    reference it.

    Raises:
    -------
    VertexIndexError
        If an edge references a vertex outside points
    DegenerateSpringError
        If an edge connects a vertex to itself
    """
    springs: List[Spring] = []
    n_zero = 0
    for edge in sorted(edges):
        spring = _connect(points, edge)
        if spring is None:
            n_zero += 1
            continue
        springs.append(spring)

    if n_zero:
        logger.warning("Dropped %d zero-length springs between coincident vertices", n_zero)
    logger.info("Built %d springs over %d points", len(springs), len(points))
    return springs

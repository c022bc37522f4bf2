# hexspring/io.py
"""
FILE FORMATS: .hex meshes, boundary-condition lists, .obj wireframes
====================================================================

All three formats are whitespace-delimited; line breaks carry no meaning.

MESH (.hex):
------------
    N
    x y z            (N rows)
    M
    a b c d e f g h t    (M rows: 8 one-based vertex indices + 1 ignored tag)

BOUNDARY CONDITIONS:
--------------------
    F
    i1 ... iF        one-based fixed vertices (F may be 0)
    D
    j1 ... jD        one-based displaced vertices (D may be 0, or missing)

WIREFRAME (.obj):
-----------------
    v x y z          one per vertex, input order
    l a b            one per spring, one-based

Readers return 0-based indices; writers emit 1-based ones.
"""

import logging
from pathlib import Path
from typing import Iterable, List, Tuple, Union

import numpy as np

from .boundary import BoundaryConditions
from .errors import MeshFormatError, VertexIndexError
from .model import HexMesh

logger = logging.getLogger(__name__)

PathLike = Union[str, Path]


class _Tokens:
    """Sequential reader over the whitespace-separated tokens of a file."""

    def __init__(self, text: str, source: str):
        self._tokens = text.split()
        self._pos = 0
        self.source = source

    def exhausted(self) -> bool:
        return self._pos >= len(self._tokens)

    def _next(self, what: str) -> str:
        if self.exhausted():
            raise MeshFormatError(f"{self.source}: unexpected end of file while reading {what}")
        tok = self._tokens[self._pos]
        self._pos += 1
        return tok

    def next_int(self, what: str) -> int:
        tok = self._next(what)
        try:
            return int(tok)
        except ValueError:
            raise MeshFormatError(f"{self.source}: expected integer {what}, got {tok!r}") from None

    def next_float(self, what: str) -> float:
        tok = self._next(what)
        try:
            return float(tok)
        except ValueError:
            raise MeshFormatError(f"{self.source}: expected number {what}, got {tok!r}") from None

    def count(self, what: str) -> int:
        n = self.next_int(what)
        if n < 0:
            raise MeshFormatError(f"{self.source}: {what} must be non-negative, got {n}")
        return n


def parse_hex_mesh(text: str, source: str = "<mesh>") -> HexMesh:
    """
    Parse the contents of a .hex mesh file.

    Returns:
    --------
    HexMesh
        Vertices as an (N, 3) float array and elements as an (M, 8) array of
        0-based indices. The trailing tag column is dropped.

    Raises:
    -------
    MeshFormatError
        Truncated file or non-numeric token
    VertexIndexError
        Element index outside 1..N
    """
    tokens = _Tokens(text, source)

    n_vertices = tokens.count("vertex count")
    vertices = np.empty((n_vertices, 3), dtype=float)
    for i in range(n_vertices):
        for axis in range(3):
            vertices[i, axis] = tokens.next_float(f"coordinate {axis} of vertex {i + 1}")

    n_elements = tokens.count("element count")
    elements = np.empty((n_elements, 8), dtype=int)
    for e in range(n_elements):
        for c in range(8):
            elements[e, c] = tokens.next_int(f"corner {c} of element {e + 1}")
        tokens.next_int(f"tag of element {e + 1}")

    if n_elements:
        bad = (elements < 1) | (elements > n_vertices)
        if bad.any():
            e, c = np.argwhere(bad)[0]
            raise VertexIndexError(
                f"{source}: element {e + 1} references vertex {elements[e, c]} "
                f"(mesh has {n_vertices} vertices)"
            )

    logger.info("Read %d vertices and %d hexahedra from %s", n_vertices, n_elements, source)
    return HexMesh(vertices=vertices, elements=elements - 1)


def read_hex_mesh(path: PathLike) -> HexMesh:
    """Read a .hex mesh file. A missing file raises the usual OSError."""
    path = Path(path)
    return parse_hex_mesh(path.read_text(), source=str(path))


def parse_boundary_conditions(text: str, source: str = "<bc>") -> BoundaryConditions:
    """
    Parse a boundary-condition list. Indices are converted to 0-based.

    The displaced section may be omitted entirely; range checks against the
    mesh happen in apply_boundary_conditions().
    """
    tokens = _Tokens(text, source)

    n_fixed = tokens.count("fixed vertex count")
    fixed = [tokens.next_int(f"fixed vertex {k + 1}") - 1 for k in range(n_fixed)]

    displaced: List[int] = []
    if not tokens.exhausted():
        n_displaced = tokens.count("displaced vertex count")
        displaced = [tokens.next_int(f"displaced vertex {k + 1}") - 1 for k in range(n_displaced)]

    logger.info("Read %d fixed and %d displaced vertices from %s", len(fixed), len(displaced), source)
    return BoundaryConditions(fixed=fixed, displaced=displaced)


def read_boundary_conditions(path: PathLike) -> BoundaryConditions:
    path = Path(path)
    return parse_boundary_conditions(path.read_text(), source=str(path))


def format_hex_mesh(mesh: HexMesh) -> str:
    """Serialize a mesh in .hex format (tag column written as 0)."""
    lines = [str(mesh.n_vertices)]
    lines.extend(f"{x:.17g} {y:.17g} {z:.17g}" for x, y, z in mesh.vertices)
    lines.append(str(mesh.n_elements))
    lines.extend(" ".join(str(int(i) + 1) for i in element) + " 0" for element in mesh.elements)
    return "\n".join(lines) + "\n"


def write_hex_mesh(path: PathLike, mesh: HexMesh) -> None:
    Path(path).write_text(format_hex_mesh(mesh))


def format_obj(positions: Iterable[Iterable[float]], edges: Iterable[Tuple[int, int]]) -> str:
    """
    Wireframe OBJ text: vertex lines then one line element per edge.

    edges must already be 1-based.
    """
    lines = [f"v {x:g} {y:g} {z:g}" for x, y, z in positions]
    lines.extend(f"l {a} {b}" for a, b in edges)
    return "\n".join(lines) + "\n"


def write_obj(path: PathLike, positions, edges) -> None:
    path = Path(path)
    path.write_text(format_obj(positions, edges))
    logger.info("Wrote wireframe to %s", path)

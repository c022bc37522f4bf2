# hexspring/generative/block.py
"""
BLOCK GENERATOR: Structured Hexahedral Meshes
=============================================

PURPOSE:
--------
Build a rectangular block split into nx × ny × nz hexahedra. Used by the
demo, the API and the tests to get meshes with known connectivity without
shipping mesh files.

NODE NUMBERING:
---------------
Vertex (ix, iy, iz) has index

    ix + (nx + 1) * (iy + (ny + 1) * iz)

so x varies fastest. Each element lists its bottom face (z = iz)
counter-clockwise seen from above, then the top face (z = iz + 1) in the
same order, which is the corner order hex_element_edges() expects.

CONNECTIVITY:
-------------
In the grid interior every vertex has 6 springs (±x, ±y, ±z). Face, edge
and corner vertices have 5, 4 and 3. A block with no explicit fixed list
therefore pins its whole surface under the fallback rule.
"""

from dataclasses import dataclass
from typing import List, Literal

import numpy as np

from ..model import HexMesh

Face = Literal['xmin', 'xmax', 'ymin', 'ymax', 'zmin', 'zmax']


@dataclass
class BlockParams:
    """
    Parameters of a structured block mesh.

    nx, ny, nz : int
        Number of elements along each axis (>= 1)
    width, depth, height : float
        Block size along x, y, z
    """
    nx: int = 2
    ny: int = 2
    nz: int = 2
    width: float = 1.0
    depth: float = 1.0
    height: float = 1.0

    def __post_init__(self):
        for name in ('nx', 'ny', 'nz'):
            if getattr(self, name) < 1:
                raise ValueError(f"{name} must be at least 1, got {getattr(self, name)}")
        for name in ('width', 'depth', 'height'):
            if getattr(self, name) <= 0:
                raise ValueError(f"{name} must be positive, got {getattr(self, name)}")


def _node_index(ix: int, iy: int, iz: int, params: BlockParams) -> int:
    return ix + (params.nx + 1) * (iy + (params.ny + 1) * iz)


def generate_block(params: BlockParams) -> HexMesh:
    """
    Generate the vertices and elements of a block.

    Returns:
    --------
    HexMesh
        (nx+1)(ny+1)(nz+1) vertices and nx*ny*nz elements, 0-based.

    Example:
    --------
    >>> mesh = generate_block(BlockParams(nx=1, ny=1, nz=1))
    >>> mesh.n_vertices, mesh.n_elements
    (8, 1)
    """
    xs = np.linspace(0.0, params.width, params.nx + 1)
    ys = np.linspace(0.0, params.depth, params.ny + 1)
    zs = np.linspace(0.0, params.height, params.nz + 1)

    vertices = np.array([(x, y, z) for z in zs for y in ys for x in xs], dtype=float)

    elements = []
    for iz in range(params.nz):
        for iy in range(params.ny):
            for ix in range(params.nx):
                bottom = [
                    _node_index(ix, iy, iz, params),
                    _node_index(ix + 1, iy, iz, params),
                    _node_index(ix + 1, iy + 1, iz, params),
                    _node_index(ix, iy + 1, iz, params),
                ]
                top = [
                    _node_index(ix, iy, iz + 1, params),
                    _node_index(ix + 1, iy, iz + 1, params),
                    _node_index(ix + 1, iy + 1, iz + 1, params),
                    _node_index(ix, iy + 1, iz + 1, params),
                ]
                elements.append(bottom + top)

    return HexMesh(vertices=vertices, elements=np.array(elements, dtype=int).reshape(-1, 8))


def block_face_vertices(params: BlockParams, face: Face) -> List[int]:
    """
    0-based indices of every vertex on one face of the block, in ascending order.

    Example:
    --------
    >>> block_face_vertices(BlockParams(nx=1, ny=1, nz=1), 'zmax')
    [4, 5, 6, 7]
    """
    if len(face) != 4 or face[0] not in 'xyz' or face[1:] not in ('min', 'max'):
        raise ValueError(f"Unknown face {face!r}; expected one of xmin, xmax, ymin, ymax, zmin, zmax")
    axis = 'xyz'.index(face[0])

    counts = (params.nx, params.ny, params.nz)
    target = 0 if face.endswith('min') else counts[axis]

    result = []
    for iz in range(params.nz + 1):
        for iy in range(params.ny + 1):
            for ix in range(params.nx + 1):
                if (ix, iy, iz)[axis] == target:
                    result.append(_node_index(ix, iy, iz, params))
    return sorted(result)

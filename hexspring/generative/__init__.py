# hexspring/generative - Parametric Mesh Generators
"""
GENERATIVE: Structured Hexahedral Meshes
========================================

Generate meshes from a handful of parameters instead of reading .hex files.

USAGE:
------
    from hexspring.generative import generate_block, BlockParams

    params = BlockParams(nx=4, ny=4, nz=2, width=2.0, depth=2.0, height=1.0)
    mesh = generate_block(params)
    top = block_face_vertices(params, 'zmax')
"""

from .block import generate_block, block_face_vertices, BlockParams

__all__ = ['generate_block', 'block_face_vertices', 'BlockParams']

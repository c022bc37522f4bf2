# hexspring/errors.py
"""Exception types raised by the mesh readers, topology builder and boundary conditions."""


class HexSpringError(RuntimeError):
    """Base class for all hexspring errors."""
    pass


class MeshFormatError(HexSpringError, ValueError):
    """Raised when a mesh or boundary-condition file is truncated or malformed."""
    pass


class VertexIndexError(HexSpringError, IndexError):
    """Raised when a vertex index does not refer to an existing vertex."""
    pass


class DegenerateSpringError(HexSpringError, ValueError):
    """Raised when a spring would connect a vertex to itself."""
    pass

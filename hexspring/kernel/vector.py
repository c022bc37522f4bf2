# hexspring/kernel/vector.py
"""
VECTOR3: 3D Vector Arithmetic
=============================

PURPOSE:
--------
The small value type every other part of the engine is written in terms of.
Positions, velocities and impulses of point masses are all Vector3.

Arithmetic operators return NEW vectors. Only normalize() and set_zero()
mutate in place, because the step loop reuses the impulse accumulator of
each point instead of allocating a fresh one.

    a + b, a - b, -a     component-wise
    a * s, s * a, a / s  scalar scaling
    a.dot(b)             scalar product
    a.mag()              Euclidean length

normalize() on the zero vector raises ZeroDivisionError. Callers that can
meet a zero-length direction (coincident spring endpoints) must check mag()
first.
"""

import math
from dataclasses import dataclass
from typing import Iterator, Tuple


@dataclass
class Vector3:
    """
    A 3D vector with float components.

    Examples:
    ---------
    >>> v = Vector3(3.0, 4.0, 0.0)
    >>> v.mag()
    5.0
    >>> (v * 2.0).as_tuple()
    (6.0, 8.0, 0.0)
    """
    x: float = 0.0
    y: float = 0.0
    z: float = 0.0

    def mag(self) -> float:
        """Magnitude (Euclidean norm) of the vector."""
        return math.sqrt(self.x * self.x + self.y * self.y + self.z * self.z)

    def dot(self, other: "Vector3") -> float:
        return self.x * other.x + self.y * other.y + self.z * other.z

    def normalize(self) -> "Vector3":
        """
        Scale this vector to unit length in place and return it.

        Raises:
        -------
        ZeroDivisionError
            If the vector has zero magnitude.
        """
        m = self.mag()
        self.x /= m
        self.y /= m
        self.z /= m
        return self

    def normalized(self) -> "Vector3":
        """Unit-length copy; see normalize()."""
        return self.copy().normalize()

    def set_zero(self) -> None:
        self.x = 0.0
        self.y = 0.0
        self.z = 0.0

    def copy(self) -> "Vector3":
        return Vector3(self.x, self.y, self.z)

    def as_tuple(self) -> Tuple[float, float, float]:
        return (self.x, self.y, self.z)

    def __iter__(self) -> Iterator[float]:
        yield self.x
        yield self.y
        yield self.z

    def __add__(self, other: "Vector3") -> "Vector3":
        return Vector3(self.x + other.x, self.y + other.y, self.z + other.z)

    def __sub__(self, other: "Vector3") -> "Vector3":
        return Vector3(self.x - other.x, self.y - other.y, self.z - other.z)

    def __neg__(self) -> "Vector3":
        return Vector3(-self.x, -self.y, -self.z)

    def __mul__(self, scalar: float) -> "Vector3":
        return Vector3(self.x * scalar, self.y * scalar, self.z * scalar)

    __rmul__ = __mul__

    def __truediv__(self, scalar: float) -> "Vector3":
        return Vector3(self.x / scalar, self.y / scalar, self.z / scalar)


def distance(a: Vector3, b: Vector3) -> float:
    """Euclidean distance between two points."""
    return (b - a).mag()

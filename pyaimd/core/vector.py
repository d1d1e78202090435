"""
Three-component vector algebra.

This module provides the Vector3D value type that every physical
quantity in the driver is built on.
"""
import math
from dataclasses import dataclass
from numbers import Real
from typing import Iterable, Tuple


@dataclass(frozen=True)
class Vector3D:
    """
    Immutable Cartesian vector.

    All operations return new instances. Scalar multiplication is
    commutative so formulas can be written as ``0.5 * v`` or ``v * 0.5``.

    Attributes:
        x: First component.
        y: Second component.
        z: Third component.

    Example:
        >>> v = Vector3D(3.0, 4.0, 0.0)
        >>> v.norm()
        5.0
        >>> (2.0 * v).x
        6.0
    """
    x: float
    y: float
    z: float

    # Keep numpy scalars from broadcasting over instances; ``np.float64 * v``
    # falls through to ``__rmul__``.
    __array_ufunc__ = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "x", float(self.x))
        object.__setattr__(self, "y", float(self.y))
        object.__setattr__(self, "z", float(self.z))

    @classmethod
    def zero(cls) -> "Vector3D":
        """Return the zero vector."""
        return cls(0.0, 0.0, 0.0)

    @classmethod
    def from_iterable(cls, values: Iterable[float]) -> "Vector3D":
        """
        Build a vector from any three-element iterable.

        Raises:
            ValueError: If the iterable does not hold exactly three values.
        """
        items = [float(v) for v in values]
        if len(items) != 3:
            raise ValueError(f"Vector3D needs 3 components, got {len(items)}")
        return cls(*items)

    def add(self, other: "Vector3D") -> "Vector3D":
        return Vector3D(self.x + other.x, self.y + other.y, self.z + other.z)

    def subtract(self, other: "Vector3D") -> "Vector3D":
        return Vector3D(self.x - other.x, self.y - other.y, self.z - other.z)

    def scale(self, scalar: float) -> "Vector3D":
        s = float(scalar)
        return Vector3D(self.x * s, self.y * s, self.z * s)

    def squared_norm(self) -> float:
        """Return x² + y² + z²."""
        return self.x * self.x + self.y * self.y + self.z * self.z

    def norm(self) -> float:
        """Return the Euclidean length."""
        return math.sqrt(self.squared_norm())

    def normalize(self) -> "Vector3D":
        """
        Return the unit vector pointing along this vector.

        Raises:
            ValueError: If the vector has zero length.
        """
        length = self.norm()
        if length == 0.0:
            raise ValueError("Cannot normalize a zero-length vector")
        return self.scale(1.0 / length)

    def as_tuple(self) -> Tuple[float, float, float]:
        return (self.x, self.y, self.z)

    def __add__(self, other: object) -> "Vector3D":
        if not isinstance(other, Vector3D):
            return NotImplemented
        return self.add(other)

    def __sub__(self, other: object) -> "Vector3D":
        if not isinstance(other, Vector3D):
            return NotImplemented
        return self.subtract(other)

    def __mul__(self, scalar: object) -> "Vector3D":
        if not isinstance(scalar, Real):
            return NotImplemented
        return self.scale(scalar)

    __rmul__ = __mul__

    def __neg__(self) -> "Vector3D":
        return self.scale(-1.0)

    def __str__(self) -> str:
        return f"x: {self.x}\ny: {self.y}\nz: {self.z}"

"""
Typed physical quantities.

Position, Velocity, Force, Acceleration and Momentum share the same
arithmetic but are distinct types. Adding a Force to a Position is an
error; formulas that combine kinds work on the underlying Vector3D and
re-tag the result explicitly::

    new_pos = Position.from_vector(pos.as_vec() + vel.as_vec() * dt)
    accel = force.as_kind(Acceleration) * (1.0 / mass)
"""
from numbers import Real
from typing import Type, TypeVar

from .vector import Vector3D

Q = TypeVar("Q", bound="Vectored")


class Vectored:
    """
    Base class for a Vector3D tagged with a physical kind.

    Instances are immutable. ``+`` and ``-`` accept only the same kind,
    scalar ``*`` works from either side and preserves the kind.

    Example:
        >>> f = Force(1.0, 0.0, 0.0)
        >>> (0.5 * f) + f
        Force(1.5, 0.0, 0.0)
        >>> f.as_kind(Acceleration)
        Acceleration(1.0, 0.0, 0.0)
    """

    __slots__ = ("_vec",)
    __array_ufunc__ = None

    def __init__(self, x: float = 0.0, y: float = 0.0, z: float = 0.0) -> None:
        object.__setattr__(self, "_vec", Vector3D(x, y, z))

    def __setattr__(self, name: str, value: object) -> None:
        raise AttributeError(f"{type(self).__name__} is immutable")

    @classmethod
    def from_vector(cls: Type[Q], vec: Vector3D) -> Q:
        return cls(vec.x, vec.y, vec.z)

    @classmethod
    def zero(cls: Type[Q]) -> Q:
        return cls(0.0, 0.0, 0.0)

    def as_vec(self) -> Vector3D:
        """Return the untyped vector."""
        return self._vec

    def as_kind(self, kind: Type[Q]) -> Q:
        """Re-tag the same components as another quantity kind."""
        return kind.from_vector(self._vec)

    @property
    def x(self) -> float:
        return self._vec.x

    @property
    def y(self) -> float:
        return self._vec.y

    @property
    def z(self) -> float:
        return self._vec.z

    def squared_norm(self) -> float:
        return self._vec.squared_norm()

    def norm(self) -> float:
        return self._vec.norm()

    def normalize(self: Q) -> Q:
        """
        Return the unit quantity of the same kind.

        Raises:
            ValueError: At zero norm.
        """
        return self.from_vector(self._vec.normalize())

    def _check_kind(self, other: object, op: str) -> None:
        if type(other) is not type(self):
            other_name = type(other).__name__
            raise TypeError(
                f"unsupported operand kinds for {op}: {type(self).__name__} and "
                f"{other_name}; convert explicitly with as_kind()"
            )

    def __add__(self: Q, other: object) -> Q:
        self._check_kind(other, "+")
        return self.from_vector(self._vec + other.as_vec())  # type: ignore[union-attr]

    def __sub__(self: Q, other: object) -> Q:
        self._check_kind(other, "-")
        return self.from_vector(self._vec - other.as_vec())  # type: ignore[union-attr]

    def __mul__(self: Q, scalar: object) -> Q:
        if not isinstance(scalar, Real):
            return NotImplemented
        return self.from_vector(self._vec * float(scalar))

    __rmul__ = __mul__

    def __neg__(self: Q) -> Q:
        return self.from_vector(-self._vec)

    def __eq__(self, other: object) -> bool:
        if type(other) is not type(self):
            return NotImplemented
        return self._vec == other._vec  # type: ignore[union-attr]

    def __hash__(self) -> int:
        return hash((type(self).__name__, self._vec))

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.x}, {self.y}, {self.z})"


class Position(Vectored):
    """Atomic position in Å."""

    __slots__ = ()


class Velocity(Vectored):
    """Atomic velocity in Å/fs."""

    __slots__ = ()


class Force(Vectored):
    """Force in amu·Å/fs²."""

    __slots__ = ()


class Acceleration(Vectored):
    """Acceleration in Å/fs²."""

    __slots__ = ()


class Momentum(Vectored):
    """Linear momentum in amu·Å/fs."""

    __slots__ = ()

"""
Atom class for AIMD simulations.

This module provides the Atom dataclass that carries both the static
properties of a particle and its dynamic state.
"""
from dataclasses import dataclass, field

from .quantities import Force, Momentum, Position, Velocity


@dataclass
class Atom:
    """
    A single particle in the simulation.

    The mass is fixed when the atom is created from the species table.
    ``mobile`` may be switched off once, before the run starts; a frozen
    atom keeps its position and zero velocity for the rest of the run but
    its forces are still stored so the force registers stay in sync with
    the backend.

    Attributes:
        symbol: Chemical symbol (e.g., 'O', 'H').
        mass: Atomic mass in amu.
        mobile: Whether integration moves this atom.
        position: Current position (Å).
        velocity: Current velocity (Å/fs).
        force: Force at the current geometry.
        next_force: Force at the geometry after the pending position update.

    Example:
        >>> from pyaimd.core import Atom, Position
        >>> atom = Atom("O", 15.999, position=Position(0.0, 0.0, 0.1))
        >>> atom.mobile
        True
    """
    symbol: str
    mass: float
    mobile: bool = True
    position: Position = field(default_factory=Position.zero)
    velocity: Velocity = field(default_factory=Velocity.zero)
    force: Force = field(default_factory=Force.zero)
    next_force: Force = field(default_factory=Force.zero)

    def __post_init__(self) -> None:
        """Validate atom properties after initialization."""
        if self.mass <= 0:
            raise ValueError(f"Atom mass must be positive, got {self.mass}")
        if not self.symbol:
            raise ValueError("Atom symbol cannot be empty")

    def freeze(self) -> None:
        """Pin the atom in place and zero its velocity."""
        self.mobile = False
        self.velocity = Velocity.zero()

    def momentum(self) -> Momentum:
        return self.velocity.as_kind(Momentum) * self.mass

    def kinetic_energy(self) -> float:
        """Return ½·m·|v|² in amu·Å²/fs²."""
        return 0.5 * self.mass * self.velocity.squared_norm()

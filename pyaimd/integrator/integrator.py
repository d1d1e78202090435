"""
Abstract base class for time integrators.

This module provides the Integrator ABC that defines how positions and
velocities of an atom list are advanced around a force evaluation.
"""
from abc import ABC, abstractmethod
from typing import List

from pyaimd.core import Atom, Position
from pyaimd.exceptions import ConfigurationError


class Integrator(ABC):
    """
    Abstract base for time integration algorithms (Strategy Pattern).

    A step is split in two halves around the force evaluation so that the
    caller can hand the new geometry to the backend before any velocity
    changes:

        positions = integrator.propose_positions(atoms)
        ... evaluate forces at positions, store them as atom.next_force ...
        integrator.advance_velocities(atoms)

    Attributes:
        dt: Time step size in fs.
    """

    def __init__(self, dt: float) -> None:
        """
        Initialize integrator.

        Args:
            dt: Time step size in fs.

        Raises:
            ConfigurationError: If dt is not positive.
        """
        if dt <= 0:
            raise ConfigurationError(f"Time step must be positive, got {dt}")
        self.dt = dt

    @abstractmethod
    def propose_positions(self, atoms: List[Atom]) -> List[Position]:
        """
        Return the positions after one step without modifying the atoms.

        Frozen atoms keep their current position.
        """
        pass

    @abstractmethod
    def advance_velocities(self, atoms: List[Atom]) -> None:
        """
        Update velocities from the stored forces and rotate force registers.

        Requires ``next_force`` to hold the forces at the new positions.
        """
        pass

    @abstractmethod
    def get_name(self) -> str:
        """Get human-readable name of this integrator."""
        pass

"""
Abstract base class for thermostats.

This module provides the Thermostat ABC that defines the interface
for temperature control applied to a SimulationState.
"""
from abc import ABC, abstractmethod

from pyaimd.core import SimulationState


class Thermostat(ABC):
    """
    Abstract base for thermostats (Strategy Pattern).

    Thermostats control the temperature of the simulation by modifying
    velocities.

    Attributes:
        target_temperature: Target temperature in Kelvin.
    """

    def __init__(self, target_temperature: float) -> None:
        """
        Initialize thermostat.

        Args:
            target_temperature: Target temperature in Kelvin.
        """
        if target_temperature < 0:
            raise ValueError(
                f"Target temperature must be non-negative, got {target_temperature}"
            )
        self.target_temperature = target_temperature

    @abstractmethod
    def apply(self, state: SimulationState) -> float:
        """
        Apply thermostat to the state.

        Modifies atom velocities in place.

        Args:
            state: The simulation state.

        Returns:
            The factor the velocities were scaled by.
        """
        pass

    @abstractmethod
    def get_name(self) -> str:
        """Get human-readable name of this thermostat."""
        pass

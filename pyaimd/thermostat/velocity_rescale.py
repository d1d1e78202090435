"""
Instantaneous velocity rescaling.

Used once at bootstrap to bring sampled velocities exactly to the
reference temperature.
"""
import logging
import math

from pyaimd.core import REFERENCE_TEMPERATURE, SimulationState

from .thermostat import Thermostat

LOGGER = logging.getLogger(__name__)


class VelocityRescaleThermostat(Thermostat):
    """
    Rescales all velocities to hit the target temperature exactly.

        T_inst = 2 * KE / (n_dof * R)
        s = sqrt(T_target / T_inst)
        v_new = s * v

    Example:
        >>> thermostat = VelocityRescaleThermostat()
        >>> scale = thermostat.apply(state)
        >>> state.compute_temperature()  # doctest: +SKIP
        300.0
    """

    def __init__(self, target_temperature: float = REFERENCE_TEMPERATURE) -> None:
        super().__init__(target_temperature)

    def apply(self, state: SimulationState) -> float:
        current_temp = state.compute_temperature()

        # Nothing to scale for a system at rest
        if current_temp <= 0.0:
            LOGGER.warning(
                "Kinetic energy is zero; velocities not rescaled to %.1f K",
                self.target_temperature,
            )
            return 1.0

        scale = math.sqrt(self.target_temperature / current_temp)
        for atom in state.atoms:
            atom.velocity = atom.velocity * scale
        LOGGER.info(
            "Rescaled velocities from %.2f K to %.2f K (factor %.6f)",
            current_temp,
            self.target_temperature,
            scale,
        )
        return scale

    def get_name(self) -> str:
        """Return thermostat name with parameters."""
        return f"VelocityRescale(T={self.target_temperature})"

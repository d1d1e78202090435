"""
Thermostat module for AIMD runs.

Provides temperature control algorithms:
- VelocityRescaleThermostat: Exact instantaneous rescale
"""

from .thermostat import Thermostat
from .velocity_rescale import VelocityRescaleThermostat

__all__ = [
    "Thermostat",
    "VelocityRescaleThermostat",
]

"""
Integrator module for AIMD runs.

Provides time integration algorithms:
- VelocityVerlet: Standard symplectic integrator
"""

from .integrator import Integrator
from .velocity_verlet import VelocityVerlet

__all__ = [
    "Integrator",
    "VelocityVerlet",
]

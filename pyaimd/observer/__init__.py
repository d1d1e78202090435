"""
Observer module for AIMD runs.

Provides the report sinks written during a run:
- TrajectoryReporter: XYZ frames
- EnergyReporter: Potential, kinetic and total energy
- VelocityReporter: Per-atom velocities (bootstrap)
- KineticReporter: Per-atom kinetic energies (bootstrap)
- ReportSet: Combine multiple reporters
"""

from .reporter import (
    EnergyReporter,
    KineticReporter,
    Reporter,
    ReportSet,
    TrajectoryReporter,
    VelocityReporter,
)

__all__ = [
    "Reporter",
    "ReportSet",
    "TrajectoryReporter",
    "EnergyReporter",
    "VelocityReporter",
    "KineticReporter",
]

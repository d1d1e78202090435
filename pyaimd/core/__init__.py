"""
Core module for AIMD simulations.

This module provides the fundamental classes for AIMD runs:
- Vector3D: Immutable Cartesian vector
- Position, Velocity, Force, Acceleration, Momentum: Typed quantities
- Atom: A particle with its dynamic state
- SimulationState: Snapshot of a run after a completed step
- ElementRegistry: Supported species and their masses
"""

from .atom import Atom
from .constants import (
    AMU_TO_KG,
    AVOGADRO,
    BOLTZMANN_SI,
    GAS_CONSTANT,
    HARTREE_BOHR_TO_FORCE,
    HARTREE_TO_REPORT,
    KINETIC_TO_REPORT,
    M2_S2_TO_A2_FS2,
    REFERENCE_TEMPERATURE,
    REPORT_TO_J_MOL,
)
from .element_registry import ElementData, ElementRegistry, elements
from .quantities import Acceleration, Force, Momentum, Position, Vectored, Velocity
from .state import SimulationState
from .vector import Vector3D

__all__ = [
    # Classes
    "Vector3D",
    "Vectored",
    "Position",
    "Velocity",
    "Force",
    "Acceleration",
    "Momentum",
    "Atom",
    "SimulationState",
    "ElementData",
    "ElementRegistry",
    # Singleton instance
    "elements",
    # Constants
    "AVOGADRO",
    "BOLTZMANN_SI",
    "GAS_CONSTANT",
    "REFERENCE_TEMPERATURE",
    "AMU_TO_KG",
    "M2_S2_TO_A2_FS2",
    "KINETIC_TO_REPORT",
    "REPORT_TO_J_MOL",
    "HARTREE_TO_REPORT",
    "HARTREE_BOHR_TO_FORCE",
]

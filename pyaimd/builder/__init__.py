"""
Builder module for AIMD runs.

Provides everything needed before the first force evaluation:
- StructureIngestor: Atoms from a Gaussian log
- ConstraintApplier: Frozen-atom selection
- RunParameters, GaussianSettings: Validated configuration
"""

from .config_loader import (
    GaussianSettings,
    RunParameters,
    build_run_parameters,
    load_backend_settings,
    load_yaml,
)
from .constraints import ConstraintApplier, parse_ranges
from .structure_ingestor import StructureIngestor, remove_com_velocity

__all__ = [
    "StructureIngestor",
    "remove_com_velocity",
    "ConstraintApplier",
    "parse_ranges",
    "RunParameters",
    "GaussianSettings",
    "build_run_parameters",
    "load_backend_settings",
    "load_yaml",
]

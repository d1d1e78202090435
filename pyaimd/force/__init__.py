"""
Force module for AIMD runs.

Provides the force/energy backend contract:
- ForceEvaluator: Abstract synchronous backend
- EvaluationResult: Energy and forces in backend units
- GaussianEvaluator: File-based Gaussian 16 backend
"""

from .evaluator import EvaluationResult, ForceEvaluator, Geometry
from .gaussian import GaussianEvaluator, parse_forces, parse_scf_energy

__all__ = [
    "ForceEvaluator",
    "EvaluationResult",
    "Geometry",
    "GaussianEvaluator",
    "parse_forces",
    "parse_scf_energy",
]

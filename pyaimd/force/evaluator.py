"""
Abstract base class for force evaluators.

A force evaluator is the single synchronous request/response boundary
between the driver and the quantum-chemistry program.
"""
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import List, Sequence, Tuple

from pyaimd.core import Position, Vector3D

Geometry = Sequence[Tuple[str, Position]]


@dataclass
class EvaluationResult:
    """
    Output of one force evaluation, in backend units.

    Attributes:
        potential_energy: Total electronic energy in Hartree.
        forces: One force per input atom in Hartree/Bohr, same order.
    """
    potential_energy: float
    forces: List[Vector3D] = field(default_factory=list)


class ForceEvaluator(ABC):
    """
    Abstract base for force/energy backends (Strategy Pattern).

    Implementations block until the calculation finishes. Any failure,
    including missing or garbled output, is raised as EvaluatorFailure;
    evaluators never retry.

    Example:
        >>> result = evaluator.evaluate([("O", Position(0.0, 0.0, 0.0))])
        >>> len(result.forces)
        1
    """

    @abstractmethod
    def evaluate(self, geometry: Geometry) -> EvaluationResult:
        """
        Compute energy and forces for a geometry.

        Args:
            geometry: Ordered (symbol, position in Å) pairs.

        Returns:
            Energy and per-atom forces in the same order as the input.

        Raises:
            EvaluatorFailure: If the backend fails.
        """
        pass

    @abstractmethod
    def get_name(self) -> str:
        """Get human-readable name of this evaluator."""
        pass

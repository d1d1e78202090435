"""
SimulationState for AIMD runs.

This module provides the SimulationState dataclass: everything a run
needs to continue from a given step. One instance is serialized per
completed step into the checkpoint log.
"""
from dataclasses import dataclass, field, replace
from typing import List, Optional

from pyaimd.exceptions import ConfigurationError

from .atom import Atom
from .constants import GAS_CONSTANT, KINETIC_TO_REPORT, REPORT_TO_J_MOL


@dataclass
class SimulationState:
    """
    Snapshot of the simulation after a completed step.

    The order of ``atoms`` is the index contract with the force
    evaluator: the i-th force returned belongs to the i-th atom.

    Attributes:
        atoms: Ordered list of atoms.
        time_step: Integration time step in fs.
        num_steps: Number of integration steps to run after bootstrap.
        step_num: Current step number (0 = bootstrap).
        potential_energy: Potential energy in 100 kJ/mol.
        kinetic_energy: Kinetic energy in 100 kJ/mol.
        total_energy: potential_energy + kinetic_energy.

    Example:
        >>> state = SimulationState(atoms=[Atom("H", 1.008)], time_step=0.5,
        ...                         num_steps=10)
        >>> state.time
        0.0
    """
    atoms: List[Atom] = field(default_factory=list)
    time_step: float = 1.0
    num_steps: int = 0
    step_num: int = 0
    potential_energy: float = 0.0
    kinetic_energy: float = 0.0
    total_energy: float = 0.0

    def __post_init__(self) -> None:
        """Validate run counters after initialization."""
        if self.time_step <= 0:
            raise ConfigurationError(
                f"Time step must be positive, got {self.time_step}"
            )
        if self.num_steps < 0:
            raise ConfigurationError(
                f"Number of steps must be non-negative, got {self.num_steps}"
            )
        if self.step_num < 0:
            raise ConfigurationError(
                f"Step number must be non-negative, got {self.step_num}"
            )

    @property
    def n_atoms(self) -> int:
        return len(self.atoms)

    @property
    def time(self) -> float:
        """Simulation time in fs."""
        return self.step_num * self.time_step

    @property
    def is_finished(self) -> bool:
        return self.step_num > self.num_steps

    def mobile_atoms(self) -> List[Atom]:
        return [atom for atom in self.atoms if atom.mobile]

    def frozen_indices(self) -> List[int]:
        """Return 1-based indices of frozen atoms."""
        return [i for i, atom in enumerate(self.atoms, start=1) if not atom.mobile]

    def degrees_of_freedom(self) -> int:
        """Three translational degrees of freedom per mobile atom."""
        return 3 * len(self.mobile_atoms())

    def compute_kinetic_energy(self) -> float:
        """
        Compute kinetic energy in the reported unit.

        KE = 100 * (1/2) * Σ_i m_i * |v_i|²

        Returns:
            Kinetic energy in 100 kJ/mol.
        """
        return KINETIC_TO_REPORT * sum(atom.kinetic_energy() for atom in self.atoms)

    def compute_temperature(self, kinetic_energy: Optional[float] = None) -> float:
        """
        Compute instantaneous temperature from kinetic energy.

        Uses the equipartition theorem on a molar basis:
            T = 2 * KE / (n_dof * R)

        Args:
            kinetic_energy: Kinetic energy in 100 kJ/mol. Computed from the
                current velocities when omitted.

        Returns:
            Temperature in Kelvin, 0.0 when no atom can move.
        """
        if kinetic_energy is None:
            kinetic_energy = self.compute_kinetic_energy()
        n_dof = self.degrees_of_freedom()
        if n_dof == 0:
            return 0.0
        return 2.0 * kinetic_energy * REPORT_TO_J_MOL / (n_dof * GAS_CONSTANT)

    def copy(self) -> "SimulationState":
        """Create a deep copy of the state."""
        return replace(self, atoms=[replace(atom) for atom in self.atoms])

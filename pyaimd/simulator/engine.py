"""
SimulationEngine that drives an AIMD run.

Couples the velocity Verlet integrator to the external force evaluator,
applies the bootstrap thermostat, writes reports and checkpoints, and
resumes interrupted runs from the checkpoint log.
"""
import logging
from enum import Enum
from pathlib import Path
from typing import List, Optional

from pyaimd.builder import (
    ConstraintApplier,
    RunParameters,
    StructureIngestor,
)
from pyaimd.core import (
    HARTREE_BOHR_TO_FORCE,
    HARTREE_TO_REPORT,
    Force,
    Position,
    SimulationState,
)
from pyaimd.exceptions import EvaluatorFailure
from pyaimd.force import EvaluationResult, ForceEvaluator
from pyaimd.integrator import Integrator, VelocityVerlet
from pyaimd.observer import ReportSet
from pyaimd.thermostat import Thermostat, VelocityRescaleThermostat

from .checkpoint import CheckpointStore

LOGGER = logging.getLogger(__name__)


class EnginePhase(Enum):
    """Where the engine is in its lifecycle."""
    BOOTSTRAPPING = "bootstrapping"
    STEPPING = "stepping"
    HALTED = "halted"


class SimulationEngine:
    """
    Main AIMD simulation driver.

    Orchestrates the run:
    1. Bootstrap (fresh runs only): evaluate forces at the start geometry,
       rescale velocities to the reference temperature, write the step-0
       checkpoint and the initial reports.
    2. For each step until ``step_num > num_steps``:
       a. Propose new positions (mobile atoms only)
       b. Evaluate forces at the new positions
       c. Commit positions, update velocities, rotate force registers
       d. Update energies
       e. Checkpoint, then report

    A step either completes and is checkpointed or leaves the state
    untouched: positions are committed only after the evaluator returns,
    and no report row is written for a step until its checkpoint is.
    Errors propagate; restarting from the checkpoint is the recovery path.

    Example:
        >>> engine = SimulationEngine(state, evaluator, store, reports)
        >>> engine.run()
        >>> engine.phase
        <EnginePhase.HALTED: 'halted'>
    """

    def __init__(
        self,
        state: SimulationState,
        evaluator: ForceEvaluator,
        checkpoint: CheckpointStore,
        reports: Optional[ReportSet] = None,
        thermostat: Optional[Thermostat] = None,
        integrator: Optional[Integrator] = None,
    ) -> None:
        """
        Initialize the engine.

        Args:
            state: Initial or restored simulation state.
            evaluator: Force/energy backend.
            checkpoint: Checkpoint log.
            reports: Report sinks (optional, defaults to none).
            thermostat: Bootstrap thermostat (defaults to a rescale to 300 K).
            integrator: Time integrator (defaults to velocity Verlet).
        """
        self.state = state
        self.evaluator = evaluator
        self.checkpoint = checkpoint
        self.reports = reports if reports is not None else ReportSet([])
        self.thermostat = (
            thermostat if thermostat is not None else VelocityRescaleThermostat()
        )
        self.integrator = (
            integrator if integrator is not None else VelocityVerlet(state.time_step)
        )

    # ------------------------------------------------------------------ #
    #  Construction
    # ------------------------------------------------------------------ #

    @classmethod
    def from_parameters(
        cls,
        params: RunParameters,
        evaluator: ForceEvaluator,
        ingestor: Optional[StructureIngestor] = None,
    ) -> "SimulationEngine":
        """
        Build a fresh run from a geometry source.

        Ingestion and constraint errors are raised before any state exists.
        """
        ingestor = ingestor if ingestor is not None else StructureIngestor(seed=params.seed)
        atoms = ingestor.from_file(params.input)
        ConstraintApplier(params.freeze).apply(atoms)
        Path(params.work_dir).mkdir(parents=True, exist_ok=True)

        state = SimulationState(
            atoms=atoms,
            time_step=params.time_step,
            num_steps=params.num_steps,
        )
        return cls(
            state,
            evaluator,
            CheckpointStore.in_directory(params.work_dir),
            ReportSet.in_directory(params.work_dir),
        )

    @classmethod
    def from_checkpoint(
        cls,
        checkpoint: CheckpointStore,
        evaluator: ForceEvaluator,
        reports: Optional[ReportSet] = None,
        num_steps: Optional[int] = None,
    ) -> "SimulationEngine":
        """
        Resume from the last checkpoint at the following step.

        Args:
            checkpoint: Log to restore from.
            evaluator: Force/energy backend.
            reports: Report sinks; records are appended to existing files.
            num_steps: New step budget; keeps the saved one when omitted.

        Raises:
            CheckpointIOFailure: If no valid checkpoint can be read.
        """
        state = checkpoint.read_last()
        LOGGER.info(
            "Restarting after step %d of %d", state.step_num, state.num_steps
        )
        state.step_num += 1
        if num_steps is not None:
            state.num_steps = num_steps
        return cls(state, evaluator, checkpoint, reports)

    # ------------------------------------------------------------------ #
    #  State machine
    # ------------------------------------------------------------------ #

    @property
    def phase(self) -> EnginePhase:
        if self.state.step_num == 0:
            return EnginePhase.BOOTSTRAPPING
        if self.state.is_finished:
            return EnginePhase.HALTED
        return EnginePhase.STEPPING

    def run(self) -> SimulationState:
        """
        Run until the step budget is exhausted.

        Returns:
            The final state.
        """
        if self.phase is EnginePhase.BOOTSTRAPPING:
            self.bootstrap()
        while self.phase is EnginePhase.STEPPING:
            self.step()
        LOGGER.info("Simulation finished after step %d", self.state.num_steps)
        return self.state

    def bootstrap(self) -> None:
        """Evaluate initial forces, thermalize, write step 0."""
        state = self.state
        if state.step_num != 0:
            raise RuntimeError("Bootstrap only runs before the first step")

        for index in state.frozen_indices():
            LOGGER.info("Atom %d (%s) is frozen", index, state.atoms[index - 1].symbol)

        result = self._evaluate(self._geometry([atom.position for atom in state.atoms]))
        for atom, force in zip(state.atoms, self._convert_forces(result)):
            atom.force = force
        self._update_potential(result.potential_energy)
        self._update_kinetic()
        self.thermostat.apply(state)
        self._update_kinetic()
        self._update_total()

        self.checkpoint.reset()
        self.checkpoint.append(state)
        self.reports.initialize()
        self.reports.report(state, bootstrap=True)
        self._log_progress()
        state.step_num = 1

    def step(self) -> None:
        """Advance one velocity Verlet step."""
        state = self.state
        if self.phase is not EnginePhase.STEPPING:
            raise RuntimeError(f"Cannot step while {self.phase.value}")

        positions = self.integrator.propose_positions(state.atoms)
        result = self._evaluate(self._geometry(positions))
        forces = self._convert_forces(result)

        for atom, position, force in zip(state.atoms, positions, forces):
            atom.position = position
            atom.next_force = force
        self.integrator.advance_velocities(state.atoms)
        self._update_potential(result.potential_energy)
        self._update_kinetic()
        self._update_total()

        # the checkpoint commits the step; reports follow it
        self.checkpoint.append(state)
        self.reports.report(state)
        self._log_progress()
        state.step_num += 1

    # ------------------------------------------------------------------ #
    #  Helpers
    # ------------------------------------------------------------------ #

    def _geometry(self, positions: List[Position]):
        return [(atom.symbol, pos) for atom, pos in zip(self.state.atoms, positions)]

    def _evaluate(self, geometry) -> EvaluationResult:
        result = self.evaluator.evaluate(geometry)
        if len(result.forces) != self.state.n_atoms:
            raise EvaluatorFailure(
                f"{self.evaluator.get_name()} returned {len(result.forces)} forces "
                f"for {self.state.n_atoms} atoms"
            )
        return result

    @staticmethod
    def _convert_forces(result: EvaluationResult) -> List[Force]:
        # Hartree/Bohr -> amu*Å/fs^2
        return [Force.from_vector(f) * HARTREE_BOHR_TO_FORCE for f in result.forces]

    def _update_potential(self, hartree: float) -> None:
        self.state.potential_energy = hartree * HARTREE_TO_REPORT

    def _update_kinetic(self) -> None:
        self.state.kinetic_energy = self.state.compute_kinetic_energy()

    def _update_total(self) -> None:
        self.state.total_energy = self.state.potential_energy + self.state.kinetic_energy

    def _log_progress(self) -> None:
        state = self.state
        LOGGER.info(
            "Step %6d | t=%10.2f fs | T=%8.2f K | PE=%14.6f | KE=%12.6f | E=%14.6f",
            state.step_num,
            state.time,
            state.compute_temperature(state.kinetic_energy),
            state.potential_energy,
            state.kinetic_energy,
            state.total_energy,
        )


def run_simulation(
    params: RunParameters,
    evaluator: ForceEvaluator,
) -> SimulationState:
    """
    Start or resume a run according to ``params``.

    Returns:
        Final simulation state.
    """
    if params.restart:
        engine = SimulationEngine.from_checkpoint(
            CheckpointStore.in_directory(params.work_dir),
            evaluator,
            ReportSet.in_directory(params.work_dir),
        )
    else:
        engine = SimulationEngine.from_parameters(params, evaluator)
    return engine.run()

"""
Reporter module for time-series output.

Provides the Observer pattern for the plain-text reports written during
a run: trajectory, energies, per-atom velocities and kinetic energies.
"""
import logging
from abc import ABC, abstractmethod
from pathlib import Path
from typing import List, Union

from pyaimd.core import KINETIC_TO_REPORT, SimulationState
from pyaimd.exceptions import ReportIOFailure

LOGGER = logging.getLogger(__name__)

TRAJECTORY_FILE = "trajectory.xyz"
ENERGY_FILE = "energy.txt"
VELOCITY_FILE = "velocity.txt"
KINETIC_FILE = "kinetic.txt"


def format_coordinates(state: SimulationState) -> str:
    return "\n".join(
        f"{atom.symbol} {atom.position.x:.5f} {atom.position.y:.5f} "
        f"{atom.position.z:.5f}"
        for atom in state.atoms
    )


class Reporter(ABC):
    """
    Abstract base for report sinks (Observer Pattern).

    Each reporter owns one file. ``initialize`` truncates it and writes
    the header at the start of a fresh run; ``report`` appends one record.

    Attributes:
        path: Output file.
        every_step: Whether the reporter runs after each step or only at
            bootstrap.
    """

    header: str = ""
    every_step: bool = True

    def __init__(self, path: Union[str, Path]) -> None:
        self.path = Path(path)

    @abstractmethod
    def format(self, state: SimulationState) -> str:
        """Render one record, including its trailing newline."""
        pass

    def initialize(self) -> None:
        self._write(self.header, mode="w")

    def report(self, state: SimulationState) -> None:
        self._write(self.format(state), mode="a")

    def _write(self, text: str, mode: str) -> None:
        try:
            with open(self.path, mode, encoding="utf-8") as handle:
                handle.write(text)
        except OSError as exc:
            raise ReportIOFailure(f"failed to write report {self.path}: {exc}") from exc

    def get_name(self) -> str:
        return f"{type(self).__name__}({self.path.name})"


class TrajectoryReporter(Reporter):
    """Appends an XYZ frame per step."""

    def format(self, state: SimulationState) -> str:
        return f"{state.n_atoms}\ntrajectory\n{format_coordinates(state)}\n"


class EnergyReporter(Reporter):
    """Appends (time, potential, kinetic, total) per step."""

    header = (
        f"{'Time fs':<30} {'Potential 100 KJ/mol':<30} "
        f"{'Kinetic 100 KJ/mol':<30} Total 100 KJ/mol\n"
    )

    def format(self, state: SimulationState) -> str:
        return (
            f"{state.time:<30.2f} {state.potential_energy:<30.6f} "
            f"{state.kinetic_energy:<30.6f} {state.total_energy:.6f}\n"
        )


class VelocityReporter(Reporter):
    """Writes per-atom velocity components and magnitude at bootstrap."""

    header = (
        f"{'Number':<30} {'Symbol':<30} {'X':<30} {'Y':<30} {'Z':<30} Magnitude\n"
    )
    every_step = False

    def format(self, state: SimulationState) -> str:
        lines = [
            f"{index:<30} {atom.symbol:<30} {atom.velocity.x:<30} "
            f"{atom.velocity.y:<30} {atom.velocity.z:<30} {atom.velocity.norm()}"
            for index, atom in enumerate(state.atoms, start=1)
        ]
        return "\n".join(lines) + "\n"


class KineticReporter(Reporter):
    """Writes per-atom kinetic energy at bootstrap."""

    header = f"{'Number':<30} {'Symbol':<30} Kinetic 100 kJ/mol\n"
    every_step = False

    def format(self, state: SimulationState) -> str:
        lines = [
            f"{index:<30} {atom.symbol:<30} "
            f"{atom.kinetic_energy() * KINETIC_TO_REPORT}"
            for index, atom in enumerate(state.atoms, start=1)
        ]
        return "\n".join(lines) + "\n"


class ReportSet:
    """
    Composite reporter that dispatches to its children.

    Example:
        >>> reports = ReportSet.in_directory("run")
        >>> reports.initialize()
        >>> reports.report(state, bootstrap=True)
    """

    def __init__(self, reporters: List[Reporter]) -> None:
        self.reporters = reporters

    @classmethod
    def in_directory(cls, directory: Union[str, Path]) -> "ReportSet":
        """Create the standard four reports inside ``directory``."""
        directory = Path(directory)
        return cls([
            TrajectoryReporter(directory / TRAJECTORY_FILE),
            EnergyReporter(directory / ENERGY_FILE),
            VelocityReporter(directory / VELOCITY_FILE),
            KineticReporter(directory / KINETIC_FILE),
        ])

    def initialize(self) -> None:
        """Truncate all report files and write their headers."""
        for reporter in self.reporters:
            reporter.initialize()
            LOGGER.debug("Initialized %s", reporter.get_name())

    def report(self, state: SimulationState, bootstrap: bool = False) -> None:
        """Emit a record to every reporter that runs at this point."""
        for reporter in self.reporters:
            if bootstrap or reporter.every_step:
                reporter.report(state)

    def get_name(self) -> str:
        names = [r.get_name() for r in self.reporters]
        return f"ReportSet[{', '.join(names)}]"

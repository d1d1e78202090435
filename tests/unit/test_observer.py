"""
Unit tests for observer module.

Tests for the report files written during a run.
"""
from pathlib import Path

import pytest

from pyaimd.core import SimulationState
from pyaimd.exceptions import ReportIOFailure
from pyaimd.observer import (
    EnergyReporter,
    KineticReporter,
    ReportSet,
    TrajectoryReporter,
    VelocityReporter,
)


@pytest.fixture
def reported_state(moving_state: SimulationState) -> SimulationState:
    moving_state.step_num = 2
    moving_state.potential_energy = -2006.25
    moving_state.kinetic_energy = 0.125
    moving_state.total_energy = -2006.125
    return moving_state


class TestReporters:
    """Tests for individual reporters."""

    def test_trajectory_frame(self, reported_state: SimulationState, tmp_path: Path) -> None:
        frame = TrajectoryReporter(tmp_path / "t.xyz").format(reported_state)
        assert frame == (
            "3\n"
            "trajectory\n"
            "O 0.00000 0.00000 0.00000\n"
            "H 1.00000 0.00000 0.00000\n"
            "H -1.00000 0.00000 0.00000\n"
        )

    def test_energy_row(self, reported_state: SimulationState, tmp_path: Path) -> None:
        row = EnergyReporter(tmp_path / "e.txt").format(reported_state)
        fields = row.split()
        assert fields == ["1.00", "-2006.250000", "0.125000", "-2006.125000"]
        assert row.endswith("\n")

    def test_energy_header(self, tmp_path: Path) -> None:
        reporter = EnergyReporter(tmp_path / "e.txt")
        reporter.initialize()
        header = reporter.path.read_text()
        assert header.startswith("Time fs")
        assert "Potential 100 KJ/mol" in header
        assert header.rstrip().endswith("Total 100 KJ/mol")

    def test_velocity_rows(self, reported_state: SimulationState, tmp_path: Path) -> None:
        rows = VelocityReporter(tmp_path / "v.txt").format(reported_state).splitlines()
        assert len(rows) == 3
        fields = rows[1].split()
        assert fields[:5] == ["2", "H", "0.0", "0.002", "0.0"]
        assert float(fields[5]) == pytest.approx(0.002)

    def test_kinetic_rows(self, reported_state: SimulationState, tmp_path: Path) -> None:
        rows = KineticReporter(tmp_path / "k.txt").format(reported_state).splitlines()
        number, symbol, energy = rows[1].split()
        assert (number, symbol) == ("2", "H")
        assert float(energy) == pytest.approx(100 * 0.5 * 1.008 * 0.002 ** 2)
        assert float(rows[2].split()[2]) == 0.0

    def test_write_failure(self, reported_state: SimulationState, tmp_path: Path) -> None:
        reporter = EnergyReporter(tmp_path / "missing" / "e.txt")
        with pytest.raises(ReportIOFailure):
            reporter.report(reported_state)


class TestReportSet:
    """Tests for the composite reporter."""

    def test_bootstrap_and_step_records(
        self, reported_state: SimulationState, tmp_path: Path
    ) -> None:
        """Test per-atom reports are written only at bootstrap."""
        reports = ReportSet.in_directory(tmp_path)
        reports.initialize()
        reports.report(reported_state, bootstrap=True)
        reports.report(reported_state)

        energy_lines = (tmp_path / "energy.txt").read_text().splitlines()
        assert len(energy_lines) == 3
        velocity_lines = (tmp_path / "velocity.txt").read_text().splitlines()
        assert len(velocity_lines) == 1 + reported_state.n_atoms
        kinetic_lines = (tmp_path / "kinetic.txt").read_text().splitlines()
        assert len(kinetic_lines) == 1 + reported_state.n_atoms
        frames = (tmp_path / "trajectory.xyz").read_text().splitlines()
        assert len(frames) == 2 * (2 + reported_state.n_atoms)

    def test_initialize_truncates(self, reported_state: SimulationState, tmp_path: Path) -> None:
        reports = ReportSet.in_directory(tmp_path)
        reports.initialize()
        reports.report(reported_state)
        reports.initialize()
        assert (tmp_path / "trajectory.xyz").read_text() == ""
        assert len((tmp_path / "energy.txt").read_text().splitlines()) == 1

    def test_get_name(self, tmp_path: Path) -> None:
        assert "EnergyReporter" in ReportSet.in_directory(tmp_path).get_name()

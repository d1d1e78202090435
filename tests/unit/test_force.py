"""
Unit tests for force module.

Tests for Gaussian output parsing, input generation and the
subprocess-driven GaussianEvaluator.
"""
import stat
import sys
from pathlib import Path

import pytest

from pyaimd.builder import GaussianSettings
from pyaimd.core import Position, Vector3D
from pyaimd.exceptions import EvaluatorFailure
from pyaimd.force import (
    ForceEvaluator,
    GaussianEvaluator,
    parse_forces,
    parse_scf_energy,
)

posix_only = pytest.mark.skipif(
    sys.platform == "win32", reason="fake Gaussian is a shell script"
)

WATER = [
    ("O", Position(0.0, 0.0, 0.119262)),
    ("H", Position(0.0, 0.763239, -0.477047)),
    ("H", Position(0.0, -0.763239, -0.477047)),
]


def fake_gaussian(tmp_path: Path, body: str) -> Path:
    """Write an executable shell script standing in for g16."""
    script = tmp_path / "fake_g16"
    script.write_text("#!/bin/sh\ncat > /dev/null\n" + body)
    script.chmod(script.stat().st_mode | stat.S_IXUSR | stat.S_IXGRP | stat.S_IXOTH)
    return script


class TestForceEvaluator:
    """Tests for the abstract backend contract."""

    def test_cannot_instantiate(self) -> None:
        with pytest.raises(TypeError):
            ForceEvaluator()


class TestParsing:
    """Tests for Gaussian output parsing."""

    def test_last_scf_energy(self, forces_log_text: str) -> None:
        assert parse_scf_energy(forces_log_text) == pytest.approx(-76.4089533474)

    def test_fortran_exponent(self) -> None:
        text = " SCF Done:  E(UHF) =  -1.5D+02     A.U. after    3 cycles"
        assert parse_scf_energy(text) == pytest.approx(-150.0)

    def test_missing_energy(self) -> None:
        with pytest.raises(EvaluatorFailure, match="SCF Done"):
            parse_scf_energy("Normal termination of Gaussian 16")

    def test_last_force_block(self, forces_log_text: str) -> None:
        """Test that the final force block wins over earlier ones."""
        forces = parse_forces(forces_log_text, 3)
        assert forces == [
            Vector3D(0.0, 0.0, -0.012345678),
            Vector3D(0.0, 0.004321, 0.006172839),
            Vector3D(0.0, -0.004321, 0.006172839),
        ]

    def test_missing_force_block(self) -> None:
        with pytest.raises(EvaluatorFailure, match="no force block"):
            parse_forces(" SCF Done:  E(RB3LYP) =  -76.4  A.U.", 3)

    def test_truncated_force_block(self, forces_log_text: str) -> None:
        cut = forces_log_text.rsplit("      2        1", 1)[0]
        with pytest.raises(EvaluatorFailure, match="truncated"):
            parse_forces(cut, 3)

    def test_short_force_block(self, forces_log_text: str) -> None:
        """Test that fewer rows than atoms is rejected."""
        with pytest.raises(EvaluatorFailure):
            parse_forces(forces_log_text, 4)


class TestGaussianInput:
    """Tests for input deck generation."""

    def test_build_input(self) -> None:
        settings = GaussianSettings(nproc=4, memory="2GB", charge=0, multiplicity=1)
        deck = GaussianEvaluator(settings).build_input(WATER)
        assert deck == (
            "%nprocshared=4\n"
            "%mem=2GB\n"
            "#p force b3lyp/6-31g(d)\n"
            "\n"
            "pyaimd force evaluation\n"
            "\n"
            "0 1\n"
            "O 0.00000 0.00000 0.11926\n"
            "H 0.00000 0.76324 -0.47705\n"
            "H 0.00000 -0.76324 -0.47705\n"
            "\n"
        )

    def test_no_link0_by_default(self) -> None:
        deck = GaussianEvaluator(GaussianSettings()).build_input(WATER)
        assert deck.splitlines()[0] == "#p force b3lyp/6-31g(d)"

    def test_write_input(self, tmp_path: Path) -> None:
        evaluator = GaussianEvaluator(GaussianSettings(), work_dir=tmp_path / "run")
        path = evaluator.write_input(WATER)
        assert path == tmp_path / "run" / "input.com"
        assert "O 0.00000 0.00000 0.11926" in path.read_text()


@posix_only
class TestGaussianEvaluator:
    """Tests for running the backend as a subprocess."""

    def test_evaluate(self, tmp_path: Path, forces_log_text: str) -> None:
        log = tmp_path / "reference.log"
        log.write_text(forces_log_text)
        script = fake_gaussian(tmp_path, f"cat '{log}'\n")
        evaluator = GaussianEvaluator(
            GaussianSettings(executable=str(script)), work_dir=tmp_path / "run"
        )

        result = evaluator.evaluate(WATER)

        assert result.potential_energy == pytest.approx(-76.4089533474)
        assert result.forces[0] == Vector3D(0.0, 0.0, -0.012345678)
        assert len(result.forces) == 3
        assert evaluator.output_path.read_text() == forces_log_text

    def test_nonzero_exit(self, tmp_path: Path) -> None:
        script = fake_gaussian(tmp_path, "echo 'Erroneous write' >&2\nexit 2\n")
        evaluator = GaussianEvaluator(
            GaussianSettings(executable=str(script)), work_dir=tmp_path
        )
        with pytest.raises(EvaluatorFailure, match="exit code 2: Erroneous write"):
            evaluator.evaluate(WATER)

    def test_missing_executable(self, tmp_path: Path) -> None:
        evaluator = GaussianEvaluator(
            GaussianSettings(executable=str(tmp_path / "no_such_g16")),
            work_dir=tmp_path,
        )
        with pytest.raises(EvaluatorFailure, match="cannot run"):
            evaluator.evaluate(WATER)

    def test_garbled_output(self, tmp_path: Path) -> None:
        script = fake_gaussian(tmp_path, "echo 'Error termination'\n")
        evaluator = GaussianEvaluator(
            GaussianSettings(executable=str(script)), work_dir=tmp_path
        )
        with pytest.raises(EvaluatorFailure):
            evaluator.evaluate(WATER)

    def test_get_name(self) -> None:
        assert "g16" in GaussianEvaluator(GaussianSettings()).get_name()

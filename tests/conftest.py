"""
Shared fixtures for pyaimd tests.

Provides sample Gaussian text and in-process force evaluators so the
engine can be exercised without a Gaussian installation.
"""
from typing import List, Optional

import pytest

from pyaimd.core import Atom, Position, SimulationState, Vector3D, Velocity
from pyaimd.exceptions import EvaluatorFailure
from pyaimd.force import EvaluationResult, ForceEvaluator, Geometry

BOHR_IN_ANGSTROM = 0.529177

WATER_LOG = """\
 Entering Gaussian System, Link 0=g16
 NAtoms=      3 NQM=        3 NQMF=       0 NMMI=      0 NMMIF=      0
                         Standard orientation:
 ---------------------------------------------------------------------
 Center     Atomic      Atomic             Coordinates (Angstroms)
 Number     Number       Type             X           Y           Z
 ---------------------------------------------------------------------
      1          8           0        0.000000    0.000000    0.120000
      2          1           0        0.000000    0.770000   -0.480000
      3          1           0        0.000000   -0.770000   -0.480000
 ---------------------------------------------------------------------
 SCF Done:  E(RB3LYP) =  -76.4000000000     A.U. after    9 cycles
                         Standard orientation:
 ---------------------------------------------------------------------
 Center     Atomic      Atomic             Coordinates (Angstroms)
 Number     Number       Type             X           Y           Z
 ---------------------------------------------------------------------
      1          8           0        0.000000    0.000000    0.119262
      2          1           0        0.000000    0.763239   -0.477047
      3          1           0        0.000000   -0.763239   -0.477047
 ---------------------------------------------------------------------
 SCF Done:  E(RB3LYP) =  -76.4089533474     A.U. after    7 cycles
 Normal termination of Gaussian 16
"""

FORCES_LOG = """\
 SCF Done:  E(RB3LYP) =  -76.3000000000     A.U. after   10 cycles
 -------------------------------------------------------------------
 Center     Atomic                   Forces (Hartrees/Bohr)
 Number     Number              X              Y              Z
 -------------------------------------------------------------------
      1        8           0.100000000    0.100000000    0.100000000
      2        1           0.100000000    0.100000000    0.100000000
      3        1           0.100000000    0.100000000    0.100000000
 -------------------------------------------------------------------
 SCF Done:  E(RB3LYP) =  -76.4089533474     A.U. after    7 cycles
 -------------------------------------------------------------------
 Center     Atomic                   Forces (Hartrees/Bohr)
 Number     Number              X              Y              Z
 -------------------------------------------------------------------
      1        8           0.000000000    0.000000000   -0.012345678
      2        1           0.000000000    0.004321000    0.006172839
      3        1           0.000000000   -0.004321000    0.006172839
 -------------------------------------------------------------------
 Normal termination of Gaussian 16
"""


class ConstantEvaluator(ForceEvaluator):
    """Returns the same energy and forces for every geometry."""

    def __init__(self, energy: float = -1.0, force: Optional[Vector3D] = None) -> None:
        self.energy = energy
        self.force = force if force is not None else Vector3D.zero()
        self.calls: List[Geometry] = []

    def evaluate(self, geometry: Geometry) -> EvaluationResult:
        self.calls.append(list(geometry))
        return EvaluationResult(self.energy, [self.force for _ in geometry])

    def get_name(self) -> str:
        return "Constant"


class HarmonicEvaluator(ForceEvaluator):
    """
    Isotropic harmonic well around the origin, in atomic units.

    E = k/2 * Σ|r|², F = -k * r with r in Bohr. Optionally fails on a
    given call number (1-based) to simulate a backend crash.
    """

    def __init__(self, k: float = 0.05, fail_on_call: Optional[int] = None) -> None:
        self.k = k
        self.fail_on_call = fail_on_call
        self.n_calls = 0

    def evaluate(self, geometry: Geometry) -> EvaluationResult:
        self.n_calls += 1
        if self.fail_on_call is not None and self.n_calls == self.fail_on_call:
            raise EvaluatorFailure(
                "Gaussian16 calculation failed with exit code 1"
            )
        coords = [pos.as_vec() * (1.0 / BOHR_IN_ANGSTROM) for _, pos in geometry]
        energy = 0.5 * self.k * sum(r.squared_norm() for r in coords)
        return EvaluationResult(energy, [r * -self.k for r in coords])

    def get_name(self) -> str:
        return f"Harmonic(k={self.k})"


@pytest.fixture
def water_log(tmp_path):
    """Write the sample Gaussian log to disk and return its path."""
    path = tmp_path / "water.log"
    path.write_text(WATER_LOG)
    return path


@pytest.fixture
def moving_state() -> SimulationState:
    """Three atoms with known velocities; the last one frozen."""
    atoms = [
        Atom("O", 15.999, position=Position(0.0, 0.0, 0.0),
             velocity=Velocity(0.001, 0.0, 0.0)),
        Atom("H", 1.008, position=Position(1.0, 0.0, 0.0),
             velocity=Velocity(0.0, 0.002, 0.0)),
        Atom("H", 1.008, position=Position(-1.0, 0.0, 0.0)),
    ]
    atoms[2].freeze()
    return SimulationState(atoms=atoms, time_step=0.5, num_steps=3)


@pytest.fixture
def water_log_text() -> str:
    """Gaussian optimization log with two orientation blocks."""
    return WATER_LOG


@pytest.fixture
def forces_log_text() -> str:
    """Gaussian force output with two force blocks."""
    return FORCES_LOG


@pytest.fixture
def constant_evaluator() -> ConstantEvaluator:
    return ConstantEvaluator(energy=-76.4)


@pytest.fixture
def make_harmonic():
    """Factory for harmonic evaluators, optionally failing on a call."""
    return HarmonicEvaluator


@pytest.fixture
def make_constant():
    """Factory for constant-force evaluators."""
    return ConstantEvaluator

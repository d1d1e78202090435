#!/usr/bin/env python3
"""
Example 1: Bond Spring Without Gaussian

A hydrogen molecule whose bond is modelled by a harmonic spring in atomic
units. Shows how to plug a custom ForceEvaluator into the engine so the
integration loop, reports and checkpoints can be tried without a
quantum-chemistry installation.

Physics:
    E(r) = 0.5 * k * (r - r0)^2      (Hartree, r in Bohr)

Total energy is conserved while kinetic and potential energy trade places.

Usage:
    python examples/01_bond_spring.py
"""
import sys
from pathlib import Path
sys.path.insert(0, str(Path(__file__).parent.parent))

import tempfile

from pyaimd.core import Atom, Position, SimulationState, Vector3D
from pyaimd.force import EvaluationResult, ForceEvaluator
from pyaimd.observer import ReportSet
from pyaimd.simulator import CheckpointStore, SimulationEngine

BOHR = 0.529177  # Å


class BondSpring(ForceEvaluator):
    """Harmonic bond between atoms 1 and 2."""

    def __init__(self, k: float = 0.37, r0: float = 1.40):
        self.k = k    # Hartree/Bohr^2
        self.r0 = r0  # Bohr

    def evaluate(self, geometry):
        (_, a), (_, b) = geometry
        d = (b.as_vec() - a.as_vec()) * (1.0 / BOHR)
        r = d.norm()
        energy = 0.5 * self.k * (r - self.r0) ** 2
        f_b = d.normalize() * (-self.k * (r - self.r0))
        return EvaluationResult(energy, [-f_b, f_b])

    def get_name(self):
        return f"BondSpring(k={self.k}, r0={self.r0})"


def main():
    print("=" * 55)
    print("  Example 1: BOND SPRING")
    print("  H2 on a harmonic bond, no Gaussian needed")
    print("=" * 55)

    # Stretched bond, both atoms at rest
    atoms = [
        Atom("H", 1.008, position=Position(0.0, 0.0, 0.0)),
        Atom("H", 1.008, position=Position(0.85, 0.0, 0.0)),
    ]
    state = SimulationState(atoms=atoms, time_step=0.2, num_steps=200)

    work_dir = Path(tempfile.mkdtemp(prefix="pyaimd_spring_"))
    engine = SimulationEngine(
        state,
        BondSpring(),
        CheckpointStore.in_directory(work_dir),
        ReportSet.in_directory(work_dir),
    )
    engine.run()

    energies = (work_dir / "energy.txt").read_text().splitlines()[1:]
    totals = [float(line.split()[3]) for line in energies]
    print(f"\n  Steps run:        {state.num_steps}")
    print(f"  Final bond (Å):   "
          f"{(state.atoms[1].position - state.atoms[0].position).norm():.4f}")
    print(f"  Total energy drift (100 kJ/mol): {max(totals) - min(totals):.2e}")
    print(f"  Reports written to {work_dir}")


if __name__ == "__main__":
    main()

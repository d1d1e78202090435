#!/usr/bin/env python3
"""
Example 2: Water AIMD with Gaussian 16

Starts a short AIMD run from a Gaussian optimization log, freezing the
oxygen, then resumes it with a larger step budget, as an operator would
after a crash.

Requirements:
    A working ``g16`` on PATH and a Gaussian log ``water_opt.log``.

Usage:
    python examples/02_gaussian_water.py water_opt.log
"""
import sys
from pathlib import Path
sys.path.insert(0, str(Path(__file__).parent.parent))

import logging

from pyaimd.builder import build_run_parameters, load_backend_settings
from pyaimd.force import GaussianEvaluator
from pyaimd.observer import ReportSet
from pyaimd.simulator import CheckpointStore, SimulationEngine, run_simulation

CONFIG = """\
executable: g16
keywords: "#p force b3lyp/6-31g(d)"
charge: 0
multiplicity: 1
nproc: 4
memory: 2GB
"""


def main():
    logging.basicConfig(level=logging.INFO, format="%(levelname)s %(message)s")
    source = Path(sys.argv[1] if len(sys.argv) > 1 else "water_opt.log")
    work_dir = Path("water_aimd")
    work_dir.mkdir(exist_ok=True)
    config = work_dir / "config.yaml"
    config.write_text(CONFIG)

    params = build_run_parameters(
        input=source,
        time_step=0.5,
        num_steps=20,
        freeze="1",
        backend_config=config,
        work_dir=work_dir,
        seed=2024,
    )
    evaluator = GaussianEvaluator(load_backend_settings(config), work_dir=work_dir)
    run_simulation(params, evaluator)

    # Extend the finished run by another 20 steps
    engine = SimulationEngine.from_checkpoint(
        CheckpointStore.in_directory(work_dir),
        evaluator,
        ReportSet.in_directory(work_dir),
        num_steps=40,
    )
    final = engine.run()
    t_end = final.num_steps * final.time_step
    print(f"Finished at t = {t_end:.1f} fs, E = {final.total_energy:.6f} 100 kJ/mol")


if __name__ == "__main__":
    main()

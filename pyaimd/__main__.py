"""Command line entry point: ``python -m pyaimd`` or ``pyaimd``.

Starts a new AIMD run from a Gaussian log, or resumes the last one from
its checkpoint with ``--restart``.
"""
import argparse
import logging
import sys
from typing import Optional

from pyaimd import __version__
from pyaimd.builder import build_run_parameters, load_backend_settings
from pyaimd.exceptions import AIMDError
from pyaimd.force import GaussianEvaluator
from pyaimd.simulator import run_simulation

LOGGER = logging.getLogger("pyaimd")


# ------------------------------------------------------------------ #
#  CLI argument parser
# ------------------------------------------------------------------ #


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="pyaimd",
        description="Run ab-initio molecular dynamics with Gaussian 16 forces.",
    )
    parser.add_argument("input", help="Gaussian log file with the start geometry")
    parser.add_argument(
        "-t",
        "--time-step",
        type=float,
        default=1.0,
        help="Time step in fs (default: 1.0)",
    )
    parser.add_argument(
        "-n",
        "--num-steps",
        type=int,
        default=10000,
        help="Number of AIMD steps (default: 10000)",
    )
    parser.add_argument(
        "-r",
        "--restart",
        action="store_true",
        help="Resume from the last record in save.json",
    )
    parser.add_argument(
        "-f",
        "--freeze",
        default=None,
        help="Atoms to freeze, 1-based ranges, e.g. '1-3,7-8'",
    )
    parser.add_argument(
        "-c",
        "--config",
        default="config.yaml",
        help="Gaussian settings YAML (default: config.yaml)",
    )
    parser.add_argument(
        "-w",
        "--work-dir",
        default=".",
        help="Directory for reports, checkpoints and Gaussian files",
    )
    parser.add_argument("--seed", type=int, default=None, help="Velocity sampling seed")
    parser.add_argument(
        "--log-level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        default="INFO",
        help="Logging verbosity (default: INFO)",
    )
    parser.add_argument("--version", action="version", version=f"pyaimd {__version__}")
    return parser


# ------------------------------------------------------------------ #
#  Launch
# ------------------------------------------------------------------ #


def main(argv: Optional[list] = None) -> int:
    """CLI entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)
    logging.basicConfig(
        level=getattr(logging, args.log_level),
        format="%(asctime)s %(levelname)-8s %(name)s: %(message)s",
    )
    try:
        params = build_run_parameters(
            input=args.input,
            time_step=args.time_step,
            num_steps=args.num_steps,
            restart=args.restart,
            freeze=args.freeze,
            backend_config=args.config,
            work_dir=args.work_dir,
            seed=args.seed,
        )
        settings = load_backend_settings(params.backend_config)
        evaluator = GaussianEvaluator(settings, work_dir=params.work_dir)
        run_simulation(params, evaluator)
        return 0
    except AIMDError as exc:
        LOGGER.error("%s: %s", type(exc).__name__, exc)
        return 1
    except OSError as exc:
        LOGGER.error("Cannot access %s: %s", exc.filename, exc.strerror)
        return 1


if __name__ == "__main__":
    sys.exit(main())

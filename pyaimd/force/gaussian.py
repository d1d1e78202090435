"""
Gaussian 16 force evaluator.

Writes a Gaussian input file for the current geometry, runs the program
as ``<executable> < input.com > forces.out`` and parses the SCF energy and
the Cartesian forces from the output.
"""
import logging
import re
import subprocess
from pathlib import Path
from typing import List, Union

from pyaimd.builder.config_loader import GaussianSettings
from pyaimd.core import Vector3D
from pyaimd.exceptions import EvaluatorFailure

from .evaluator import EvaluationResult, ForceEvaluator, Geometry

LOGGER = logging.getLogger(__name__)

INPUT_FILE = "input.com"
OUTPUT_FILE = "forces.out"

SCF_ENERGY = re.compile(r"SCF Done:\s+E\([^)]+\)\s*=\s*(-?\d+\.\d+(?:[EeDd][-+]?\d+)?)")
FORCES_HEADER = "Forces (Hartrees/Bohr)"


def format_geometry(geometry: Geometry) -> str:
    """Return one ``Sym x y z`` line per atom, 5 decimals."""
    return "\n".join(
        f"{symbol} {pos.x:.5f} {pos.y:.5f} {pos.z:.5f}" for symbol, pos in geometry
    )


def parse_scf_energy(text: str) -> float:
    """
    Return the last SCF energy in Hartree.

    Raises:
        EvaluatorFailure: If no ``SCF Done`` line exists.
    """
    matches = SCF_ENERGY.findall(text)
    if not matches:
        raise EvaluatorFailure("no 'SCF Done' energy found in Gaussian output")
    return float(matches[-1].replace("D", "E").replace("d", "e"))


def parse_forces(text: str, n_atoms: int) -> List[Vector3D]:
    """
    Return the forces of the last force block, in Hartree/Bohr.

    The header line is followed by a column-title line, a dashed rule and one
    ``center atomic_number fx fy fz`` row per atom.

    Raises:
        EvaluatorFailure: If the block is missing, short or unparsable.
    """
    lines = text.splitlines()
    starts = [i for i, line in enumerate(lines) if FORCES_HEADER in line]
    if not starts:
        raise EvaluatorFailure("no force block found in Gaussian output")
    rows = lines[starts[-1] + 3:starts[-1] + 3 + n_atoms]
    if len(rows) < n_atoms:
        raise EvaluatorFailure(
            f"force block truncated: expected {n_atoms} rows, got {len(rows)}"
        )

    forces = []
    for row in rows:
        fields = row.split()
        try:
            forces.append(Vector3D.from_iterable(fields[2:5]))
        except ValueError as exc:
            raise EvaluatorFailure(f"cannot parse force row {row.strip()!r}") from exc
    return forces


class GaussianEvaluator(ForceEvaluator):
    """
    File-based Gaussian 16 backend.

    Attributes:
        settings: Route, charge, multiplicity and Link0 options.
        work_dir: Directory for ``input.com`` and ``forces.out``.

    Example:
        >>> settings = load_backend_settings("config.yaml")
        >>> evaluator = GaussianEvaluator(settings, work_dir="run")
        >>> result = evaluator.evaluate(geometry)
    """

    def __init__(
        self,
        settings: GaussianSettings,
        work_dir: Union[str, Path] = ".",
    ) -> None:
        self.settings = settings
        self.work_dir = Path(work_dir)

    @property
    def input_path(self) -> Path:
        return self.work_dir / INPUT_FILE

    @property
    def output_path(self) -> Path:
        return self.work_dir / OUTPUT_FILE

    def build_input(self, geometry: Geometry) -> str:
        """Render the Gaussian input deck for a geometry."""
        settings = self.settings
        link0 = []
        if settings.nproc is not None:
            link0.append(f"%nprocshared={settings.nproc}")
        if settings.memory:
            link0.append(f"%mem={settings.memory}")
        if settings.checkpoint:
            link0.append(f"%chk={settings.checkpoint}")
        sections = link0 + [
            settings.keywords,
            "",
            settings.title,
            "",
            f"{settings.charge} {settings.multiplicity}",
            format_geometry(geometry),
            "",
            "",
        ]
        return "\n".join(sections)

    def write_input(self, geometry: Geometry) -> Path:
        try:
            self.work_dir.mkdir(parents=True, exist_ok=True)
            self.input_path.write_text(self.build_input(geometry), encoding="utf-8")
        except OSError as exc:
            raise EvaluatorFailure(f"cannot write {self.input_path}: {exc}") from exc
        return self.input_path

    def run(self) -> None:
        """Run Gaussian on the current input file and wait for it."""
        command = [self.settings.executable]
        LOGGER.debug(
            "Running %s < %s > %s", command[0], self.input_path, self.output_path
        )
        try:
            with open(self.input_path, "r", encoding="utf-8") as stdin, open(
                self.output_path, "w", encoding="utf-8"
            ) as stdout:
                process = subprocess.run(
                    command,
                    stdin=stdin,
                    stdout=stdout,
                    stderr=subprocess.PIPE,
                    cwd=self.work_dir,
                    text=True,
                    check=False,
                )
        except OSError as exc:
            raise EvaluatorFailure(f"cannot run {command[0]}: {exc}") from exc
        if process.returncode != 0:
            detail = (process.stderr or "").strip()
            raise EvaluatorFailure(
                f"Gaussian16 calculation failed with exit code "
                f"{process.returncode}" + (f": {detail}" if detail else "")
            )

    def read_output(self, n_atoms: int) -> EvaluationResult:
        try:
            text = self.output_path.read_text(encoding="utf-8", errors="replace")
        except OSError as exc:
            raise EvaluatorFailure(f"cannot read {self.output_path}: {exc}") from exc
        return EvaluationResult(
            potential_energy=parse_scf_energy(text),
            forces=parse_forces(text, n_atoms),
        )

    def evaluate(self, geometry: Geometry) -> EvaluationResult:
        self.write_input(geometry)
        self.run()
        return self.read_output(len(geometry))

    def get_name(self) -> str:
        return f"Gaussian({self.settings.executable}, {self.settings.keywords})"

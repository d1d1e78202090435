"""
Checkpoint store for crash recovery.

Every completed step appends one self-contained JSON snapshot of the
SimulationState to ``save.json``. Restart reads only the last
well-formed line; earlier lines are kept as history.
"""
from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import List, Tuple, Union

from pydantic import BaseModel, Field, ValidationError

from pyaimd.core import Atom, Force, Position, SimulationState, Velocity
from pyaimd.exceptions import CheckpointIOFailure

LOGGER = logging.getLogger(__name__)

CHECKPOINT_FILE = "save.json"

Triple = Tuple[float, float, float]


# ------------------------------------------------------------------ #
#  Record models
# ------------------------------------------------------------------ #


class AtomRecord(BaseModel):
    """Serialized form of one Atom."""

    symbol: str = Field(..., min_length=1)
    mass: float = Field(..., gt=0)
    mobile: bool
    position: Triple
    velocity: Triple
    force: Triple
    next_force: Triple

    @classmethod
    def from_atom(cls, atom: Atom) -> "AtomRecord":
        return cls(
            symbol=atom.symbol,
            mass=atom.mass,
            mobile=atom.mobile,
            position=atom.position.as_vec().as_tuple(),
            velocity=atom.velocity.as_vec().as_tuple(),
            force=atom.force.as_vec().as_tuple(),
            next_force=atom.next_force.as_vec().as_tuple(),
        )

    def to_atom(self) -> Atom:
        return Atom(
            symbol=self.symbol,
            mass=self.mass,
            mobile=self.mobile,
            position=Position(*self.position),
            velocity=Velocity(*self.velocity),
            force=Force(*self.force),
            next_force=Force(*self.next_force),
        )


class SimulationRecord(BaseModel):
    """Serialized form of a SimulationState after a completed step."""

    atoms: List[AtomRecord]
    time_step: float = Field(..., gt=0)
    num_steps: int = Field(..., ge=0)
    step_num: int = Field(..., ge=0)
    potential_energy: float
    kinetic_energy: float
    total_energy: float

    @classmethod
    def from_state(cls, state: SimulationState) -> "SimulationRecord":
        return cls(
            atoms=[AtomRecord.from_atom(atom) for atom in state.atoms],
            time_step=state.time_step,
            num_steps=state.num_steps,
            step_num=state.step_num,
            potential_energy=state.potential_energy,
            kinetic_energy=state.kinetic_energy,
            total_energy=state.total_energy,
        )

    def to_state(self) -> SimulationState:
        return SimulationState(
            atoms=[record.to_atom() for record in self.atoms],
            time_step=self.time_step,
            num_steps=self.num_steps,
            step_num=self.step_num,
            potential_energy=self.potential_energy,
            kinetic_energy=self.kinetic_energy,
            total_energy=self.total_energy,
        )


# ------------------------------------------------------------------ #
#  Store
# ------------------------------------------------------------------ #


class CheckpointStore:
    """
    Append-only JSON-lines checkpoint log.

    A single engine appends to the file at a time; there is no
    inter-process locking.

    Example:
        >>> store = CheckpointStore("run/save.json")
        >>> store.append(state)
        >>> store.read_last().step_num == state.step_num
        True
    """

    def __init__(self, path: Union[str, Path] = CHECKPOINT_FILE) -> None:
        self.path = Path(path)

    @classmethod
    def in_directory(cls, directory: Union[str, Path]) -> "CheckpointStore":
        return cls(Path(directory) / CHECKPOINT_FILE)

    def exists(self) -> bool:
        return self.path.is_file()

    def reset(self) -> None:
        """Start an empty log for a fresh run."""
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            self.path.write_text("", encoding="utf-8")
        except OSError as exc:
            raise CheckpointIOFailure(f"failed to init {self.path}: {exc}") from exc

    def append(self, state: SimulationState) -> None:
        """
        Append one snapshot as a single line.

        A fragment left by an interrupted append is closed off with a
        newline first, so the new record always starts its own line.
        """
        line = SimulationRecord.from_state(state).model_dump_json()
        try:
            prefix = "\n" if self._has_open_line() else ""
            with open(self.path, "a", encoding="utf-8") as handle:
                handle.write(prefix + line + "\n")
                handle.flush()
        except OSError as exc:
            raise CheckpointIOFailure(f"failed to write to {self.path}: {exc}") from exc
        LOGGER.debug("Checkpointed step %d to %s", state.step_num, self.path)

    def _has_open_line(self) -> bool:
        """Whether the log ends in an unterminated line."""
        if not self.path.exists():
            return False
        with open(self.path, "rb") as handle:
            handle.seek(0, os.SEEK_END)
            if handle.tell() == 0:
                return False
            handle.seek(-1, os.SEEK_END)
            return handle.read(1) != b"\n"

    def read_last(self) -> SimulationState:
        """
        Load the last well-formed snapshot.

        A corrupt final line, left by a crash mid-append, is skipped in
        favour of the line before it.

        Raises:
            CheckpointIOFailure: If the file is missing, empty or holds no
                valid snapshot at its end.
        """
        try:
            with open(self.path, "r", encoding="utf-8") as handle:
                lines = [line for line in handle.read().splitlines() if line.strip()]
        except OSError as exc:
            raise CheckpointIOFailure(f"failed to open {self.path}: {exc}") from exc
        if not lines:
            raise CheckpointIOFailure(f"checkpoint file {self.path} is empty")

        try:
            return SimulationRecord.model_validate_json(lines[-1]).to_state()
        except ValidationError as exc:
            if len(lines) < 2:
                raise CheckpointIOFailure(
                    f"no valid checkpoint in {self.path}"
                ) from exc
            LOGGER.warning(
                "Ignoring corrupt trailing record in %s (%d bytes)",
                self.path,
                len(lines[-1]),
            )

        try:
            return SimulationRecord.model_validate_json(lines[-2]).to_state()
        except ValidationError as exc:
            raise CheckpointIOFailure(f"no valid checkpoint in {self.path}") from exc

    def __len__(self) -> int:
        """Number of lines in the log."""
        if not self.exists():
            return 0
        with open(self.path, "r", encoding="utf-8") as handle:
            return sum(1 for line in handle if line.strip())

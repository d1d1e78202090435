"""
StructureIngestor for building atoms from a Gaussian log.

Reads the final geometry block of a Gaussian output file, assigns
species masses, samples thermal velocities and removes the
centre-of-mass drift.
"""
import logging
import re
from pathlib import Path
from typing import List, Optional, Union

import numpy as np

from pyaimd.core import (
    AMU_TO_KG,
    BOLTZMANN_SI,
    M2_S2_TO_A2_FS2,
    REFERENCE_TEMPERATURE,
    Atom,
    Momentum,
    Position,
    Velocity,
    elements,
)
from pyaimd.exceptions import MalformedRecord, MissingAtomCount

LOGGER = logging.getLogger(__name__)

# center number, atomic number, atomic type, x, y, z
ATOM_RECORD = re.compile(r"^\s+\d+\s+\d+\s+\d+(\s+-?\d+\.\d+){3}")
ATOM_COUNT = re.compile(r"NAtoms=")


class StructureIngestor:
    """
    Builds the initial atom list from a geometry source.

    The source may hold several orientation blocks (one per optimization
    step); only the last ``NAtoms`` records are used.

    Attributes:
        temperature: Temperature used for velocity sampling (K).
        rng: Random generator for velocity sampling.

    Example:
        >>> ingestor = StructureIngestor(seed=7)
        >>> atoms = ingestor.from_file("water_opt.log")
        >>> [a.symbol for a in atoms]
        ['O', 'H', 'H']
    """

    def __init__(
        self,
        temperature: float = REFERENCE_TEMPERATURE,
        seed: Optional[int] = None,
        rng: Optional[np.random.Generator] = None,
    ) -> None:
        if temperature < 0:
            raise ValueError(
                f"Temperature must be non-negative, got {temperature}"
            )
        self.temperature = temperature
        self.rng = rng if rng is not None else np.random.default_rng(seed)

    def from_file(self, path: Union[str, Path]) -> List[Atom]:
        """Read a Gaussian log and ingest its final geometry."""
        with open(path, "r", encoding="utf-8", errors="replace") as handle:
            text = handle.read()
        LOGGER.debug("Read geometry source %s", path)
        return self.ingest(text)

    def ingest(self, text: str) -> List[Atom]:
        """
        Build atoms with thermal velocities and zero net momentum.

        Raises:
            MissingAtomCount: No ``NAtoms=`` directive.
            UnsupportedSpecies: Unknown atomic number.
            MalformedRecord: Too few records or unparsable coordinates.
        """
        atoms = self.parse_geometry(text)
        for atom in atoms:
            atom.velocity = self.sample_velocity(atom.mass)
        atoms = remove_com_velocity(atoms)
        LOGGER.info("Ingested %d atoms", len(atoms))
        return atoms

    def parse_geometry(self, text: str) -> List[Atom]:
        """
        Parse the final geometry block into atoms at rest.

        Deterministic: parsing the same text twice gives equal atom lists.
        """
        records = read_atomic_lines(text)
        count = read_atom_count(text)
        if len(records) < count:
            raise MalformedRecord(
                f"expected {count} atom records, found {len(records)}"
            )
        final_block = records[len(records) - count:] if count else []
        for line in final_block:
            LOGGER.debug("Geometry record: %s", line.strip())
        return [make_atom(line) for line in final_block]

    def sample_velocity(self, mass: float) -> Velocity:
        """
        Draw a Maxwell-Boltzmann velocity for one atom.

        Each Cartesian component is an independent normal sample with
            sigma = sqrt(kB * T / m)
        converted from m/s to Å/fs.

        Args:
            mass: Atomic mass in amu.
        """
        mass_kg = mass * AMU_TO_KG
        variance = (BOLTZMANN_SI * self.temperature / mass_kg) * M2_S2_TO_A2_FS2
        vx, vy, vz = self.rng.normal(0.0, np.sqrt(variance), size=3)
        return Velocity(float(vx), float(vy), float(vz))


def read_atomic_lines(text: str) -> List[str]:
    """Return every per-atom geometry record, in file order."""
    return [line for line in text.splitlines() if ATOM_RECORD.match(line)]


def read_atom_count(text: str) -> int:
    """
    Return the atom count from the first ``NAtoms=`` line.

    Raises:
        MissingAtomCount: If no such line exists or it has no integer.
    """
    for line in text.splitlines():
        if ATOM_COUNT.search(line):
            for token in line.replace("=", " ").split():
                if token.isdigit():
                    return int(token)
            break
    raise MissingAtomCount("no 'NAtoms=' directive found in geometry source")


def make_atom(line: str) -> Atom:
    """
    Build an atom at rest from one geometry record.

    Raises:
        UnsupportedSpecies: Unknown atomic number.
        MalformedRecord: Unparsable fields.
    """
    fields = line.split()
    if len(fields) < 6:
        raise MalformedRecord("geometry record has too few fields", line)
    try:
        atomic_number = int(fields[1])
        x, y, z = (float(value) for value in fields[3:6])
    except ValueError as exc:
        raise MalformedRecord("cannot parse geometry record", line) from exc

    element = elements.lookup(atomic_number)
    return Atom(
        symbol=element.symbol,
        mass=element.atomic_mass,
        mobile=True,
        position=Position(x, y, z),
    )


def remove_com_velocity(atoms: List[Atom]) -> List[Atom]:
    """
    Subtract the centre-of-mass velocity from every atom.

    v_cm = Σ m_i v_i / Σ m_i

    Returns:
        The same atoms, updated in place, for chaining.
    """
    if not atoms:
        return atoms
    total_momentum = Momentum.zero()
    for atom in atoms:
        total_momentum = total_momentum + atom.momentum()
    total_mass = sum(atom.mass for atom in atoms)
    com_velocity = total_momentum.as_kind(Velocity) * (1.0 / total_mass)
    for atom in atoms:
        atom.velocity = atom.velocity - com_velocity
    return atoms

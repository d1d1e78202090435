"""
Exception hierarchy for the AIMD driver.

Ingestion errors abort startup before any simulation state exists.
Evaluator and checkpoint errors abort a running simulation; the last
checkpoint written stays valid and is the recovery point for a restart.
"""
from typing import Optional


class AIMDError(Exception):
    """Base class for all errors raised by pyaimd."""


class MissingAtomCount(AIMDError):
    """The geometry source has no ``NAtoms=`` directive."""


class UnsupportedSpecies(AIMDError):
    """An atomic number has no entry in the species table."""

    def __init__(self, number: int) -> None:
        super().__init__(f"atomic number: {number}, is not supported!")
        self.number = number


class MalformedRecord(AIMDError):
    """A per-atom geometry record could not be parsed."""

    def __init__(self, message: str, line: Optional[str] = None) -> None:
        if line is not None:
            message = f"{message}: {line.strip()!r}"
        super().__init__(message)
        self.line = line


class EvaluatorFailure(AIMDError):
    """The force backend failed or produced no/garbled output."""


class CheckpointIOFailure(AIMDError):
    """The checkpoint store could not be read or written."""


class ConfigurationError(AIMDError, ValueError):
    """Invalid run parameters, backend settings or freeze expression."""


class ReportIOFailure(AIMDError):
    """A report file could not be written."""

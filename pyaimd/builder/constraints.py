"""
Frozen-atom constraints.

Parses a range expression such as ``"1-3,7-8"`` and pins the selected
atoms in place for the whole run.
"""
import logging
from typing import List, Optional

from pyaimd.core import Atom
from pyaimd.exceptions import ConfigurationError

LOGGER = logging.getLogger(__name__)


def parse_ranges(expression: str) -> List[int]:
    """
    Expand a freeze expression into sorted 1-based atom indices.

    Tokens are comma separated ``lo-hi`` ranges (inclusive) or single
    indices. Tokens that do not parse as integers are skipped.

    Raises:
        ConfigurationError: If a range has lo > hi or an index below 1.

    Example:
        >>> parse_ranges("1-3, 6-6,x-2")
        [1, 2, 3, 6]
    """
    indices = set()
    for token in expression.split(","):
        token = token.strip()
        if not token:
            continue
        parts = [part.strip() for part in token.split("-")]
        try:
            bounds = [int(part) for part in parts]
        except ValueError:
            LOGGER.warning("Skipping malformed freeze range %r", token)
            continue
        if len(bounds) == 1:
            low = high = bounds[0]
        elif len(bounds) == 2:
            low, high = bounds
        else:
            LOGGER.warning("Skipping malformed freeze range %r", token)
            continue
        if low < 1:
            raise ConfigurationError(f"Atom indices start at 1, got {token!r}")
        if low > high:
            raise ConfigurationError(f"Empty freeze range {token!r}")
        indices.update(range(low, high + 1))
    return sorted(indices)


class ConstraintApplier:
    """
    Marks atoms immobile before the run starts.

    Frozen atoms get zero velocity and are skipped by the integrator,
    but they keep their index: no renumbering takes place.

    Example:
        >>> ConstraintApplier("2-3").apply(atoms)
        [2, 3]
    """

    def __init__(self, expression: Optional[str]) -> None:
        self.expression = expression

    def apply(self, atoms: List[Atom]) -> List[int]:
        """
        Freeze the selected atoms in place.

        Returns:
            The 1-based indices that were frozen.

        Raises:
            ConfigurationError: If an index exceeds the number of atoms.
        """
        if not self.expression:
            return []
        indices = parse_ranges(self.expression)
        for index in indices:
            if index > len(atoms):
                raise ConfigurationError(
                    f"Cannot freeze atom {index}: system has {len(atoms)} atoms"
                )
        for index in indices:
            atom = atoms[index - 1]
            atom.freeze()
            LOGGER.debug("Froze atom %d (%s)", index, atom.symbol)
        return indices

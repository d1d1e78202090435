"""
Species table for chemical elements.

This module maps atomic numbers, as printed by the quantum-chemistry
backend, to element symbols and atomic masses using a Singleton registry.
"""
from dataclasses import dataclass
from typing import Dict, Optional

from pyaimd.exceptions import UnsupportedSpecies


@dataclass(frozen=True)
class ElementData:
    """
    Immutable data for a chemical element.

    Attributes:
        symbol: Chemical symbol (e.g., "H", "Au").
        name: Full element name.
        atomic_number: Atomic number Z.
        atomic_mass: Standard atomic mass in amu (g/mol).
    """
    symbol: str
    name: str
    atomic_number: int
    atomic_mass: float


class ElementRegistry:
    """
    Read-only registry of supported species (Singleton pattern).

    Only the species listed here can appear in an input geometry; any
    other atomic number is rejected with UnsupportedSpecies.

    Example:
        >>> from pyaimd.core import elements
        >>> elements.lookup(8).symbol
        'O'
        >>> elements.lookup(79).atomic_mass
        196.97
    """

    _instance: Optional["ElementRegistry"] = None
    _initialized: bool = False

    def __new__(cls) -> "ElementRegistry":
        """Singleton: Only one registry instance exists."""
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __init__(self) -> None:
        """Initialize the species table (only once)."""
        if not ElementRegistry._initialized:
            self._elements_by_number: Dict[int, ElementData] = {}
            self._initialize_table()
            ElementRegistry._initialized = True

    def _initialize_table(self) -> None:
        """Populate the registry. Masses: IUPAC standard atomic weights."""
        elements_data = [
            ElementData("H", "Hydrogen", 1, 1.008),
            ElementData("He", "Helium", 2, 4.0026),
            ElementData("C", "Carbon", 6, 12.011),
            ElementData("N", "Nitrogen", 7, 14.007),
            ElementData("O", "Oxygen", 8, 15.999),
            ElementData("F", "Fluorine", 9, 18.998),
            ElementData("Ne", "Neon", 10, 20.180),
            ElementData("P", "Phosphorus", 15, 30.974),
            ElementData("S", "Sulfur", 16, 32.06),
            ElementData("Cl", "Chlorine", 17, 35.45),
            ElementData("Ag", "Silver", 47, 107.87),
            ElementData("Au", "Gold", 79, 196.97),
        ]

        for element in elements_data:
            self._elements_by_number[element.atomic_number] = element

    def lookup(self, atomic_number: int) -> ElementData:
        """
        Resolve an atomic number to its species entry.

        Raises:
            UnsupportedSpecies: If the number is not in the table.
        """
        element = self._elements_by_number.get(atomic_number)
        if element is None:
            raise UnsupportedSpecies(atomic_number)
        return element


# Module-level convenience instance (Singleton)
elements = ElementRegistry()

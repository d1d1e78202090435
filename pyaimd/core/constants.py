"""
Physical constants and unit conversions for AIMD runs.

Internal units are Å (length), fs (time) and amu = g/mol (mass), so
forces are amu·Å/fs² and velocities Å/fs. Energies are reported in
units of 100 kJ/mol.
"""
from typing import Final

# Avogadro's number (mol^-1)
AVOGADRO: Final[float] = 6.0221408e23

# Boltzmann constant in SI units (J/K)
BOLTZMANN_SI: Final[float] = 1.380649e-23

# Molar gas constant (J/(mol·K))
GAS_CONSTANT: Final[float] = 8.31446261815324

# Reference temperature for velocity sampling and the bootstrap rescale (K)
REFERENCE_TEMPERATURE: Final[float] = 300.0

# amu (g/mol) to kg per particle
AMU_TO_KG: Final[float] = 1.0 / AVOGADRO / 1000.0

# (m/s)^2 to (Å/fs)^2
M2_S2_TO_A2_FS2: Final[float] = 1e-10

# amu·Å²/fs² to the reported energy unit (100 kJ/mol)
KINETIC_TO_REPORT: Final[float] = 100.0

# Reported energy unit (100 kJ/mol) to J/mol
REPORT_TO_J_MOL: Final[float] = 100.0 * 1000.0

# Hartree to kJ/mol
HARTREE_TO_KJ_MOL: Final[float] = 2625.5

# Hartree to the reported energy unit (100 kJ/mol)
HARTREE_TO_REPORT: Final[float] = HARTREE_TO_KJ_MOL / 100.0

# Hartree/Bohr to amu·Å/fs²
HARTREE_BOHR_TO_FORCE: Final[float] = 0.496147792

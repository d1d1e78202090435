"""
pyaimd - Ab-initio Molecular Dynamics Driver.

A Python framework that drives Born-Oppenheimer molecular dynamics runs
where forces come from an external quantum-chemistry program at every
step. The driver owns the atoms, integrates them with velocity Verlet and
keeps an append-only checkpoint log so a crashed run can be resumed.

Main features:
- Typed vector quantities (Position, Velocity, Force, ...)
- Geometry ingestion from Gaussian log files
- Frozen-atom constraints
- One-shot velocity rescale to the reference temperature
- Gaussian 16 force evaluator
- Checkpoint/restart through a JSON-lines save file
"""

__version__ = "0.1.0"
__author__ = "pyaimd Team"

"""
Simulator module for AIMD runs.

Provides the run driver and its persistence:
- SimulationEngine: Bootstrap and velocity Verlet stepping
- CheckpointStore: Append-only JSON-lines checkpoint log
- run_simulation: Start or resume a run from RunParameters
"""

from .checkpoint import AtomRecord, CheckpointStore, SimulationRecord
from .engine import EnginePhase, SimulationEngine, run_simulation

__all__ = [
    "SimulationEngine",
    "EnginePhase",
    "run_simulation",
    "CheckpointStore",
    "SimulationRecord",
    "AtomRecord",
]

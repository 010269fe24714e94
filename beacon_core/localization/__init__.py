"""
Localization Module: known beacon positions and emitter trilateration.

Key classes:
- KnownBeaconPositions: Fixed (x, y) of the three beacons
- EmitterSolver: Levenberg-Marquardt least-squares position estimate
"""

from .known_positions import (
    KnownBeaconPosition,
    KnownBeaconPositions,
    DEFAULT_POSITIONS,
)
from .emitter_solver import (
    EmitterSolver,
    EmitterSolverConfig,
    distances_from,
)

__all__ = [
    'KnownBeaconPosition',
    'KnownBeaconPositions',
    'DEFAULT_POSITIONS',
    'EmitterSolver',
    'EmitterSolverConfig',
    'distances_from',
]

"""
Known beacon positions.

The three beacons sit at fixed plane coordinates for the lifetime of the
process. KnownBeaconPositions is built once (from config or defaults) and
never mutated.
"""

from dataclasses import dataclass
from typing import Dict, List, Mapping, Optional, Tuple
import math

from beacon_core.proto.beacon_report import BeaconName


DEFAULT_POSITIONS = {
    BeaconName.KENOBI: (-500.0, -200.0),
    BeaconName.SKYWALKER: (100.0, -100.0),
    BeaconName.SATO: (500.0, 100.0),
}


@dataclass(frozen=True)
class KnownBeaconPosition:
    """Fixed plane coordinate of one beacon."""

    name: BeaconName
    x: float
    y: float

    def __post_init__(self):
        if not (math.isfinite(self.x) and math.isfinite(self.y)):
            raise ValueError(f"Beacon position must be finite: ({self.x}, {self.y})")

    @property
    def xy(self) -> Tuple[float, float]:
        return (self.x, self.y)


class KnownBeaconPositions:
    """
    Table of the three known beacon positions.

    Usage:
        positions = KnownBeaconPositions.from_config(config.KNOWN_BEACON_CONFIG)
        kenobi = positions[BeaconName.KENOBI]
        solver_input = positions.as_list()  # canonical order
    """

    def __init__(self, positions: Optional[Mapping[BeaconName, Tuple[float, float]]] = None):
        """
        Args:
            positions: BeaconName -> (x, y); uses DEFAULT_POSITIONS if None

        Raises:
            ValueError: If any of the three identities is missing
        """
        positions = positions if positions is not None else DEFAULT_POSITIONS

        missing = [name.value for name in BeaconName.ordered() if name not in positions]
        if missing:
            raise ValueError(f"Known positions missing for beacons: {missing}")

        self._positions: Dict[BeaconName, KnownBeaconPosition] = {
            name: KnownBeaconPosition(name, float(positions[name][0]), float(positions[name][1]))
            for name in BeaconName.ordered()
        }

    @classmethod
    def from_config(cls, beacon_config: Mapping[str, Mapping[str, float]]) -> "KnownBeaconPositions":
        """
        Build from a config dict of name -> {"x": .., "y": ..}.

        Raises:
            ValueError: Unknown beacon name or missing identity
        """
        positions = {}
        for raw_name, coord in beacon_config.items():
            name = BeaconName.parse(raw_name)
            if name is None:
                raise ValueError(f"Unknown beacon in config: {raw_name!r}")
            positions[name] = (coord["x"], coord["y"])
        return cls(positions)

    def __getitem__(self, name: BeaconName) -> KnownBeaconPosition:
        return self._positions[name]

    def as_list(self) -> List[Tuple[float, float]]:
        """Positions as (x, y) tuples in canonical beacon order."""
        return [self._positions[name].xy for name in BeaconName.ordered()]

"""
Beacon Report Message Schema.

Defines the per-beacon measurement record: a distance from the beacon to the
emitter and the message fragments the beacon overheard.

The three beacon identities are fixed. Their declaration order in
BeaconName is the system-wide order used for solving and for the
message-fragment tie-break.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Iterable, Optional, Tuple
import math

from .errors import BeaconError, ErrorKind


class BeaconName(str, Enum):
    """Fixed beacon identities, in canonical order (A, B, C)."""

    KENOBI = "kenobi"
    SKYWALKER = "skywalker"
    SATO = "sato"

    @classmethod
    def parse(cls, name) -> Optional["BeaconName"]:
        """
        Case-insensitive lookup.

        Args:
            name: Raw beacon name (e.g. "Kenobi", "SATO")

        Returns:
            BeaconName, or None if name is not one of the fixed identities
        """
        if not isinstance(name, str):
            return None
        try:
            return cls(name.strip().lower())
        except ValueError:
            return None

    @classmethod
    def ordered(cls) -> Tuple["BeaconName", ...]:
        """All identities in canonical order."""
        return tuple(cls)


@dataclass(frozen=True)
class Beacon:
    """
    Measurement reported by one beacon.

    Attributes:
        name: Normalized (lowercase) beacon name as received
        distance: Distance from beacon to emitter
        fragments: Words overheard at each message index ("" or None = gap)

    Notes:
        - name is kept as a plain string so that unknown names can still be
          carried to the validation step and rejected there
        - Type checks happen here; range checks (finite, >= 0) are reported
          by measurement_error() so callers get a result value
    """

    name: str
    distance: float
    fragments: Optional[Tuple[Optional[str], ...]]

    def __post_init__(self):
        """Normalize fields and reject malformed types."""
        if not isinstance(self.name, str):
            raise TypeError(f"Beacon name must be a string: {self.name!r}")

        if isinstance(self.distance, bool) or not isinstance(self.distance, (int, float)):
            raise TypeError(f"Distance must be a number: {self.distance!r}")

        object.__setattr__(self, 'name', self.name.strip().lower())
        try:
            distance = float(self.distance)
        except OverflowError:
            # Integers beyond float range; measurement_error() rejects them
            distance = math.inf if self.distance > 0 else -math.inf
        object.__setattr__(self, 'distance', distance)

        if self.fragments is not None:
            if isinstance(self.fragments, str):
                raise TypeError("Fragments must be a sequence of strings, not a string")
            fragments = tuple(self.fragments)
            for fragment in fragments:
                if fragment is not None and not isinstance(fragment, str):
                    raise TypeError(f"Fragment must be a string: {fragment!r}")
            object.__setattr__(self, 'fragments', fragments)

    def renamed(self, name: str) -> "Beacon":
        """Copy of this beacon under another name (name gets normalized)."""
        return Beacon(name=name, distance=self.distance, fragments=self.fragments)

    def measurement_error(self) -> Optional[BeaconError]:
        """
        Check distance and fragments.

        Returns:
            BeaconError(INVALID_MEASUREMENT) describing the first problem,
            or None if the measurement is usable
        """
        if not math.isfinite(self.distance):
            return BeaconError(
                ErrorKind.INVALID_MEASUREMENT,
                f"Distance for beacon '{self.name}' must be finite: {self.distance}",
            )

        if self.distance < 0:
            return BeaconError(
                ErrorKind.INVALID_MEASUREMENT,
                f"Distance for beacon '{self.name}' cannot be negative: {self.distance}",
            )

        if not self.fragments:
            return BeaconError(
                ErrorKind.INVALID_MEASUREMENT,
                f"Message fragments for beacon '{self.name}' cannot be empty",
            )

        return None

    def to_dict(self) -> dict:
        """Convert to dictionary in the wire shape."""
        return {
            'name': self.name,
            'distance': self.distance,
            'message': list(self.fragments) if self.fragments is not None else None,
        }


def beacon_from_dict(payload: dict, name: Optional[str] = None) -> Beacon:
    """
    Build a Beacon from a decoded JSON object.

    Args:
        payload: Dict with "distance" and "message" (and "name" unless given)
        name: Authoritative name (e.g. from the URL); overrides payload["name"]

    Returns:
        Beacon instance

    Raises:
        ValueError: Required field missing
        TypeError: Field has the wrong type
    """
    if not isinstance(payload, dict):
        raise TypeError("Beacon payload must be a JSON object")

    if name is None:
        name = payload.get('name')
        if name is None:
            raise ValueError("Field 'name' is required")

    if payload.get('distance') is None:
        raise ValueError("Field 'distance' is required")

    if 'message' not in payload:
        raise ValueError("Field 'message' is required")

    fragments: Optional[Iterable] = payload['message']
    if fragments is not None and not isinstance(fragments, list):
        raise TypeError("Field 'message' must be a list of strings")

    return Beacon(name=name, distance=payload['distance'], fragments=fragments)

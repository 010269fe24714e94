"""
Error result values.

Core operations return these instead of raising, so every caller has to look
at the error kind before using a result.
"""

from dataclasses import dataclass
from enum import IntEnum


class ErrorKind(IntEnum):
    """Kind of client data error."""

    INCOMPLETE_DATA = 1       # Not exactly three beacons, or required name missing
    INVALID_BEACON_NAME = 2   # Name outside the fixed set
    INVALID_MEASUREMENT = 3   # Non-finite/negative distance, missing fragments


@dataclass(frozen=True)
class BeaconError:
    """
    Error returned by registry and consolidation operations.

    Attributes:
        kind: Error category
        message: Human-readable description for the caller
    """

    kind: ErrorKind
    message: str

    @property
    def reason_code(self) -> str:
        """Metrics rejection reason for this error."""
        return self.kind.name.lower()

    def to_dict(self) -> dict:
        """Error payload with a single message field."""
        return {'message': self.message}

"""
Emitter Result Schemas.

Output of the solver (EmitterEstimate) and of the consolidation and
registry operations (ConsolidationResult, SubmitResult).
"""

from dataclasses import dataclass
from typing import Optional, Tuple

from .errors import BeaconError, ErrorKind


@dataclass(frozen=True)
class EmitterEstimate:
    """
    Emitter position estimate from trilateration.

    Attributes:
        x: Estimated x coordinate
        y: Estimated y coordinate
        residual_rms: RMS of (computed - measured) distances at the estimate
        iterations: Solver iterations performed
        converged: False if the iteration cap was hit or the cost overflowed
        geometry_score: Beacon geometry health (0 = collinear, 1 = good)

    Notes:
        - x, y are never rounded
        - A non-converged estimate is still the best point found
    """

    x: float
    y: float
    residual_rms: float = 0.0
    iterations: int = 0
    converged: bool = True
    geometry_score: Optional[float] = None

    def __post_init__(self):
        """Validate estimate."""
        if self.residual_rms < 0:
            raise ValueError(f"Residual cannot be negative: {self.residual_rms}")

        if self.iterations < 0:
            raise ValueError(f"Iterations cannot be negative: {self.iterations}")

    @property
    def position(self) -> Tuple[float, float]:
        """(x, y) tuple."""
        return (self.x, self.y)

    def to_dict(self) -> dict:
        """Position payload."""
        return {'x': self.x, 'y': self.y}


@dataclass(frozen=True)
class ConsolidationResult:
    """
    Result of consolidating three beacons.

    Exactly one of (position, message) or error is populated.
    """

    position: Optional[EmitterEstimate] = None
    message: Optional[str] = None
    error: Optional[BeaconError] = None

    def __post_init__(self):
        """Check that the result is either a success or an error."""
        if self.error is None and (self.position is None or self.message is None):
            raise ValueError("Successful result needs both position and message")

        if self.error is not None and self.position is not None:
            raise ValueError("Failed result cannot carry a position")

    @property
    def ok(self) -> bool:
        """True if consolidation succeeded."""
        return self.error is None

    @property
    def error_kind(self) -> Optional[ErrorKind]:
        """Error kind, or None on success."""
        return self.error.kind if self.error else None

    def to_dict(self) -> dict:
        """Success or error payload."""
        if self.error is not None:
            return self.error.to_dict()

        return {
            'position': self.position.to_dict(),
            'message': self.message,
        }


@dataclass(frozen=True)
class SubmitResult:
    """Result of storing one beacon in the registry."""

    name: Optional[str] = None
    error: Optional[BeaconError] = None

    @property
    def ok(self) -> bool:
        """True if the beacon was stored."""
        return self.error is None

    @property
    def error_kind(self) -> Optional[ErrorKind]:
        """Error kind, or None on success."""
        return self.error.kind if self.error else None

    def to_dict(self) -> dict:
        """Acknowledgement or error payload."""
        if self.error is not None:
            return self.error.to_dict()
        return {'message': 'stored'}


def create_failure(kind: ErrorKind, message: str) -> ConsolidationResult:
    """
    Create a failed ConsolidationResult.

    Args:
        kind: Error kind
        message: Human-readable description

    Returns:
        ConsolidationResult carrying only the error
    """
    return ConsolidationResult(error=BeaconError(kind, message))

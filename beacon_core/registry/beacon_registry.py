"""
Beacon Registry.

Holds the most recent submission for each of the three beacons while
measurements arrive one at a time (split workflow). Entries never expire;
a newer submission for the same name overwrites the old one.

Thread safety: a single internal lock guards the map. Beacon values are
immutable, so a snapshot copy never contains a half-written entry and
callers never need to lock.
"""

from types import MappingProxyType
from typing import Dict, Mapping, Optional
import logging
import threading

from beacon_core.proto.beacon_report import Beacon, BeaconName
from beacon_core.proto.emitter_result import SubmitResult
from beacon_core.proto.errors import BeaconError, ErrorKind
from beacon_core.metrics import MetricsCollector, get_metrics

logger = logging.getLogger(__name__)


class BeaconRegistry:
    """
    Per-process store of the latest measurement per beacon.

    Usage:
        registry = BeaconRegistry()
        result = registry.submit("Kenobi", beacon)
        if not result.ok:
            print(result.error.message)

        current = registry.snapshot()  # {"kenobi": Beacon, ...}
    """

    def __init__(self, metrics: Optional[MetricsCollector] = None):
        """
        Args:
            metrics: Metrics collector (global collector if None)
        """
        self._lock = threading.Lock()
        self._beacons: Dict[str, Beacon] = {}
        self.metrics = metrics or get_metrics()

    def submit(self, name: str, beacon: Beacon) -> SubmitResult:
        """
        Store or overwrite the entry for name.

        Args:
            name: Beacon name (case-insensitive); authoritative over beacon.name
            beacon: Measurement to store

        Returns:
            SubmitResult; on error the registry is unchanged
        """
        self.metrics.increment('split_submissions')

        identity = BeaconName.parse(name)
        if identity is None:
            return self._reject(BeaconError(
                ErrorKind.INVALID_BEACON_NAME,
                f"Invalid beacon name: {name}",
            ))

        stored = beacon.renamed(identity.value)
        measurement_error = stored.measurement_error()
        if measurement_error is not None:
            return self._reject(measurement_error)

        with self._lock:
            self._beacons[identity.value] = stored

        self.metrics.increment('split_stored')
        logger.info("Stored beacon '%s' (distance %.3f)", identity.value, stored.distance)
        return SubmitResult(name=identity.value)

    def snapshot(self) -> Mapping[str, Beacon]:
        """
        Copy of the current entries.

        Returns:
            Read-only mapping of normalized name -> Beacon
        """
        with self._lock:
            return MappingProxyType(dict(self._beacons))

    def get(self, name: str) -> Optional[Beacon]:
        """Latest beacon stored under name, or None."""
        identity = BeaconName.parse(name)
        if identity is None:
            return None
        with self._lock:
            return self._beacons.get(identity.value)

    def is_ready(self) -> bool:
        """True once all three beacons have been submitted."""
        with self._lock:
            return all(name.value in self._beacons for name in BeaconName.ordered())

    def reset(self):
        """Remove all entries."""
        with self._lock:
            self._beacons.clear()
        logger.info("Beacon registry cleared")

    def __len__(self) -> int:
        with self._lock:
            return len(self._beacons)

    def _reject(self, error: BeaconError) -> SubmitResult:
        self.metrics.increment_rejection(error.reason_code)
        logger.warning("Rejected beacon submission: %s", error.message)
        return SubmitResult(error=error)

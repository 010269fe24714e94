"""
Consolidation Service.

Single place where a beacon data set is checked before solving: exactly
the three fixed beacons, each present once, each with a usable measurement.
Both request shapes go through here:

- one-shot: a list of three beacon records in any order
- split: the registry's current snapshot

Distances and fragment lists are extracted in canonical beacon order, then
the emitter solver and message reconstructor run on that immutable data.
"""

from typing import Dict, Mapping, Optional, Sequence
import logging

from beacon_core.proto.beacon_report import Beacon, BeaconName
from beacon_core.proto.emitter_result import ConsolidationResult, create_failure
from beacon_core.proto.errors import ErrorKind
from beacon_core.localization.emitter_solver import EmitterSolver
from beacon_core.localization.known_positions import KnownBeaconPositions
from beacon_core.messaging.message_reconstructor import MessageReconstructor
from beacon_core.registry.beacon_registry import BeaconRegistry
from beacon_core.metrics import MetricsCollector, get_metrics

logger = logging.getLogger(__name__)

INCOMPLETE_DATA_MESSAGE = "Insufficient information: data from kenobi, skywalker and sato is required"


class ConsolidationService:
    """
    Validate beacon data and compute emitter position and message.

    Usage:
        service = ConsolidationService()

        # One-shot
        result = service.consolidate_request([kenobi, skywalker, sato])

        # Split
        result = service.consolidate_stored(registry)

        if result.ok:
            print(result.position.x, result.position.y, result.message)
        else:
            print(result.error.kind, result.error.message)
    """

    def __init__(
        self,
        known_positions: Optional[KnownBeaconPositions] = None,
        solver: Optional[EmitterSolver] = None,
        reconstructor: Optional[MessageReconstructor] = None,
        metrics: Optional[MetricsCollector] = None,
    ):
        """
        Args:
            known_positions: Fixed beacon positions (defaults if None)
            solver: Emitter solver (default config if None)
            reconstructor: Message reconstructor
            metrics: Metrics collector (global collector if None)
        """
        self.metrics = metrics or get_metrics()
        self.known_positions = known_positions or KnownBeaconPositions()
        self.solver = solver or EmitterSolver(metrics=self.metrics)
        self.reconstructor = reconstructor or MessageReconstructor()

    def consolidate_request(self, beacons: Sequence[Beacon]) -> ConsolidationResult:
        """
        Consolidate a one-shot request.

        Args:
            beacons: Beacon records in any order

        Returns:
            ConsolidationResult; INCOMPLETE_DATA unless there are exactly
            three records covering the three fixed names
        """
        if len(beacons) != 3:
            self.metrics.increment('consolidate_requests')
            return self._fail(
                ErrorKind.INCOMPLETE_DATA,
                f"{INCOMPLETE_DATA_MESSAGE} (got {len(beacons)} records)",
            )

        # A duplicate name collapses two records into one key, leaving a
        # required name missing
        beacons_by_name: Dict[str, Beacon] = {beacon.name: beacon for beacon in beacons}
        return self.consolidate(beacons_by_name)

    def consolidate_stored(self, registry: BeaconRegistry) -> ConsolidationResult:
        """Consolidate whatever the registry currently holds."""
        return self.consolidate(registry.snapshot())

    def consolidate(self, beacons_by_name: Mapping[str, Beacon]) -> ConsolidationResult:
        """
        Consolidate beacons keyed by name.

        Args:
            beacons_by_name: Normalized beacon name -> Beacon; keys other than
                the three fixed names are ignored

        Returns:
            ConsolidationResult with position and message, or an error
        """
        self.metrics.increment('consolidate_requests')

        missing = [name.value for name in BeaconName.ordered() if name.value not in beacons_by_name]
        if missing:
            return self._fail(
                ErrorKind.INCOMPLETE_DATA,
                f"{INCOMPLETE_DATA_MESSAGE} (missing: {', '.join(missing)})",
            )

        ordered = [beacons_by_name[name.value] for name in BeaconName.ordered()]

        for beacon in ordered:
            error = beacon.measurement_error()
            if error is not None:
                return self._fail(error.kind, error.message)

        distances = [beacon.distance for beacon in ordered]
        fragment_lists = [beacon.fragments for beacon in ordered]

        position = self.solver.estimate(self.known_positions.as_list(), distances)
        message = self.reconstructor.reconstruct(fragment_lists)

        self.metrics.increment('consolidate_success')
        logger.info(
            "Consolidated emitter at (%.4f, %.4f), message %r",
            position.x, position.y, message,
        )

        return ConsolidationResult(position=position, message=message)

    def _fail(self, kind: ErrorKind, message: str) -> ConsolidationResult:
        result = create_failure(kind, message)
        self.metrics.increment_rejection(result.error.reason_code)
        logger.warning("Consolidation rejected (%s): %s", kind.name, message)
        return result

"""
HTTP transport for the beacon emitter locator.

Thin Flask layer: parses JSON into Beacon records, calls the consolidation
service or the registry, and turns result values into responses.

Routes:
    POST   /topsecret/                    one-shot consolidate
    POST   /topsecret_split/<beacon_name> store one beacon
    GET    /topsecret_split               consolidate stored beacons
    GET    /topsecret_split/status        stored count and readiness
    GET    /topsecret_split/<beacon_name> stored measurement for one beacon
    DELETE /topsecret_split               clear stored beacons
    GET    /metrics                       counters snapshot
"""

from __future__ import annotations

import logging
from typing import Optional

from flask import Flask, jsonify, request

from beacon_core.domain import ConsolidationService
from beacon_core.metrics import MetricsCollector, get_metrics
from beacon_core.proto import beacon_from_dict
from beacon_core.registry import BeaconRegistry

logger = logging.getLogger(__name__)

# Consolidation errors answer 404, submit and parse errors 400
CONSOLIDATE_ERROR_STATUS = 404
SUBMIT_ERROR_STATUS = 400
MALFORMED_STATUS = 400
NOT_STORED_STATUS = 404


def create_app(
    registry: Optional[BeaconRegistry] = None,
    service: Optional[ConsolidationService] = None,
    metrics: Optional[MetricsCollector] = None,
) -> Flask:
    """
    Build the Flask app around an explicitly owned registry and service.

    Args:
        registry: Store for split submissions (new empty registry if None)
        service: Consolidation service (default positions/solver if None)
        metrics: Metrics collector (global collector if None)

    Returns:
        Configured Flask app
    """
    metrics = metrics or get_metrics()
    registry = registry if registry is not None else BeaconRegistry(metrics=metrics)
    service = service or ConsolidationService(metrics=metrics)

    app = Flask(__name__)
    app.json.sort_keys = False
    app.extensions["beacon_registry"] = registry
    app.extensions["consolidation_service"] = service

    def malformed(message: str):
        metrics.increment_rejection('malformed_request')
        logger.warning("Malformed request to %s: %s", request.path, message)
        return jsonify({"message": message}), MALFORMED_STATUS

    def consolidation_response(result):
        if result.ok:
            return jsonify(result.to_dict()), 200
        return jsonify(result.to_dict()), CONSOLIDATE_ERROR_STATUS

    @app.route("/topsecret/", methods=["POST"])
    @app.route("/topsecret", methods=["POST"])
    def topsecret():
        payload = request.get_json(silent=True)
        if not isinstance(payload, dict):
            return malformed("Request body must be a JSON object")

        records = payload.get("satellites")
        if not isinstance(records, list):
            return malformed("Field 'satellites' must be a list")

        try:
            beacons = [beacon_from_dict(record) for record in records]
        except (TypeError, ValueError) as e:
            return malformed(str(e))

        return consolidation_response(service.consolidate_request(beacons))

    @app.route("/topsecret_split/<beacon_name>", methods=["POST"])
    def topsecret_split_submit(beacon_name: str):
        payload = request.get_json(silent=True)
        if not isinstance(payload, dict):
            return malformed("Request body must be a JSON object")

        try:
            beacon = beacon_from_dict(payload, name=beacon_name)
        except (TypeError, ValueError) as e:
            return malformed(str(e))

        result = registry.submit(beacon_name, beacon)
        if result.ok:
            return jsonify(result.to_dict()), 200
        return jsonify(result.to_dict()), SUBMIT_ERROR_STATUS

    @app.route("/topsecret_split", methods=["GET"])
    @app.route("/topsecret_split/", methods=["GET"])
    def topsecret_split_consolidate():
        return consolidation_response(service.consolidate_stored(registry))

    @app.route("/topsecret_split/status", methods=["GET"])
    def topsecret_split_status():
        return jsonify({"stored": len(registry), "ready": registry.is_ready()}), 200

    @app.route("/topsecret_split/<beacon_name>", methods=["GET"])
    def topsecret_split_stored(beacon_name: str):
        beacon = registry.get(beacon_name)
        if beacon is None:
            return jsonify({"message": f"No measurement stored for beacon: {beacon_name}"}), NOT_STORED_STATUS
        return jsonify(beacon.to_dict()), 200

    @app.route("/topsecret_split", methods=["DELETE"])
    def topsecret_split_reset():
        registry.reset()
        return jsonify({"message": "cleared"}), 200

    @app.route("/metrics", methods=["GET"])
    def metrics_snapshot():
        return jsonify(metrics.snapshot().to_dict())

    return app

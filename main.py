"""
Beacon emitter locator server.

Receives beacon distances and message fragments over HTTP, locates the
emitter and reconstructs its message.
"""

import logging
import argparse

import config
from api_server import create_app
from beacon_core.domain import ConsolidationService
from beacon_core.localization import (
    EmitterSolver,
    EmitterSolverConfig,
    KnownBeaconPositions,
)
from beacon_core.metrics import get_metrics
from beacon_core.registry import BeaconRegistry

logging.basicConfig(
    level=getattr(logging, config.LOGGING_CONFIG["level"]),
    format=config.LOGGING_CONFIG["format"]
)
logger = logging.getLogger(__name__)


def build_app():
    """Wire registry, solver and service from config into a Flask app."""
    metrics = get_metrics()

    known_positions = KnownBeaconPositions.from_config(config.KNOWN_BEACON_CONFIG)
    solver = EmitterSolver(EmitterSolverConfig.from_dict(config.SOLVER_CONFIG), metrics=metrics)
    service = ConsolidationService(
        known_positions=known_positions,
        solver=solver,
        metrics=metrics,
    )
    registry = BeaconRegistry(metrics=metrics)

    logger.info("Known beacon positions: %s", known_positions.as_list())

    return create_app(registry=registry, service=service, metrics=metrics)


def main():
    """Parse flags, build the app and serve until interrupted."""
    parser = argparse.ArgumentParser(description='Beacon emitter locator server')
    parser.add_argument('--host', '-H', type=str, default=None,
                        help='Listen address')
    parser.add_argument('--port', '-p', type=int, default=None,
                        help='Listen port')
    parser.add_argument('--debug', '-d', action='store_true',
                        help='Enable debug logging')

    args = parser.parse_args()

    if args.debug:
        logging.getLogger().setLevel(logging.DEBUG)

    if args.host:
        config.SERVER_CONFIG["host"] = args.host
    if args.port:
        config.SERVER_CONFIG["port"] = args.port

    app = build_app()

    logger.info(
        "Serving on %s:%d", config.SERVER_CONFIG["host"], config.SERVER_CONFIG["port"]
    )
    try:
        app.run(
            host=config.SERVER_CONFIG["host"],
            port=config.SERVER_CONFIG["port"],
            threaded=config.SERVER_CONFIG["threaded"],
            debug=False,
            use_reloader=False,
        )
    finally:
        get_metrics().log_summary()
        logger.info("Server stopped")


if __name__ == "__main__":
    main()

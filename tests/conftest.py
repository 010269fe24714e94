"""
Pytest configuration and shared fixtures for the beacon emitter locator tests.

Provides known beacon positions, noiseless measurement builders, fresh
core components and a Flask test client.
"""

import sys
import math
from pathlib import Path
from typing import Dict, List, Tuple

import pytest

# Add project root to path for imports
PROJECT_ROOT = Path(__file__).parent.parent
sys.path.insert(0, str(PROJECT_ROOT))

from beacon_core.domain import ConsolidationService
from beacon_core.localization import EmitterSolver, KnownBeaconPositions
from beacon_core.messaging import MessageReconstructor
from beacon_core.metrics import MetricsCollector
from beacon_core.proto import Beacon
from beacon_core.registry import BeaconRegistry


# =============================================================================
# Beacon Layout Fixtures
# =============================================================================


@pytest.fixture
def known_positions_2d() -> List[Tuple[float, float]]:
    """
    Fixed beacon positions in canonical order.

    Returns:
        [(x, y)] for Kenobi, Skywalker, Sato.
    """
    return [
        (-500.0, -200.0),  # Kenobi
        (100.0, -100.0),   # Skywalker
        (500.0, 100.0),    # Sato
    ]


@pytest.fixture
def known_positions() -> KnownBeaconPositions:
    """Default KnownBeaconPositions table."""
    return KnownBeaconPositions()


# =============================================================================
# Component Fixtures
# =============================================================================


@pytest.fixture
def metrics() -> MetricsCollector:
    """Fresh metrics collector, isolated from the global one."""
    return MetricsCollector()


@pytest.fixture
def solver(metrics: MetricsCollector) -> EmitterSolver:
    """Emitter solver with default configuration."""
    return EmitterSolver(metrics=metrics)


@pytest.fixture
def reconstructor() -> MessageReconstructor:
    return MessageReconstructor()


@pytest.fixture
def registry(metrics: MetricsCollector) -> BeaconRegistry:
    """Empty registry."""
    return BeaconRegistry(metrics=metrics)


@pytest.fixture
def service(metrics: MetricsCollector, known_positions: KnownBeaconPositions) -> ConsolidationService:
    """Consolidation service with default positions."""
    return ConsolidationService(known_positions=known_positions, metrics=metrics)


@pytest.fixture
def client(registry: BeaconRegistry, service: ConsolidationService, metrics: MetricsCollector):
    """Flask test client bound to the fixture registry and service."""
    from api_server import create_app

    app = create_app(registry=registry, service=service, metrics=metrics)
    app.config["TESTING"] = True
    with app.test_client() as test_client:
        yield test_client


# =============================================================================
# Test Data Fixtures
# =============================================================================


@pytest.fixture
def origin_beacons() -> List[Beacon]:
    """
    Noiseless beacons for an emitter at (0, 0).

    Distances: ~538.52 (Kenobi), ~141.42 (Skywalker), ~509.90 (Sato).
    """
    return [
        Beacon("kenobi", math.hypot(500.0, 200.0), ["este", "", "", "mensaje", ""]),
        Beacon("skywalker", math.hypot(100.0, 100.0), ["", "es", "", "", "secreto"]),
        Beacon("sato", math.hypot(500.0, 100.0), ["este", "", "un", "", ""]),
    ]


@pytest.fixture
def origin_payload(origin_beacons: List[Beacon]) -> Dict:
    """One-shot request body for the origin scenario."""
    return {"satellites": [beacon.to_dict() for beacon in origin_beacons]}


# =============================================================================
# Helper Functions
# =============================================================================


def calculate_distance_2d(
    p1: Tuple[float, float], p2: Tuple[float, float]
) -> float:
    """
    Calculate Euclidean distance between two 2D points.

    Args:
        p1: First point (x, y).
        p2: Second point (x, y).

    Returns:
        Distance in the same units as input.
    """
    return math.sqrt((p1[0] - p2[0]) ** 2 + (p1[1] - p2[1]) ** 2)


def sum_squared_residuals(
    point: Tuple[float, float],
    positions: List[Tuple[float, float]],
    distances: List[float],
) -> float:
    """Least-squares cost of a candidate emitter position."""
    return sum(
        (calculate_distance_2d(point, p) - d) ** 2
        for p, d in zip(positions, distances)
    )

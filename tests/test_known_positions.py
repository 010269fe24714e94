"""
Unit tests for known beacon positions and config wiring.
"""

import math

import pytest

import config
from beacon_core.localization import DEFAULT_POSITIONS, KnownBeaconPositions
from beacon_core.proto import BeaconName


class TestKnownBeaconPositions:
    """Tests for the fixed position table."""

    def test_defaults_in_canonical_order(self):
        """Default table lists Kenobi, Skywalker, Sato."""
        assert KnownBeaconPositions().as_list() == [
            (-500.0, -200.0),
            (100.0, -100.0),
            (500.0, 100.0),
        ]

    def test_lookup_by_name(self):
        positions = KnownBeaconPositions()

        assert positions[BeaconName.SKYWALKER].xy == (100.0, -100.0)

    def test_from_project_config_matches_defaults(self):
        """Project config carries the default coordinates."""
        positions = KnownBeaconPositions.from_config(config.KNOWN_BEACON_CONFIG)

        assert positions.as_list() == [DEFAULT_POSITIONS[n] for n in BeaconName.ordered()]

    def test_from_config_case_insensitive(self):
        """Config keys match beacon names in any case."""
        positions = KnownBeaconPositions.from_config({
            "Kenobi": {"x": 0, "y": 0},
            "SKYWALKER": {"x": 1, "y": 0},
            "sato": {"x": 0, "y": 1},
        })

        assert positions.as_list() == [(0.0, 0.0), (1.0, 0.0), (0.0, 1.0)]

    def test_missing_beacon_raises(self):
        """Every beacon needs a position."""
        with pytest.raises(ValueError, match="sato"):
            KnownBeaconPositions({
                BeaconName.KENOBI: (0.0, 0.0),
                BeaconName.SKYWALKER: (1.0, 0.0),
            })

    def test_unknown_beacon_in_config_raises(self):
        """Config may only name the fixed beacons."""
        with pytest.raises(ValueError, match="vader"):
            KnownBeaconPositions.from_config({"vader": {"x": 0, "y": 0}})

    def test_non_finite_position_raises(self):
        """NaN coordinates are rejected."""
        with pytest.raises(ValueError, match="finite"):
            KnownBeaconPositions({
                BeaconName.KENOBI: (math.nan, 0.0),
                BeaconName.SKYWALKER: (1.0, 0.0),
                BeaconName.SATO: (0.0, 1.0),
            })


def test_build_app_from_config():
    """main.build_app wires config into a working app."""
    import main

    app = main.build_app()
    response = app.test_client().post("/topsecret/", json={"satellites": [
        {"name": "kenobi", "distance": math.hypot(500, 200), "message": ["hola", ""]},
        {"name": "skywalker", "distance": math.hypot(100, 100), "message": ["", "mundo"]},
        {"name": "sato", "distance": math.hypot(500, 100), "message": [""]},
    ]})

    assert response.status_code == 200
    assert response.get_json()["message"] == "hola mundo"

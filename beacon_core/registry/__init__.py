"""
Registry Module: in-memory store for beacons submitted one at a time.
"""

from .beacon_registry import BeaconRegistry

__all__ = ['BeaconRegistry']

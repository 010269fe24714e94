"""
Beacon Emitter Locator Core Package.

Locates an emitter on a 2D plane from three beacon distances and rebuilds
the message fragments the beacons overheard.

Package structure:
- proto: Beacon records, result values, error kinds
- localization: Known beacon positions, emitter trilateration
- messaging: Message reconstruction from fragments
- registry: In-memory store for split submissions
- domain: Consolidation (validation + solve + reconstruct)
- metrics: Counters, rejection reasons, histograms
"""

__version__ = "0.1.0"
__author__ = "Beacon Locator Team"

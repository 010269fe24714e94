"""
Request and solver counters.

One MetricsCollector per process tracks:
- Consolidation and split-submission counts
- Rejections, keyed by the error reason code of the result value
- Recent solver iterations and residuals (bounded sample windows)

A rejected request is always counted under exactly one reason.
"""

import logging
import threading
import time
from collections import defaultdict, deque
from dataclasses import dataclass
from typing import Deque, Dict, List, Optional
import statistics

logger = logging.getLogger(__name__)

# Samples kept per histogram; older samples fall off
HISTOGRAM_WINDOW = 5000


@dataclass
class CounterSnapshot:
    """Copy of the collector state taken under its lock."""

    timestamp: float
    counters: Dict[str, int]
    rejection_reasons: Dict[str, int]
    histograms: Dict[str, List[float]]

    def total_rejected(self) -> int:
        return sum(self.rejection_reasons.values())

    def to_dict(self) -> dict:
        """Counters and reasons for JSON output (histograms omitted)."""
        return {
            'timestamp': self.timestamp,
            'counters': dict(self.counters),
            'rejection_reasons': dict(self.rejection_reasons),
        }


class MetricsCollector:
    """
    Thread-safe counters with per-reason rejection tracking.

    Usage:
        collector = MetricsCollector()
        collector.increment('consolidate_requests')
        collector.increment_rejection('incomplete_data')
        collector.record_histogram('solver_iterations', 7)

        collector.log_summary()
    """

    REJECTION_REASONS = {
        'incomplete_data': 'Not exactly three beacons, or required name missing',
        'invalid_beacon_name': 'Beacon name outside the fixed set',
        'invalid_measurement': 'Non-finite/negative distance or missing fragments',
        'malformed_request': 'Body failed to parse into beacon records',
    }

    STANDARD_COUNTERS = (
        'consolidate_requests',
        'consolidate_success',
        'split_submissions',
        'split_stored',
        'solver_runs',
        'solver_not_converged',
        'requests_rejected',
    )

    def __init__(self, histogram_window: int = HISTOGRAM_WINDOW):
        """
        Args:
            histogram_window: Samples kept per histogram
        """
        self._lock = threading.Lock()
        self._counters: Dict[str, int] = defaultdict(int)
        self._rejection_reasons: Dict[str, int] = defaultdict(int)
        self._histograms: Dict[str, Deque[float]] = defaultdict(
            lambda: deque(maxlen=histogram_window)
        )
        self._start_time = time.time()

        # Reported as zero until first use
        for counter in self.STANDARD_COUNTERS:
            self._counters[counter] = 0
        for reason in self.REJECTION_REASONS:
            self._rejection_reasons[reason] = 0

    def increment(self, counter_name: str, value: int = 1):
        with self._lock:
            self._counters[counter_name] += value

    def increment_rejection(self, reason: str, value: int = 1):
        """
        Count a rejected request.

        Args:
            reason: Reason code, normally a key of REJECTION_REASONS
            value: Amount to add (default 1)
        """
        if reason not in self.REJECTION_REASONS:
            logger.warning("Unknown rejection reason '%s'", reason)

        with self._lock:
            self._rejection_reasons[reason] += value
            self._counters['requests_rejected'] += value

    def get_counter(self, counter_name: str) -> int:
        """Current value (0 if never incremented)."""
        with self._lock:
            return self._counters.get(counter_name, 0)

    def record_histogram(self, histogram_name: str, value: float):
        with self._lock:
            self._histograms[histogram_name].append(value)

    def get_histogram_stats(self, histogram_name: str) -> Optional[Dict[str, float]]:
        """
        Summary of the samples in one histogram window.

        Returns:
            Dict with count, mean and max, or None if nothing was recorded
        """
        with self._lock:
            samples = list(self._histograms.get(histogram_name, ()))

        if not samples:
            return None

        return {
            'count': len(samples),
            'mean': statistics.mean(samples),
            'max': max(samples),
        }

    def snapshot(self) -> CounterSnapshot:
        with self._lock:
            return CounterSnapshot(
                timestamp=time.time(),
                counters=dict(self._counters),
                rejection_reasons=dict(self._rejection_reasons),
                histograms={k: list(v) for k, v in self._histograms.items()},
            )

    def get_uptime(self) -> float:
        """Seconds since the collector was created."""
        return time.time() - self._start_time

    def log_summary(self):
        """Log counters, rejection breakdown and solver stats at INFO."""
        snapshot = self.snapshot()

        lines = [f"METRICS SUMMARY (uptime: {self.get_uptime():.1f}s)"]
        for name, value in sorted(snapshot.counters.items()):
            lines.append(f"  {name:30s}: {value:8d}")

        total_rejected = snapshot.total_rejected()
        if total_rejected > 0:
            lines.append("REJECTION REASONS:")
            for reason, count in sorted(snapshot.rejection_reasons.items()):
                if count > 0:
                    pct = (count / total_rejected) * 100
                    lines.append(f"  {reason:30s}: {count:8d} ({pct:5.1f}%)")

        for name in sorted(snapshot.histograms):
            stats = self.get_histogram_stats(name)
            if stats:
                lines.append(
                    f"  {name}: count={stats['count']}, mean={stats['mean']:.3g}, "
                    f"max={stats['max']:.3g}"
                )

        logger.info("\n".join(lines))

"""
Metrics Module: request counters, rejection reasons, solver histograms.

Usage:
    from beacon_core.metrics import get_metrics

    metrics = get_metrics()
    metrics.increment('consolidate_requests')
    metrics.increment_rejection('incomplete_data')
    metrics.record_histogram('solver_residual_rms', 0.42)

Components take an explicit collector where isolation matters (tests);
otherwise they share the process-wide one.
"""

from .counters import MetricsCollector, CounterSnapshot

_global_metrics = None


def get_metrics() -> MetricsCollector:
    """
    Get the process-wide metrics collector, creating it on first use.

    Returns:
        MetricsCollector instance
    """
    global _global_metrics
    if _global_metrics is None:
        _global_metrics = MetricsCollector()
    return _global_metrics


__all__ = ['MetricsCollector', 'CounterSnapshot', 'get_metrics']

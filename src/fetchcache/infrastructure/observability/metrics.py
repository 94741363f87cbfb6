"""
Metrics Collection
In-process counters, gauges and histograms for cache and fetch activity
"""
from __future__ import annotations

from collections import defaultdict
from typing import Any

from fetchcache.infrastructure.observability.logger import get_logger

logger = get_logger(__name__)


class MetricsCollector:
    """
    Collects cache/fetch metrics for observability.

    Supports:
    - Counters (monotonically increasing values)
    - Gauges (values that can go up or down)
    - Histograms (distributions of values)

    A disabled collector accepts every call and records nothing.
    """

    def __init__(self, enabled: bool = False) -> None:
        """
        Initialize metrics collector.

        Args:
            enabled: Whether to enable metrics collection
        """
        self.enabled = enabled
        self._counters: dict[str, float] = defaultdict(float)
        self._gauges: dict[str, float] = {}
        self._histograms: dict[str, list[float]] = defaultdict(list)

        if enabled:
            logger.info("metrics_collector_initialized")

    def increment_counter(self, name: str, value: float = 1.0, **labels: Any) -> None:
        """
        Increment a counter metric.

        Args:
            name: Metric name (e.g., "cache_hits_total")
            value: Amount to increment by
            **labels: Metric labels (e.g., reason="expired")
        """
        if not self.enabled:
            return

        key = self._make_key(name, labels)
        self._counters[key] += value
        logger.debug("counter_incremented", metric=name, value=value, labels=labels)

    def set_gauge(self, name: str, value: float, **labels: Any) -> None:
        if not self.enabled:
            return

        key = self._make_key(name, labels)
        self._gauges[key] = value
        logger.debug("gauge_set", metric=name, value=value, labels=labels)

    def observe_histogram(self, name: str, value: float, **labels: Any) -> None:
        """
        Add an observation to a histogram metric.

        Args:
            name: Metric name (e.g., "fetch_duration_seconds")
            value: Observed value
            **labels: Metric labels
        """
        if not self.enabled:
            return

        key = self._make_key(name, labels)
        self._histograms[key].append(value)
        logger.debug("histogram_observed", metric=name, value=value, labels=labels)

    def get_counter(self, name: str, **labels: Any) -> float:
        return self._counters.get(self._make_key(name, labels), 0.0)

    def get_metrics(self) -> dict[str, Any]:
        """
        Get all collected metrics (for debugging/export).

        Returns:
            Dictionary of all metrics
        """
        return {
            "counters": dict(self._counters),
            "gauges": dict(self._gauges),
            "histograms": {
                k: {
                    "count": len(v),
                    "sum": sum(v),
                    "min": min(v) if v else 0,
                    "max": max(v) if v else 0,
                }
                for k, v in self._histograms.items()
            },
        }

    def reset_metrics(self) -> None:
        """Reset all collected metrics (for testing)."""
        self._counters.clear()
        self._gauges.clear()
        self._histograms.clear()

    @staticmethod
    def _make_key(name: str, labels: dict[str, Any]) -> str:
        label_str = ",".join(f"{k}={v}" for k, v in sorted(labels.items()))
        return f"{name}{{{label_str}}}" if label_str else name


# Global metrics collector (configured at startup)
_metrics: MetricsCollector | None = None


def get_metrics() -> MetricsCollector:
    global _metrics
    if _metrics is None:
        _metrics = MetricsCollector()
    return _metrics


def configure_metrics(enabled: bool = False) -> MetricsCollector:
    """
    Configure the global metrics collector.

    Args:
        enabled: Whether to enable metrics collection
    """
    global _metrics
    _metrics = MetricsCollector(enabled=enabled)
    return _metrics

"""
Observability
Structured logging and in-process metrics
"""
from fetchcache.infrastructure.observability.logger import (
    bound_cache_key,
    configure_logging,
    get_logger,
)
from fetchcache.infrastructure.observability.metrics import (
    MetricsCollector,
    configure_metrics,
    get_metrics,
)

__all__ = [
    "configure_logging",
    "get_logger",
    "bound_cache_key",
    "MetricsCollector",
    "configure_metrics",
    "get_metrics",
]

"""
Wiring helpers: build stores and orchestrators from Settings.
"""
from __future__ import annotations

from typing import Optional

from fetchcache.cache.expiring_store import Clock, ExpiringStore
from fetchcache.config import Settings, get_settings
from fetchcache.fetching.hooks import FailureNotifier, FetchHooks, ProgressIndicator
from fetchcache.fetching.keys import CacheKeyBuilder
from fetchcache.fetching.orchestrator import FetchingStrategy, FetchOrchestrator
from fetchcache.infrastructure.observability import configure_logging, configure_metrics, get_logger
from fetchcache.infrastructure.storage import IKeyValueStorage, InMemoryStorage, RedisStorage

logger = get_logger(__name__)


def configure_observability(settings: Optional[Settings] = None) -> None:
    settings = settings or get_settings()
    configure_logging(settings.log_level, json_logs=settings.log_json)
    configure_metrics(enabled=settings.metrics_enabled)


def build_storage(settings: Optional[Settings] = None) -> IKeyValueStorage:
    settings = settings or get_settings()
    if settings.redis_url:
        logger.info("storage_selected", backend="redis", prefix=settings.redis_prefix)
        return RedisStorage.from_url(settings.redis_url, key_prefix=settings.redis_prefix)
    logger.info("storage_selected", backend="memory")
    return InMemoryStorage()


def build_store(
    settings: Optional[Settings] = None,
    *,
    storage: Optional[IKeyValueStorage] = None,
    clock: Optional[Clock] = None,
) -> ExpiringStore:
    settings = settings or get_settings()
    return ExpiringStore(
        storage if storage is not None else build_storage(settings),
        settings.default_ttl_minutes,
        clock=clock,
    )


def build_orchestrator(
    fetching_strategy: FetchingStrategy,
    key: Optional[str] = None,
    store: Optional[ExpiringStore] = None,
    *,
    indicator: Optional[ProgressIndicator] = None,
    notifier: Optional[FailureNotifier] = None,
    settings: Optional[Settings] = None,
) -> FetchOrchestrator:
    """
    Build an orchestrator using the configured key separator and failure
    message. Caching is enabled only when both key and store are given.
    """
    settings = settings or get_settings()
    hooks = FetchHooks.from_collaborators(indicator, notifier, message=settings.failure_message)
    key_builder = CacheKeyBuilder(key, separator=settings.key_separator) if key is not None else None
    return FetchOrchestrator(fetching_strategy, key, store, hooks, key_builder=key_builder)

"""
Fetch-or-cache orchestration.

Given a cache key and an async fetching strategy, FetchOrchestrator returns
cached data when it is live and non-empty, otherwise fetches from the origin,
stores the result and returns it.

Overlapping get_or_fetch() calls for the same key may each miss and each
fetch; the last write wins. There is no single-flight, cancellation or
timeout handling beyond what the fetching strategy provides.
"""
from __future__ import annotations

import inspect
import time
from collections.abc import Sized
from typing import Any, Awaitable, Callable, Optional, Union

from fetchcache.cache.expiring_store import ExpiringStore, validate_ttl_minutes
from fetchcache.exceptions import InvalidTTLError
from fetchcache.fetching.hooks import FetchHooks
from fetchcache.fetching.keys import CacheKeyBuilder
from fetchcache.infrastructure.observability.logger import bound_cache_key, get_logger
from fetchcache.infrastructure.observability.metrics import MetricsCollector, get_metrics

logger = get_logger(__name__)

FetchingStrategy = Callable[..., Awaitable[Any]]


class _NeverExpire:
    def __repr__(self) -> str:
        return "NEVER_EXPIRE"


NEVER_EXPIRE = _NeverExpire()

TTLOverride = Union[None, float, _NeverExpire]


def is_empty(data: Any) -> bool:
    """None and empty collections/strings count as nothing cached."""
    if data is None:
        return True
    if isinstance(data, Sized) and not isinstance(data, (bytes, bytearray)):
        return len(data) == 0
    return False


class FetchOrchestrator:
    """
    Fetches a dataset from its origin, caching it under a composite key.

    Attributes:
        key: Base cache key, or None when this data set is not cached
        store: ExpiringStore holding the data, or None when not cached
        hooks: Progress/failure callbacks around each origin fetch
    """

    def __init__(
        self,
        fetching_strategy: FetchingStrategy,
        key: Optional[str] = None,
        store: Optional[ExpiringStore] = None,
        hooks: Optional[FetchHooks] = None,
        *,
        key_builder: Optional[CacheKeyBuilder] = None,
        metrics: Optional[MetricsCollector] = None,
    ) -> None:
        """
        Args:
            fetching_strategy: Async callable producing the data for given params
            key: Base cache key. Only provide if this data should be cached
            store: ExpiringStore to cache into. Only provide if this data should be cached
            hooks: Optional progress/failure callbacks
            key_builder: Custom key builder; defaults to one built from key
            metrics: Collector for fetch metrics (global one by default)
        """
        self._fetching_strategy = fetching_strategy
        self.key = key
        self.store = store
        self.hooks = hooks or FetchHooks()
        if key_builder is None and key is not None:
            key_builder = CacheKeyBuilder(key)
        self._key_builder = key_builder
        self._metrics = metrics or get_metrics()

        # None: use the store's default TTL
        self._ttl: TTLOverride = None

    @property
    def caching_enabled(self) -> bool:
        return self.store is not None and self._key_builder is not None

    @property
    def ttl_override(self) -> TTLOverride:
        return self._ttl

    def configure_ttl(self, minutes: Any) -> None:
        """
        Cache this data set for a custom number of minutes instead of the
        store default. Numeric strings are parsed as integers.

        Raises:
            InvalidTTLError: if minutes is not a positive number
        """
        if isinstance(minutes, str):
            try:
                minutes = int(minutes.strip(), 10)
            except ValueError as e:
                raise InvalidTTLError("ttl minutes must be an integer string", details={"minutes": minutes}) from e
        self._ttl = validate_ttl_minutes(minutes, field="minutes")

    def configure_never_expire(self) -> None:
        self._ttl = NEVER_EXPIRE

    def configure_default_ttl(self) -> None:
        self._ttl = None

    def build_key(self, *params: Any) -> Optional[str]:
        if self._key_builder is None:
            return None
        return self._key_builder.build(*params)

    async def fetch(self, *params: Any) -> Any:
        """
        Fetch from the origin regardless of the cache, then store the result.
        Use when the origin data is known to have changed.

        Raises:
            Whatever the fetching strategy raised, unchanged
        """
        key = self.build_key(*params)
        with bound_cache_key(key):
            data = await self._fetch_from_origin(*params)
            self._save_to_cache(key, data)
        return data

    async def refresh(self, *params: Any) -> Any:
        return await self.fetch(*params)

    async def get_or_fetch(self, *params: Any) -> Any:
        """
        Return cached data for params if present, otherwise fetch it from the
        origin and cache it before returning.

        Raises:
            Whatever the fetching strategy raised, unchanged
        """
        if not self.caching_enabled:
            return await self.fetch(*params)

        key = self.build_key(*params)
        with bound_cache_key(key):
            data = self.store.get(key)
            if not is_empty(data):
                logger.debug("cache_hit")
                return data

            logger.debug("cache_miss")
            data = await self._fetch_from_origin(*params)
            self._save_to_cache(key, data)
        return data

    def invalidate(self, *params: Any) -> None:
        """Forget the cached data for params."""
        if not self.caching_enabled:
            return
        self.store.forget(self.build_key(*params))

    def _save_to_cache(self, key: Optional[str], data: Any) -> bool:
        """
        Persist data under key using the configured TTL policy.

        A failing write is logged and reported as False; it never replaces
        the fetched data the caller is waiting for.
        """
        if not self.caching_enabled or key is None:
            return False

        try:
            if self._ttl is NEVER_EXPIRE:
                self.store.forever(key, data)
            elif self._ttl is None:
                self.store.set(key, data)
            else:
                self.store.set(key, data, self._ttl)
        except Exception as e:
            logger.error("cache_write_failed", key=key, error=str(e), exc_info=True)
            self._metrics.increment_counter("cache_write_failures_total")
            return False
        return True

    async def _fetch_from_origin(self, *params: Any) -> Any:
        self.hooks.start()
        logger.debug("fetch_started", key=self.key, params=len(params))
        started = time.perf_counter()
        try:
            result = self._fetching_strategy(*params)
            if inspect.isawaitable(result):
                result = await result
        except BaseException as e:
            self.hooks.end()
            if isinstance(e, Exception):
                self._metrics.increment_counter("fetch_failures_total")
                logger.warning("fetch_failed", key=self.key, error=str(e))
                self.hooks.error(e)
            raise

        self.hooks.end()
        elapsed = time.perf_counter() - started
        self._metrics.observe_histogram("fetch_duration_seconds", elapsed)
        logger.debug("fetch_succeeded", key=self.key, duration_s=round(elapsed, 4))
        return result

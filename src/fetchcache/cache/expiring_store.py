"""
Expiring key-value cache over a synchronous string storage.

Staleness is detected passively on read; nothing sweeps the backing
storage, and an expired entry stays there until it is overwritten or
forgotten.
"""
from __future__ import annotations

import json
import math
import time
from typing import Any, Callable, Mapping, Optional, Union

from fetchcache.cache.entry import CacheEntry
from fetchcache.exceptions import InvalidTTLError
from fetchcache.infrastructure.observability.logger import get_logger
from fetchcache.infrastructure.observability.metrics import MetricsCollector, get_metrics
from fetchcache.infrastructure.storage.storage_protocol import IKeyValueStorage
from fetchcache.utils.serialization import dumps, loads

logger = get_logger(__name__)

Clock = Callable[[], int]


def epoch_ms() -> int:
    return int(time.time() * 1000)


def validate_ttl_minutes(minutes: Any, *, field: str = "ttl_minutes") -> float:
    """
    Return minutes if it is a positive number.

    Raises:
        InvalidTTLError: for non-numbers, non-finite values and anything <= 0
    """
    if isinstance(minutes, bool) or not isinstance(minutes, (int, float)):
        raise InvalidTTLError(f"{field} must be a number of minutes", details={field: repr(minutes)})
    if isinstance(minutes, float) and not math.isfinite(minutes):
        raise InvalidTTLError(f"{field} must be finite", details={field: repr(minutes)})
    if minutes <= 0:
        raise InvalidTTLError(f"{field} must be > 0", details={field: minutes})
    return minutes


class ExpiringStore:
    """
    Wraps values with expiration metadata and decides staleness.

    Attributes:
        storage: Backing string storage
        default_ttl_minutes: TTL applied by set() when none is given
    """

    def __init__(
        self,
        storage: IKeyValueStorage,
        default_ttl_minutes: float,
        *,
        clock: Optional[Clock] = None,
        metrics: Optional[MetricsCollector] = None,
    ) -> None:
        """
        Args:
            storage: Synchronous get/set/remove string storage
            default_ttl_minutes: Positive default TTL in minutes
            clock: Zero-arg callable returning epoch milliseconds
            metrics: Collector for hit/miss/write counters (global one by default)
        """
        self.storage = storage
        self.default_ttl_minutes = validate_ttl_minutes(default_ttl_minutes, field="default_ttl_minutes")
        self._clock = clock or epoch_ms
        self._metrics = metrics or get_metrics()

    def now(self) -> int:
        return self._clock()

    def _miss(self, key: str, reason: str) -> None:
        self._metrics.increment_counter("cache_misses_total", reason=reason)
        logger.debug("cache_store_miss", key=key, reason=reason)

    def get_entry(self, key: str) -> Optional[CacheEntry]:
        """
        Read the live entry for key.

        Returns:
            The entry, or None when nothing is stored, the stored text is
            corrupt, or the entry has expired
        """
        raw = self.storage.get_item(key)
        if raw is None:
            self._miss(key, "absent")
            return None

        try:
            decoded = loads(raw)
        except (json.JSONDecodeError, TypeError, ValueError, RecursionError) as e:
            logger.warning("cache_entry_unparseable", key=key, error=str(e))
            self._miss(key, "corrupt")
            return None

        if decoded is None:
            # a forgotten entry written as JSON null
            self._miss(key, "absent")
            return None

        try:
            entry = CacheEntry.from_record(decoded)
        except ValueError as e:
            logger.warning("cache_entry_malformed", key=key, error=str(e))
            self._miss(key, "corrupt")
            return None

        if entry.is_expired(self.now()):
            self._miss(key, "expired")
            return None

        self._metrics.increment_counter("cache_hits_total")
        return entry

    def get(self, key: str) -> Any:
        """
        Get the cached value for key.

        Returns:
            The unwrapped value, or None on a miss
        """
        entry = self.get_entry(key)
        return None if entry is None else entry.value

    def set(self, key: str, value: Any, ttl_minutes: Optional[float] = None) -> None:
        """
        Remember value for ttl_minutes (store default when None).

        A CacheEntry passed as value is persisted unchanged, keeping its own
        expiration. Any other value, including a mapping that happens to hold
        an "expires" key, is wrapped afresh.

        Raises:
            InvalidTTLError: if ttl_minutes is not a positive number
        """
        if isinstance(value, CacheEntry):
            entry = value
        else:
            minutes = self.default_ttl_minutes if ttl_minutes is None else validate_ttl_minutes(ttl_minutes)
            entry = CacheEntry.with_ttl(value, minutes, self.now())
        self._write(key, entry, mode="ttl")

    def forever(self, key: str, value: Any) -> None:
        """Remember value with no expiration."""
        self._write(key, CacheEntry(value=value), mode="forever")

    def forget(self, key: str) -> None:
        """Drop the entry for key. Unknown keys are ignored."""
        self.storage.remove_item(key)
        logger.debug("cache_entry_forgotten", key=key)

    def is_expired(self, entry: Union[CacheEntry, Mapping[str, Any], None]) -> bool:
        """
        Staleness predicate.

        None counts as expired; an entry or record without an expiration
        never expires.
        """
        if entry is None:
            return True
        now = self.now()
        if isinstance(entry, CacheEntry):
            return entry.is_expired(now)
        if "expires" not in entry or entry["expires"] is None:
            return False
        expires = entry["expires"]
        if isinstance(expires, bool) or not isinstance(expires, (int, float)) or (
            isinstance(expires, float) and not math.isfinite(expires)
        ):
            return True
        return now >= expires

    def _write(self, key: str, entry: CacheEntry, *, mode: str) -> None:
        self.storage.set_item(key, dumps(entry.to_record()))
        self._metrics.increment_counter("cache_writes_total", mode=mode)
        logger.debug("cache_entry_written", key=key, expires_at=entry.expires_at, mode=mode)

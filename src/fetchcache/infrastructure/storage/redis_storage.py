"""
Redis Storage Implementation
Synchronous Redis-backed IKeyValueStorage
"""
from __future__ import annotations

from redis import Redis
from redis.exceptions import RedisError

from fetchcache.exceptions import StorageError
from fetchcache.infrastructure.observability.logger import get_logger

logger = get_logger(__name__)


class RedisStorage:
    """
    Persistent key-value storage on top of a Redis client.

    Entries are written without a Redis-side TTL; ExpiringStore reads the
    embedded expiration and decides staleness itself.

    Attributes:
        redis: Synchronous Redis client (decode_responses=True)
        key_prefix: Prefix for all storage keys (for namespacing)
    """

    def __init__(self, redis: Redis, key_prefix: str = "fetchcache") -> None:
        """
        Initialize Redis storage.

        Args:
            redis: Redis client instance
            key_prefix: Prefix for storage keys (default: "fetchcache")
        """
        self.redis = redis
        self.key_prefix = key_prefix

    @classmethod
    def from_url(cls, url: str, key_prefix: str = "fetchcache") -> "RedisStorage":
        return cls(Redis.from_url(url, decode_responses=True), key_prefix=key_prefix)

    def _make_key(self, key: str) -> str:
        """Create prefixed key for namespacing."""
        return f"{self.key_prefix}:{key}" if self.key_prefix else key

    def get_item(self, key: str) -> str | None:
        """
        Read raw text for key.

        A Redis failure is logged and reported as nothing stored, so the
        caller falls through to its origin.
        """
        try:
            value = self.redis.get(self._make_key(key))
        except RedisError as e:
            logger.error("redis_get_failed", key=key, error=str(e))
            return None
        if value is None:
            return None
        if isinstance(value, bytes):
            return value.decode("utf-8")
        return value

    def set_item(self, key: str, value: str) -> None:
        """
        Store raw text for key.

        Raises:
            StorageError: if Redis rejects the write
        """
        try:
            self.redis.set(self._make_key(key), value)
        except RedisError as e:
            logger.error("redis_set_failed", key=key, error=str(e))
            raise StorageError("Redis SET failed", details={"key": key}) from e

    def remove_item(self, key: str) -> None:
        try:
            self.redis.delete(self._make_key(key))
        except RedisError as e:
            logger.error("redis_delete_failed", key=key, error=str(e))
            raise StorageError("Redis DELETE failed", details={"key": key}) from e

    def ping(self) -> bool:
        """
        Ping Redis to check connectivity.

        Returns:
            True if Redis is reachable
        """
        try:
            return bool(self.redis.ping())
        except RedisError as e:
            logger.error("redis_ping_failed", error=str(e))
            return False

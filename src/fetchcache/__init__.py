"""
fetchcache - expiring key-value cache with a fetch-or-cache orchestrator.
"""
from fetchcache.cache import CacheEntry, ExpiringStore
from fetchcache.exceptions import CacheKeyError, FetchCacheError, InvalidTTLError, StorageError
from fetchcache.fetching import (
    DEFAULT_FAILURE_MESSAGE,
    NEVER_EXPIRE,
    CacheKeyBuilder,
    FetchHooks,
    FetchOrchestrator,
)
from fetchcache.infrastructure.storage.memory_storage import InMemoryStorage
from fetchcache.infrastructure.storage.storage_protocol import IKeyValueStorage

__version__ = "0.1.0"

__all__ = [
    "CacheEntry",
    "ExpiringStore",
    "FetchOrchestrator",
    "FetchHooks",
    "CacheKeyBuilder",
    "NEVER_EXPIRE",
    "DEFAULT_FAILURE_MESSAGE",
    "IKeyValueStorage",
    "InMemoryStorage",
    "FetchCacheError",
    "InvalidTTLError",
    "StorageError",
    "CacheKeyError",
]

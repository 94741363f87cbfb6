"""
Storage Infrastructure
Backing key-value stores for ExpiringStore
"""
from fetchcache.infrastructure.storage.memory_storage import InMemoryStorage
from fetchcache.infrastructure.storage.redis_storage import RedisStorage
from fetchcache.infrastructure.storage.storage_protocol import IKeyValueStorage

__all__ = [
    "IKeyValueStorage",
    "InMemoryStorage",
    "RedisStorage",
]

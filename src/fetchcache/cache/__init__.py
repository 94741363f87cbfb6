from fetchcache.cache.entry import CacheEntry
from fetchcache.cache.expiring_store import ExpiringStore, epoch_ms

__all__ = ["CacheEntry", "ExpiringStore", "epoch_ms"]

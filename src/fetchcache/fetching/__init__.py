from fetchcache.fetching.hooks import DEFAULT_FAILURE_MESSAGE, FetchHooks
from fetchcache.fetching.keys import CacheKeyBuilder
from fetchcache.fetching.orchestrator import NEVER_EXPIRE, FetchOrchestrator

__all__ = [
    "CacheKeyBuilder",
    "DEFAULT_FAILURE_MESSAGE",
    "FetchHooks",
    "FetchOrchestrator",
    "NEVER_EXPIRE",
]

"""
Error types raised by fetchcache.

Fetch failures are never wrapped: the exception raised by the fetching
strategy reaches the caller unchanged.
"""
from __future__ import annotations

from typing import Any, Dict, Optional


class FetchCacheError(Exception):
    """Base class for library errors."""
    code: str = "fetchcache_error"
    message: str
    details: Optional[Dict[str, Any]]

    def __init__(
        self,
        message: str = "",
        *,
        code: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
    ) -> None:
        super().__init__(message or self.__class__.__name__)
        if code is not None:
            self.code = code
        self.message = message or self.__class__.__name__
        self.details = details

    def to_dict(self) -> Dict[str, Any]:
        body: Dict[str, Any] = {"code": self.code, "message": self.message}
        if self.details:
            body["details"] = self.details
        return body


class InvalidTTLError(FetchCacheError, ValueError):
    code = "invalid_ttl"


class StorageError(FetchCacheError):
    code = "storage_error"


class CacheKeyError(FetchCacheError, ValueError):
    code = "invalid_cache_key"


__all__ = [
    "FetchCacheError",
    "InvalidTTLError",
    "StorageError",
    "CacheKeyError",
]

"""
Cache entry value object and its persisted record shape.

Persisted form is a JSON object: {"value": <data>} for entries that never
expire, {"value": <data>, "expires": <epoch ms>} otherwise.
"""
from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Any, Mapping, Optional

MS_PER_MINUTE = 60_000


def _coerce_expires(raw: Any) -> int:
    # bool is an int subclass; a flag is never a timestamp
    if isinstance(raw, bool) or not isinstance(raw, (int, float)):
        raise ValueError(f"expires must be epoch milliseconds, got {raw!r}")
    if isinstance(raw, float) and not math.isfinite(raw):
        raise ValueError(f"expires must be finite, got {raw!r}")
    return int(raw)


@dataclass(frozen=True)
class CacheEntry:
    """
    A cached value plus optional expiration.

    Attributes:
        value: The cached data
        expires_at: Epoch milliseconds at which the entry expires; None never expires
    """

    value: Any
    expires_at: Optional[int] = None

    @classmethod
    def with_ttl(cls, value: Any, ttl_minutes: float, now_ms: int) -> "CacheEntry":
        return cls(value=value, expires_at=now_ms + int(ttl_minutes * MS_PER_MINUTE))

    @property
    def never_expires(self) -> bool:
        return self.expires_at is None

    def is_expired(self, now_ms: int) -> bool:
        """Expired iff an expiration is set and now_ms >= expires_at."""
        return self.expires_at is not None and now_ms >= self.expires_at

    def to_record(self) -> dict[str, Any]:
        record: dict[str, Any] = {"value": self.value}
        if self.expires_at is not None:
            record["expires"] = self.expires_at
        return record

    @classmethod
    def from_record(cls, record: Any) -> "CacheEntry":
        """
        Build an entry from a decoded record.

        Raises:
            ValueError: if record is not a mapping with a "value" key, or its
                "expires" is not a number
        """
        if not isinstance(record, Mapping) or "value" not in record:
            raise ValueError("cache record must be an object with a 'value' key")
        expires = record.get("expires")
        return cls(
            value=record["value"],
            expires_at=None if expires is None else _coerce_expires(expires),
        )

# /src/fetchcache/utils/serialization.py
"""
Safe JSON helpers with support for datetime, UUID, Decimal.
"""

from __future__ import annotations

import json
from datetime import date, datetime
from decimal import Decimal
from typing import Any
from uuid import UUID


class SafeEncoder(json.JSONEncoder):
    def default(self, o: Any):
        if isinstance(o, (datetime, date)):
            return o.isoformat()
        if isinstance(o, (UUID,)):
            return str(o)
        if isinstance(o, (Decimal,)):
            return float(o)
        if isinstance(o, (set, frozenset)):
            return sorted(o, key=str)
        return super().default(o)


def dumps(data: Any, *, sort_keys: bool = False) -> str:
    return json.dumps(data, separators=(",", ":"), cls=SafeEncoder, sort_keys=sort_keys)


def loads(s: str | bytes) -> Any:
    return json.loads(s)

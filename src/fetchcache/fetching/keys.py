"""
Composite cache keys: a base identifier plus one normalized token per call
parameter, in call order.

    CacheKeyBuilder("users").build(42, "activeOnly") == "users_42_active_only"

Normalization is lossy by nature; distinct parameter sequences usually, but
not provably, map to distinct keys.
"""
from __future__ import annotations

from typing import Any, Callable, Mapping

from fetchcache.exceptions import CacheKeyError
from fetchcache.infrastructure.observability.logger import get_logger
from fetchcache.utils.serialization import dumps
from fetchcache.utils.strings import to_snake

logger = get_logger(__name__)

Tokenizer = Callable[[str], str]

DEFAULT_SEPARATOR = "_"


def stringify_param(param: Any) -> str:
    if param is None:
        return "none"
    if isinstance(param, bool):
        return "true" if param else "false"
    if isinstance(param, str):
        return param
    if isinstance(param, (Mapping, list, tuple, set, frozenset)):
        try:
            return dumps(param, sort_keys=True)
        except (TypeError, ValueError):
            return str(param)
    return str(param)


class CacheKeyBuilder:
    """Builds deterministic cache keys from a base key and call parameters."""

    def __init__(
        self,
        base_key: str,
        *,
        separator: str = DEFAULT_SEPARATOR,
        tokenizer: Tokenizer = to_snake,
    ) -> None:
        if not isinstance(base_key, str) or not base_key:
            raise CacheKeyError("base_key must be a non-empty string", details={"base_key": repr(base_key)})
        if not isinstance(separator, str) or not separator:
            raise CacheKeyError("separator must be a non-empty string", details={"separator": repr(separator)})
        self.base_key = base_key
        self.separator = separator
        self._tokenizer = tokenizer

    def token(self, param: Any) -> str:
        """
        Normalize one parameter.

        Never raises: if stringifying or the tokenizer fails, the repr of the
        parameter goes through the default snake-case tokenizer instead.
        """
        try:
            return str(self._tokenizer(stringify_param(param)))
        except Exception as e:
            logger.warning(
                "cache_key_param_fallback",
                base_key=self.base_key,
                param_type=type(param).__name__,
                error=str(e),
            )
            return to_snake(repr(param))

    def build(self, *params: Any) -> str:
        key = self.base_key
        for param in params:
            key += self.separator + self.token(param)
        return key

    __call__ = build

"""
Centralized configuration for fetchcache.

- Frozen dataclass loaded from OS env (and a .env file when present).
- Validation in __post_init__.
- Singleton via functools.lru_cache.
- Secrets never logged (masked).
"""

from __future__ import annotations

import functools
import logging
import os
import re
from dataclasses import dataclass
from pathlib import Path
from typing import Literal, Optional, cast
from urllib.parse import urlparse

from dotenv import load_dotenv

from fetchcache.fetching.hooks import DEFAULT_FAILURE_MESSAGE

# ------------------------------------------------------------------------------
# Helpers
# ------------------------------------------------------------------------------
def _mask_url(value: Optional[str]) -> str:
    if not value:
        return "<unset>"
    parsed = urlparse(value)
    if parsed.password:
        return value.replace(parsed.password, "***")
    return value


def _get_env_str(key: str, default: Optional[str] = None) -> Optional[str]:
    v = os.getenv(key)
    if v is None or v.strip() == "":
        return default
    return v


def _get_env_bool(key: str, default: bool = False) -> bool:
    v = os.getenv(key)
    if v is None:
        return default
    v = v.strip().lower()
    return v in {"1", "true", "t", "yes", "y", "on"}


def _get_env_float(key: str, default: float) -> float:
    v = os.getenv(key)
    if v is None or v.strip() == "":
        return default
    try:
        return float(v)
    except ValueError:
        raise ValueError(f"Env var {key} must be a number")


def _validate_choice(value: str, *, choices: tuple[str, ...], key: str) -> str:
    if value not in choices:
        raise ValueError(f"{key} must be one of {choices}, got {value!r}")
    return value


def _validate_url(value: Optional[str], *, key: str, allowed_schemes: tuple[str, ...]) -> Optional[str]:
    if value in (None, ""):
        return None
    parsed = urlparse(value)
    if parsed.scheme not in allowed_schemes or not parsed.netloc:
        raise ValueError(f"{key} must be a valid URL with scheme in {allowed_schemes}")
    return value


# ------------------------------------------------------------------------------
# Settings dataclass (immutable)
# ------------------------------------------------------------------------------
EnvName = Literal["local", "dev", "staging", "prod"]


@dataclass(frozen=True)
class Settings:
    # Environment
    environment: EnvName = "local"

    # Cache
    default_ttl_minutes: float = 60 * 24  # one day
    key_separator: str = "_"
    failure_message: str = DEFAULT_FAILURE_MESSAGE

    # Backing storage (in-memory when unset)
    redis_url: Optional[str] = None
    redis_prefix: str = "fetchcache"

    # Observability
    log_level: str = "INFO"
    log_json: bool = True
    metrics_enabled: bool = False

    def __post_init__(self) -> None:
        _validate_choice(self.environment, choices=("local", "dev", "staging", "prod"), key="FETCHCACHE_ENVIRONMENT")
        if self.redis_url:
            _validate_url(self.redis_url, key="FETCHCACHE_REDIS_URL", allowed_schemes=("redis", "rediss"))

        if self.default_ttl_minutes <= 0:
            raise ValueError("FETCHCACHE_DEFAULT_TTL_MINUTES must be > 0")
        if not self.key_separator:
            raise ValueError("FETCHCACHE_KEY_SEPARATOR must be non-empty")

        if not re.fullmatch(r"(?i)DEBUG|INFO|WARNING|ERROR|CRITICAL", self.log_level.strip()):
            raise ValueError("LOG_LEVEL must be one of DEBUG, INFO, WARNING, ERROR, CRITICAL")

    # Safe dict (for debug prints without secrets)
    def safe_dict(self) -> dict:
        return {
            "environment": self.environment,
            "default_ttl_minutes": self.default_ttl_minutes,
            "key_separator": self.key_separator,
            "redis_url": _mask_url(self.redis_url),
            "redis_prefix": self.redis_prefix,
            "log_level": self.log_level,
            "log_json": self.log_json,
            "metrics_enabled": self.metrics_enabled,
        }


# ------------------------------------------------------------------------------
# Loader (singleton)
# ------------------------------------------------------------------------------
_logger = logging.getLogger(__name__)


def load_settings(env_file: Optional[Path] = None) -> Settings:
    if env_file is not None and env_file.exists():
        load_dotenv(dotenv_path=str(env_file), override=False)

    settings = Settings(
        environment=cast(EnvName, _get_env_str("FETCHCACHE_ENVIRONMENT", "local")),
        default_ttl_minutes=_get_env_float("FETCHCACHE_DEFAULT_TTL_MINUTES", 60 * 24),
        key_separator=_get_env_str("FETCHCACHE_KEY_SEPARATOR", "_") or "_",
        failure_message=_get_env_str("FETCHCACHE_FAILURE_MESSAGE", DEFAULT_FAILURE_MESSAGE) or DEFAULT_FAILURE_MESSAGE,
        redis_url=_get_env_str("FETCHCACHE_REDIS_URL", None),
        redis_prefix=_get_env_str("FETCHCACHE_REDIS_PREFIX", "fetchcache") or "fetchcache",
        log_level=_get_env_str("LOG_LEVEL", "INFO") or "INFO",
        log_json=_get_env_bool("LOG_JSON", True),
        metrics_enabled=_get_env_bool("METRICS_ENABLED", False),
    )

    _logger.info("Settings loaded", extra={"settings": settings.safe_dict()})
    return settings


@functools.lru_cache(maxsize=1)
def get_settings() -> Settings:
    # .env in the current working directory, if any
    return load_settings(Path.cwd() / ".env")

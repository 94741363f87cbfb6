import structlog
import pytest

from fetchcache.config import Settings
from fetchcache.factory import configure_observability
from fetchcache.fetching.orchestrator import FetchOrchestrator
from fetchcache.infrastructure.observability import bound_cache_key, configure_metrics, get_metrics


@pytest.fixture(autouse=True)
def reset_structlog():
    yield
    structlog.contextvars.clear_contextvars()
    structlog.reset_defaults()
    configure_metrics(enabled=False)


def test_configure_observability_applies_settings():
    configure_observability(Settings(log_level="DEBUG", log_json=False, metrics_enabled=True))
    assert get_metrics().enabled is True
    assert structlog.is_configured()


def test_bound_cache_key_is_scoped_to_block():
    with bound_cache_key("users_42"):
        assert structlog.contextvars.get_contextvars() == {"cache_key": "users_42"}
    assert structlog.contextvars.get_contextvars() == {}


@pytest.mark.asyncio
async def test_fetch_logs_carry_composite_key(store):
    seen = []

    async def strategy(user_id):
        seen.append(structlog.contextvars.get_contextvars().get("cache_key"))
        return {"id": user_id}

    users = FetchOrchestrator(strategy, "users", store)
    await users.get_or_fetch(42)
    await users.refresh(7)

    assert seen == ["users_42", "users_7"]
    assert "cache_key" not in structlog.contextvars.get_contextvars()

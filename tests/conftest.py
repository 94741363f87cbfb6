import pytest

from fetchcache.cache.expiring_store import ExpiringStore
from fetchcache.infrastructure.observability.metrics import MetricsCollector
from fetchcache.infrastructure.storage.memory_storage import InMemoryStorage

START_MS = 1_700_000_000_000


class FakeClock:
    """Epoch-millisecond clock that only moves when told to."""

    def __init__(self, now_ms: int = START_MS) -> None:
        self.now_ms = now_ms

    def __call__(self) -> int:
        return self.now_ms

    def advance(self, *, ms: int = 0, minutes: float = 0) -> None:
        self.now_ms += ms + int(minutes * 60_000)


class FakeIndicator:
    def __init__(self) -> None:
        self.calls: list[tuple] = []

    def show(self, **options):
        self.calls.append(("show", options))

    def hide(self):
        self.calls.append(("hide",))


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def storage():
    return InMemoryStorage()


@pytest.fixture
def metrics():
    return MetricsCollector(enabled=True)


@pytest.fixture
def store(storage, clock, metrics):
    return ExpiringStore(storage, default_ttl_minutes=60, clock=clock, metrics=metrics)


@pytest.fixture
def indicator():
    return FakeIndicator()

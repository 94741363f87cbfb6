import json
import math

import pytest

from fetchcache.cache.entry import CacheEntry
from fetchcache.cache.expiring_store import ExpiringStore
from fetchcache.exceptions import InvalidTTLError
from fetchcache.infrastructure.storage.memory_storage import InMemoryStorage


def test_set_then_get_returns_value(store):
    store.set("k", {"a": [1, 2]}, 5)
    assert store.get("k") == {"a": [1, 2]}


def test_set_uses_default_ttl(store, storage, clock):
    store.set("k", "v")
    record = json.loads(storage.get_item("k"))
    assert record == {"value": "v", "expires": clock.now_ms + 60 * 60_000}


def test_entry_expires_after_ttl(store, clock):
    store.set("k", "v", 1)
    clock.advance(ms=59_999)
    assert store.get("k") == "v"
    clock.advance(ms=1)
    assert store.get("k") is None


def test_expired_entry_is_not_deleted_on_read(store, storage, clock):
    store.set("k", "v", 1)
    clock.advance(minutes=5)
    assert store.get("k") is None
    assert "k" in storage


def test_forever_survives_large_time_jump(store, clock, storage):
    store.forever("k", "v")
    clock.advance(minutes=60 * 24 * 365 * 10)
    assert store.get("k") == "v"
    assert json.loads(storage.get_item("k")) == {"value": "v"}


def test_forget_removes_entry(store):
    store.set("k", "v")
    store.forget("k")
    assert store.get("k") is None


def test_forget_unknown_key_is_noop(store):
    store.forget("missing")
    assert store.get("missing") is None


def test_set_overwrites_previous_entry(store, clock):
    store.forever("k", "old")
    store.set("k", "new", 1)
    assert store.get("k") == "new"
    clock.advance(minutes=1)
    assert store.get("k") is None


@pytest.mark.parametrize(
    "raw",
    [
        "{not json",
        "null",
        "[]",
        '{"expires": 1}',
        '{"value": 1, "expires": "x"}',
        '{"value": 1, "expires": 1e400}',
        '{"value": 1, "expires": Infinity}',
        '{"value": 1, "expires": NaN}',
        pytest.param("[" * 100_000, id="deeply-nested"),
    ],
)
def test_corrupt_entries_are_misses(clock, metrics, raw):
    s = ExpiringStore(InMemoryStorage({"k": raw}), 60, clock=clock, metrics=metrics)
    assert s.get("k") is None


def test_miss_reasons_are_counted(store, storage, clock, metrics):
    store.get("absent")
    storage.set_item("bad", "{oops")
    store.get("bad")
    store.set("old", "v", 1)
    clock.advance(minutes=2)
    store.get("old")
    store.forever("live", 1)
    store.get("live")

    assert metrics.get_counter("cache_misses_total", reason="absent") == 1
    assert metrics.get_counter("cache_misses_total", reason="corrupt") == 1
    assert metrics.get_counter("cache_misses_total", reason="expired") == 1
    assert metrics.get_counter("cache_hits_total") == 1
    assert metrics.get_counter("cache_writes_total", mode="forever") == 1


def test_is_expired_predicate(store, clock):
    assert store.is_expired(None) is True
    assert store.is_expired({"value": "v"}) is False
    assert store.is_expired({"value": "v", "expires": clock.now_ms}) is True
    assert store.is_expired({"value": "v", "expires": clock.now_ms + 1}) is False
    assert store.is_expired(CacheEntry("v")) is False
    assert store.is_expired(CacheEntry("v", clock.now_ms)) is True


def test_cache_entry_value_is_persisted_as_is(store, clock):
    pre_wrapped = CacheEntry("v", expires_at=clock.now_ms + 10)
    store.set("k", pre_wrapped, 600)
    assert store.get_entry("k") == pre_wrapped
    clock.advance(ms=10)
    assert store.get("k") is None


def test_mapping_with_expires_key_is_wrapped_as_data(store, clock):
    data = {"expires": clock.now_ms - 1, "value": "stale-looking"}
    store.set("k", data)
    assert store.get("k") == data


@pytest.mark.parametrize("bad", [0, -5, "10", None, True, math.inf, float("nan")])
def test_invalid_default_ttl_rejected(storage, bad):
    with pytest.raises(InvalidTTLError):
        ExpiringStore(storage, bad)


def test_invalid_call_ttl_rejected(store):
    with pytest.raises(InvalidTTLError):
        store.set("k", "v", 0)


def test_non_finite_call_ttl_rejected(store):
    with pytest.raises(InvalidTTLError):
        store.set("k", "v", math.inf)


def test_is_expired_treats_non_finite_record_expiry_as_expired(store):
    assert store.is_expired({"value": "v", "expires": float("nan")}) is True

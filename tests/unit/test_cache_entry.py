import pytest

from fetchcache.cache.entry import CacheEntry


def test_entry_without_expiration_never_expires():
    e = CacheEntry(value={"id": 1})
    assert e.never_expires
    assert not e.is_expired(10**15)


def test_expiration_boundary_is_inclusive():
    e = CacheEntry(value="v", expires_at=1000)
    assert e.is_expired(1000)
    assert not e.is_expired(999)


def test_with_ttl_computes_expiration_in_ms():
    e = CacheEntry.with_ttl("v", 2, now_ms=1000)
    assert e.expires_at == 1000 + 2 * 60_000


def test_record_shape():
    assert CacheEntry("v").to_record() == {"value": "v"}
    assert CacheEntry("v", 5).to_record() == {"value": "v", "expires": 5}


def test_from_record_accepts_float_expires():
    assert CacheEntry.from_record({"value": 1, "expires": 5.0}) == CacheEntry(1, 5)


@pytest.mark.parametrize(
    "record",
    [
        {"value": 1, "expires": float("inf")},
        {"value": 1, "expires": float("nan")},
        [],
        "value",
        {"expires": 10},
        {"value": 1, "expires": "soon"},
        {"value": 1, "expires": True},
    ],
)
def test_from_record_rejects_malformed(record):
    with pytest.raises(ValueError):
        CacheEntry.from_record(record)

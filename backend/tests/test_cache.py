import threading

import pytest

from leadfinder.core.cache import ResultCache


class FakeClock:
    def __init__(self):
        self.now = 1000.0

    def __call__(self):
        return self.now


@pytest.fixture
def clock():
    return FakeClock()


def test_get_returns_value_until_expiry(clock):
    cache = ResultCache(default_ttl=60, clock=clock)
    cache.set("geocode_x", (1.0, 2.0))

    clock.now += 59
    assert cache.get("geocode_x") == (1.0, 2.0)

    clock.now += 1
    assert cache.get("geocode_x") is None
    assert len(cache) == 0


def test_per_key_ttl_overrides_default(clock):
    cache = ResultCache(default_ttl=60, clock=clock)
    cache.set("leads_a", ["lead"], ttl=3600)
    clock.now += 120
    assert cache.get("leads_a") == ["lead"]


def test_values_are_stored_by_reference(clock):
    cache = ResultCache(default_ttl=60, clock=clock)
    value = [1, 2]
    cache.set("k", value)
    assert cache.get("k") is value


def test_set_triggers_periodic_sweep(clock):
    cache = ResultCache(default_ttl=100, clock=clock)
    assert cache.check_period == 20
    cache.set("old", 1, ttl=5)
    clock.now += 10
    cache.set("new", 2)
    assert len(cache) == 2  # sweep not due yet

    clock.now += 15
    cache.set("newer", 3)
    assert len(cache) == 2
    assert "old" not in cache


def test_invalidate_all_and_delete(clock):
    cache = ResultCache(default_ttl=60, clock=clock)
    cache.set("a", 1)
    cache.set("b", 2)
    assert cache.delete("a") is True
    assert cache.delete("a") is False
    cache.invalidate_all()
    assert cache.get("b") is None


def test_stats_counts_hits_and_misses(clock):
    cache = ResultCache(default_ttl=60, clock=clock)
    cache.set("a", 1)
    cache.get("a")
    cache.get("missing")
    assert cache.stats() == {"hits": 1, "misses": 1, "keys": 1}


def test_default_ttl_must_be_positive():
    with pytest.raises(ValueError):
        ResultCache(default_ttl=0)


def test_expired_key_read_twice_at_once(clock):
    cache = ResultCache(default_ttl=60, clock=clock)
    cache.set("geocode_chennai", (13.0827, 80.2707))
    clock.now += 61

    class NestedReadClock:
        """Reads the same key again while the outer read checks expiry."""

        def __init__(self):
            self.nested = False

        def __call__(self):
            if not self.nested:
                self.nested = True
                assert cache.get("geocode_chennai") is None
            return clock.now

    cache._clock = NestedReadClock()

    assert cache.get("geocode_chennai") is None
    assert len(cache) == 0


def test_concurrent_set_and_get_with_sweeps():
    cache = ResultCache(default_ttl=60, check_period=0)
    errors = []

    def worker(prefix):
        try:
            for i in range(5000):
                cache.set(f"{prefix}_{i}", i, ttl=1 if i % 2 else 60)
                cache.get(f"{prefix}_{i // 2}")
        except Exception as exc:  # noqa: BLE001
            errors.append(exc)

    threads = [threading.Thread(target=worker, args=(f"t{n}",)) for n in range(4)]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()

    assert errors == []
    assert cache.get("t0_0") == 0

"""Tests for the TTL cache."""

from __future__ import annotations

import threading

from pkgscout.cache import TTL_SECONDS, TTLCache


class FakeClock:
    def __init__(self) -> None:
        self.now = 1000.0

    def __call__(self) -> float:
        return self.now


class TestTTLCache:
    def test_default_ttl_is_five_minutes(self) -> None:
        assert TTL_SECONDS == 300
        assert TTLCache().ttl_seconds == 300

    def test_get_missing(self) -> None:
        assert TTLCache[str]().get("nope") is None

    def test_put_then_get(self) -> None:
        cache: TTLCache[str] = TTLCache()
        cache.put("k", "v")
        assert cache.get("k") == "v"

    def test_expiry_evicts(self) -> None:
        clock = FakeClock()
        cache: TTLCache[str] = TTLCache(ttl_seconds=10, clock=clock)
        cache.put("k", "v")

        clock.now += 9.9
        assert cache.get("k") == "v"

        clock.now += 0.1
        assert cache.get("k") is None
        assert len(cache) == 0

    def test_per_call_ttl(self) -> None:
        clock = FakeClock()
        cache: TTLCache[str] = TTLCache(ttl_seconds=10, clock=clock)
        cache.put("k", "v", ttl=60)

        clock.now += 30
        assert cache.get("k") == "v"

    def test_put_overwrites(self) -> None:
        cache: TTLCache[str] = TTLCache()
        cache.put("k", "first")
        cache.put("k", "second")
        assert cache.get("k") == "second"

    def test_clear(self) -> None:
        cache: TTLCache[str] = TTLCache()
        cache.put("a", "1")
        cache.put("b", "2")
        cache.clear()
        assert cache.get("a") is None
        assert len(cache) == 0

    def test_concurrent_puts(self) -> None:
        cache: TTLCache[int] = TTLCache()

        def _worker(n: int) -> None:
            for i in range(200):
                cache.put(f"{n}-{i}", i)
                cache.get(f"{n}-{i}")

        threads = [threading.Thread(target=_worker, args=(n,)) for n in range(8)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        assert len(cache) == 8 * 200

from __future__ import annotations

import asyncio

import pytest

from promptcache import CacheItem, InMemoryTagAwareCache, MockClock


def run_async(coro):
    return asyncio.run(coro)


def test_get_or_compute_runs_compute_once_until_expiry():
    clock = MockClock(1_000)
    cache = InMemoryTagAwareCache(clock=clock)
    calls = []

    def _compute(item: CacheItem):
        calls.append(item.key)
        item.expires_after(10)
        return {"value": len(calls)}

    assert run_async(cache.get_or_compute("k", _compute)) == {"value": 1}
    clock.sleep(9)
    assert run_async(cache.get_or_compute("k", _compute)) == {"value": 1}
    clock.sleep(1)
    assert run_async(cache.get_or_compute("k", _compute)) == {"value": 2}
    assert calls == ["k", "k"]


def test_rows_without_ttl_use_store_default_or_never_expire():
    clock = MockClock(1_000)
    forever = InMemoryTagAwareCache(clock=clock)
    short = InMemoryTagAwareCache(clock=clock, default_ttl_s=5)

    run_async(forever.get_or_compute("k", lambda item: 1))
    run_async(short.get_or_compute("k", lambda item: 1))
    clock.sleep(3600)

    assert run_async(forever.get_or_compute("k", lambda item: 2)) == 1
    assert run_async(short.get_or_compute("k", lambda item: 2)) == 2


def test_async_compute_is_awaited():
    cache = InMemoryTagAwareCache()

    async def _compute(item: CacheItem):
        await asyncio.sleep(0)
        return "async"

    assert run_async(cache.get_or_compute("k", _compute)) == "async"


def test_failed_compute_is_not_stored():
    cache = InMemoryTagAwareCache()

    def _boom(item: CacheItem):
        raise ValueError("boom")

    with pytest.raises(ValueError, match="boom"):
        run_async(cache.get_or_compute("k", _boom))

    assert len(cache) == 0
    assert run_async(cache.get_or_compute("k", lambda item: "ok")) == "ok"


def test_invalidate_tags_removes_only_tagged_rows():
    cache = InMemoryTagAwareCache()

    run_async(cache.get_or_compute("a", lambda item: item.tag("gpt4o") and 1))
    run_async(cache.get_or_compute("b", lambda item: item.tag("gpt4o", "shared") and 2))
    run_async(cache.get_or_compute("c", lambda item: item.tag("claude") and 3))

    assert run_async(cache.invalidate_tags(["gpt4o"])) == 2
    assert len(cache) == 1
    assert run_async(cache.get_or_compute("c", lambda item: 99)) == 3


def test_delete_and_clear():
    cache = InMemoryTagAwareCache()
    run_async(cache.get_or_compute("a", lambda item: 1))
    run_async(cache.get_or_compute("b", lambda item: 2))

    run_async(cache.delete("a"))
    assert len(cache) == 1
    run_async(cache.clear())
    assert len(cache) == 0


def test_stored_values_are_isolated_from_callers():
    cache = InMemoryTagAwareCache()

    first = run_async(cache.get_or_compute("k", lambda item: {"items": [1]}))
    first["items"].append(2)

    assert run_async(cache.get_or_compute("k", lambda item: None)) == {"items": [1]}


def test_concurrent_misses_are_single_flighted():
    cache = InMemoryTagAwareCache()
    calls = []

    async def _slow(item: CacheItem):
        calls.append(item.key)
        await asyncio.sleep(0.01)
        return "shared"

    async def _race():
        return await asyncio.gather(*(cache.get_or_compute("k", _slow) for _ in range(5)))

    assert run_async(_race()) == ["shared"] * 5
    assert calls == ["k"]


def test_cache_item_validates_tags_and_ttl():
    item = CacheItem("k", default_ttl_s=30)

    assert item.ttl_s == 30
    item.tag("a", "b", "a")
    assert item.tags == ("a", "b")
    with pytest.raises(ValueError):
        item.tag("")
    with pytest.raises(ValueError):
        item.expires_after(0)
    item.expires_after(None)
    assert item.ttl_s is None

from __future__ import annotations

import asyncio
from uuid import uuid4

import pytest

from promptcache import (
    CacheBackendError,
    CacheSettings,
    InMemoryTagAwareCache,
    MockClock,
    create_cache,
    list_cache_backends,
    register_cache_backend,
)


def run_async(coro):
    return asyncio.run(coro)


def test_builtin_backends_are_registered():
    assert {"inmemory", "redis"} <= set(list_cache_backends())


def test_default_backend_builds_inmemory_store_on_the_given_clock():
    clock = MockClock(0)
    cache = create_cache(settings=CacheSettings(default_ttl_s=10), clock=clock)

    assert isinstance(cache, InMemoryTagAwareCache)
    assert create_cache(clock=clock) is not cache

    calls = []

    def compute(item):
        calls.append(item.key)
        return {"n": len(calls)}

    assert run_async(cache.get_or_compute("k", compute)) == {"n": 1}
    clock.sleep(5)
    assert run_async(cache.get_or_compute("k", compute)) == {"n": 1}
    clock.sleep(6)
    assert run_async(cache.get_or_compute("k", compute)) == {"n": 2}


def test_register_and_resolve_backend_factory_by_id():
    backend_id = f"custom_{uuid4().hex}"
    seen = []

    def factory(settings, clock):
        seen.append((settings, clock))
        return InMemoryTagAwareCache(clock=clock, backend_id=backend_id)

    register_cache_backend(backend_id, factory)
    settings = CacheSettings(backend=backend_id)
    clock = MockClock(0)

    cache = create_cache(backend_id.upper(), settings=settings, clock=clock)

    assert cache.backend_id == backend_id
    assert seen == [(settings, clock)]
    assert backend_id in list_cache_backends()
    with pytest.raises(CacheBackendError, match="already registered"):
        register_cache_backend(backend_id, factory)

    register_cache_backend(
        backend_id,
        lambda settings, clock: InMemoryTagAwareCache(backend_id="replacement"),
        overwrite=True,
    )
    assert create_cache(backend_id).backend_id == "replacement"


def test_instances_pass_through_and_unknown_ids_fail():
    backend = InMemoryTagAwareCache()

    assert create_cache(backend) is backend
    with pytest.raises(CacheBackendError, match="Unknown cache backend"):
        create_cache(f"missing_{uuid4().hex}")
    with pytest.raises(CacheBackendError, match="non-empty"):
        register_cache_backend("  ", lambda settings, clock: InMemoryTagAwareCache())


def test_redis_backend_requires_a_url():
    with pytest.raises(CacheBackendError, match="PROMPTCACHE_REDIS_URL"):
        create_cache("redis", settings=CacheSettings())

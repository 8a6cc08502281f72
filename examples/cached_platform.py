"""
cached_platform.py — Minimal prompt cache example.

Wraps a toy platform so the second identical call is served from cache.

Usage:
    python examples/cached_platform.py
"""

from promptcache import (
    CachePlatform,
    DeferredResult,
    InMemoryRawResult,
    InMemoryTagAwareCache,
    PlainConverter,
    TextResult,
)


class EchoPlatform:
    def __init__(self) -> None:
        self.calls = 0

    async def invoke(self, model, input, options=None):
        self.calls += 1
        return DeferredResult(
            PlainConverter(TextResult(f"{model} says: {input}")),
            InMemoryRawResult({"call": self.calls}),
            options,
        )

    def get_model_catalog(self):
        return {}


async def main() -> None:
    backend = EchoPlatform()
    platform = CachePlatform(backend, cache=InMemoryTagAwareCache())

    for _ in range(2):
        result = await platform.invoke(
            "gpt-4.1-mini",
            "Hello!",
            {"prompt_cache_key": "demo", "prompt_cache_ttl": 60},
        )
        print(result.result.content, result.metadata.all())

    print(f"backend calls: {backend.calls}")


if __name__ == "__main__":
    import asyncio

    asyncio.run(main())

"""Redis options store.

All options live in a single hash::

    HSET {prefix}:options {key} {value}

When prefix is None the hash is just ``morrisb:options``.
"""

from __future__ import annotations

import redis.asyncio as aioredis


def create_redis_client(redis_url: str) -> aioredis.Redis:
    """Create an async Redis client with short connect/read timeouts."""
    return aioredis.from_url(
        redis_url,
        decode_responses=False,
        socket_connect_timeout=5,
        socket_timeout=5,
        retry_on_timeout=True,
    )


class RedisOptionsStore:
    """Redis implementation of the OptionsStore protocol.

    The client is owned by the store unless ``owns_client=False`` is passed,
    in which case ``aclose`` leaves it open for the caller.
    """

    def __init__(self, client: aioredis.Redis, prefix: str | None = None, *, owns_client: bool = True) -> None:
        self._client = client
        self._hash_key = f"{prefix}:options" if prefix else "morrisb:options"
        self._owns_client = owns_client

    @classmethod
    def from_url(cls, redis_url: str, prefix: str | None = None) -> RedisOptionsStore:
        return cls(create_redis_client(redis_url), prefix=prefix)

    @property
    def hash_key(self) -> str:
        return self._hash_key

    async def get(self, key: str) -> str | None:
        raw = await self._client.hget(self._hash_key, key)
        if raw is None:
            return None
        if isinstance(raw, bytes):
            return raw.decode("utf-8")
        return raw

    async def set(self, key: str, value: str) -> None:
        await self._client.hset(self._hash_key, key, value.encode("utf-8"))

    async def aclose(self) -> None:
        if self._owns_client:
            await self._client.aclose()

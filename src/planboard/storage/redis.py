"""Redis snapshot backend.

The snapshot is a single Redis string under the configured key, shared by
every session pointed at the same Redis database.
"""
from __future__ import annotations

import logging

from redis import asyncio as aioredis
from redis.exceptions import RedisError

from planboard.core.exceptions import SnapshotError
from planboard.storage.snapshot import SnapshotBackend

logger = logging.getLogger(__name__)


class RedisSnapshotBackend(SnapshotBackend):
    """Snapshot store on top of Redis ``GET`` / ``SET`` / ``DEL``.

    Example
    -------
    .. code-block:: python

        backend = RedisSnapshotBackend("redis://localhost:6379/0")
        await backend.write("planboard.snapshot", snapshot.to_json())
        raw = await backend.read("planboard.snapshot")
        await backend.close()
    """

    def __init__(self, redis_url: str, key_prefix: str = "") -> None:
        self.key_prefix = key_prefix
        self.redis: aioredis.Redis = aioredis.from_url(
            redis_url,
            encoding="utf-8",
            decode_responses=False,
        )
        logger.info("RedisSnapshotBackend initialised prefix=%r", key_prefix)

    def _key(self, key: str) -> str:
        return f"{self.key_prefix}{key}"

    async def read(self, key: str) -> str | None:
        try:
            raw = await self.redis.get(self._key(key))
        except RedisError as exc:
            raise SnapshotError(key, str(exc)) from exc
        if raw is None:
            logger.debug("No snapshot under %s", key)
            return None
        return raw.decode("utf-8") if isinstance(raw, bytes) else raw

    async def write(self, key: str, payload: str) -> None:
        try:
            await self.redis.set(self._key(key), payload.encode("utf-8"))
        except RedisError as exc:
            raise SnapshotError(key, str(exc)) from exc
        logger.debug("Wrote snapshot %s to redis (%d bytes)", key, len(payload))

    async def clear(self, key: str) -> None:
        try:
            await self.redis.delete(self._key(key))
        except RedisError as exc:
            raise SnapshotError(key, str(exc)) from exc

    async def close(self) -> None:
        """Close the Redis connection pool."""
        logger.info("Closing RedisSnapshotBackend")
        await self.redis.aclose()


__all__ = ["RedisSnapshotBackend"]

"""Key/value backends that hold the local snapshot.

The snapshot is one JSON document stored under one fixed key, the way a
browser app keeps its state in a single ``localStorage`` entry.

- InMemorySnapshotBackend: testing and demos, lost on exit
- FileSnapshotBackend: one ``<key>.json`` file in a state directory
- RedisSnapshotBackend (``planboard.storage.redis``): one Redis string
"""
from __future__ import annotations

import asyncio
import logging
import os
from abc import ABC, abstractmethod
from pathlib import Path

from pydantic import ValidationError

from planboard.core.exceptions import DataLoadError, SnapshotError
from planboard.core.types import Snapshot

logger = logging.getLogger(__name__)


class SnapshotBackend(ABC):
    """Minimal string store addressed by key."""

    @abstractmethod
    async def read(self, key: str) -> str | None:
        """Return the stored payload, or None when the key is absent."""
        pass

    @abstractmethod
    async def write(self, key: str, payload: str) -> None:
        """Store *payload* under *key*, replacing any previous value."""
        pass

    @abstractmethod
    async def clear(self, key: str) -> None:
        """Remove *key*. Removing an absent key is not an error."""
        pass

    async def close(self) -> None:  # noqa: B027
        """Release held resources. No-op by default."""


class InMemorySnapshotBackend(SnapshotBackend):
    """Dictionary-backed snapshot store.

    DO NOT USE IN PRODUCTION - all data is lost on restart!
    """

    def __init__(self) -> None:
        self._data: dict[str, str] = {}

    async def read(self, key: str) -> str | None:
        return self._data.get(key)

    async def write(self, key: str, payload: str) -> None:
        self._data[key] = payload
        logger.debug("Stored snapshot %s in memory (%d bytes)", key, len(payload))

    async def clear(self, key: str) -> None:
        self._data.pop(key, None)

    def keys(self) -> list[str]:
        """Stored keys (for testing/debugging)."""
        return list(self._data)


class FileSnapshotBackend(SnapshotBackend):
    """One JSON file per key inside *directory*.

    Writes go to a temporary sibling first and are moved into place, so a
    crash mid-write never leaves a truncated snapshot behind.
    """

    def __init__(self, directory: Path | str) -> None:
        self.directory = Path(directory).expanduser()

    def path_for(self, key: str) -> Path:
        return self.directory / f"{key}.json"

    async def read(self, key: str) -> str | None:
        path = self.path_for(key)
        try:
            return await asyncio.to_thread(path.read_text, encoding="utf-8")
        except FileNotFoundError:
            return None
        except OSError as exc:
            raise SnapshotError(key, str(exc)) from exc

    async def write(self, key: str, payload: str) -> None:
        path = self.path_for(key)
        try:
            await asyncio.to_thread(self._write_atomic, path, payload)
        except OSError as exc:
            raise SnapshotError(key, str(exc)) from exc
        logger.debug("Wrote snapshot %s to %s", key, path)

    async def clear(self, key: str) -> None:
        try:
            await asyncio.to_thread(self.path_for(key).unlink, missing_ok=True)
        except OSError as exc:
            raise SnapshotError(key, str(exc)) from exc

    @staticmethod
    def _write_atomic(path: Path, payload: str) -> None:
        path.parent.mkdir(parents=True, exist_ok=True)
        tmp = path.with_suffix(path.suffix + ".tmp")
        tmp.write_text(payload, encoding="utf-8")
        os.replace(tmp, path)


async def load_snapshot(backend: SnapshotBackend, key: str) -> Snapshot | None:
    """Read and parse the snapshot under *key*.

    Returns:
        The snapshot, or None when nothing is stored

    Raises:
        DataLoadError: If the payload is unreadable or does not parse
    """
    try:
        raw = await backend.read(key)
    except SnapshotError as exc:
        raise DataLoadError("snapshot", exc.reason) from exc
    if raw is None:
        return None
    try:
        return Snapshot.model_validate_json(raw)
    except ValidationError as exc:
        raise DataLoadError("snapshot", f"malformed payload under {key!r}") from exc


async def save_snapshot(backend: SnapshotBackend, key: str, snapshot: Snapshot) -> None:
    """Serialise *snapshot* with its camelCase aliases and store it."""
    await backend.write(key, snapshot.to_json())


__all__ = [
    "FileSnapshotBackend",
    "InMemorySnapshotBackend",
    "SnapshotBackend",
    "load_snapshot",
    "save_snapshot",
]

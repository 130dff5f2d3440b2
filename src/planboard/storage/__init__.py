"""Storage implementations for task data.

This module provides the backing stores a session can run on:
- Remote: the REST API is authoritative
- Local: writes are kept in a persisted snapshot
- Demo: a local store seeded with built-in demo data

and the snapshot backends the local stores persist through (memory, file,
Redis).

Example:
    ```python
    from planboard.storage import SnapshotBackendFactory, select_store

    backend = SnapshotBackendFactory.create(config.snapshot_backend, config)
    selection = await select_store(config, backend)

    task = await selection.store.create_task(draft)
    data = await selection.store.list_all()
    ```
"""

from planboard.storage.base import TaskStore
from planboard.storage.demo import DemoTaskStore, demo_dataset
from planboard.storage.factory import SnapshotBackendFactory, StoreSelection, select_store
from planboard.storage.local import LocalTaskStore
from planboard.storage.remote import RemoteTaskStore
from planboard.storage.snapshot import (
    FileSnapshotBackend,
    InMemorySnapshotBackend,
    SnapshotBackend,
    load_snapshot,
    save_snapshot,
)

# Optional, requires: pip install planboard[redis]
try:
    from planboard.storage.redis import RedisSnapshotBackend
except ImportError:
    RedisSnapshotBackend = None  # type: ignore[assignment, misc]

__all__ = [
    "DemoTaskStore",
    "FileSnapshotBackend",
    "InMemorySnapshotBackend",
    "LocalTaskStore",
    "RedisSnapshotBackend",
    "RemoteTaskStore",
    "SnapshotBackend",
    "SnapshotBackendFactory",
    "StoreSelection",
    "TaskStore",
    "demo_dataset",
    "load_snapshot",
    "save_snapshot",
    "select_store",
]

"""Startup store selection and snapshot backend construction.

Selection policy (strict order, first success wins)::

    1. local snapshot present and parses  → LocalTaskStore   (remote never contacted)
    2. all four remote GETs succeed       → RemoteTaskStore
    3. otherwise                          → DemoTaskStore

The choice is made once and held in a :class:`StoreSelection` for the rest of
the session; nothing switches modes afterwards.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from pydantic import BaseModel, ConfigDict

from planboard.core.exceptions import ConfigurationError, DataLoadError
from planboard.core.types import Dataset, PersistenceMode, SnapshotBackendKind
from planboard.storage.base import TaskStore
from planboard.storage.demo import DemoTaskStore
from planboard.storage.local import LocalTaskStore
from planboard.storage.remote import RemoteTaskStore
from planboard.storage.snapshot import (
    FileSnapshotBackend,
    InMemorySnapshotBackend,
    SnapshotBackend,
    load_snapshot,
)

if TYPE_CHECKING:
    from collections.abc import Callable

    from planboard.core.config import PlanboardConfig

logger = logging.getLogger(__name__)


class StoreSelection(BaseModel):
    """Outcome of startup selection: which store won, and what it loaded."""

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    mode: PersistenceMode
    store: TaskStore
    dataset: Dataset
    selected_project: int | None = None


class SnapshotBackendFactory:
    """Factory for creating snapshot backend instances."""

    @staticmethod
    def create(kind: SnapshotBackendKind, config: PlanboardConfig) -> SnapshotBackend:
        """Create the snapshot backend for *kind*."""

        def _redis() -> SnapshotBackend:
            from planboard.storage.redis import RedisSnapshotBackend

            if not config.redis_url:
                raise ConfigurationError("redis_url", "required for the redis snapshot backend")
            return RedisSnapshotBackend(config.redis_url)

        backends: dict[SnapshotBackendKind, Callable[[], SnapshotBackend]] = {
            SnapshotBackendKind.MEMORY: InMemorySnapshotBackend,
            SnapshotBackendKind.FILE: lambda: FileSnapshotBackend(config.snapshot_dir),
            SnapshotBackendKind.REDIS: _redis,
        }

        backend_factory = backends.get(kind)
        if not backend_factory:
            raise ConfigurationError("snapshot_backend", f"unsupported backend {kind!r}")

        return backend_factory()


async def select_store(
    config: PlanboardConfig,
    snapshot_backend: SnapshotBackend,
    *,
    remote_factory: Callable[[], RemoteTaskStore] | None = None,
    id_clock: Callable[[], int] | None = None,
) -> StoreSelection:
    """Pick the backing store for this session.

    Args:
        config: Planboard configuration
        snapshot_backend: Where the local snapshot is read from / written to
        remote_factory: Builds the remote store; only called when tier 2 is
            reached. Defaults to :meth:`RemoteTaskStore.from_config`.
        id_clock: Id source for local-write stores (tests)

    Returns:
        :class:`StoreSelection` for the winning tier

    Example:
        ```python
        backend = SnapshotBackendFactory.create(config.snapshot_backend, config)
        selection = await select_store(config, backend)
        if selection.mode.is_local_write:
            print("working offline")
        ```
    """
    key = config.snapshot_key

    # Tier 1: previously persisted snapshot
    try:
        snapshot = await load_snapshot(snapshot_backend, key)
    except DataLoadError as exc:
        logger.warning("Ignoring unusable snapshot: %s", exc)
        snapshot = None

    if snapshot is not None:
        dataset = snapshot.to_dataset()
        store = LocalTaskStore(
            dataset,
            backend=snapshot_backend,
            key=key,
            selected_project=snapshot.selected_project,
            id_clock=id_clock,
        )
        logger.info("Loaded local snapshot %s (%d tasks)", key, len(dataset.tasks))
        return StoreSelection(
            mode=PersistenceMode.LOCAL,
            store=store,
            dataset=dataset,
            selected_project=snapshot.selected_project,
        )

    # Tier 2: remote API, all four collections or nothing
    if config.enable_remote:
        remote = (remote_factory or (lambda: RemoteTaskStore.from_config(config)))()
        try:
            dataset = await remote.list_all()
        except DataLoadError as exc:
            logger.warning("Remote API unavailable, falling back to demo data: %s", exc)
            await remote.close()
        else:
            logger.info("Loaded %d tasks from %s", len(dataset.tasks), remote.base_url)
            return StoreSelection(mode=PersistenceMode.REMOTE, store=remote, dataset=dataset)
    else:
        logger.info("Remote API disabled, using demo data")

    # Tier 3: built-in demo data
    demo = DemoTaskStore(backend=snapshot_backend, key=key, id_clock=id_clock)
    dataset = await demo.list_all()
    return StoreSelection(
        mode=PersistenceMode.DEMO,
        store=demo,
        dataset=dataset,
        selected_project=demo.selected_project,
    )


__all__ = ["SnapshotBackendFactory", "StoreSelection", "select_store"]

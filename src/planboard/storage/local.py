"""Local-write task store.

Mutations are applied to an in-memory :class:`~planboard.core.types.Dataset`
and then persisted as a snapshot; nothing is ever forwarded to the remote
API. The snapshot is written *before* the in-memory dataset is swapped, so a
failed write leaves the store exactly as it was.
"""

from __future__ import annotations

import logging
import time
from typing import TYPE_CHECKING, ClassVar

from planboard.core.exceptions import TaskNotFoundError
from planboard.core.types import Dataset, PersistenceMode, Snapshot, Task
from planboard.storage.base import TaskStore
from planboard.storage.snapshot import save_snapshot
from planboard.utils.denormalize import refresh_display_fields

if TYPE_CHECKING:
    from collections.abc import Callable

    from planboard.core.types import TaskDraft
    from planboard.storage.snapshot import SnapshotBackend

logger = logging.getLogger(__name__)


def _epoch_millis() -> int:
    return time.time_ns() // 1_000_000


class LocalTaskStore(TaskStore):
    """Task store backed by a snapshot.

    New tasks get a millisecond timestamp as id, bumped past the largest
    existing id when two creates land in the same millisecond.

    Example:
        ```python
        backend = FileSnapshotBackend("~/.local/state/planboard")
        store = LocalTaskStore(dataset, backend=backend, key="planboard.snapshot")

        task = await store.create_task(draft)    # snapshot written
        await store.set_selected_project(2)      # snapshot written
        ```

    Attributes:
        key: Snapshot key this store writes to
        selected_project: Project selection persisted alongside the data
    """

    mode: ClassVar[PersistenceMode] = PersistenceMode.LOCAL

    def __init__(
        self,
        dataset: Dataset,
        *,
        backend: SnapshotBackend,
        key: str,
        selected_project: int | None = None,
        id_clock: Callable[[], int] | None = None,
    ) -> None:
        self._dataset = dataset
        self._backend = backend
        self.key = key
        self.selected_project = selected_project
        self._id_clock = id_clock or _epoch_millis
        logger.info(
            "Initialized %s store with %d tasks (key=%s)",
            self.mode.value,
            len(dataset.tasks),
            key,
        )

    async def list_all(self) -> Dataset:
        logger.debug("Listed %d tasks from local snapshot", len(self._dataset.tasks))
        return self._dataset

    async def create_task(self, draft: TaskDraft) -> Task:
        task = self._refresh(Task(id=self._next_id(), **draft.model_dump()))
        await self._commit(self._dataset.with_tasks([*self._dataset.tasks, task]))
        logger.info("Created local task %s (%s)", task.id, task.task_code)
        return task

    async def update_task(self, task_id: int, draft: TaskDraft) -> Task:
        existing = self._dataset.task(task_id)
        if existing is None:
            raise TaskNotFoundError(task_id)

        fields = draft.model_dump()
        fields["task_code"] = existing.task_code
        updated = self._refresh(Task(id=task_id, **fields))

        tasks = [updated if t.id == task_id else t for t in self._dataset.tasks]
        await self._commit(self._dataset.with_tasks(tasks))
        logger.info("Updated local task %s", task_id)
        return updated

    async def delete_task(self, task_id: int) -> None:
        if self._dataset.task(task_id) is None:
            raise TaskNotFoundError(task_id)
        tasks = [t for t in self._dataset.tasks if t.id != task_id]
        await self._commit(self._dataset.with_tasks(tasks))
        logger.info("Deleted local task %s", task_id)

    async def set_selected_project(self, project_id: int | None) -> None:
        """Persist the project selection together with the data."""
        await save_snapshot(
            self._backend,
            self.key,
            Snapshot.from_dataset(self._dataset, project_id),
        )
        self.selected_project = project_id

    async def persist(self) -> None:
        """Write the current dataset to the snapshot backend."""
        await self._commit(self._dataset)

    def _refresh(self, task: Task) -> Task:
        return refresh_display_fields(task, self._dataset.phases, self._dataset.team_members)

    def _next_id(self) -> int:
        candidate = self._id_clock()
        highest = max((t.id for t in self._dataset.tasks), default=0)
        return candidate if candidate > highest else highest + 1

    async def _commit(self, dataset: Dataset) -> None:
        await save_snapshot(
            self._backend,
            self.key,
            Snapshot.from_dataset(dataset, self.selected_project),
        )
        self._dataset = dataset


__all__ = ["LocalTaskStore"]

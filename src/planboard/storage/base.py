"""Abstract task storage interface.

This module defines the interface every backing store implements, whether it
talks to the REST API or keeps a local snapshot.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, ClassVar

if TYPE_CHECKING:
    from planboard.core.types import Dataset, PersistenceMode, Task, TaskDraft


class TaskStore(ABC):
    """Abstract base class for task storage implementations.

    One store is chosen at startup and serves every read and write for the
    rest of the session.

    Implementations:
    - RemoteTaskStore: the REST API is authoritative
    - LocalTaskStore: writes stay in a persisted local snapshot
    - DemoTaskStore: a LocalTaskStore seeded with built-in demo data

    Example:
        ```python
        data = await store.list_all()

        created = await store.create_task(draft)
        updated = await store.update_task(created.id, draft.model_copy(update={"name": "Cut"}))
        await store.delete_task(created.id)

        # Re-read after any mutation; for the remote store this is the
        # resynchronising fetch.
        data = await store.list_all()
        ```
    """

    mode: ClassVar[PersistenceMode]

    @abstractmethod
    async def list_all(self) -> Dataset:
        """Read all four collections.

        Returns:
            Dataset with projects, tasks, phases and team members

        Raises:
            DataLoadError: If the collections cannot be read
        """
        pass

    @abstractmethod
    async def create_task(self, draft: TaskDraft) -> Task:
        """Create a task.

        Args:
            draft: Task fields, without id

        Returns:
            The stored task, with its id assigned

        Raises:
            RemoteStoreError: If the remote API refuses or is unreachable
            SnapshotError: If the local snapshot cannot be written
        """
        pass

    @abstractmethod
    async def update_task(self, task_id: int, draft: TaskDraft) -> Task:
        """Replace every field of an existing task.

        Args:
            task_id: Task to replace
            draft: New field values

        Returns:
            The updated task

        Raises:
            TaskNotFoundError: If a local store has no such task
            RemoteStoreError: If the remote API refuses or is unreachable
        """
        pass

    @abstractmethod
    async def delete_task(self, task_id: int) -> None:
        """Delete a task by id.

        Raises:
            TaskNotFoundError: If a local store has no such task
            RemoteStoreError: If the remote API refuses or is unreachable
        """
        pass

    async def close(self) -> None:  # noqa: B027
        """Release held resources. No-op by default."""


__all__ = ["TaskStore"]

"""REST-backed task store.

The API is authoritative: this store keeps no local copy of the data and
never patches anything optimistically. Callers re-read with
:meth:`RemoteTaskStore.list_all` after every successful mutation.

Consumed contract::

    GET    /projects, /tasks, /phases, /team-members   → JSON arrays
    POST   /tasks          (TaskDraft)                 → created Task
    PUT    /tasks/{id}     (TaskDraft)                 → updated Task
    DELETE /tasks/{id}                                 → no body

Any 2xx status is success; everything else is a failure.
"""
from __future__ import annotations

import asyncio
import logging
from typing import TYPE_CHECKING, Any, ClassVar, TypeVar

import httpx
from pydantic import BaseModel, TypeAdapter, ValidationError

from planboard.core.exceptions import DataLoadError, RemoteStoreError
from planboard.core.types import Dataset, PersistenceMode, Phase, Project, Task, TeamMember
from planboard.storage.base import TaskStore

if TYPE_CHECKING:
    from planboard.core.config import PlanboardConfig
    from planboard.core.types import TaskDraft

logger = logging.getLogger(__name__)

_M = TypeVar("_M", bound=BaseModel)


class RemoteTaskStore(TaskStore):
    """Task store that forwards everything to the REST API.

    Example
    -------
    .. code-block:: python

        store = RemoteTaskStore("http://localhost:5501/api", timeout=5.0)
        data = await store.list_all()          # four GETs, concurrently
        await store.create_task(draft)
        data = await store.list_all()          # resync
        await store.close()

    Pass *client* to reuse an existing :class:`httpx.AsyncClient` (its
    ``base_url`` must already point at the API); the store then leaves
    closing it to the caller.
    """

    mode: ClassVar[PersistenceMode] = PersistenceMode.REMOTE

    def __init__(
        self,
        base_url: str,
        *,
        timeout: float = 10.0,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self._owns_client = client is None
        self._client = client or httpx.AsyncClient(
            base_url=self.base_url,
            timeout=timeout,
            headers={"Accept": "application/json"},
        )
        logger.info("RemoteTaskStore targeting %s", self.base_url)

    @classmethod
    def from_config(cls, config: PlanboardConfig) -> RemoteTaskStore:
        return cls(config.api_base_url, timeout=config.request_timeout)

    async def list_all(self) -> Dataset:
        """Fetch the four collections concurrently; all must succeed.

        The first failing request cancels the others.

        Raises:
            DataLoadError: If any request fails or any payload does not parse
        """
        try:
            async with asyncio.TaskGroup() as tg:
                projects = tg.create_task(self._get_collection("/projects", Project))
                tasks = tg.create_task(self._get_collection("/tasks", Task))
                phases = tg.create_task(self._get_collection("/phases", Phase))
                members = tg.create_task(self._get_collection("/team-members", TeamMember))
        except ExceptionGroup as group:
            failures = group.subgroup(DataLoadError)
            if failures is None:
                raise
            raise _first_leaf(failures) from group

        dataset = Dataset(
            projects=projects.result(),
            tasks=tasks.result(),
            phases=phases.result(),
            team_members=members.result(),
        )
        logger.debug(
            "Fetched %d projects, %d tasks, %d phases, %d members",
            len(dataset.projects),
            len(dataset.tasks),
            len(dataset.phases),
            len(dataset.team_members),
        )
        return dataset

    async def create_task(self, draft: TaskDraft) -> Task:
        response = await self._send("create", "POST", "/tasks", json=_body(draft))
        task = _parse_task("create", response)
        logger.info("Created remote task %s (%s)", task.id, task.task_code)
        return task

    async def update_task(self, task_id: int, draft: TaskDraft) -> Task:
        response = await self._send("update", "PUT", f"/tasks/{task_id}", json=_body(draft))
        task = _parse_task("update", response)
        logger.info("Updated remote task %s", task_id)
        return task

    async def delete_task(self, task_id: int) -> None:
        await self._send("delete", "DELETE", f"/tasks/{task_id}")
        logger.info("Deleted remote task %s", task_id)

    async def close(self) -> None:
        """Close the HTTP client if this store created it."""
        if self._owns_client:
            await self._client.aclose()
            logger.info("RemoteTaskStore closed")

    async def _get_collection(self, path: str, model: type[_M]) -> tuple[_M, ...]:
        try:
            response = await self._client.get(path)
        except httpx.HTTPError as exc:
            raise DataLoadError(path, f"{type(exc).__name__}: {exc}") from exc
        if not response.is_success:
            raise DataLoadError(path, f"HTTP {response.status_code}")
        try:
            return TypeAdapter(tuple[model, ...]).validate_json(response.content)
        except ValidationError as exc:
            raise DataLoadError(path, "unexpected response body") from exc

    async def _send(
        self,
        operation: str,
        method: str,
        path: str,
        json: dict[str, Any] | None = None,
    ) -> httpx.Response:
        try:
            response = await self._client.request(method, path, json=json)
        except httpx.HTTPError as exc:
            logger.warning("Remote %s %s failed: %s", method, path, exc)
            raise RemoteStoreError(operation, reason=f"{type(exc).__name__}: {exc}") from exc
        if not response.is_success:
            logger.warning("Remote %s %s returned HTTP %d", method, path, response.status_code)
            raise RemoteStoreError(
                operation,
                status_code=response.status_code,
                details={"body": response.text[:200]},
            )
        return response


def _first_leaf(group: BaseExceptionGroup) -> BaseException:
    first = group.exceptions[0]
    return _first_leaf(first) if isinstance(first, BaseExceptionGroup) else first


def _body(draft: TaskDraft) -> dict[str, Any]:
    return draft.model_dump(mode="json")


def _parse_task(operation: str, response: httpx.Response) -> Task:
    try:
        return Task.model_validate_json(response.content)
    except ValidationError as exc:
        raise RemoteStoreError(
            operation,
            status_code=response.status_code,
            reason="unexpected response body",
        ) from exc


__all__ = ["RemoteTaskStore"]

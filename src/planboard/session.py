"""Board session: startup load, user actions and mutation dispatch.

Lifecycle
---------
1. **Construct**: stores configuration and overrides, no I/O.
2. **initialize()**: picks the backing store (snapshot → remote → demo) and
   loads the dataset into :class:`~planboard.state.board.BoardState`.
3. **shutdown()**: closes the HTTP client and snapshot backend.

``async with BoardSession(config) as session:`` runs both ends.

Error handling
--------------
Every user action that fails with a :class:`~planboard.core.exceptions.PlanboardError`
is turned into an error notice and leaves the state otherwise untouched.
Nothing is retried. A successful mutation closes the form and is followed
by a full re-read of the store, so the rendered data is what the store
holds. When that re-read fails the mutation still counts as done: a
warning notice is added and the previous data stays on screen.
"""
from __future__ import annotations

import itertools
import logging
from datetime import UTC, datetime
from typing import TYPE_CHECKING, Any

from pydantic import ValidationError

from planboard.core.exceptions import PlanboardError, TaskNotFoundError, TaskValidationError
from planboard.grouping import tasks_for_project
from planboard.state.board import (
    BoardState,
    CloseModal,
    DataLoaded,
    DismissNotice,
    EditField,
    ExpireNotices,
    LoadStarted,
    ModalKind,
    OpenCreate,
    OpenEdit,
    PushNotice,
    SelectProject,
    SetView,
    reduce,
)
from planboard.state.notices import NoticeKind, make_notice
from planboard.storage.factory import SnapshotBackendFactory, select_store
from planboard.storage.local import LocalTaskStore
from planboard.timeline.layout import TimelineLayout
from planboard.utils.validation import validate_draft
from planboard.views.board import build_board
from planboard.views.table import build_table
from planboard.views.timeline import build_timeline

if TYPE_CHECKING:
    from collections.abc import Callable

    from planboard.core.config import PlanboardConfig
    from planboard.core.types import PersistenceMode, Task, ViewMode
    from planboard.state.board import _Action
    from planboard.state.notices import Notice
    from planboard.storage.base import TaskStore
    from planboard.storage.remote import RemoteTaskStore
    from planboard.storage.snapshot import SnapshotBackend
    from planboard.views.board import BoardColumn
    from planboard.views.table import TableSection
    from planboard.views.timeline import TimelineView

logger = logging.getLogger(__name__)


def _utcnow() -> datetime:
    return datetime.now(UTC)


class BoardSession:
    """One user's board: state, chosen store, and the actions that change them.

    Example
    -------
    .. code-block:: python

        config = PlanboardConfig()
        async with BoardSession(config) as session:
            session.set_view(ViewMode.BOARD)

            session.open_create()
            session.edit_field("task_code", "PRD-004")
            session.edit_field("name", "Drone shots")
            await session.save_task()

            for column in session.board_view():
                print(column.title)

    Parameters
    ----------
    config:
        Validated :class:`~planboard.core.config.PlanboardConfig`.
    snapshot_backend:
        Override the backend built from ``config.snapshot_backend``.
    remote_factory:
        Override how the remote store is built (tests pass one wired to a
        fake API).
    clock:
        Source of "now" (UTC); the create form's start date is its date.
    id_clock:
        Id source for local-write stores.
    """

    def __init__(
        self,
        config: PlanboardConfig,
        *,
        snapshot_backend: SnapshotBackend | None = None,
        remote_factory: Callable[[], RemoteTaskStore] | None = None,
        clock: Callable[[], datetime] | None = None,
        id_clock: Callable[[], int] | None = None,
    ) -> None:
        self.config = config
        self.layout = TimelineLayout.from_config(config)
        self._snapshot_backend = snapshot_backend
        self._remote_factory = remote_factory
        self._clock = clock or _utcnow
        self._id_clock = id_clock
        self._notice_ids = itertools.count(1)
        self._state = BoardState()
        self._initialized = False

        # Set during initialize()
        self.store: TaskStore

    @property
    def state(self) -> BoardState:
        return self._state

    @property
    def mode(self) -> PersistenceMode | None:
        return self._state.mode

    @property
    def visible_tasks(self) -> list[Task]:
        """Tasks of the selected project, in store order."""
        return tasks_for_project(self._state.dataset.tasks, self._state.selected_project)

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    async def initialize(self) -> None:
        """Choose the backing store and load the data.

        Safe to call multiple times; subsequent calls are no-ops.
        """
        if self._initialized:
            return

        self._dispatch(LoadStarted())
        if self._snapshot_backend is None:
            self._snapshot_backend = SnapshotBackendFactory.create(
                self.config.snapshot_backend, self.config
            )

        selection = await select_store(
            self.config,
            self._snapshot_backend,
            remote_factory=self._remote_factory,
            id_clock=self._id_clock,
        )
        self.store = selection.store
        self._dispatch(
            DataLoaded(
                dataset=selection.dataset,
                mode=selection.mode,
                selected_project=selection.selected_project,
            )
        )
        self._initialized = True
        logger.info(
            "BoardSession ready mode=%s tasks=%d",
            selection.mode.value,
            len(selection.dataset.tasks),
        )

    async def shutdown(self) -> None:
        """Release the store's and snapshot backend's resources."""
        if not self._initialized:
            return
        await self.store.close()
        if self._snapshot_backend is not None:
            await self._snapshot_backend.close()
        self._initialized = False
        logger.info("BoardSession shut down")

    async def __aenter__(self) -> BoardSession:
        await self.initialize()
        return self

    async def __aexit__(self, *_: Any) -> None:
        await self.shutdown()

    # ------------------------------------------------------------------
    # Pure UI actions
    # ------------------------------------------------------------------

    def set_view(self, view: ViewMode) -> None:
        self._dispatch(SetView(view=view))

    async def select_project(self, project_id: int | None) -> None:
        """Switch the project filter; local-write stores persist the choice."""
        self._dispatch(SelectProject(project_id=project_id))
        if self._initialized and isinstance(self.store, LocalTaskStore):
            try:
                await self.store.set_selected_project(project_id)
            except PlanboardError as exc:
                logger.warning("Could not persist project selection: %s", exc)

    def open_create(self) -> None:
        self._dispatch(
            OpenCreate(today=self._clock().date(), default_days=self.config.default_task_days)
        )

    def open_edit(self, task_id: int) -> None:
        task = self._state.dataset.task(task_id)
        if task is None:
            self._notify(NoticeKind.ERROR, str(TaskNotFoundError(task_id)))
            return
        self._dispatch(OpenEdit(task=task))

    def edit_field(self, field: str, value: Any) -> bool:
        """Change one field of the open form.

        Returns:
            False (with an error notice) when the value is rejected
        """
        try:
            self._dispatch(EditField(field=field, value=value))
        except ValidationError as exc:
            reason = exc.errors()[0]["msg"] if exc.errors() else "invalid value"
            self._notify(NoticeKind.ERROR, str(TaskValidationError(field, reason)))
            return False
        return True

    def close_modal(self) -> None:
        self._dispatch(CloseModal())

    def dismiss_notice(self, notice_id: int) -> None:
        self._dispatch(DismissNotice(notice_id=notice_id))

    def expire_notices(self) -> None:
        self._dispatch(ExpireNotices(now=self._clock()))

    # ------------------------------------------------------------------
    # Mutations
    # ------------------------------------------------------------------

    async def save_task(self) -> Task | None:
        """Submit the open form: create or full-replace update.

        Returns:
            The stored task, or None when validation or the store failed
            (an error notice says why; the form stays open)
        """
        modal = self._state.modal
        if modal.form is None:
            logger.debug("save_task called with no form open")
            return None

        try:
            draft = validate_draft(modal.form.to_draft())
            if modal.kind is ModalKind.EDIT and modal.task is not None:
                saved = await self.store.update_task(modal.task.id, draft)
                message = "Task updated"
            else:
                saved = await self.store.create_task(draft)
                message = "Task added"
        except PlanboardError as exc:
            logger.warning("Saving task failed: %s", exc)
            self._notify(NoticeKind.ERROR, exc.message)
            return None

        # The store has the task now; the form must not be submittable twice.
        self._dispatch(CloseModal())
        self._notify(NoticeKind.SUCCESS, message)
        await self._resync(f"{message}, but refreshing the board failed")
        return saved

    async def delete_task(
        self,
        task_id: int,
        *,
        confirm: Callable[[Task], bool] | None = None,
    ) -> bool:
        """Delete a task, optionally asking *confirm* first.

        Returns:
            True when the task was deleted
        """
        task = self._state.dataset.task(task_id)
        if task is None:
            self._notify(NoticeKind.ERROR, str(TaskNotFoundError(task_id)))
            return False
        if confirm is not None and not confirm(task):
            return False

        try:
            await self.store.delete_task(task_id)
        except PlanboardError as exc:
            logger.warning("Deleting task %s failed: %s", task_id, exc)
            self._notify(NoticeKind.ERROR, exc.message)
            return False

        self._dispatch(CloseModal())
        self._notify(NoticeKind.SUCCESS, "Task deleted")
        await self._resync("Task deleted, but refreshing the board failed")
        return True

    # ------------------------------------------------------------------
    # View models
    # ------------------------------------------------------------------

    def timeline_view(self) -> TimelineView:
        return build_timeline(self.visible_tasks, self._state.dataset.phases, self.layout)

    def board_view(self) -> tuple[BoardColumn, ...]:
        return build_board(self.visible_tasks)

    def table_view(self) -> tuple[TableSection, ...]:
        return build_table(self.visible_tasks, self._state.dataset.phases)

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    async def _reload(self) -> None:
        dataset = await self.store.list_all()
        self._dispatch(
            DataLoaded(
                dataset=dataset,
                mode=self.store.mode,
                selected_project=self._state.selected_project,
            )
        )

    async def _resync(self, warning: str) -> None:
        """Re-read after a committed mutation; failure only warns."""
        try:
            await self._reload()
        except PlanboardError as exc:
            logger.warning("Resync after mutation failed: %s", exc)
            self._notify(NoticeKind.WARNING, warning)

    def _notify(self, kind: NoticeKind, message: str) -> Notice:
        notice = make_notice(
            next(self._notice_ids),
            kind,
            message,
            self._clock(),
            self.config.notice_ttl_seconds,
        )
        self._dispatch(PushNotice(notice=notice))
        return notice

    def _dispatch(self, action: _Action) -> None:
        self._state = reduce(self._state, action)


__all__ = ["BoardSession"]

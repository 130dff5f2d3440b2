"""UI state for a board session: one immutable record plus a reducer.

:class:`BoardState` is never modified in place. Every change is expressed as
an action and applied with :func:`reduce`, which returns a new record::

    state = BoardState()
    state = reduce(state, DataLoaded(dataset=data, mode=PersistenceMode.REMOTE))
    state = reduce(state, SetView(view=ViewMode.BOARD))
    state = reduce(state, OpenEdit(task=data.tasks[0]))

The view selector has no transition restrictions. The modal is independent
of the view: closed, open for create, or open for edit of one task; closing
discards the form.
"""
from __future__ import annotations

import logging
from datetime import date, datetime
from enum import StrEnum
from functools import singledispatch
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from planboard.core.types import Dataset, PersistenceMode, Task, ViewMode
from planboard.state.form import TaskForm, create_form, edit_form
from planboard.state.notices import Notice

logger = logging.getLogger(__name__)


class ModalKind(StrEnum):
    CLOSED = "closed"
    CREATE = "create"
    EDIT = "edit"


class ModalState(BaseModel):
    """The task modal: which mode it is in, and the form it gates."""

    model_config = ConfigDict(frozen=True)

    kind: ModalKind = ModalKind.CLOSED
    task: Task | None = Field(default=None, description="Task being edited (EDIT only)")
    form: TaskForm | None = None

    @property
    def is_open(self) -> bool:
        return self.kind is not ModalKind.CLOSED


CLOSED_MODAL = ModalState()


class BoardState(BaseModel):
    """Everything the page renders from."""

    model_config = ConfigDict(frozen=True)

    view: ViewMode = ViewMode.TIMELINE
    loading: bool = True
    mode: PersistenceMode | None = None
    dataset: Dataset = Field(default_factory=Dataset)
    selected_project: int | None = None
    modal: ModalState = CLOSED_MODAL
    notices: tuple[Notice, ...] = ()


# ---------------------------------------------------------------------------
# Actions
# ---------------------------------------------------------------------------

class _Action(BaseModel):
    model_config = ConfigDict(frozen=True)


class LoadStarted(_Action):
    pass


class DataLoaded(_Action):
    dataset: Dataset
    mode: PersistenceMode
    selected_project: int | None = None


class SetView(_Action):
    view: ViewMode


class SelectProject(_Action):
    project_id: int | None


class OpenCreate(_Action):
    today: date
    default_days: int = 5


class OpenEdit(_Action):
    task: Task


class EditField(_Action):
    field: str
    value: Any = None


class CloseModal(_Action):
    pass


class PushNotice(_Action):
    notice: Notice


class DismissNotice(_Action):
    notice_id: int


class ExpireNotices(_Action):
    now: datetime


# ---------------------------------------------------------------------------
# Reducer
# ---------------------------------------------------------------------------

def reduce(state: BoardState, action: _Action) -> BoardState:
    """Apply *action* to *state* and return the new state.

    Raises:
        TypeError: If *action* is not a known action type
        pydantic.ValidationError: If an ``EditField`` value does not fit the field
    """
    return _apply(action, state)


@singledispatch
def _apply(action: _Action, state: BoardState) -> BoardState:
    raise TypeError(f"Unknown action: {type(action).__name__}")


@_apply.register
def _(action: LoadStarted, state: BoardState) -> BoardState:
    return state.model_copy(update={"loading": True})


@_apply.register
def _(action: DataLoaded, state: BoardState) -> BoardState:
    selected = (
        action.selected_project
        if action.selected_project is not None
        else state.selected_project
    )
    project_ids = {p.id for p in action.dataset.projects}
    if selected not in project_ids:
        selected = action.dataset.projects[0].id if action.dataset.projects else None
    return state.model_copy(
        update={
            "dataset": action.dataset,
            "mode": action.mode,
            "loading": False,
            "selected_project": selected,
        }
    )


@_apply.register
def _(action: SetView, state: BoardState) -> BoardState:
    return state.model_copy(update={"view": action.view})


@_apply.register
def _(action: SelectProject, state: BoardState) -> BoardState:
    return state.model_copy(update={"selected_project": action.project_id})


@_apply.register
def _(action: OpenCreate, state: BoardState) -> BoardState:
    form = create_form(
        state.dataset.phases,
        state.dataset.team_members,
        state.selected_project,
        action.today,
        action.default_days,
    )
    return state.model_copy(update={"modal": ModalState(kind=ModalKind.CREATE, form=form)})


@_apply.register
def _(action: OpenEdit, state: BoardState) -> BoardState:
    modal = ModalState(kind=ModalKind.EDIT, task=action.task, form=edit_form(action.task))
    return state.model_copy(update={"modal": modal})


@_apply.register
def _(action: EditField, state: BoardState) -> BoardState:
    modal = state.modal
    if modal.form is None:
        logger.debug("Ignoring edit of %r: no form open", action.field)
        return state
    if modal.kind is ModalKind.EDIT and action.field == "task_code":
        logger.debug("Ignoring edit of task_code on existing task")
        return state
    form = modal.form.with_field(action.field, action.value)
    return state.model_copy(update={"modal": modal.model_copy(update={"form": form})})


@_apply.register
def _(action: CloseModal, state: BoardState) -> BoardState:
    return state.model_copy(update={"modal": CLOSED_MODAL})


@_apply.register
def _(action: PushNotice, state: BoardState) -> BoardState:
    return state.model_copy(update={"notices": (*state.notices, action.notice)})


@_apply.register
def _(action: DismissNotice, state: BoardState) -> BoardState:
    notices = tuple(n for n in state.notices if n.id != action.notice_id)
    return state.model_copy(update={"notices": notices})


@_apply.register
def _(action: ExpireNotices, state: BoardState) -> BoardState:
    notices = tuple(n for n in state.notices if not n.is_expired(action.now))
    return state.model_copy(update={"notices": notices})


__all__ = [
    "BoardState",
    "CloseModal",
    "DataLoaded",
    "DismissNotice",
    "EditField",
    "ExpireNotices",
    "LoadStarted",
    "ModalKind",
    "ModalState",
    "OpenCreate",
    "OpenEdit",
    "PushNotice",
    "SelectProject",
    "SetView",
    "reduce",
]

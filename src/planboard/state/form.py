"""The single task-editing form behind the modal."""
from __future__ import annotations

from datetime import date, timedelta
from typing import TYPE_CHECKING

from pydantic import BaseModel, ConfigDict, Field

from planboard.core.types import TaskDraft, TaskStatus

if TYPE_CHECKING:
    from collections.abc import Sequence

    from planboard.core.types import Phase, Task, TeamMember


class TaskForm(BaseModel):
    """Field values of the open form.

    Unlike :class:`~planboard.core.types.TaskDraft` the text fields may be
    empty here; emptiness is only rejected on submit.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    task_code: str = ""
    name: str = ""
    phase_id: int | None = None
    status: TaskStatus = TaskStatus.OPEN
    owner_id: int | None = None
    start_date: date
    end_date: date
    duration: int = Field(default=5, ge=0)
    project_id: int | None = None

    def to_draft(self) -> TaskDraft:
        return TaskDraft.model_validate(self.model_dump())

    def with_field(self, field: str, value: object) -> TaskForm:
        """Return a copy with one field replaced, re-validated.

        Raises:
            pydantic.ValidationError: Unknown field or uncoercible value
        """
        return TaskForm.model_validate({**self.model_dump(), field: value})


def create_form(
    phases: Sequence[Phase],
    members: Sequence[TeamMember],
    project_id: int | None,
    today: date,
    default_days: int = 5,
) -> TaskForm:
    """Defaults for a new task: starts today, first phase and owner, status Open."""
    return TaskForm(
        phase_id=phases[0].id if phases else None,
        owner_id=members[0].id if members else None,
        start_date=today,
        end_date=today + timedelta(days=default_days),
        duration=default_days,
        project_id=project_id,
    )


def edit_form(task: Task) -> TaskForm:
    """Seed every field from an existing task."""
    return TaskForm.model_validate(task.to_draft().model_dump())


__all__ = ["TaskForm", "create_form", "edit_form"]

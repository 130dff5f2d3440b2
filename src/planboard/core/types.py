"""Core types and data models for planboard.

All records are frozen pydantic models. Use ``model_copy(update={...})`` to
derive modified versions; nothing in the package mutates a record in place.

Backends are not trusted to be tidy: unknown fields are ignored, and date
fields accept either ``YYYY-MM-DD`` strings or full ISO timestamps (many REST
backends serialise DATE columns as ``2026-01-08T00:00:00.000Z``).
"""
from __future__ import annotations

from datetime import date, datetime
from enum import StrEnum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator


class TaskStatus(StrEnum):
    """Task workflow status, in board-column order."""
    OPEN = "Open"
    IN_PROGRESS = "In Progress"
    TESTING = "Testing"
    DONE = "Done"


STATUS_ORDER: tuple[TaskStatus, ...] = (
    TaskStatus.OPEN,
    TaskStatus.IN_PROGRESS,
    TaskStatus.TESTING,
    TaskStatus.DONE,
)


class ViewMode(StrEnum):
    """Which of the three task views is active."""
    TIMELINE = "timeline"
    BOARD = "board"
    TABLE = "table"


class PersistenceMode(StrEnum):
    """Backing store chosen at startup."""
    REMOTE = "remote"
    LOCAL = "local"
    DEMO = "demo"

    @property
    def is_local_write(self) -> bool:
        """True when mutations stay in the local snapshot."""
        return self is not PersistenceMode.REMOTE


class SnapshotBackendKind(StrEnum):
    """Where the local snapshot is kept."""
    MEMORY = "memory"
    FILE = "file"
    REDIS = "redis"


def _coerce_date(value: Any) -> Any:
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, str) and "T" in value:
        return datetime.fromisoformat(value).date()
    return value


class _Record(BaseModel):
    model_config = ConfigDict(frozen=True, extra="ignore", populate_by_name=True)


class Project(_Record):
    """Root grouping entity. Created externally, never mutated here."""

    id: int = Field(..., description="Project ID")
    name: str = Field(..., description="Project display name")


class Phase(_Record):
    """Ordered project stage (pre-production, production …)."""

    id: int = Field(..., description="Phase ID")
    name: str = Field(..., description="Phase display name")
    order: int = Field(default=0, description="Position among the project's phases")


class TeamMember(_Record):
    """Person a task can be assigned to."""

    id: int = Field(..., description="Member ID")
    name: str = Field(..., description="Member display name")
    avatar_color: str | None = Field(default=None, description="CSS colour of the avatar")


class TaskDraft(_Record):
    """Task fields as sent to a store on create/update.

    Carries no ``id`` and no display fields; those are owned by the store.
    """

    task_code: str = Field(..., description="Human task code, immutable once created")
    name: str = Field(..., description="Task name")
    phase_id: int | None = Field(default=None, description="Owning phase")
    status: TaskStatus = Field(default=TaskStatus.OPEN, description="Workflow status")
    owner_id: int | None = Field(default=None, description="Assigned team member")
    start_date: date = Field(..., description="First day of work")
    end_date: date = Field(..., description="Last day of work (inclusive)")
    duration: int = Field(default=5, ge=0, description="Planned duration in days")
    project_id: int | None = Field(default=None, description="Owning project")

    @field_validator("start_date", "end_date", mode="before")
    @classmethod
    def _accept_timestamps(cls, v: Any) -> Any:
        return _coerce_date(v)


class Task(TaskDraft):
    """Stored task, including the denormalized display fields.

    ``phase_name``, ``owner_name`` and ``avatar_color`` are a cache of the
    referenced :class:`Phase` / :class:`TeamMember` rows. Local stores
    recompute them on every write via
    :func:`planboard.utils.denormalize.refresh_display_fields`.
    """

    id: int = Field(..., description="Task ID")
    phase_name: str | None = Field(default=None, description="Cached phase name")
    owner_name: str | None = Field(default=None, description="Cached owner name")
    avatar_color: str | None = Field(default=None, description="Cached owner colour")

    def to_draft(self) -> TaskDraft:
        """Strip the id and display fields."""
        return TaskDraft.model_validate(
            self.model_dump(include=set(TaskDraft.model_fields))
        )


class Dataset(_Record):
    """Everything a session renders: the four collections, read-only.

    Example
    -------
    .. code-block:: python

        data = await store.list_all()
        phase = data.phase(task.phase_id)
        data = data.with_tasks([*data.tasks, new_task])
    """

    projects: tuple[Project, ...] = ()
    tasks: tuple[Task, ...] = ()
    phases: tuple[Phase, ...] = ()
    team_members: tuple[TeamMember, ...] = Field(default=(), alias="teamMembers")

    def phase(self, phase_id: int | None) -> Phase | None:
        return next((p for p in self.phases if p.id == phase_id), None)

    def member(self, member_id: int | None) -> TeamMember | None:
        return next((m for m in self.team_members if m.id == member_id), None)

    def task(self, task_id: int) -> Task | None:
        return next((t for t in self.tasks if t.id == task_id), None)

    def with_tasks(self, tasks: Any) -> Dataset:
        return self.model_copy(update={"tasks": tuple(tasks)})


class Snapshot(Dataset):
    """Persisted local bundle.

    Serialised with aliases, i.e.
    ``{"projects", "tasks", "phases", "teamMembers", "selectedProject"}``.
    """

    selected_project: int | None = Field(default=None, alias="selectedProject")

    @classmethod
    def from_dataset(cls, dataset: Dataset, selected_project: int | None = None) -> Snapshot:
        return cls(
            projects=dataset.projects,
            tasks=dataset.tasks,
            phases=dataset.phases,
            team_members=dataset.team_members,
            selected_project=selected_project,
        )

    def to_dataset(self) -> Dataset:
        return Dataset(
            projects=self.projects,
            tasks=self.tasks,
            phases=self.phases,
            team_members=self.team_members,
        )

    def to_json(self) -> str:
        return self.model_dump_json(by_alias=True)


__all__ = [
    "STATUS_ORDER",
    "Dataset",
    "PersistenceMode",
    "Phase",
    "Project",
    "Snapshot",
    "SnapshotBackendKind",
    "Task",
    "TaskDraft",
    "TaskStatus",
    "TeamMember",
    "ViewMode",
]

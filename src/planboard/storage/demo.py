"""Built-in demo dataset, served when neither a snapshot nor the API is available.

The demo store is a local-write store: edits are kept in the snapshot, so the
next startup resumes from the edited data instead of the pristine demo.
"""
from __future__ import annotations

from datetime import date
from typing import TYPE_CHECKING, ClassVar

from planboard.core.types import (
    Dataset,
    PersistenceMode,
    Phase,
    Project,
    Task,
    TaskStatus,
    TeamMember,
)
from planboard.storage.local import LocalTaskStore
from planboard.utils.denormalize import refresh_display_fields

if TYPE_CHECKING:
    from collections.abc import Callable

    from planboard.storage.snapshot import SnapshotBackend

_PROJECTS = (
    Project(id=1, name="Spring Campaign Video"),
    Project(id=2, name="Product Explainer Series"),
)

_PHASES = (
    Phase(id=1, name="Pre-Production", order=1),
    Phase(id=2, name="Production", order=2),
    Phase(id=3, name="Post-Production", order=3),
)

_MEMBERS = (
    TeamMember(id=1, name="Sarah Chen", avatar_color="#4285f4"),
    TeamMember(id=2, name="Marcus Reed", avatar_color="#ea4335"),
    TeamMember(id=3, name="Priya Nair", avatar_color="#34a853"),
    TeamMember(id=4, name="Tom Alvarez", avatar_color="#fbbc04"),
)


def _task(
    task_id: int,
    code: str,
    name: str,
    phase_id: int,
    status: TaskStatus,
    owner_id: int,
    start: date,
    end: date,
    project_id: int = 1,
) -> Task:
    return Task(
        id=task_id,
        task_code=code,
        name=name,
        phase_id=phase_id,
        status=status,
        owner_id=owner_id,
        start_date=start,
        end_date=end,
        duration=(end - start).days + 1,
        project_id=project_id,
    )


_TASKS = (
    _task(1, "PRE-001", "Creative brief", 1, TaskStatus.DONE, 1,
          date(2026, 1, 8), date(2026, 1, 12)),
    _task(2, "PRE-002", "Script and storyboard", 1, TaskStatus.DONE, 3,
          date(2026, 1, 13), date(2026, 1, 21)),
    _task(3, "PRE-003", "Casting and locations", 1, TaskStatus.TESTING, 2,
          date(2026, 1, 19), date(2026, 1, 28)),
    _task(4, "PRD-001", "Principal photography", 2, TaskStatus.IN_PROGRESS, 2,
          date(2026, 1, 29), date(2026, 2, 6)),
    _task(5, "PRD-002", "B-roll and pickups", 2, TaskStatus.OPEN, 4,
          date(2026, 2, 5), date(2026, 2, 10)),
    _task(6, "PST-001", "Offline edit", 3, TaskStatus.OPEN, 3,
          date(2026, 2, 9), date(2026, 2, 18)),
    _task(7, "PST-002", "Colour grade and sound mix", 3, TaskStatus.OPEN, 4,
          date(2026, 2, 19), date(2026, 2, 24)),
    _task(8, "PST-003", "Final delivery", 3, TaskStatus.OPEN, 1,
          date(2026, 2, 25), date(2026, 2, 26)),
    _task(9, "EXP-001", "Episode outlines", 1, TaskStatus.IN_PROGRESS, 3,
          date(2026, 1, 12), date(2026, 1, 23), project_id=2),
    _task(10, "EXP-002", "Screen recordings", 2, TaskStatus.OPEN, 4,
          date(2026, 1, 26), date(2026, 2, 4), project_id=2),
)


def demo_dataset() -> Dataset:
    """The demo bundle, with display fields filled from its own tables."""
    return Dataset(
        projects=_PROJECTS,
        phases=_PHASES,
        team_members=_MEMBERS,
        tasks=tuple(refresh_display_fields(t, _PHASES, _MEMBERS) for t in _TASKS),
    )


class DemoTaskStore(LocalTaskStore):
    """Local-write store seeded with :func:`demo_dataset`."""

    mode: ClassVar[PersistenceMode] = PersistenceMode.DEMO

    def __init__(
        self,
        *,
        backend: SnapshotBackend,
        key: str,
        id_clock: Callable[[], int] | None = None,
    ) -> None:
        data = demo_dataset()
        super().__init__(
            data,
            backend=backend,
            key=key,
            selected_project=data.projects[0].id,
            id_clock=id_clock,
        )


__all__ = ["DemoTaskStore", "demo_dataset"]

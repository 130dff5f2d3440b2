"""Table (list) view model: phase sections of task rows."""
from __future__ import annotations

from typing import TYPE_CHECKING

from pydantic import BaseModel, ConfigDict

from planboard.core.types import Phase, Task
from planboard.grouping import group_by_phase
from planboard.views.board import avatar_color, owner_initial
from planboard.views.colors import badge_colors

if TYPE_CHECKING:
    from collections.abc import Iterable, Sequence

COLUMNS = ("ID", "Name", "Owner", "Status", "Start", "Due", "Duration", "Actions")


class TableRow(BaseModel):
    model_config = ConfigDict(frozen=True)

    task: Task
    owner_initial: str
    avatar_color: str
    badge_color: str
    badge_text_color: str

    @property
    def duration_label(self) -> str:
        return f"{self.task.duration}d"


class TableSection(BaseModel):
    model_config = ConfigDict(frozen=True)

    phase: Phase
    rows: tuple[TableRow, ...]


def _row(task: Task) -> TableRow:
    badge = badge_colors(task.status)
    return TableRow(
        task=task,
        owner_initial=owner_initial(task),
        avatar_color=avatar_color(task),
        badge_color=badge.background,
        badge_text_color=badge.text,
    )


def build_table(tasks: Iterable[Task], phases: Sequence[Phase]) -> tuple[TableSection, ...]:
    return tuple(
        TableSection(
            phase=phase,
            rows=tuple(_row(t) for t in phase_tasks),
        )
        for phase, phase_tasks in group_by_phase(phases, tasks)
    )


__all__ = ["COLUMNS", "TableRow", "TableSection", "build_table"]

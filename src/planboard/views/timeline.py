"""Timeline (Gantt) view model: phase sections of positioned task bars."""
from __future__ import annotations

from typing import TYPE_CHECKING

from pydantic import BaseModel, ConfigDict

from planboard.core.types import Phase, Task
from planboard.grouping import group_by_phase
from planboard.timeline.layout import BarGeometry
from planboard.views.colors import bar_colors

if TYPE_CHECKING:
    from collections.abc import Iterable, Sequence

    from planboard.timeline.layout import TimelineLayout


class TimelineRow(BaseModel):
    model_config = ConfigDict(frozen=True)

    task: Task
    bar: BarGeometry
    bar_color: str
    text_color: str


class TimelineSection(BaseModel):
    model_config = ConfigDict(frozen=True)

    phase: Phase
    rows: tuple[TimelineRow, ...]


class TimelineView(BaseModel):
    model_config = ConfigDict(frozen=True)

    columns: tuple[str, ...]
    sections: tuple[TimelineSection, ...]


def _row(task: Task, layout: TimelineLayout) -> TimelineRow:
    colors = bar_colors(task.status)
    return TimelineRow(
        task=task,
        bar=layout.bar(task),
        bar_color=colors.background,
        text_color=colors.text,
    )


def build_timeline(
    tasks: Iterable[Task],
    phases: Sequence[Phase],
    layout: TimelineLayout,
) -> TimelineView:
    """One section per phase (empty ones included), one bar per task."""
    sections = tuple(
        TimelineSection(
            phase=phase,
            rows=tuple(_row(t, layout) for t in phase_tasks),
        )
        for phase, phase_tasks in group_by_phase(phases, tasks)
    )
    return TimelineView(columns=tuple(layout.columns), sections=sections)


__all__ = ["TimelineRow", "TimelineSection", "TimelineView", "build_timeline"]

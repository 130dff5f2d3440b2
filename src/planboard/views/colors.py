"""Status colour tables shared by the view models.

Each table maps a :class:`~planboard.core.types.TaskStatus` to a
background/text pair. Statuses missing from a table get that table's grey
default, so a status added later still renders.
"""
from __future__ import annotations

from collections.abc import Mapping

from pydantic import BaseModel, ConfigDict

from planboard.core.types import TaskStatus


class StatusColors(BaseModel):
    model_config = ConfigDict(frozen=True)

    background: str
    text: str


# Timeline bars
BAR_COLORS: Mapping[TaskStatus, StatusColors] = {
    TaskStatus.DONE: StatusColors(background="#4285f4", text="#fff"),
    TaskStatus.IN_PROGRESS: StatusColors(background="#fbbc04", text="#333"),
    TaskStatus.TESTING: StatusColors(background="#34a853", text="#fff"),
    TaskStatus.OPEN: StatusColors(background="#9e9e9e", text="#fff"),
}
DEFAULT_BAR_COLORS = StatusColors(background="#9e9e9e", text="#fff")

# Table status badges
BADGE_COLORS: Mapping[TaskStatus, StatusColors] = {
    TaskStatus.DONE: StatusColors(background="#d1e7dd", text="#0f5132"),
    TaskStatus.IN_PROGRESS: StatusColors(background="#cfe2ff", text="#084298"),
    TaskStatus.TESTING: StatusColors(background="#fff3cd", text="#664d03"),
    TaskStatus.OPEN: StatusColors(background="#f0f0f0", text="#666"),
}
DEFAULT_BADGE_COLORS = StatusColors(background="#f0f0f0", text="#666")

# Board column headers
COLUMN_COLORS: Mapping[TaskStatus, str] = {
    TaskStatus.OPEN: "#d4edda",
    TaskStatus.IN_PROGRESS: "#cfe2ff",
    TaskStatus.TESTING: "#fff3cd",
    TaskStatus.DONE: "#d1e7dd",
}
DEFAULT_COLUMN_COLOR = "#f0f0f0"


def bar_colors(
    status: TaskStatus, table: Mapping[TaskStatus, StatusColors] = BAR_COLORS
) -> StatusColors:
    return table.get(status, DEFAULT_BAR_COLORS)


def badge_colors(
    status: TaskStatus, table: Mapping[TaskStatus, StatusColors] = BADGE_COLORS
) -> StatusColors:
    return table.get(status, DEFAULT_BADGE_COLORS)


def column_color(status: TaskStatus, table: Mapping[TaskStatus, str] = COLUMN_COLORS) -> str:
    return table.get(status, DEFAULT_COLUMN_COLOR)


__all__ = [
    "BADGE_COLORS",
    "BAR_COLORS",
    "COLUMN_COLORS",
    "DEFAULT_BADGE_COLORS",
    "DEFAULT_BAR_COLORS",
    "DEFAULT_COLUMN_COLOR",
    "StatusColors",
    "badge_colors",
    "bar_colors",
    "column_color",
]

"""Board (Kanban) view model: one column per status, with counts."""
from __future__ import annotations

from datetime import date
from typing import TYPE_CHECKING

from pydantic import BaseModel, ConfigDict

from planboard.core.types import Task, TaskStatus
from planboard.grouping import group_by_status
from planboard.views.colors import column_color

if TYPE_CHECKING:
    from collections.abc import Iterable

DEFAULT_AVATAR_COLOR = "#4285f4"


def owner_initial(task: Task) -> str:
    """First letter of the cached owner name, ``"?"`` when unassigned."""
    name = (task.owner_name or "").strip()
    return name[0].upper() if name else "?"


def avatar_color(task: Task) -> str:
    return task.avatar_color or DEFAULT_AVATAR_COLOR


class BoardCard(BaseModel):
    model_config = ConfigDict(frozen=True)

    task: Task
    owner_initial: str
    avatar_color: str
    due_date: date


class BoardColumn(BaseModel):
    model_config = ConfigDict(frozen=True)

    status: TaskStatus
    header_color: str
    cards: tuple[BoardCard, ...]

    @property
    def count(self) -> int:
        return len(self.cards)

    @property
    def title(self) -> str:
        return f"{self.status.value} ({self.count})"


def build_board(tasks: Iterable[Task]) -> tuple[BoardColumn, ...]:
    """Four columns in status order; empty columns are kept."""
    return tuple(
        BoardColumn(
            status=status,
            header_color=column_color(status),
            cards=tuple(
                BoardCard(
                    task=t,
                    owner_initial=owner_initial(t),
                    avatar_color=avatar_color(t),
                    due_date=t.end_date,
                )
                for t in status_tasks
            ),
        )
        for status, status_tasks in group_by_status(tasks).items()
    )


__all__ = [
    "DEFAULT_AVATAR_COLOR",
    "BoardCard",
    "BoardColumn",
    "avatar_color",
    "build_board",
    "owner_initial",
]

"""Recompute the display fields cached on a task.

``phase_name``, ``owner_name`` and ``avatar_color`` are copied from the
reference tables at write time. Every local write goes through
:func:`refresh_display_fields` so a stale cache is never written back.
"""
from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Iterable

    from planboard.core.types import Phase, Task, TeamMember


def refresh_display_fields(
    task: Task,
    phases: Iterable[Phase],
    members: Iterable[TeamMember],
) -> Task:
    """Return *task* with display fields taken from the current tables.

    A reference that no longer resolves clears the matching field rather
    than keeping the old value.
    """
    phase = next((p for p in phases if p.id == task.phase_id), None)
    owner = next((m for m in members if m.id == task.owner_id), None)
    return task.model_copy(
        update={
            "phase_name": phase.name if phase else None,
            "owner_name": owner.name if owner else None,
            "avatar_color": owner.avatar_color if owner else None,
        }
    )


__all__ = ["refresh_display_fields"]

"""Task grouping projections used by all three views.

Every function here is pure: inputs are read once, never mutated, and the
result is rebuilt from scratch on each call. Data volumes are tens of tasks,
so there is no caching or incremental update.
"""
from __future__ import annotations

from typing import TYPE_CHECKING

from planboard.core.types import STATUS_ORDER, TaskStatus

if TYPE_CHECKING:
    from collections.abc import Iterable, Sequence

    from planboard.core.types import Phase, Task


def group_by_phase(
    phases: Sequence[Phase],
    tasks: Iterable[Task],
) -> list[tuple[Phase, list[Task]]]:
    """Bucket tasks by ``phase_id``, one bucket per phase in phase order.

    Tasks keep their input order inside a bucket. A task whose ``phase_id``
    matches no phase lands in no bucket.

    Example:
        ```python
        for phase, phase_tasks in group_by_phase(data.phases, data.tasks):
            print(phase.name, len(phase_tasks))
        ```
    """
    task_list = list(tasks)
    return [(phase, [t for t in task_list if t.phase_id == phase.id]) for phase in phases]


def group_by_status(tasks: Iterable[Task]) -> dict[TaskStatus, list[Task]]:
    """Bucket tasks by status, keyed in board-column order.

    All four statuses are always present, possibly with an empty list.
    """
    grouped: dict[TaskStatus, list[Task]] = {status: [] for status in STATUS_ORDER}
    for task in tasks:
        grouped[task.status].append(task)
    return grouped


def tasks_for_project(tasks: Iterable[Task], project_id: int | None) -> list[Task]:
    """Tasks of one project; every task when no project is selected."""
    if project_id is None:
        return list(tasks)
    return [t for t in tasks if t.project_id == project_id]


__all__ = ["group_by_phase", "group_by_status", "tasks_for_project"]

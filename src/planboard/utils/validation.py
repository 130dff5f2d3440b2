"""Client-side checks run before a task is submitted to any store.

Nothing here talks to a store; a failed check raises
:class:`~planboard.core.exceptions.TaskValidationError` and the request is
never issued.
"""
from __future__ import annotations

from typing import TYPE_CHECKING

from planboard.core.exceptions import TaskValidationError

if TYPE_CHECKING:
    from planboard.core.types import TaskDraft

_REQUIRED_FIELDS = ("task_code", "name")


def validate_draft(draft: TaskDraft) -> TaskDraft:
    """Reject drafts that must not reach a store.

    Rules:
    - ``task_code`` and ``name`` are non-empty after stripping whitespace
    - ``start_date`` is on or before ``end_date``

    Surrounding whitespace is stripped from the required text fields.

    Returns:
        The normalised draft

    Raises:
        TaskValidationError: On the first failing rule
    """
    for field in _REQUIRED_FIELDS:
        value = getattr(draft, field)
        if not value or not value.strip():
            raise TaskValidationError(field, "required")

    if draft.start_date > draft.end_date:
        raise TaskValidationError(
            "end_date",
            f"ends {draft.end_date.isoformat()} before it starts {draft.start_date.isoformat()}",
        )

    return draft.model_copy(
        update={"task_code": draft.task_code.strip(), "name": draft.name.strip()}
    )


__all__ = ["validate_draft"]

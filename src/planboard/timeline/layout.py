"""Date-to-percent layout for the timeline (Gantt) view.

The viewport is a fixed row of week columns starting at an epoch date. A bar
is placed by whole-day counts only::

    offset_days   = start - epoch                (days)
    duration_days = end - start + 1              (days, inclusive)
    left_percent  = offset_days / 7 * (100 / weeks)
    width_percent = duration_days / 7 * (100 / weeks)

Percentages are not rounded. Bars starting before the epoch get
``left_percent`` clamped to 0; ``offset_days`` keeps the raw value and the
width is not trimmed.
"""
from __future__ import annotations

from datetime import date, timedelta

from pydantic import BaseModel, ConfigDict, Field

from planboard.core.config import DEFAULT_TIMELINE_EPOCH

DAYS_PER_WEEK = 7
DEFAULT_WEEKS = 7

_MONTHS = ("JAN", "FEB", "MAR", "APR", "MAY", "JUN", "JUL", "AUG", "SEP", "OCT", "NOV", "DEC")


class BarGeometry(BaseModel):
    """Horizontal placement of one task bar, in percent of the viewport width."""

    model_config = ConfigDict(frozen=True)

    offset_days: int = Field(..., description="Days from the epoch to the start date")
    duration_days: int = Field(..., description="Inclusive day span of the task")
    left_percent: float = Field(..., description="Left edge, clamped at 0")
    width_percent: float = Field(..., description="Bar width")

    @property
    def clamped(self) -> bool:
        """True when the task starts before the epoch."""
        return self.offset_days < 0


def compute_bar(
    start: date,
    end: date,
    epoch: date = DEFAULT_TIMELINE_EPOCH,
    weeks: int = DEFAULT_WEEKS,
) -> BarGeometry:
    """Place a task's ``[start, end]`` range on the timeline.

    Args:
        start: First day of the task
        end: Last day of the task (inclusive)
        epoch: Calendar date at the left edge of the viewport
        weeks: Number of week columns in the viewport

    Returns:
        :class:`BarGeometry` with left/width percentages

    Example:
        ```python
        bar = compute_bar(date(2026, 1, 8), date(2026, 1, 12))
        bar.left_percent   # 0.0
        bar.width_percent  # 10.204… (5/7 of one 100/7 % column)
        ```
    """
    if weeks < 1:
        raise ValueError(f"weeks must be >= 1, got {weeks}")

    column_percent = 100 / weeks
    offset_days = (start - epoch).days
    duration_days = (end - start).days + 1

    left = (offset_days / DAYS_PER_WEEK) * column_percent
    width = (duration_days / DAYS_PER_WEEK) * column_percent
    return BarGeometry(
        offset_days=offset_days,
        duration_days=duration_days,
        left_percent=max(left, 0.0),
        width_percent=width,
    )


def week_columns(epoch: date = DEFAULT_TIMELINE_EPOCH, weeks: int = DEFAULT_WEEKS) -> list[str]:
    """Header labels for the viewport's week columns.

    Each label carries the ISO week number of the column's first day and its
    day range, e.g. ``"W2 08-14 JAN"`` or ``"W5 29 JAN-04 FEB"`` when the
    column crosses a month boundary.
    """
    labels: list[str] = []
    for i in range(weeks):
        first = epoch + timedelta(days=i * DAYS_PER_WEEK)
        last = first + timedelta(days=DAYS_PER_WEEK - 1)
        week_no = first.isocalendar().week
        if first.month == last.month:
            span = f"{first.day:02d}-{last.day:02d} {_MONTHS[first.month - 1]}"
        else:
            span = (
                f"{first.day:02d} {_MONTHS[first.month - 1]}-"
                f"{last.day:02d} {_MONTHS[last.month - 1]}"
            )
        labels.append(f"W{week_no} {span}")
    return labels


class TimelineLayout:
    """Epoch and column count bound together, for repeated bar placement.

    Example:
        ```python
        layout = TimelineLayout.from_config(config)
        layout.columns          # ["W2 08-14 JAN", …]
        layout.bar(task)        # BarGeometry
        ```
    """

    def __init__(self, epoch: date = DEFAULT_TIMELINE_EPOCH, weeks: int = DEFAULT_WEEKS) -> None:
        if weeks < 1:
            raise ValueError(f"weeks must be >= 1, got {weeks}")
        self.epoch = epoch
        self.weeks = weeks

    @classmethod
    def from_config(cls, config) -> TimelineLayout:
        return cls(epoch=config.timeline_epoch, weeks=config.timeline_weeks)

    @property
    def columns(self) -> list[str]:
        return week_columns(self.epoch, self.weeks)

    def bar(self, task) -> BarGeometry:
        return compute_bar(task.start_date, task.end_date, self.epoch, self.weeks)

    def __repr__(self) -> str:
        return f"TimelineLayout(epoch={self.epoch.isoformat()}, weeks={self.weeks})"


__all__ = [
    "BarGeometry",
    "DAYS_PER_WEEK",
    "DEFAULT_WEEKS",
    "TimelineLayout",
    "compute_bar",
    "week_columns",
]

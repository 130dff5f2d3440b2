"""Timeline (Gantt) geometry."""

from planboard.timeline.layout import (
    BarGeometry,
    TimelineLayout,
    compute_bar,
    week_columns,
)

__all__ = [
    "BarGeometry",
    "TimelineLayout",
    "compute_bar",
    "week_columns",
]

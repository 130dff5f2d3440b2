"""View models for the timeline, board and table views.

Each builder is a pure function of the (project-filtered) task list and the
reference tables; renderers draw straight from the returned records.
"""

from planboard.views.board import BoardCard, BoardColumn, build_board
from planboard.views.colors import StatusColors, badge_colors, bar_colors, column_color
from planboard.views.table import TableRow, TableSection, build_table
from planboard.views.timeline import TimelineRow, TimelineSection, TimelineView, build_timeline

__all__ = [
    "BoardCard",
    "BoardColumn",
    "StatusColors",
    "TableRow",
    "TableSection",
    "TimelineRow",
    "TimelineSection",
    "TimelineView",
    "badge_colors",
    "bar_colors",
    "build_board",
    "build_table",
    "build_timeline",
    "column_color",
]

"""planboard: headless core of a production-planning board.

Quick start
-----------
.. code-block:: python

    from planboard import BoardSession, PlanboardConfig, ViewMode

    config = PlanboardConfig(api_base_url="http://localhost:5501/api")

    async with BoardSession(config) as session:
        print(session.mode)            # remote, local or demo
        session.set_view(ViewMode.TIMELINE)
        timeline = session.timeline_view()

Public API
----------
Core types
    Project, Phase, TeamMember, Task, TaskDraft, Dataset, Snapshot,
    TaskStatus, ViewMode, PersistenceMode

Configuration
    PlanboardConfig

Session
    BoardSession

Layout & grouping
    compute_bar, week_columns, TimelineLayout,
    group_by_phase, group_by_status, tasks_for_project

Storage backends
    TaskStore (ABC), RemoteTaskStore, LocalTaskStore, DemoTaskStore,
    select_store, snapshot backends

State
    BoardState, reduce and the action types

Exceptions
    PlanboardError and all its subclasses
"""
from __future__ import annotations

from importlib.metadata import PackageNotFoundError
from importlib.metadata import version as _pkg_version

try:
    __version__: str = _pkg_version("planboard")
except PackageNotFoundError:  # running from source without install
    __version__ = "0.0.0+dev"

__license__ = "MIT"

# Configuration
from planboard.core.config import PlanboardConfig

# Exceptions
from planboard.core.exceptions import (
    ConfigurationError,
    DataLoadError,
    PlanboardError,
    RemoteStoreError,
    SnapshotError,
    TaskNotFoundError,
    TaskValidationError,
)
from planboard.core.types import (
    STATUS_ORDER,
    Dataset,
    PersistenceMode,
    Phase,
    Project,
    Snapshot,
    SnapshotBackendKind,
    Task,
    TaskDraft,
    TaskStatus,
    TeamMember,
    ViewMode,
)

# Grouping
from planboard.grouping import group_by_phase, group_by_status, tasks_for_project

# Session
from planboard.session import BoardSession

# State
from planboard.state import BoardState, ModalKind, Notice, NoticeKind, TaskForm, reduce

# Storage
from planboard.storage import (
    DemoTaskStore,
    FileSnapshotBackend,
    InMemorySnapshotBackend,
    LocalTaskStore,
    RemoteTaskStore,
    SnapshotBackend,
    StoreSelection,
    TaskStore,
    select_store,
)

# Timeline
from planboard.timeline import BarGeometry, TimelineLayout, compute_bar, week_columns

__all__ = [  # noqa: RUF022
    "__version__",
    # Types
    "Project",
    "Phase",
    "TeamMember",
    "Task",
    "TaskDraft",
    "Dataset",
    "Snapshot",
    "TaskStatus",
    "STATUS_ORDER",
    "ViewMode",
    "PersistenceMode",
    "SnapshotBackendKind",
    # Config
    "PlanboardConfig",
    # Exceptions
    "PlanboardError",
    "DataLoadError",
    "RemoteStoreError",
    "TaskNotFoundError",
    "TaskValidationError",
    "SnapshotError",
    "ConfigurationError",
    # Session
    "BoardSession",
    # State
    "BoardState",
    "ModalKind",
    "Notice",
    "NoticeKind",
    "TaskForm",
    "reduce",
    # Timeline & grouping
    "BarGeometry",
    "TimelineLayout",
    "compute_bar",
    "week_columns",
    "group_by_phase",
    "group_by_status",
    "tasks_for_project",
    # Storage
    "TaskStore",
    "RemoteTaskStore",
    "LocalTaskStore",
    "DemoTaskStore",
    "StoreSelection",
    "select_store",
    "SnapshotBackend",
    "InMemorySnapshotBackend",
    "FileSnapshotBackend",
]

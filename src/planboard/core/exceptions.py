"""Custom exceptions for planboard.

All exceptions derive from :class:`PlanboardError` so callers can catch the
entire family with a single ``except PlanboardError`` clause.

Hierarchy::

    PlanboardError
    ├── DataLoadError
    ├── RemoteStoreError
    ├── TaskNotFoundError
    ├── TaskValidationError
    ├── SnapshotError
    └── ConfigurationError
"""

from __future__ import annotations

from typing import Any


class PlanboardError(Exception):
    """Base exception for all planboard errors."""

    def __init__(self, message: str, details: dict[str, Any] | None = None) -> None:
        self.message = message
        self.details: dict[str, Any] = details or {}
        super().__init__(message)

    def __str__(self) -> str:
        if self.details:
            return f"{self.message} | details={self.details}"
        return self.message

    def __repr__(self) -> str:
        return f"{type(self).__name__}(message={self.message!r})"


class DataLoadError(PlanboardError):
    """Raised when a startup load tier (snapshot or remote fetch) fails."""

    def __init__(
        self,
        source: str,
        reason: str,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(f"Could not load data from {source}: {reason}", details)
        self.source = source
        self.reason = reason


class RemoteStoreError(PlanboardError):
    """Raised when a remote mutation gets a non-2xx answer or no answer at all."""

    def __init__(
        self,
        operation: str,
        status_code: int | None = None,
        reason: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        message = f"Remote {operation} failed"
        if status_code is not None:
            message += f" (HTTP {status_code})"
        if reason:
            message += f": {reason}"
        super().__init__(message, details)
        self.operation = operation
        self.status_code = status_code
        self.reason = reason


class TaskNotFoundError(PlanboardError):
    """Raised when a local update/delete targets an unknown task id."""

    def __init__(
        self,
        task_id: int | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        message = f"Task not found: {task_id!r}" if task_id is not None else "Task not found"
        super().__init__(message, details)
        self.task_id = task_id


class TaskValidationError(PlanboardError):
    """Raised before any request when a task form is not submittable."""

    def __init__(
        self,
        field: str,
        reason: str,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(f"Invalid task field {field!r}: {reason}", details)
        self.field = field
        self.reason = reason


class SnapshotError(PlanboardError):
    """Raised when a snapshot backend cannot read or write its key."""

    def __init__(
        self,
        key: str,
        reason: str,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(f"Snapshot {key!r} unavailable: {reason}", details)
        self.key = key
        self.reason = reason


class ConfigurationError(PlanboardError):
    """Raised when :class:`~planboard.core.config.PlanboardConfig` contains an invalid value."""

    def __init__(
        self,
        parameter: str,
        reason: str,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(f"Invalid configuration for {parameter!r}: {reason}", details)
        self.parameter = parameter
        self.reason = reason


__all__ = [
    "ConfigurationError",
    "DataLoadError",
    "PlanboardError",
    "RemoteStoreError",
    "SnapshotError",
    "TaskNotFoundError",
    "TaskValidationError",
]

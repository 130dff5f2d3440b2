"""Transient, dismissible user notices.

Every user-triggered outcome (saved, deleted, failed, rejected) is reported
as a :class:`Notice`. Notices expire after a configurable delay; expiry is
applied explicitly through the ``ExpireNotices`` action, so nothing here runs
on a timer.
"""
from __future__ import annotations

from datetime import datetime, timedelta
from enum import StrEnum

from pydantic import BaseModel, ConfigDict, Field


class NoticeKind(StrEnum):
    SUCCESS = "success"
    ERROR = "error"
    WARNING = "warning"


class Notice(BaseModel):
    """One message shown to the user."""

    model_config = ConfigDict(frozen=True)

    id: int = Field(..., description="Session-unique notice id")
    kind: NoticeKind
    message: str
    created_at: datetime
    expires_at: datetime | None = Field(
        default=None, description="None keeps the notice until dismissed"
    )

    def is_expired(self, now: datetime) -> bool:
        return self.expires_at is not None and now >= self.expires_at


def make_notice(
    notice_id: int,
    kind: NoticeKind,
    message: str,
    now: datetime,
    ttl_seconds: float = 0,
) -> Notice:
    expires = now + timedelta(seconds=ttl_seconds) if ttl_seconds > 0 else None
    return Notice(id=notice_id, kind=kind, message=message, created_at=now, expires_at=expires)


__all__ = ["Notice", "NoticeKind", "make_notice"]

"""Database model for contest email reminders."""

from __future__ import annotations

from datetime import datetime
from typing import Optional

from sqlmodel import Field as ORMField, SQLModel

from ..core.time import utcnow


class Reminder(SQLModel, table=True):
    """Email reminder registered for an upcoming contest."""

    id: Optional[int] = ORMField(default=None, primary_key=True)
    name: str
    email: str = ORMField(index=True)
    contest_name: str
    start_time: str
    start_time_iso: str
    starts_at: datetime = ORMField(index=True)
    duration: str
    platform_name: str
    contest_link: str
    created_at: datetime = ORMField(default_factory=utcnow)
    notified_at: Optional[datetime] = None


__all__ = ["Reminder"]

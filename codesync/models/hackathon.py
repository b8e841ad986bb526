"""Database model for synced hackathon listings."""

from __future__ import annotations

from datetime import datetime
from typing import Optional

from sqlmodel import Field as ORMField, SQLModel


class Hackathon(SQLModel, table=True):
    """Hackathon listing mirrored from the Open Hackathons feed."""

    id: int = ORMField(primary_key=True)
    url: str = ""
    title: str = ORMField(default="", index=True)
    thumbnail_url: Optional[str] = None
    featured: bool = False
    organization_name: str = ""
    is_open: str = "open"
    submission_period_dates: str = ""
    displayed_location: str = ""
    registrations_count: int = 0
    prize_text: str = ""
    time_left_to_submission: str = ""
    themes_json: str = "[]"
    start_a_submission_url: Optional[str] = None
    source: str = ""
    type: str = ORMField(default="offline", index=True)
    start_date: Optional[str] = None
    end_date: Optional[str] = None
    last_synced: Optional[datetime] = None


__all__ = ["Hackathon"]

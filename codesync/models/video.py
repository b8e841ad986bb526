"""Database model for contest solution videos."""

from __future__ import annotations

from datetime import datetime
from typing import Optional

from sqlalchemy import UniqueConstraint
from sqlmodel import Field as ORMField, SQLModel

from ..core.time import utcnow


class VideoLink(SQLModel, table=True):
    """Solution video URL for a contest."""

    __tablename__ = "video_link"
    __table_args__ = (UniqueConstraint("platform", "contest_id"),)

    id: Optional[int] = ORMField(default=None, primary_key=True)
    platform: str = ORMField(index=True)
    contest_id: str
    youtube_url: str
    title: Optional[str] = None
    updated_at: datetime = ORMField(default_factory=utcnow)


__all__ = ["VideoLink"]

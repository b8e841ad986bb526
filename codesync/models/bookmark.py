"""Database model for contest bookmarks."""

from __future__ import annotations

from datetime import datetime
from typing import Optional

from sqlmodel import Field as ORMField, SQLModel

from ..core.time import utcnow


class Bookmark(SQLModel, table=True):
    """Contest saved by an anonymous browser client."""

    id: Optional[int] = ORMField(default=None, primary_key=True)
    owner: str = ORMField(index=True)
    contest_id: str
    platform: str
    contest_json: str
    created_at: datetime = ORMField(default_factory=utcnow)


__all__ = ["Bookmark"]

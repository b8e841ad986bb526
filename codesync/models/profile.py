"""Database model for the friend-search index."""

from __future__ import annotations

from datetime import datetime
from typing import Optional

from sqlalchemy import UniqueConstraint
from sqlmodel import Field as ORMField, SQLModel

from ..core.time import utcnow


class IndexedProfile(SQLModel, table=True):
    """Cached public profile, searchable by username or real name."""

    __tablename__ = "indexed_profile"
    __table_args__ = (UniqueConstraint("username", "platform"),)

    id: Optional[int] = ORMField(default=None, primary_key=True)
    username: str = ORMField(index=True)
    real_name: str = ""
    avatar: Optional[str] = None
    platform: str = "leetcode"
    rating: int = 0
    ranking: str = "N/A"
    last_updated_at: datetime = ORMField(default_factory=utcnow)


__all__ = ["IndexedProfile"]

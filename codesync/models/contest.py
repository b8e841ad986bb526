"""Value types for contests and per-user statistics."""

from __future__ import annotations

from typing import List, Optional

from sqlmodel import Field, SQLModel


class Contest(SQLModel):
    """A scheduled contest on one of the supported platforms."""

    id: str
    name: str
    platform: str
    start_time: str
    start_time_iso: str
    duration: str
    status: str
    href: str


class ActivitySubmission(SQLModel):
    """One heatmap cell: submissions made on a single day."""

    date: str
    count: int
    level: int


class RatingPoint(SQLModel):
    date: str
    rating: int
    platform: Optional[str] = None


class TopicCount(SQLModel):
    name: str
    count: int


class UserStats(SQLModel):
    """Solved counts, rating and topic breakdown for one platform handle."""

    platform: str
    total_solved: int = 0
    contest_rating: int = 0
    contest_count: int = 0
    easy_solved: int = 0
    medium_solved: int = 0
    hard_solved: int = 0
    rating_history: List[RatingPoint] = Field(default_factory=list)
    topic_stats: List[TopicCount] = Field(default_factory=list)


class CumulativeStats(SQLModel):
    """Stats summed across all platforms."""

    total_solved: int = 0
    total_contests: int = 0
    max_rating: int = 0
    easy_solved: int = 0
    medium_solved: int = 0
    hard_solved: int = 0
    rating_history: List[RatingPoint] = Field(default_factory=list)
    topic_stats: List[TopicCount] = Field(default_factory=list)
    details: List[UserStats] = Field(default_factory=list)


__all__ = [
    "ActivitySubmission",
    "Contest",
    "CumulativeStats",
    "RatingPoint",
    "TopicCount",
    "UserStats",
]

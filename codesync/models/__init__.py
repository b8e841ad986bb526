"""Database model exports."""

from .bookmark import Bookmark
from .contest import (
    ActivitySubmission,
    Contest,
    CumulativeStats,
    RatingPoint,
    TopicCount,
    UserStats,
)
from .hackathon import Hackathon
from .profile import IndexedProfile
from .reminder import Reminder
from .video import VideoLink

__all__ = [
    "ActivitySubmission",
    "Bookmark",
    "Contest",
    "CumulativeStats",
    "Hackathon",
    "IndexedProfile",
    "RatingPoint",
    "Reminder",
    "TopicCount",
    "UserStats",
    "VideoLink",
]

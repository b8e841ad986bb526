"""Core configuration and infrastructure helpers."""

from .config import (
    ALLOWED_CORS_ORIGINS,
    CONTESTS_PER_PAGE,
    CONTEST_CACHE_TTL,
    COOKIE_DOMAIN,
    COOKIE_SAMESITE,
    COOKIE_SECURE,
    DB_RESET,
    FRONTEND_ORIGIN,
    FRONTEND_ORIGINS,
    HACKATHONS_FEED_URL,
    HTTP_TIMEOUT,
    LEETCODE_RATINGS_CSV,
    LOG_LEVEL,
    PAST_CONTEST_LIMIT,
    PLAYLIST_IDS,
    REMINDER_WINDOW_MINUTES,
    SECRET_KEY,
    YOUTUBE_API_KEY,
)
from .database import engine, get_session
from .time import utcnow

__all__ = [
    "ALLOWED_CORS_ORIGINS",
    "CONTESTS_PER_PAGE",
    "CONTEST_CACHE_TTL",
    "COOKIE_DOMAIN",
    "COOKIE_SAMESITE",
    "COOKIE_SECURE",
    "DB_RESET",
    "FRONTEND_ORIGIN",
    "FRONTEND_ORIGINS",
    "HACKATHONS_FEED_URL",
    "HTTP_TIMEOUT",
    "LEETCODE_RATINGS_CSV",
    "LOG_LEVEL",
    "PAST_CONTEST_LIMIT",
    "PLAYLIST_IDS",
    "REMINDER_WINDOW_MINUTES",
    "SECRET_KEY",
    "YOUTUBE_API_KEY",
    "engine",
    "get_session",
    "utcnow",
]

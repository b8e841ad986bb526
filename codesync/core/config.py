"""Application settings and environment helpers."""

from __future__ import annotations

import os
from pathlib import Path
from typing import Iterable, List

from dotenv import load_dotenv

load_dotenv(override=False)


def _require_env(name: str) -> str:
    """Return a required environment variable or raise an error."""

    value = os.getenv(name)
    if not value:
        raise RuntimeError(f"Missing required environment variable: {name}")
    return value


def _env_bool(name: str, default: bool = False) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    return raw.strip().lower() in {"1", "true", "yes", "on"}


def _env_int(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        return int(raw)
    except ValueError as exc:
        raise RuntimeError(f"{name} must be an integer") from exc


def _split_csv(raw: str | None) -> List[str]:
    if not raw:
        return []
    return [item.strip() for item in raw.split(",") if item.strip()]


def _unique(values: Iterable[str]) -> List[str]:
    seen = set()
    ordered: List[str] = []
    for value in values:
        if value not in seen:
            seen.add(value)
            ordered.append(value)
    return ordered


_PROJECT_ROOT = Path(__file__).resolve().parents[2]


# Application security -------------------------------------------------------
SECRET_KEY = _require_env("SECRET_KEY")

# FRONTEND_ORIGIN can contain a comma-separated list for multi-domain deploys.
_frontend_origins = _split_csv(_require_env("FRONTEND_ORIGIN"))
_additional_origins = _split_csv(os.getenv("ADDITIONAL_ALLOWED_ORIGINS"))

_local_dev_origins = [
    "http://localhost:3000",
    "http://127.0.0.1:3000",
]

ALLOWED_CORS_ORIGINS = _unique(
    [
        *_frontend_origins,
        *_additional_origins,
        *_local_dev_origins,
    ]
)

FRONTEND_ORIGINS = _frontend_origins
FRONTEND_ORIGIN = FRONTEND_ORIGINS[0] if FRONTEND_ORIGINS else ""

COOKIE_DOMAIN = os.getenv("COOKIE_DOMAIN") or None
COOKIE_SECURE = _env_bool("COOKIE_SECURE", False)
COOKIE_SAMESITE = os.getenv("COOKIE_SAMESITE", "lax")


# Storage --------------------------------------------------------------------
DATABASE_URL = os.getenv(
    "DATABASE_URL", f"sqlite:///{_PROJECT_ROOT / 'data' / 'codesync.db'}"
)
DB_RESET = _env_bool("DB_RESET", False)


# Runtime behaviour ----------------------------------------------------------
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()
HTTP_TIMEOUT = float(os.getenv("HTTP_TIMEOUT", "20"))
CONTEST_CACHE_TTL = _env_int("CONTEST_CACHE_TTL", 300)
PAST_CONTEST_LIMIT = _env_int("PAST_CONTEST_LIMIT", 50)
CONTESTS_PER_PAGE = _env_int("CONTESTS_PER_PAGE", 9)


# Email reminders ------------------------------------------------------------
SMTP_HOST = os.getenv("SMTP_HOST", "")
SMTP_PORT = _env_int("SMTP_PORT", 587)
SMTP_USER = os.getenv("SMTP_USER", "")
SMTP_PASS = os.getenv("SMTP_PASS", "")
SMTP_FROM = os.getenv("SMTP_FROM") or SMTP_USER
SMTP_STARTTLS = _env_bool("SMTP_STARTTLS", True)
REMINDER_WINDOW_MINUTES = _env_int("REMINDER_WINDOW_MINUTES", 12)


# Upstream feeds -------------------------------------------------------------
HACKATHONS_FEED_URL = os.getenv(
    "HACKATHONS_FEED_URL",
    "https://webdevharsha.github.io/open-hackathons-api/data.json",
)

YOUTUBE_API_KEY = os.getenv("YOUTUBE_API_KEY", "")
PLAYLIST_IDS = {
    "codechef": os.getenv("CODECHEF_PLAYLIST_ID", ""),
    "leetcode": os.getenv("LEETCODE_PLAYLIST_ID", ""),
    "codeforces": os.getenv("CODEFORCES_PLAYLIST_ID", ""),
}

LEETCODE_RATINGS_CSV = Path(
    os.getenv("LEETCODE_RATINGS_CSV", str(_PROJECT_ROOT / "LeetCode User Ratings.csv"))
)


__all__ = [
    "ALLOWED_CORS_ORIGINS",
    "CONTESTS_PER_PAGE",
    "CONTEST_CACHE_TTL",
    "COOKIE_DOMAIN",
    "COOKIE_SAMESITE",
    "COOKIE_SECURE",
    "DATABASE_URL",
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
    "SMTP_FROM",
    "SMTP_HOST",
    "SMTP_PASS",
    "SMTP_PORT",
    "SMTP_STARTTLS",
    "SMTP_USER",
    "YOUTUBE_API_KEY",
]

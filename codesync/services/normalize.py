"""Helpers for reshaping platform payloads into the common contest shape."""

from __future__ import annotations

from datetime import datetime, timedelta
from typing import List, Optional, Union

from ..core.time import format_display, format_hours, to_utc_iso, utcnow
from ..models import Contest


def contest_status(
    start: datetime, duration_seconds: Union[int, float], now: Optional[datetime] = None
) -> str:
    """Classify a contest relative to ``now``."""

    now = now or utcnow()
    if now < start:
        return "upcoming"
    if now < start + timedelta(seconds=float(duration_seconds)):
        return "ongoing"
    return "completed"


def build_contest(
    *,
    platform: str,
    contest_id: Union[int, str],
    name: str,
    start: datetime,
    duration_seconds: Union[int, float],
    status: str,
    href: str,
) -> Contest:
    return Contest(
        id=str(contest_id),
        name=name,
        platform=platform,
        start_time=format_display(start),
        start_time_iso=to_utc_iso(start),
        duration=format_hours(duration_seconds),
        status=status,
        href=href,
    )


def most_recent(contests: List[Contest], limit: int) -> List[Contest]:
    """Keep the ``limit`` most recently started contests."""

    return sorted(contests, key=lambda c: c.start_time_iso, reverse=True)[:limit]


__all__ = ["build_contest", "contest_status", "most_recent"]

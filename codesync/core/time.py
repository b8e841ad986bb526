"""Time parsing and formatting helpers shared by the platform adapters."""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Optional, Union


def utcnow() -> datetime:
    """Return the current UTC datetime."""

    return datetime.now(timezone.utc)


def from_unix(seconds: Union[int, float, str]) -> datetime:
    return datetime.fromtimestamp(int(float(seconds)), tz=timezone.utc)


def to_utc_iso(value: datetime) -> str:
    """Serialise an aware datetime as ``2025-01-05T14:30:00.000Z``."""

    value = value.astimezone(timezone.utc)
    return value.strftime("%Y-%m-%dT%H:%M:%S.") + f"{value.microsecond // 1000:03d}Z"


def parse_iso(raw: Optional[str]) -> Optional[datetime]:
    """Parse an ISO-8601 string into an aware UTC datetime.

    Naive values are assumed to be UTC. Returns ``None`` when the value
    cannot be parsed.
    """

    if not raw:
        return None
    text = str(raw).strip().replace("Z", "+00:00")
    try:
        parsed = datetime.fromisoformat(text)
    except ValueError:
        return None
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed.astimezone(timezone.utc)


def format_display(value: datetime) -> str:
    """Human readable UTC start time, e.g. ``Jan 5, 2025, 2:30 PM UTC``."""

    value = value.astimezone(timezone.utc)
    hour = value.hour % 12 or 12
    meridiem = "AM" if value.hour < 12 else "PM"
    return (
        f"{value.strftime('%b')} {value.day}, {value.year}, "
        f"{hour}:{value.minute:02d} {meridiem} UTC"
    )


def format_hours(seconds: Union[int, float]) -> str:
    """Render a duration in seconds as ``"2 hours"`` or ``"1.5 hours"``."""

    hours = round(float(seconds) / 3600, 2)
    if hours == int(hours):
        return f"{int(hours)} hours"
    return f"{hours:g} hours"


def day_key(seconds: Union[int, float, str]) -> str:
    """UTC calendar day (``YYYY-MM-DD``) for a unix timestamp."""

    return from_unix(seconds).strftime("%Y-%m-%d")


def time_until(target: datetime, now: Optional[datetime] = None) -> str:
    """Describe the gap until ``target`` as ``"1 days 2 hours 5 minutes"``."""

    now = now or utcnow()
    total_minutes = int((target - now).total_seconds() // 60)
    if total_minutes <= 0:
        return ""
    days, remainder = divmod(total_minutes, 60 * 24)
    hours, minutes = divmod(remainder, 60)

    parts = []
    if days > 0:
        parts.append(f"{days} days")
    if hours > 0:
        parts.append(f"{hours} hours")
    if minutes > 0:
        parts.append(f"{minutes} minutes")
    return " ".join(parts)


__all__ = [
    "day_key",
    "format_display",
    "format_hours",
    "from_unix",
    "parse_iso",
    "time_until",
    "to_utc_iso",
    "utcnow",
]

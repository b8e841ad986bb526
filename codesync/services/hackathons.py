"""Hackathon listings from the Open Hackathons feed, mirrored in the store."""

from __future__ import annotations

import calendar
import json
import logging
import re
from datetime import date, datetime
from typing import Any, Dict, Iterable, List, Optional, Tuple

import httpx
from sqlalchemy.exc import SQLAlchemyError
from sqlmodel import Session, select

from ..core.config import HACKATHONS_FEED_URL
from ..core.time import utcnow
from ..models import Hackathon
from .http import UPSTREAM_ERRORS, get_json

logger = logging.getLogger(__name__)

DB_QUERY_LIMIT = 100
RESULT_LIMIT = 50

_RANGE_SPLIT_RE = re.compile(r"\s+[-–]\s+")
_YEAR_RE = re.compile(r"\d{4}")
_TAG_RE = re.compile(r"<[^>]*>?")
_DATE_FORMATS = ("%b %d, %Y", "%B %d, %Y", "%b %d %Y", "%B %d %Y")

_COLUMNS = (
    "url",
    "title",
    "thumbnail_url",
    "featured",
    "organization_name",
    "is_open",
    "submission_period_dates",
    "displayed_location",
    "registrations_count",
    "prize_text",
    "time_left_to_submission",
    "start_a_submission_url",
    "source",
    "type",
    "start_date",
    "end_date",
)


def _parse_day(text: str) -> Optional[date]:
    cleaned = " ".join(text.replace("Sept", "Sep").split())
    for fmt in _DATE_FORMATS:
        try:
            return datetime.strptime(cleaned, fmt).date()
        except ValueError:
            continue
    return None


def parse_dates(
    text: Optional[str], current_year: Optional[int] = None
) -> Tuple[Optional[str], Optional[str]]:
    """Parse a ``submission_period_dates`` range into ISO start/end dates.

    Handles ``"Nov 03 - Dec 15, 2025"`` and ``"Dec 01 - 31, 2025"``; the year
    is taken from the string (or ``current_year``) and a missing end month is
    borrowed from the start.
    """

    if not text:
        return None, None
    parts = _RANGE_SPLIT_RE.split(text.strip(), maxsplit=1)
    if len(parts) != 2:
        return None, None

    year_match = _YEAR_RE.search(text)
    year = year_match.group(0) if year_match else str(current_year or utcnow().year)

    start_part, end_part = (part.strip() for part in parts)
    if end_part[:1].isdigit() and start_part.split():
        end_part = f"{start_part.split()[0]} {end_part}"
    if not _YEAR_RE.search(start_part):
        start_part = f"{start_part}, {year}"
    if not _YEAR_RE.search(end_part):
        end_part = f"{end_part}, {year}"

    start = _parse_day(start_part)
    end = _parse_day(end_part)
    # "Dec 15 - Jan 10, 2026" starts in the previous year.
    if start and end and start > end and not _YEAR_RE.search(parts[0]):
        start = start.replace(year=start.year - 1)

    return (
        start.isoformat() if start else None,
        end.isoformat() if end else None,
    )


def normalize_hackathon(raw: Dict[str, Any]) -> Dict[str, Any]:
    """Reshape one feed entry and derive ``type`` and the parsed date range."""

    location = str(raw.get("displayed_location") or "")
    prize = raw.get("prizeText") or raw.get("prize_text") or ""
    start_date, end_date = parse_dates(raw.get("submission_period_dates"))
    return {
        "id": int(raw["id"]),
        "url": raw.get("url") or "",
        "title": raw.get("title") or "",
        "thumbnail_url": raw.get("thumbnail_url"),
        "featured": bool(raw.get("featured")),
        "organization_name": raw.get("organization_name") or "",
        "is_open": raw.get("isOpen") or raw.get("open_state") or "open",
        "submission_period_dates": raw.get("submission_period_dates") or "",
        "displayed_location": location,
        "registrations_count": int(raw.get("registrations_count") or 0),
        "prize_text": _TAG_RE.sub("", str(prize)),
        "time_left_to_submission": raw.get("time_left_to_submission") or "",
        "themes": [
            {"id": theme.get("id"), "name": theme.get("name") or ""}
            for theme in raw.get("themes") or []
        ],
        "start_a_submission_url": raw.get("start_a_submission_url"),
        "source": raw.get("source") or "",
        "type": "online" if "online" in location.lower() else "offline",
        "start_date": start_date,
        "end_date": end_date,
    }


def hackathon_to_dict(row: Hackathon) -> Dict[str, Any]:
    data = {"id": row.id, **{name: getattr(row, name) for name in _COLUMNS}}
    data["themes"] = json.loads(row.themes_json or "[]")
    data["last_synced"] = row.last_synced.isoformat() if row.last_synced else None
    return data


async def fetch_all_hackathons(client: httpx.AsyncClient) -> List[Dict[str, Any]]:
    try:
        payload = await get_json(client, HACKATHONS_FEED_URL)
        return [normalize_hackathon(item) for item in payload.get("hackathons") or []]
    except UPSTREAM_ERRORS as exc:
        logger.error("Error fetching hackathons: %s", exc)
        return []


def dedupe_by_id(items: Iterable[Dict[str, Any]]) -> List[Dict[str, Any]]:
    """Keep one listing per id; later duplicates replace earlier ones in place."""

    unique: Dict[int, Dict[str, Any]] = {}
    for item in items:
        unique[item["id"]] = item
    return list(unique.values())


def matches_search(item: Dict[str, Any], search: str) -> bool:
    needle = search.lower()
    return (
        needle in (item.get("title") or "").lower()
        or needle in (item.get("organization_name") or "").lower()
        or any(needle in (t.get("name") or "").lower() for t in item.get("themes") or [])
    )


def filter_hackathons(
    items: Iterable[Dict[str, Any]],
    type: Optional[str] = None,
    featured: bool = False,
    search: Optional[str] = None,
) -> List[Dict[str, Any]]:
    results = list(items)
    if type in ("online", "offline"):
        results = [h for h in results if h["type"] == type]
    if featured:
        results = [h for h in results if h["featured"]]
    if search:
        results = [h for h in results if matches_search(h, search)]
    return results


def sync_hackathons_to_store(session: Session, hackathons: List[Dict[str, Any]]) -> int:
    synced_at = utcnow()
    for item in hackathons:
        row = session.get(Hackathon, item["id"]) or Hackathon(id=item["id"])
        for name in _COLUMNS:
            setattr(row, name, item.get(name))
        row.themes_json = json.dumps(item.get("themes") or [])
        row.last_synced = synced_at
        session.add(row)
    session.commit()
    return len(hackathons)


async def sync_hackathons(session: Session, client: httpx.AsyncClient) -> int:
    """Mirror the feed into the store. Returns the number of listings written."""

    hackathons = dedupe_by_id(await fetch_all_hackathons(client))
    if not hackathons:
        return 0
    count = sync_hackathons_to_store(session, hackathons)
    logger.info("Synced %d hackathons to database.", count)
    return count


def _query_store(
    session: Session, type: Optional[str], featured: bool, search: Optional[str]
) -> List[Dict[str, Any]]:
    statement = select(Hackathon)
    if type in ("online", "offline"):
        statement = statement.where(Hackathon.type == type)
    if featured:
        statement = statement.where(Hackathon.featured == True)  # noqa: E712
    rows = [hackathon_to_dict(row) for row in session.exec(statement).all()]
    if search:
        rows = [row for row in rows if matches_search(row, search)]
    return rows[:DB_QUERY_LIMIT]


async def get_hackathons(
    session: Session,
    client: httpx.AsyncClient,
    type: Optional[str] = None,
    featured: bool = False,
    search: Optional[str] = None,
) -> List[Dict[str, Any]]:
    """Filtered listings from the store, falling back to the live feed."""

    results: List[Dict[str, Any]] = []
    try:
        results = _query_store(session, type, featured, search)
    except SQLAlchemyError as exc:
        logger.error("Database fetch failed, falling back to API: %s", exc)

    if not results:
        results = filter_hackathons(await fetch_all_hackathons(client), type, featured, search)

    return dedupe_by_id(results)[:RESULT_LIMIT]


def overlaps_month(item: Dict[str, Any], year: int, month: int) -> bool:
    """True when the listing's range touches the month, or it has no dates."""

    start_raw = item.get("start_date") or item.get("end_date")
    end_raw = item.get("end_date") or item.get("start_date")
    if not start_raw:
        return True
    month_start = date(year, month, 1)
    month_end = date(year, month, calendar.monthrange(year, month)[1])
    start = date.fromisoformat(start_raw[:10])
    end = date.fromisoformat(end_raw[:10])
    return start <= month_end and end >= month_start


async def hackathons_for_month(
    session: Session, client: httpx.AsyncClient, year: int, month: int
) -> List[Dict[str, Any]]:
    rows: List[Dict[str, Any]] = []
    try:
        rows = [hackathon_to_dict(row) for row in session.exec(select(Hackathon)).all()]
    except SQLAlchemyError as exc:
        logger.error("Database fetch failed, falling back to API: %s", exc)
    if not rows:
        rows = await fetch_all_hackathons(client)
    return [item for item in dedupe_by_id(rows) if overlaps_month(item, year, month)]


__all__ = [
    "dedupe_by_id",
    "fetch_all_hackathons",
    "filter_hackathons",
    "get_hackathons",
    "hackathon_to_dict",
    "hackathons_for_month",
    "matches_search",
    "normalize_hackathon",
    "overlaps_month",
    "parse_dates",
    "sync_hackathons",
]

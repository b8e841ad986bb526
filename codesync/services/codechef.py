"""CodeChef adapter: public contest API plus profile page scraping.

CodeChef has no public user API, so activity and stats are pulled out of the
profile HTML. The page embeds two script variables we rely on:

* ``points = [{"date": "2024-01-25", "value": 3}, ...];`` (submission heatmap)
* ``all_rating = [{"rating": "1534", "end_date": "2024-01-25 22:00:00", ...}];``

Rating and solved count are read from the markup with BeautifulSoup; the
script arrays are pulled out with regular expressions. The extraction
functions are pure so they can be exercised against saved
pages; they return empty values rather than raising when the markup moves.
"""

from __future__ import annotations

import json
import logging
import re
from typing import Any, Dict, List, Optional

import httpx
from bs4 import BeautifulSoup

from ..core.config import PAST_CONTEST_LIMIT
from ..core.platforms import CODECHEF
from ..core.time import parse_iso
from ..models import Contest, RatingPoint, UserStats
from .http import UPSTREAM_ERRORS, get_json, get_text
from .normalize import build_contest

logger = logging.getLogger(__name__)

BASE_URL = "https://www.codechef.com"
CONTESTS_URL = f"{BASE_URL}/api/list/contests/all"
CONTESTS_PARAMS = {
    "sort_by": "START",
    "sorting_order": "asc",
    "offset": 0,
    "mode": "all",
}

_POINTS_RE = re.compile(r"points\s*=\s*(\[[\s\S]*?\]);")
_HISTORY_RE = re.compile(r"(?:var\s+|window\.)?all_rating\s*=\s*(\[[\s\S]*?\]);")
_NUMBER_RE = re.compile(r"\d+")
_SOLVED_LABELS = (
    re.compile(r"Fully Solved", re.IGNORECASE),
    re.compile(r"Total Problems? Solved", re.IGNORECASE),
    re.compile(r"Problems Solved", re.IGNORECASE),
)


def _to_contest(entry: Dict[str, Any], status: str) -> Optional[Contest]:
    start = parse_iso(entry.get("contest_start_date_iso"))
    if start is None:
        return None
    code = entry["contest_code"]
    minutes = float(entry.get("contest_duration") or 0)
    return build_contest(
        platform=CODECHEF,
        contest_id=code,
        name=entry["contest_name"],
        start=start,
        duration_seconds=minutes * 60,
        status=status,
        href=f"{BASE_URL}/{code}",
    )


def parse_contests(data: Dict[str, Any]) -> List[Contest]:
    buckets = (
        (data.get("future_contests") or [], "upcoming"),
        (data.get("present_contests") or [], "ongoing"),
        ((data.get("past_contests") or [])[:PAST_CONTEST_LIMIT], "completed"),
    )
    contests: List[Contest] = []
    for entries, status in buckets:
        for entry in entries:
            contest = _to_contest(entry, status)
            if contest is not None:
                contests.append(contest)
    return contests


async def fetch_contests(client: httpx.AsyncClient) -> List[Contest]:
    try:
        data = await get_json(client, CONTESTS_URL, CONTESTS_PARAMS)
        return parse_contests(data)
    except UPSTREAM_ERRORS as exc:
        logger.error("Error fetching CodeChef contests: %s", exc)
        return []


def _load_array(pattern: re.Pattern, html: str) -> Optional[List[Any]]:
    match = pattern.search(html)
    if not match:
        return None
    try:
        value = json.loads(match.group(1))
    except ValueError:
        logger.warning("Failed to parse embedded CodeChef array for %s", pattern.pattern)
        return None
    return value if isinstance(value, list) else None


def _history_date(raw: Any) -> Optional[str]:
    parsed = parse_iso(str(raw)) if raw else None
    return parsed.strftime("%Y-%m-%d") if parsed else None


def extract_rating_history(html: str) -> List[RatingPoint]:
    """Contest rating history from ``all_rating``, oldest first."""

    history: List[RatingPoint] = []
    for entry in _load_array(_HISTORY_RE, html) or []:
        date = _history_date(entry.get("end_date"))
        try:
            rating = int(entry.get("rating"))
        except (TypeError, ValueError):
            continue
        if date:
            history.append(RatingPoint(date=date, rating=rating))
    history.sort(key=lambda point: point.date)
    return history


def extract_heatmap(html: str) -> Dict[str, int]:
    """Daily submission counts, falling back to one activity per contest."""

    points = _load_array(_POINTS_RE, html)
    if points is None:
        points = [
            {"date": point.date, "value": 1} for point in extract_rating_history(html)
        ]

    result: Dict[str, int] = {}
    for item in points:
        if not isinstance(item, dict):
            continue
        date = item.get("date")
        try:
            value = int(item.get("value") or 0)
        except (TypeError, ValueError):
            continue
        if date and value:
            result[date] = result.get(date, 0) + value
    return result


def _rating_from(soup: BeautifulSoup) -> Optional[int]:
    node = soup.select_one(".rating-number")
    if node is None:
        return None
    match = _NUMBER_RE.search(node.get_text())
    return int(match.group(0)) if match else None


def _solved_from(soup: BeautifulSoup) -> int:
    for label in _SOLVED_LABELS:
        node = soup.find(string=label)
        if node is None:
            continue
        # The count sits in the label text or in the next text node.
        match = _NUMBER_RE.search(str(node))
        if match:
            return int(match.group(0))
        following = node.find_next(string=_NUMBER_RE)
        if following is not None:
            return int(_NUMBER_RE.search(str(following)).group(0))
    return 0


def extract_rating(html: str) -> Optional[int]:
    return _rating_from(BeautifulSoup(html, "html.parser"))


def extract_solved_count(html: str) -> int:
    return _solved_from(BeautifulSoup(html, "html.parser"))


def parse_profile_stats(html: str) -> UserStats:
    soup = BeautifulSoup(html, "html.parser")
    history = extract_rating_history(html)
    rating = _rating_from(soup)
    if rating is None:
        rating = history[-1].rating if history else 0
    return UserStats(
        platform=CODECHEF,
        total_solved=_solved_from(soup),
        contest_rating=rating,
        contest_count=len(history),
        rating_history=history,
    )


async def _profile_html(client: httpx.AsyncClient, handle: str) -> str:
    return await get_text(client, f"{BASE_URL}/users/{handle}")


async def fetch_activity(client: httpx.AsyncClient, handle: str) -> Dict[str, int]:
    if not handle:
        return {}
    try:
        return extract_heatmap(await _profile_html(client, handle))
    except UPSTREAM_ERRORS as exc:
        logger.error("CodeChef activity fetch failed for %s: %s", handle, exc)
        return {}


async def fetch_stats(client: httpx.AsyncClient, handle: str) -> UserStats:
    if not handle:
        return UserStats(platform=CODECHEF)
    try:
        return parse_profile_stats(await _profile_html(client, handle))
    except UPSTREAM_ERRORS as exc:
        logger.error("CodeChef stats fetch failed for %s: %s", handle, exc)
        return UserStats(platform=CODECHEF)


__all__ = [
    "extract_heatmap",
    "extract_rating",
    "extract_rating_history",
    "extract_solved_count",
    "fetch_activity",
    "fetch_contests",
    "fetch_stats",
    "parse_contests",
    "parse_profile_stats",
]

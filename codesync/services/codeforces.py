"""CodeForces REST adapter."""

from __future__ import annotations

import asyncio
import logging
from collections import Counter
from typing import Any, Dict, List

import httpx

from ..core.config import PAST_CONTEST_LIMIT
from ..core.platforms import CODEFORCES
from ..core.time import day_key, from_unix
from ..models import Contest, RatingPoint, TopicCount, UserStats
from .http import UPSTREAM_ERRORS, get_json
from .normalize import build_contest

logger = logging.getLogger(__name__)

API_BASE = "https://codeforces.com/api"
CONTEST_URL = "https://codeforces.com/contest"

_PHASE_STATUS = {
    "BEFORE": "upcoming",
    "CODING": "ongoing",
    "FINISHED": "completed",
}


def _to_contest(entry: Dict[str, Any], status: str) -> Contest:
    return build_contest(
        platform=CODEFORCES,
        contest_id=entry["id"],
        name=entry["name"],
        start=from_unix(entry["startTimeSeconds"]),
        duration_seconds=entry.get("durationSeconds") or 0,
        status=status,
        href=f"{CONTEST_URL}/{int(entry['id'])}",
    )


def parse_contests(result: List[Dict[str, Any]]) -> List[Contest]:
    """Group ``contest.list`` entries by phase; upstream lists newest first."""

    grouped: Dict[str, List[Contest]] = {status: [] for status in _PHASE_STATUS.values()}
    for entry in result:
        status = _PHASE_STATUS.get(entry.get("phase"))
        if status is None or entry.get("startTimeSeconds") is None:
            continue
        if status == "completed" and len(grouped[status]) >= PAST_CONTEST_LIMIT:
            continue
        grouped[status].append(_to_contest(entry, status))
    return grouped["upcoming"] + grouped["ongoing"] + grouped["completed"]


async def fetch_contests(client: httpx.AsyncClient) -> List[Contest]:
    try:
        data = await get_json(client, f"{API_BASE}/contest.list")
        if data.get("status") != "OK":
            logger.error("CodeForces contest.list returned %s", data.get("comment"))
            return []
        return parse_contests(data["result"])
    except UPSTREAM_ERRORS as exc:
        logger.error("Error fetching CodeForces contests: %s", exc)
        return []


def parse_activity(submissions: List[Dict[str, Any]]) -> Dict[str, int]:
    result: Dict[str, int] = {}
    for submission in submissions:
        if submission.get("verdict") != "OK":
            continue
        date = day_key(submission["creationTimeSeconds"])
        result[date] = result.get(date, 0) + 1
    return result


async def fetch_activity(client: httpx.AsyncClient, handle: str) -> Dict[str, int]:
    if not handle:
        return {}
    try:
        data = await get_json(client, f"{API_BASE}/user.status", {"handle": handle})
        if data.get("status") != "OK":
            return {}
        return parse_activity(data["result"])
    except UPSTREAM_ERRORS as exc:
        logger.error("CodeForces activity fetch failed for %s: %s", handle, exc)
        return {}


def _difficulty_bucket(index: str) -> str:
    letter = (index or "Z")[0].upper()
    if letter in ("A", "B"):
        return "easy"
    if letter in ("C", "D"):
        return "medium"
    return "hard"


def parse_stats(
    info: Dict[str, Any], rating: Dict[str, Any], status: Dict[str, Any]
) -> UserStats:
    """Combine the ``user.info``, ``user.rating`` and ``user.status`` payloads."""

    current_rating = 0
    if info.get("status") == "OK" and info.get("result"):
        current_rating = int(info["result"][0].get("rating") or 0)

    history: List[RatingPoint] = []
    if rating.get("status") == "OK":
        history = [
            RatingPoint(
                date=day_key(change["ratingUpdateTimeSeconds"]),
                rating=int(change["newRating"]),
            )
            for change in rating["result"]
        ]

    buckets: Counter = Counter()
    tags: Counter = Counter()
    solved = set()
    if status.get("status") == "OK":
        for submission in status["result"]:
            if submission.get("verdict") != "OK":
                continue
            problem = submission.get("problem") or {}
            key = f"{problem.get('contestId')}{problem.get('index')}"
            if key in solved:
                continue
            solved.add(key)
            buckets[_difficulty_bucket(problem.get("index") or "")] += 1
            tags.update(problem.get("tags") or [])

    return UserStats(
        platform=CODEFORCES,
        total_solved=len(solved),
        contest_rating=current_rating,
        contest_count=len(history),
        easy_solved=buckets["easy"],
        medium_solved=buckets["medium"],
        hard_solved=buckets["hard"],
        rating_history=history,
        topic_stats=[
            TopicCount(name=name, count=count) for name, count in tags.most_common(10)
        ],
    )


async def fetch_stats(client: httpx.AsyncClient, handle: str) -> UserStats:
    if not handle:
        return UserStats(platform=CODEFORCES)
    try:
        info, rating, status = await asyncio.gather(
            get_json(client, f"{API_BASE}/user.info", {"handles": handle}),
            get_json(client, f"{API_BASE}/user.rating", {"handle": handle}),
            get_json(
                client,
                f"{API_BASE}/user.status",
                {"handle": handle, "from": 1, "count": 2000},
            ),
        )
        return parse_stats(info, rating, status)
    except UPSTREAM_ERRORS as exc:
        logger.error("CodeForces stats fetch failed for %s: %s", handle, exc)
        return UserStats(platform=CODEFORCES)


__all__ = [
    "fetch_activity",
    "fetch_contests",
    "fetch_stats",
    "parse_activity",
    "parse_contests",
    "parse_stats",
]

"""Contest aggregation across all platforms."""

from __future__ import annotations

import asyncio
import logging
import math
from typing import Any, Awaitable, Callable, Dict, List, Optional

import httpx

from ..core.platforms import CODECHEF, CODEFORCES, LEETCODE
from ..models import Contest
from . import codechef, codeforces, leetcode
from .http import contest_cache

logger = logging.getLogger(__name__)

ADAPTERS: Dict[str, Callable[[httpx.AsyncClient], Awaitable[List[Contest]]]] = {
    CODECHEF: codechef.fetch_contests,
    CODEFORCES: codeforces.fetch_contests,
    LEETCODE: leetcode.fetch_contests,
}

_STATUS_ORDER = {"upcoming": 0, "ongoing": 1, "completed": 2}


async def fetch_platform_contests(client: httpx.AsyncClient, platform: str) -> List[Contest]:
    """Contests for a single platform, served from the short-lived cache."""

    adapter = ADAPTERS[platform]
    return await contest_cache.get_or_fetch(platform, lambda: adapter(client))


async def fetch_all_contests(client: httpx.AsyncClient) -> List[Contest]:
    """Fetch every platform concurrently; a failed adapter contributes nothing."""

    results = await asyncio.gather(
        *(fetch_platform_contests(client, platform) for platform in ADAPTERS),
        return_exceptions=True,
    )
    contests: List[Contest] = []
    for platform, result in zip(ADAPTERS, results):
        if isinstance(result, BaseException):
            logger.error("Contest adapter %s failed: %s", platform, result)
            continue
        contests.extend(result)
    return contests


def dedupe(contests: List[Contest]) -> List[Contest]:
    """Drop repeated (platform, id) pairs, keeping the first occurrence."""

    seen = set()
    unique: List[Contest] = []
    for contest in contests:
        key = (contest.platform, contest.id)
        if key in seen:
            continue
        seen.add(key)
        unique.append(contest)
    return unique


def sort_by_status(contests: List[Contest]) -> List[Contest]:
    """Upcoming then ongoing then completed, each ascending by start time."""

    return sorted(
        contests,
        key=lambda c: (_STATUS_ORDER.get(c.status, len(_STATUS_ORDER)), c.start_time_iso),
    )


def order_contests(contests: List[Contest]) -> List[Contest]:
    """Dashboard order: soonest upcoming first, then live, then most recent finished."""

    unique = dedupe(contests)
    upcoming = sorted(
        (c for c in unique if c.status == "upcoming"), key=lambda c: c.start_time_iso
    )
    ongoing = sorted(
        (c for c in unique if c.status == "ongoing"), key=lambda c: c.start_time_iso
    )
    completed = sorted(
        (c for c in unique if c.status not in ("upcoming", "ongoing")),
        key=lambda c: c.start_time_iso,
        reverse=True,
    )
    return upcoming + ongoing + completed


def filter_contests(
    contests: List[Contest],
    platform: Optional[str] = None,
    status: Optional[str] = None,
    search: Optional[str] = None,
) -> List[Contest]:
    needle = (search or "").strip().lower()
    platform = (platform or "").strip().lower()
    status = (status or "").strip().lower()
    return [
        contest
        for contest in contests
        if (not platform or contest.platform == platform)
        and (not status or contest.status == status)
        and (not needle or needle in contest.name.lower())
    ]


def paginate(contests: List[Contest], page: int, per_page: int) -> Dict[str, Any]:
    per_page = max(per_page, 1)
    total = len(contests)
    start = max((page - 1) * per_page, 0)
    return {
        "contests": contests[start : start + per_page],
        "pagination": {
            "current_page": page,
            "no_of_pages": math.ceil(total / per_page),
            "total_contests": total,
            "contests_per_page": per_page,
        },
    }


__all__ = [
    "ADAPTERS",
    "dedupe",
    "fetch_all_contests",
    "fetch_platform_contests",
    "filter_contests",
    "order_contests",
    "paginate",
    "sort_by_status",
]

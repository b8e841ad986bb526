"""Submission heatmap merged across platforms."""

from __future__ import annotations

import asyncio
from typing import Dict, List

import httpx

from ..models import ActivitySubmission
from . import codechef, codeforces, leetcode


def level_for(count: int) -> int:
    """Bucket a daily submission count into a 0-4 heatmap intensity."""

    if count <= 0:
        return 0
    if count == 1:
        return 1
    if count <= 3:
        return 2
    if count <= 6:
        return 3
    return 4


def merge_activities(*sources: Dict[str, int]) -> List[ActivitySubmission]:
    totals: Dict[str, int] = {}
    for source in sources:
        for date, count in source.items():
            totals[date] = totals.get(date, 0) + count
    return [
        ActivitySubmission(date=date, count=count, level=level_for(count))
        for date, count in sorted(totals.items())
    ]


async def get_user_activity(
    client: httpx.AsyncClient,
    leetcode_username: str = "",
    codeforces_handle: str = "",
    codechef_handle: str = "",
) -> List[ActivitySubmission]:
    lc, cf, cc = await asyncio.gather(
        leetcode.fetch_activity(client, leetcode_username),
        codeforces.fetch_activity(client, codeforces_handle),
        codechef.fetch_activity(client, codechef_handle),
    )
    return merge_activities(lc, cf, cc)


__all__ = ["get_user_activity", "level_for", "merge_activities"]

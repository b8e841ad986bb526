"""Cumulative solving statistics across platforms."""

from __future__ import annotations

import asyncio
from collections import Counter
from typing import List

import httpx

from ..core.platforms import display_name
from ..models import CumulativeStats, RatingPoint, TopicCount, UserStats
from . import codechef, codeforces, leetcode


def merge_stats(*per_platform: UserStats) -> CumulativeStats:
    history: List[RatingPoint] = [
        RatingPoint(date=point.date, rating=point.rating, platform=display_name(stats.platform))
        for stats in per_platform
        for point in stats.rating_history
    ]
    history.sort(key=lambda point: point.date)

    topics: Counter = Counter()
    for stats in per_platform:
        for topic in stats.topic_stats:
            topics[topic.name] += topic.count

    return CumulativeStats(
        total_solved=sum(s.total_solved for s in per_platform),
        total_contests=sum(s.contest_count for s in per_platform),
        max_rating=max((s.contest_rating for s in per_platform), default=0),
        easy_solved=sum(s.easy_solved for s in per_platform),
        medium_solved=sum(s.medium_solved for s in per_platform),
        hard_solved=sum(s.hard_solved for s in per_platform),
        rating_history=history,
        topic_stats=[
            TopicCount(name=name, count=count) for name, count in topics.most_common(10)
        ],
        details=list(per_platform),
    )


async def get_cumulative_stats(
    client: httpx.AsyncClient,
    leetcode_username: str = "",
    codeforces_handle: str = "",
    codechef_handle: str = "",
) -> CumulativeStats:
    lc, cf, cc = await asyncio.gather(
        leetcode.fetch_stats(client, leetcode_username),
        codeforces.fetch_stats(client, codeforces_handle),
        codechef.fetch_stats(client, codechef_handle),
    )
    return merge_stats(lc, cf, cc)


__all__ = ["get_cumulative_stats", "merge_stats"]

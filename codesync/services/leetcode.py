"""LeetCode GraphQL adapter."""

from __future__ import annotations

import json
import logging
from typing import Any, Dict, List, Optional

import httpx

from ..core.config import PAST_CONTEST_LIMIT
from ..core.platforms import LEETCODE
from ..core.time import day_key, from_unix, utcnow
from ..models import Contest, RatingPoint, TopicCount, UserStats
from .http import UPSTREAM_ERRORS, post_graphql
from .normalize import build_contest, contest_status, most_recent

logger = logging.getLogger(__name__)

GRAPHQL_URL = "https://leetcode.com/graphql"
CONTEST_URL = "https://leetcode.com/contest"
_REFERER = {"Referer": "https://leetcode.com/"}

CONTESTS_QUERY = """
query allContests {
  allContests {
    title
    titleSlug
    startTime
    duration
  }
}
"""

CALENDAR_QUERY = """
query userProfileCalendar($username: String!) {
  matchedUser(username: $username) {
    submissionCalendar
  }
}
"""

STATS_QUERY = """
query userStats($username: String!) {
  matchedUser(username: $username) {
    submitStats {
      acSubmissionNum {
        difficulty
        count
      }
    }
    tagProblemCounts {
      advanced { tagName problemsSolved }
      intermediate { tagName problemsSolved }
      fundamental { tagName problemsSolved }
    }
  }
  userContestRanking(username: $username) {
    attendedContestsCount
    rating
  }
  userContestRankingHistory(username: $username) {
    contest { startTime }
    rating
  }
}
"""

PROFILE_QUERY = """
query userPublicProfile($username: String!) {
  matchedUser(username: $username) {
    username
    profile {
      realName
      userAvatar
      ranking
    }
  }
  userContestRanking(username: $username) {
    rating
    globalRanking
  }
}
"""

SEARCH_QUERY = """
query userSearchList($searchKeyword: String!) {
  userSearchList(searchKeyword: $searchKeyword) {
    users {
      username
      realName
      userAvatar
    }
  }
}
"""


def parse_contests(entries: List[Dict[str, Any]]) -> List[Contest]:
    """Map ``allContests`` entries to contests, keeping only recent past ones."""

    now = utcnow()
    active: List[Contest] = []
    finished: List[Contest] = []
    for entry in entries:
        start = from_unix(entry["startTime"])
        duration = int(entry.get("duration") or 0)
        status = contest_status(start, duration, now)
        contest = build_contest(
            platform=LEETCODE,
            contest_id=entry["titleSlug"],
            name=entry["title"],
            start=start,
            duration_seconds=duration,
            status=status,
            href=f"{CONTEST_URL}/{entry['titleSlug']}",
        )
        (finished if status == "completed" else active).append(contest)
    return active + most_recent(finished, PAST_CONTEST_LIMIT)


async def fetch_contests(client: httpx.AsyncClient) -> List[Contest]:
    try:
        data = await post_graphql(client, GRAPHQL_URL, CONTESTS_QUERY, headers=_REFERER)
        return parse_contests(data.get("allContests") or [])
    except UPSTREAM_ERRORS as exc:
        logger.error("Error fetching LeetCode contests: %s", exc)
        return []


def parse_calendar(raw: Optional[str]) -> Dict[str, int]:
    """Fold the ``submissionCalendar`` JSON string into per-day counts."""

    if not raw:
        return {}
    result: Dict[str, int] = {}
    for timestamp, count in json.loads(raw).items():
        date = day_key(timestamp)
        result[date] = result.get(date, 0) + int(count)
    return result


async def fetch_activity(client: httpx.AsyncClient, username: str) -> Dict[str, int]:
    if not username:
        return {}
    try:
        data = await post_graphql(
            client, GRAPHQL_URL, CALENDAR_QUERY, {"username": username}
        )
        return parse_calendar((data.get("matchedUser") or {}).get("submissionCalendar"))
    except UPSTREAM_ERRORS as exc:
        logger.error("LeetCode activity fetch failed for %s: %s", username, exc)
        return {}


def parse_stats(data: Dict[str, Any]) -> UserStats:
    user = data.get("matchedUser") or {}
    submissions = (user.get("submitStats") or {}).get("acSubmissionNum") or []
    by_difficulty = {s.get("difficulty"): int(s.get("count") or 0) for s in submissions}

    ranking = data.get("userContestRanking") or {}

    history: List[RatingPoint] = []
    for entry in data.get("userContestRankingHistory") or []:
        rating = round(entry.get("rating") or 0)
        if rating <= 0:
            continue
        history.append(
            RatingPoint(date=day_key(entry["contest"]["startTime"]), rating=rating)
        )

    topics: List[TopicCount] = []
    tags = user.get("tagProblemCounts")
    if tags:
        merged = [
            *(tags.get("fundamental") or []),
            *(tags.get("intermediate") or []),
            *(tags.get("advanced") or []),
        ]
        topics = [
            TopicCount(name=t["tagName"], count=int(t.get("problemsSolved") or 0))
            for t in merged
        ]
        topics.sort(key=lambda t: t.count, reverse=True)

    return UserStats(
        platform=LEETCODE,
        total_solved=by_difficulty.get("All", 0),
        easy_solved=by_difficulty.get("Easy", 0),
        medium_solved=by_difficulty.get("Medium", 0),
        hard_solved=by_difficulty.get("Hard", 0),
        contest_rating=round(ranking.get("rating") or 0),
        contest_count=int(ranking.get("attendedContestsCount") or 0),
        rating_history=history,
        topic_stats=topics[:10],
    )


async def fetch_stats(client: httpx.AsyncClient, username: str) -> UserStats:
    if not username:
        return UserStats(platform=LEETCODE)
    try:
        data = await post_graphql(client, GRAPHQL_URL, STATS_QUERY, {"username": username})
        return parse_stats(data)
    except UPSTREAM_ERRORS as exc:
        logger.error("LeetCode stats fetch failed for %s: %s", username, exc)
        return UserStats(platform=LEETCODE)


async def fetch_user_profile(
    client: httpx.AsyncClient, username: str
) -> Optional[Dict[str, Any]]:
    """Public profile fields for the search index, or ``None`` if unknown."""

    try:
        data = await post_graphql(
            client, GRAPHQL_URL, PROFILE_QUERY, {"username": username}, headers=_REFERER
        )
    except UPSTREAM_ERRORS as exc:
        logger.error("Error fetching LeetCode profile for %s: %s", username, exc)
        return None

    user = data.get("matchedUser")
    if not user:
        return None
    profile = user.get("profile") or {}
    ranking = data.get("userContestRanking") or {}
    return {
        "username": user["username"],
        "real_name": profile.get("realName") or user["username"],
        "avatar": profile.get("userAvatar"),
        "platform": LEETCODE,
        "rating": round(ranking.get("rating") or 0),
        "ranking": str(profile.get("ranking") or "N/A"),
    }


async def search_users(client: httpx.AsyncClient, keyword: str) -> List[Dict[str, Any]]:
    """Discover users whose handle or name matches ``keyword``."""

    try:
        data = await post_graphql(
            client,
            GRAPHQL_URL,
            SEARCH_QUERY,
            {"searchKeyword": keyword},
            headers=_REFERER,
        )
        users = (data.get("userSearchList") or {}).get("users") or []
        return [
            {
                "username": u["username"],
                "real_name": u.get("realName") or u["username"],
                "avatar": u.get("userAvatar"),
                "platform": LEETCODE,
            }
            for u in users
            if u.get("username")
        ]
    except UPSTREAM_ERRORS as exc:
        logger.error("LeetCode user discovery failed for %r: %s", keyword, exc)
        return []


__all__ = [
    "fetch_activity",
    "fetch_contests",
    "fetch_stats",
    "fetch_user_profile",
    "parse_calendar",
    "parse_contests",
    "parse_stats",
    "search_users",
]

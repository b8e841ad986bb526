import asyncio

from codesync.services import leetcode

from .payloads import (
    LEETCODE_CALENDAR,
    LEETCODE_CONTESTS,
    LEETCODE_GRAPHQL,
    LEETCODE_STATS,
)


def run(upstream, fn, *args):
    async def go():
        async with upstream.client() as client:
            return await fn(client, *args)

    return asyncio.run(go())


def test_parse_contests_classifies_and_links():
    contests = leetcode.parse_contests(LEETCODE_CONTESTS["allContests"])

    by_id = {c.id: c for c in contests}
    assert by_id["weekly-contest-430"].status == "upcoming"
    assert by_id["biweekly-contest-146"].status == "ongoing"
    assert by_id["weekly-contest-429"].status == "completed"
    assert by_id["weekly-contest-430"].href == "https://leetcode.com/contest/weekly-contest-430"
    assert by_id["weekly-contest-430"].duration == "1.5 hours"
    assert all(c.platform == "leetcode" for c in contests)
    assert [c.status for c in contests] == ["upcoming", "ongoing", "completed", "completed"]


def test_parse_contests_keeps_most_recent_past(monkeypatch):
    monkeypatch.setattr(leetcode, "PAST_CONTEST_LIMIT", 1)
    contests = leetcode.parse_contests(LEETCODE_CONTESTS["allContests"])

    completed = [c.id for c in contests if c.status == "completed"]
    assert completed == ["weekly-contest-429"]


def test_fetch_contests(upstream):
    upstream.add_graphql(LEETCODE_GRAPHQL, {"allContests": LEETCODE_CONTESTS})
    contests = run(upstream, leetcode.fetch_contests)
    assert len(contests) == 4


def test_fetch_contests_returns_empty_on_upstream_error(upstream):
    upstream.add_graphql(LEETCODE_GRAPHQL, {"allContests": 503})
    assert run(upstream, leetcode.fetch_contests) == []


def test_parse_calendar_groups_by_utc_day():
    assert leetcode.parse_calendar(LEETCODE_CALENDAR["matchedUser"]["submissionCalendar"]) == {
        "2024-12-10": 3,
        "2024-12-11": 2,
    }
    assert leetcode.parse_calendar(None) == {}


def test_fetch_activity(upstream):
    upstream.add_graphql(LEETCODE_GRAPHQL, {"userProfileCalendar": LEETCODE_CALENDAR})
    assert run(upstream, leetcode.fetch_activity, "alice") == {
        "2024-12-10": 3,
        "2024-12-11": 2,
    }
    assert run(upstream, leetcode.fetch_activity, "") == {}


def test_parse_stats():
    stats = leetcode.parse_stats(LEETCODE_STATS)

    assert stats.total_solved == 310
    assert (stats.easy_solved, stats.medium_solved, stats.hard_solved) == (120, 150, 40)
    assert stats.contest_rating == 1835
    assert stats.contest_count == 12
    assert [p.rating for p in stats.rating_history] == [1500, 1835]
    assert [t.name for t in stats.topic_stats] == [
        "Array",
        "Hash Table",
        "Dynamic Programming",
    ]


def test_fetch_stats_defaults_when_user_missing(upstream):
    upstream.add_graphql(LEETCODE_GRAPHQL, {"userStats": {"matchedUser": None}})
    stats = run(upstream, leetcode.fetch_stats, "ghost")
    assert stats.total_solved == 0
    assert stats.rating_history == []


def test_fetch_user_profile(upstream):
    upstream.add_graphql(
        LEETCODE_GRAPHQL,
        {
            "userPublicProfile": {
                "matchedUser": {
                    "username": "alice",
                    "profile": {"realName": "Alice A", "userAvatar": "a.png", "ranking": 1234},
                },
                "userContestRanking": {"rating": 1999.6, "globalRanking": 88},
            }
        },
    )
    profile = run(upstream, leetcode.fetch_user_profile, "alice")
    assert profile == {
        "username": "alice",
        "real_name": "Alice A",
        "avatar": "a.png",
        "platform": "leetcode",
        "rating": 2000,
        "ranking": "1234",
    }


def test_fetch_user_profile_unknown(upstream):
    upstream.add_graphql(LEETCODE_GRAPHQL, {"userPublicProfile": {"matchedUser": None}})
    assert run(upstream, leetcode.fetch_user_profile, "nobody") is None


def test_search_users(upstream):
    upstream.add_graphql(
        LEETCODE_GRAPHQL,
        {
            "userSearchList": {
                "userSearchList": {
                    "users": [
                        {"username": "bob", "realName": "", "userAvatar": None},
                        {"username": "bobby", "realName": "Bobby B", "userAvatar": "b.png"},
                    ]
                }
            }
        },
    )
    users = run(upstream, leetcode.search_users, "bob")
    assert [u["username"] for u in users] == ["bob", "bobby"]
    assert users[0]["real_name"] == "bob"
    assert users[1]["avatar"] == "b.png"

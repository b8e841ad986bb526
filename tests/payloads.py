"""Canned upstream payloads shared across tests."""

from __future__ import annotations

import json
import time
from datetime import datetime, timedelta, timezone

NOW = int(time.time())
HOUR = 3600
DAY = 24 * HOUR

IST = timezone(timedelta(hours=5, minutes=30))

LEETCODE_GRAPHQL = "leetcode.com/graphql"
CF_CONTESTS = "codeforces.com/api/contest.list"
CF_USER_INFO = "codeforces.com/api/user.info"
CF_USER_RATING = "codeforces.com/api/user.rating"
CF_USER_STATUS = "codeforces.com/api/user.status"
CC_CONTESTS = "www.codechef.com/api/list/contests/all"
HACKATHON_FEED = "webdevharsha.github.io/open-hackathons-api/data.json"
PLAYLIST_ITEMS = "www.googleapis.com/youtube/v3/playlistItems"


def ist_iso(ts: int) -> str:
    return datetime.fromtimestamp(ts, tz=IST).isoformat()


LEETCODE_CONTESTS = {
    "allContests": [
        {
            "title": "Weekly Contest 430",
            "titleSlug": "weekly-contest-430",
            "startTime": NOW + 2 * DAY,
            "duration": 5400,
        },
        {
            "title": "Biweekly Contest 146",
            "titleSlug": "biweekly-contest-146",
            "startTime": NOW - 1800,
            "duration": 5400,
        },
        {
            "title": "Weekly Contest 429",
            "titleSlug": "weekly-contest-429",
            "startTime": NOW - 7 * DAY,
            "duration": 5400,
        },
        {
            "title": "Weekly Contest 428",
            "titleSlug": "weekly-contest-428",
            "startTime": NOW - 14 * DAY,
            "duration": 5400,
        },
    ]
}

CODEFORCES_CONTESTS = {
    "status": "OK",
    "result": [
        {
            "id": 2050,
            "name": "Codeforces Round 990 (Div. 2)",
            "phase": "BEFORE",
            "durationSeconds": 7200,
            "startTimeSeconds": NOW + DAY,
        },
        {
            "id": 2049,
            "name": "Educational Codeforces Round 173",
            "phase": "CODING",
            "durationSeconds": 7200,
            "startTimeSeconds": NOW - 600,
        },
        {
            "id": 2048,
            "name": "Codeforces Round 989 (Div. 1)",
            "phase": "FINISHED",
            "durationSeconds": 9000,
            "startTimeSeconds": NOW - 3 * DAY,
        },
        {
            "id": 2047,
            "name": "Codeforces Round 988 (Div. 3)",
            "phase": "FINISHED",
            "durationSeconds": 8100,
            "startTimeSeconds": NOW - 5 * DAY,
        },
    ],
}

CODECHEF_CONTESTS = {
    "status": "success",
    "future_contests": [
        {
            "contest_code": "START170",
            "contest_name": "Starters 170",
            "contest_start_date_iso": ist_iso(NOW + 3 * DAY),
            "contest_duration": "120",
        }
    ],
    "present_contests": [],
    "past_contests": [
        {
            "contest_code": "START169",
            "contest_name": "Starters 169",
            "contest_start_date_iso": ist_iso(NOW - 4 * DAY),
            "contest_duration": "180",
        }
    ],
}

CODECHEF_PROFILE = """
<html>
  <body>
    <div class="rating-header">
      <div class="rating-number">1623</div>
    </div>
    <section class="problems-solved">
      <h3>Fully Solved (142)</h3>
    </section>
    <script>
      var all_rating = [{"code":"START160","rating":"1540","end_date":"2024-11-06 22:00:00"},{"code":"START165","rating":"1623","end_date":"2024-12-11 22:00:00"}];
      var points = [{"date":"2024-12-10","value":3},{"date":"2024-12-11","value":1}];
    </script>
  </body>
</html>
"""

CODECHEF_PROFILE_NO_HEATMAP = """
<html>
  <body>
    <h3>Problems Solved: 57</h3>
    <script>
      window.all_rating = [{"code":"START160","rating":"1540","end_date":"2024-11-06 22:00:00"},{"code":"START165","rating":"1588","end_date":"2024-12-11 22:00:00"}];
    </script>
  </body>
</html>
"""

LEETCODE_STATS = {
    "matchedUser": {
        "submitStats": {
            "acSubmissionNum": [
                {"difficulty": "All", "count": 310},
                {"difficulty": "Easy", "count": 120},
                {"difficulty": "Medium", "count": 150},
                {"difficulty": "Hard", "count": 40},
            ]
        },
        "tagProblemCounts": {
            "advanced": [{"tagName": "Dynamic Programming", "problemsSolved": 60}],
            "intermediate": [{"tagName": "Hash Table", "problemsSolved": 80}],
            "fundamental": [{"tagName": "Array", "problemsSolved": 200}],
        },
    },
    "userContestRanking": {"attendedContestsCount": 12, "rating": 1834.56},
    "userContestRankingHistory": [
        {"contest": {"startTime": 1700000000}, "rating": 1500},
        {"contest": {"startTime": 1700600000}, "rating": 0},
        {"contest": {"startTime": 1701200000}, "rating": 1834.56},
    ],
}

LEETCODE_CALENDAR = {
    "matchedUser": {
        "submissionCalendar": json.dumps({"1733788800": 3, "1733875200": 2})
    }
}

CODEFORCES_INFO = {"status": "OK", "result": [{"handle": "tourist", "rating": 3500}]}

CODEFORCES_RATING = {
    "status": "OK",
    "result": [
        {"contestId": 1, "ratingUpdateTimeSeconds": 1700000000, "newRating": 1400},
        {"contestId": 2, "ratingUpdateTimeSeconds": 1700600000, "newRating": 1550},
    ],
}

CODEFORCES_STATUS = {
    "status": "OK",
    "result": [
        {
            "creationTimeSeconds": 1733788800,
            "verdict": "OK",
            "problem": {"contestId": 100, "index": "A", "tags": ["math", "greedy"]},
        },
        {
            "creationTimeSeconds": 1733792400,
            "verdict": "OK",
            "problem": {"contestId": 100, "index": "A", "tags": ["math", "greedy"]},
        },
        {
            "creationTimeSeconds": 1733792400,
            "verdict": "WRONG_ANSWER",
            "problem": {"contestId": 100, "index": "B", "tags": ["math"]},
        },
        {
            "creationTimeSeconds": 1733875200,
            "verdict": "OK",
            "problem": {"contestId": 101, "index": "D1", "tags": ["dp"]},
        },
        {
            "creationTimeSeconds": 1733875200,
            "verdict": "OK",
            "problem": {"contestId": 102, "index": "F", "tags": ["dp", "graphs"]},
        },
    ],
}

HACKATHONS = {
    "last_updated": "2025-11-30T00:00:00Z",
    "count": 3,
    "hackathons": [
        {
            "id": 101,
            "url": "https://example.devpost.com/",
            "title": "Climate Hack",
            "thumbnail_url": "https://img.example/climate.png",
            "featured": True,
            "organization_name": "Green Org",
            "isOpen": "open",
            "submission_period_dates": "Nov 03 - Dec 15, 2025",
            "displayed_location": "Online",
            "registrations_count": 420,
            "prizeText": "$<span data-currency-value>10,000</span>",
            "time_left_to_submission": "15 days left",
            "themes": [{"id": 1, "name": "Sustainability"}],
            "start_a_submission_url": "https://example.devpost.com/submit",
            "source": "devpost",
        },
        {
            "id": 102,
            "url": "https://city.devpost.com/",
            "title": "City Builders",
            "thumbnail_url": None,
            "featured": False,
            "organization_name": "Metro Labs",
            "isOpen": "open",
            "submission_period_dates": "Dec 01 - 31, 2025",
            "displayed_location": "Toronto, Canada",
            "registrations_count": 80,
            "prizeText": "$5,000",
            "time_left_to_submission": "about 1 month left",
            "themes": [{"id": 2, "name": "Machine Learning/AI"}],
            "start_a_submission_url": None,
            "source": "devpost",
        },
        {
            "id": 101,
            "url": "https://example.devpost.com/",
            "title": "Climate Hack",
            "thumbnail_url": "https://img.example/climate.png",
            "featured": True,
            "organization_name": "Green Org",
            "isOpen": "open",
            "submission_period_dates": "Nov 03 - Dec 15, 2025",
            "displayed_location": "Online",
            "registrations_count": 421,
            "prizeText": "$10,000",
            "time_left_to_submission": "15 days left",
            "themes": [{"id": 1, "name": "Sustainability"}],
            "start_a_submission_url": None,
            "source": "devpost",
        },
    ],
}

PLAYLIST = {
    "items": [
        {
            "snippet": {
                "title": "Weekly Contest 430 | Video Solutions",
                "resourceId": {"videoId": "abc123"},
            }
        },
        {
            "snippet": {
                "title": "Random livestream",
                "resourceId": {"videoId": "zzz999"},
            }
        },
    ]
}


def contests_upstream(upstream) -> None:
    """Register healthy contest endpoints for all three platforms."""

    upstream.add_graphql(LEETCODE_GRAPHQL, {"allContests": LEETCODE_CONTESTS})
    upstream.add(CF_CONTESTS, CODEFORCES_CONTESTS)
    upstream.add(CC_CONTESTS, CODECHEF_CONTESTS)

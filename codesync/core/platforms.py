"""Static metadata for the supported contest platforms."""

from __future__ import annotations

from typing import Dict

LEETCODE = "leetcode"
CODEFORCES = "codeforces"
CODECHEF = "codechef"

SUPPORTED_PLATFORMS = (LEETCODE, CODEFORCES, CODECHEF)

PLATFORM_CONFIG: Dict[str, Dict[str, str]] = {
    CODEFORCES: {
        "name": "CodeForces",
        "color": "#1f8dd6",
        "base_url": "https://codeforces.com",
        "api_url": "https://codeforces.com/api",
    },
    LEETCODE: {
        "name": "LeetCode",
        "color": "#ffa116",
        "base_url": "https://leetcode.com",
        "api_url": "https://leetcode.com/graphql",
    },
    CODECHEF: {
        "name": "CodeChef",
        "color": "#5b4638",
        "base_url": "https://www.codechef.com",
        "api_url": "https://www.codechef.com/api",
    },
}

CONTEST_STATUSES = ("upcoming", "ongoing", "completed")


def display_name(platform: str) -> str:
    return PLATFORM_CONFIG.get(platform, {}).get("name", platform)


__all__ = [
    "CODECHEF",
    "CODEFORCES",
    "CONTEST_STATUSES",
    "LEETCODE",
    "PLATFORM_CONFIG",
    "SUPPORTED_PLATFORMS",
    "display_name",
]

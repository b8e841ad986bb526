"""Per-user activity heatmap and cumulative stats."""

from __future__ import annotations

from typing import List

import httpx
from fastapi import APIRouter, Depends

from ...models import ActivitySubmission, CumulativeStats
from ...services.activity import get_user_activity
from ...services.http import get_http_client
from ...services.stats import get_cumulative_stats

router = APIRouter(prefix="/api", tags=["users"])


@router.get("/activity", response_model=List[ActivitySubmission])
async def activity(
    leetcode: str = "",
    codeforces: str = "",
    codechef: str = "",
    client: httpx.AsyncClient = Depends(get_http_client),
):
    """Daily submissions merged across the given handles."""

    return await get_user_activity(
        client, leetcode.strip(), codeforces.strip(), codechef.strip()
    )


@router.get("/stats", response_model=CumulativeStats)
async def stats(
    leetcode: str = "",
    codeforces: str = "",
    codechef: str = "",
    client: httpx.AsyncClient = Depends(get_http_client),
):
    """Solved counts, ratings and topics summed across the given handles."""

    return await get_cumulative_stats(
        client, leetcode.strip(), codeforces.strip(), codechef.strip()
    )


__all__ = ["router"]

"""Contest listing endpoints."""

from __future__ import annotations

from typing import Any, Dict, List, Optional

import httpx
from fastapi import APIRouter, Depends, Response

from ...core import CONTESTS_PER_PAGE
from ...core.platforms import CODECHEF, CODEFORCES, LEETCODE
from ...models import Contest
from ...services.contests import (
    fetch_all_contests,
    fetch_platform_contests,
    filter_contests,
    order_contests,
    paginate,
    sort_by_status,
)
from ...services.http import get_http_client

router = APIRouter(prefix="/api", tags=["contests"])


@router.get("/leetcode", response_model=List[Contest])
async def leetcode_contests(
    response: Response, client: httpx.AsyncClient = Depends(get_http_client)
):
    """LeetCode contests, never cached by the browser."""

    response.headers["Cache-Control"] = "no-cache, no-store, must-revalidate"
    return await fetch_platform_contests(client, LEETCODE)


@router.get("/codeforces", response_model=List[Contest])
async def codeforces_contests(
    response: Response, client: httpx.AsyncClient = Depends(get_http_client)
):
    """CodeForces contests grouped by status, each group ascending by start."""

    response.headers["Cache-Control"] = "public, s-maxage=300"
    return sort_by_status(await fetch_platform_contests(client, CODEFORCES))


@router.get("/codechef", response_model=List[Contest])
async def codechef_contests(client: httpx.AsyncClient = Depends(get_http_client)):
    return await fetch_platform_contests(client, CODECHEF)


@router.get("/contests", response_model=List[Contest])
async def all_contests(
    platform: Optional[str] = None,
    status: Optional[str] = None,
    search: Optional[str] = None,
    client: httpx.AsyncClient = Depends(get_http_client),
):
    """Every contest in dashboard order, optionally filtered."""

    contests = order_contests(await fetch_all_contests(client))
    return filter_contests(contests, platform=platform, status=status, search=search)


@router.get("/all")
async def paginated_contests(
    page: int = 1,
    limit: Optional[int] = None,
    platform: Optional[str] = None,
    search: Optional[str] = None,
    client: httpx.AsyncClient = Depends(get_http_client),
) -> Dict[str, Any]:
    """One page of the merged, de-duplicated contest list."""

    contests = order_contests(await fetch_all_contests(client))
    contests = filter_contests(contests, platform=platform, search=search)
    return paginate(contests, page, limit or CONTESTS_PER_PAGE)


__all__ = ["router"]

"""Friend search endpoints."""

from __future__ import annotations

import logging
from typing import Any, Dict

import httpx
from fastapi import APIRouter, BackgroundTasks, Depends, HTTPException
from sqlalchemy.exc import SQLAlchemyError
from sqlmodel import Session

from ...core import LEETCODE_RATINGS_CSV, get_session
from ...core.platforms import LEETCODE
from ...services import leetcode
from ...services.http import get_http_client
from ...services.search import (
    LOCAL_SEARCH_LIMIT,
    discovered_to_result,
    import_profiles_in_background,
    index_discovered_profiles,
    merge_results,
    paginate_users,
    profile_to_dict,
    search_profiles,
    upsert_profile,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["search"])


@router.get("/search/users")
async def search_users(
    background_tasks: BackgroundTasks,
    q: str = "",
    page: int = 1,
    limit: int = 12,
    session: Session = Depends(get_session),
    client: httpx.AsyncClient = Depends(get_http_client),
) -> Dict[str, Any]:
    """Search indexed profiles and LeetCode's own user search together.

    Newly discovered users are indexed in the background so the next search
    can find them locally.
    """

    query = q.strip()
    if not query:
        return {"users": []}

    discovered = await leetcode.search_users(client, query)
    if discovered:
        background_tasks.add_task(
            index_discovered_profiles, [user["username"] for user in discovered]
        )

    local = []
    try:
        local = [
            profile_to_dict(p)
            for p in search_profiles(session, query, LOCAL_SEARCH_LIMIT)
        ]
    except SQLAlchemyError as exc:
        logger.error("Local profile search failed: %s", exc)

    combined = merge_results(local, [discovered_to_result(u) for u in discovered])
    return paginate_users(combined, page, limit)


@router.post("/search/index")
async def index_user(
    body: Dict[str, Any],
    session: Session = Depends(get_session),
    client: httpx.AsyncClient = Depends(get_http_client),
) -> Dict[str, Any]:
    """Fetch a LeetCode profile and add it to the search index."""

    username = (body.get("username") or "").strip()
    if not username or body.get("platform") != LEETCODE:
        raise HTTPException(400, "Invalid username or platform")

    profile = await leetcode.fetch_user_profile(client, username)
    if not profile:
        raise HTTPException(404, "User not found on LeetCode")

    try:
        stored = upsert_profile(session, profile)
    except SQLAlchemyError as exc:
        logger.error("Index API error: %s", exc)
        raise HTTPException(500, "Failed to index user") from exc
    return {"message": "User indexed successfully", "profile": profile_to_dict(stored)}


@router.post("/internal/import-csv")
def import_csv(background_tasks: BackgroundTasks) -> Dict[str, str]:
    """Seed the search index from the LeetCode ratings CSV in the background."""

    background_tasks.add_task(import_profiles_in_background, LEETCODE_RATINGS_CSV)
    return {"message": "Import process started in background"}


__all__ = ["router"]

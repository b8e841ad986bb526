"""Contest solution video endpoints."""

from __future__ import annotations

from typing import Any, Dict

import httpx
from fastapi import APIRouter, Depends, HTTPException
from sqlmodel import Session, select

from ...core import get_session
from ...models import VideoLink
from ...services.http import get_http_client
from ...services.videos import build_link_map, save_link, sync_playlists

router = APIRouter(prefix="/api/youtube", tags=["videos"])


@router.get("")
def link_map(session: Session = Depends(get_session)) -> Dict[str, str]:
    """Contest id (in every spelling the UI uses) -> video URL."""

    return build_link_map(session.exec(select(VideoLink)).all())


@router.post("")
def create_link(body: Dict[str, Any], session: Session = Depends(get_session)):
    platform = (body.get("platform") or "").strip()
    contest_id = str(body.get("contest_id") or "").strip()
    youtube_url = (body.get("youtube_url") or "").strip()
    if not platform or not contest_id or not youtube_url:
        raise HTTPException(400, "platform, contest_id and youtube_url are required")
    save_link(session, platform, contest_id, youtube_url)
    return {"success": True}


@router.get("/fetch-playlist")
async def fetch_playlist(
    session: Session = Depends(get_session),
    client: httpx.AsyncClient = Depends(get_http_client),
):
    """Pull the configured playlists and store a link per recognised contest."""

    count = await sync_playlists(session, client)
    return {"success": True, "count": count}


__all__ = ["router"]

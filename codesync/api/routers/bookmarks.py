"""Contest bookmark endpoints."""

from __future__ import annotations

import uuid
from typing import Any, Dict

from fastapi import APIRouter, Depends, HTTPException, Request
from sqlmodel import Session

from ...core import get_session
from ...services.bookmarks import add_bookmark, list_bookmarks, remove_bookmark

router = APIRouter(prefix="/api", tags=["bookmarks"])


def _client_id(request: Request) -> str:
    """Anonymous id kept in the session cookie; bookmarks are scoped to it."""

    cid = request.session.get("cid")
    if not cid:
        cid = uuid.uuid4().hex
        request.session["cid"] = cid
    return cid


def _require_contest(body: Dict[str, Any]) -> Dict[str, Any]:
    if body.get("id") in (None, ""):
        raise HTTPException(400, "Contest id is required")
    return body


@router.get("/bookmark")
def get_bookmarks(request: Request, session: Session = Depends(get_session)):
    return list_bookmarks(session, _client_id(request))


@router.post("/bookmark")
def create_bookmark(
    body: Dict[str, Any], request: Request, session: Session = Depends(get_session)
):
    contest = _require_contest(body)
    if add_bookmark(session, _client_id(request), contest):
        return {"message": "Contest bookmarked successfully"}
    return {"message": "Contest already bookmarked"}


@router.delete("/bookmark")
def delete_bookmark(
    body: Dict[str, Any], request: Request, session: Session = Depends(get_session)
):
    contest = _require_contest(body)
    if not remove_bookmark(session, _client_id(request), contest):
        raise HTTPException(404, "Contest not found in bookmarks")
    return {"message": "Contest removed from bookmarks"}


__all__ = ["router"]

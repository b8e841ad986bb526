"""Hackathon listing endpoints."""

from __future__ import annotations

import logging
from typing import Any, Dict, Optional

import httpx
from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.exc import SQLAlchemyError
from sqlmodel import Session

from ...core import get_session, utcnow
from ...services.hackathons import get_hackathons, hackathons_for_month, sync_hackathons
from ...services.http import get_http_client

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/hackathons", tags=["hackathons"])


@router.get("")
async def list_hackathons(
    type: Optional[str] = None,
    featured: Optional[str] = None,
    q: Optional[str] = None,
    session: Session = Depends(get_session),
    client: httpx.AsyncClient = Depends(get_http_client),
) -> Dict[str, Any]:
    hackathons = await get_hackathons(
        session,
        client,
        type=type,
        featured=(featured or "").lower() == "true",
        search=(q or "").strip() or None,
    )
    return {"hackathons": hackathons}


@router.get("/month")
async def month_hackathons(
    year: Optional[int] = None,
    month: Optional[int] = None,
    session: Session = Depends(get_session),
    client: httpx.AsyncClient = Depends(get_http_client),
) -> Dict[str, Any]:
    """Listings running during the given month (defaults to the current one)."""

    today = utcnow()
    year = year or today.year
    month = month or today.month
    if not 1 <= month <= 12:
        raise HTTPException(400, "month must be between 1 and 12")
    if not 1 <= year <= 9999:
        raise HTTPException(400, "year must be between 1 and 9999")
    hackathons = await hackathons_for_month(session, client, year, month)
    return {"hackathons": hackathons, "year": year, "month": month}


@router.post("/sync")
async def sync(
    session: Session = Depends(get_session),
    client: httpx.AsyncClient = Depends(get_http_client),
) -> Dict[str, Any]:
    """Mirror the Open Hackathons feed into the store."""

    try:
        count = await sync_hackathons(session, client)
    except SQLAlchemyError as exc:
        logger.error("Sync error: %s", exc)
        raise HTTPException(500, f"Sync failed: {exc}") from exc
    return {"message": "Sync successful", "count": count}


__all__ = ["router"]

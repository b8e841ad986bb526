"""System-level API endpoints."""

from __future__ import annotations

from typing import Any, Dict

from fastapi import APIRouter
from fastapi.responses import JSONResponse

from ...core import CONTESTS_PER_PAGE
from ...core.platforms import CONTEST_STATUSES, PLATFORM_CONFIG

router = APIRouter(tags=["system"])


@router.get("/health")
def health() -> Dict[str, bool]:
    """Simple readiness probe."""

    return {"ok": True}


@router.get("/healthz")
def healthz() -> JSONResponse:
    """Kubernetes-style readiness endpoint."""

    return JSONResponse({"ok": True})


@router.get("/config")
def get_config() -> Dict[str, Any]:
    """Expose frontend configuration values."""

    return {
        "platforms": PLATFORM_CONFIG,
        "statuses": list(CONTEST_STATUSES),
        "contests_per_page": CONTESTS_PER_PAGE,
    }


__all__ = ["router"]

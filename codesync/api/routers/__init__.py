"""Aggregate API routers."""

from fastapi import APIRouter

from .bookmarks import router as bookmarks_router
from .contests import router as contests_router
from .hackathons import router as hackathons_router
from .reminders import router as reminders_router
from .search import router as search_router
from .system import router as system_router
from .users import router as users_router
from .videos import router as videos_router

ALL_ROUTERS: tuple[APIRouter, ...] = (
    system_router,
    contests_router,
    users_router,
    bookmarks_router,
    reminders_router,
    search_router,
    hackathons_router,
    videos_router,
)

__all__ = ["ALL_ROUTERS"]

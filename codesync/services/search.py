"""Friend search backed by the indexed profile store."""

from __future__ import annotations

import csv
import logging
from pathlib import Path
from typing import Any, Dict, List, Sequence

from sqlalchemy.exc import SQLAlchemyError
from sqlmodel import Session, col, or_, select

from ..core.database import engine
from ..core.platforms import LEETCODE
from ..core.time import utcnow
from ..models import IndexedProfile
from . import leetcode
from .http import build_client

logger = logging.getLogger(__name__)

DISCOVERY_SYNC_LIMIT = 15
LOCAL_SEARCH_LIMIT = 100

_PROFILE_FIELDS = ("real_name", "avatar", "rating", "ranking")


def profile_to_dict(profile: IndexedProfile) -> Dict[str, Any]:
    return {
        "username": profile.username,
        "real_name": profile.real_name or profile.username,
        "avatar": profile.avatar,
        "platform": profile.platform,
        "rating": profile.rating,
        "ranking": profile.ranking,
        "last_updated_at": (
            profile.last_updated_at.isoformat() if profile.last_updated_at else None
        ),
    }


def upsert_profile(session: Session, data: Dict[str, Any]) -> IndexedProfile:
    """Insert or refresh a profile keyed by (username, platform)."""

    username = data["username"]
    platform = data.get("platform") or LEETCODE
    profile = session.exec(
        select(IndexedProfile).where(
            IndexedProfile.username == username,
            IndexedProfile.platform == platform,
        )
    ).first()
    if profile is None:
        profile = IndexedProfile(username=username, platform=platform)

    for field in _PROFILE_FIELDS:
        if field in data and data[field] is not None:
            value = data[field]
            setattr(profile, field, str(value) if field == "ranking" else value)
    if not profile.real_name:
        profile.real_name = username
    profile.last_updated_at = utcnow()

    session.add(profile)
    session.commit()
    session.refresh(profile)
    return profile


def search_profiles(session: Session, query: str, limit: int = 20) -> List[IndexedProfile]:
    """Case-insensitive substring match on username or real name.

    ``%`` and ``_`` in the query match literally.
    """

    query = (query or "").strip()
    if not query:
        return []
    return list(
        session.exec(
            select(IndexedProfile)
            .where(
                or_(
                    col(IndexedProfile.username).icontains(query, autoescape=True),
                    col(IndexedProfile.real_name).icontains(query, autoescape=True),
                )
            )
            .limit(limit)
        ).all()
    )


def discovered_to_result(user: Dict[str, Any]) -> Dict[str, Any]:
    return {
        "username": user["username"],
        "real_name": user.get("real_name") or user["username"],
        "avatar": user.get("avatar"),
        "platform": user.get("platform") or LEETCODE,
        "rating": 0,
        "ranking": "N/A",
    }


def merge_results(
    local: Sequence[Dict[str, Any]], discovered: Sequence[Dict[str, Any]]
) -> List[Dict[str, Any]]:
    """Local matches first, then discovered users not already indexed."""

    known = {user["username"] for user in local}
    merged = list(local)
    for user in discovered:
        if user.get("username") and user["username"] not in known:
            known.add(user["username"])
            merged.append(user)
    return merged


def paginate_users(users: List[Dict[str, Any]], page: int, page_size: int) -> Dict[str, Any]:
    page_size = max(page_size, 1)
    start = max((page - 1) * page_size, 0)
    total = len(users)
    return {
        "users": users[start : start + page_size],
        "total_found": total,
        "page": page,
        "total_pages": -(-total // page_size),
    }


async def index_discovered_profiles(usernames: Sequence[str]) -> int:
    """Fetch and index full profiles for freshly discovered users.

    Runs as a background task after the search response is sent, so it owns
    its HTTP client and database session. Individual failures are skipped.
    """

    indexed = 0
    async with build_client() as client:
        with Session(engine) as session:
            for username in list(usernames)[:DISCOVERY_SYNC_LIMIT]:
                if not username:
                    continue
                profile = await leetcode.fetch_user_profile(client, username)
                if not profile:
                    continue
                try:
                    upsert_profile(session, profile)
                    indexed += 1
                except SQLAlchemyError as exc:
                    session.rollback()
                    logger.warning("Could not index profile %s: %s", username, exc)
    logger.info("Indexed %d discovered profiles", indexed)
    return indexed


def import_profiles_from_csv(session: Session, path: Path) -> int:
    """Seed the index from a LeetCode ratings export.

    Expects ``username``, ``rating`` and ``global rank`` columns.
    """

    if not path.exists():
        logger.error("Ratings CSV not found: %s", path)
        return 0

    count = 0
    with path.open(newline="", encoding="utf-8") as handle:
        for record in csv.DictReader(handle):
            username = (record.get("username") or "").strip()
            if not username:
                continue
            try:
                rating = round(float(record.get("rating") or 0))
            except ValueError:
                rating = 0
            upsert_profile(
                session,
                {
                    "username": username,
                    "real_name": username,
                    "platform": LEETCODE,
                    "rating": rating,
                    "ranking": (record.get("global rank") or "N/A").strip() or "N/A",
                },
            )
            count += 1
            if count % 500 == 0:
                logger.info("Imported %d profiles so far", count)

    logger.info("Imported %d profiles from %s", count, path)
    return count


def import_profiles_in_background(path: Path) -> None:
    with Session(engine) as session:
        import_profiles_from_csv(session, path)


__all__ = [
    "discovered_to_result",
    "import_profiles_from_csv",
    "import_profiles_in_background",
    "index_discovered_profiles",
    "merge_results",
    "paginate_users",
    "profile_to_dict",
    "search_profiles",
    "upsert_profile",
]

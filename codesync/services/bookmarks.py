"""Per-client contest bookmarks."""

from __future__ import annotations

import json
from typing import Any, Dict, List

from sqlmodel import Session, or_, select

from ..models import Bookmark


def _find(session: Session, owner: str, contest_id: str, platform: str) -> Bookmark | None:
    statement = select(Bookmark).where(
        Bookmark.owner == owner, Bookmark.contest_id == contest_id
    )
    if platform:
        # A bookmark saved without a platform matches any platform.
        statement = statement.where(
            or_(Bookmark.platform == platform, Bookmark.platform == "")
        )
    return session.exec(statement).first()


def list_bookmarks(session: Session, owner: str) -> List[Dict[str, Any]]:
    rows = session.exec(
        select(Bookmark).where(Bookmark.owner == owner).order_by(Bookmark.id)
    ).all()
    return [json.loads(row.contest_json) for row in rows]


def add_bookmark(session: Session, owner: str, contest: Dict[str, Any]) -> bool:
    """Store ``contest`` for ``owner``. Returns False if it was already saved."""

    contest_id = str(contest["id"])
    platform = str(contest.get("platform") or "")
    if _find(session, owner, contest_id, platform):
        return False
    session.add(
        Bookmark(
            owner=owner,
            contest_id=contest_id,
            platform=platform,
            contest_json=json.dumps(contest),
        )
    )
    session.commit()
    return True


def remove_bookmark(session: Session, owner: str, contest: Dict[str, Any]) -> bool:
    bookmark = _find(
        session, owner, str(contest["id"]), str(contest.get("platform") or "")
    )
    if not bookmark:
        return False
    session.delete(bookmark)
    session.commit()
    return True


__all__ = ["add_bookmark", "list_bookmarks", "remove_bookmark"]

"""Contest solution videos pulled from YouTube playlists."""

from __future__ import annotations

import logging
import re
from typing import Any, Dict, Iterable, List, Mapping, Optional

import httpx
from sqlmodel import Session, select

from ..core.config import PLAYLIST_IDS, YOUTUBE_API_KEY
from ..core.platforms import CODECHEF, CODEFORCES, LEETCODE
from ..core.time import utcnow
from ..models import VideoLink
from .http import UPSTREAM_ERRORS, get_json

logger = logging.getLogger(__name__)

PLAYLIST_ITEMS_URL = "https://www.googleapis.com/youtube/v3/playlistItems"

_STARTERS_TITLE_RE = re.compile(r"starters\s+(\d+)", re.IGNORECASE)
_LEETCODE_TITLE_RE = re.compile(r"(weekly|biweekly)\s+contest\s+(\d+)", re.IGNORECASE)
_ROUND_TITLE_RE = re.compile(r"round\s+#?(\d+)", re.IGNORECASE)
_STARTERS_ID_RE = re.compile(r"STARTERS(\d+)", re.IGNORECASE)
_NUMBER_RE = re.compile(r"(\d+)")


def extract_contest_id(title: str, platform: str) -> Optional[str]:
    """Map a video title like ``"Weekly Contest 420 | Solutions"`` to a contest id."""

    name = title.split("|")[0].strip()
    if platform == CODECHEF:
        match = _STARTERS_TITLE_RE.search(name)
        return f"STARTERS{match.group(1)}" if match else None
    if platform == LEETCODE:
        match = _LEETCODE_TITLE_RE.search(name)
        return f"{match.group(1)}-contest-{match.group(2)}".lower() if match else None
    if platform == CODEFORCES:
        match = _ROUND_TITLE_RE.search(name)
        return match.group(1) if match else None
    return None


def _leetcode_variations(contest_id: str) -> List[str]:
    keys = [
        contest_id,
        contest_id.lower(),
        contest_id.replace("-", " "),
        re.sub(r"\s+", "-", contest_id),
    ]
    number_match = _NUMBER_RE.search(contest_id)
    if not number_match:
        return keys
    number = number_match.group(1)
    if "biweekly" in contest_id:
        prefix = "biweekly"
    else:
        prefix = "weekly"
    keys.extend(
        [
            f"{prefix}-contest-{number}",
            f"{prefix}_contest_{number}",
            f"{prefix}contest{number}",
            f"{prefix}{number}",
            f"{prefix} contest {number}",
            f"{prefix}-{number}",
            f"{prefix}_{number}",
            f"{prefix} {number}",
        ]
    )
    if prefix == "weekly":
        keys.append(number)
    return keys


def _codechef_variations(contest_id: str) -> List[str]:
    keys = [contest_id]
    match = _STARTERS_ID_RE.search(contest_id)
    if match:
        number = match.group(1)
        keys.extend([f"STARTERS{number}", f"starters{number}", f"Starters {number}"])
    return keys


def build_link_map(links: Iterable[VideoLink]) -> Dict[str, str]:
    """Contest key -> video URL, including the spellings the UI may look up."""

    link_map: Dict[str, str] = {}
    for link in links:
        if not link.contest_id:
            continue
        if link.platform == LEETCODE:
            keys = _leetcode_variations(link.contest_id)
        elif link.platform == CODECHEF:
            keys = _codechef_variations(link.contest_id)
        else:
            keys = [link.contest_id]
        for key in keys:
            link_map[key] = link.youtube_url
    return link_map


def save_link(
    session: Session,
    platform: str,
    contest_id: str,
    youtube_url: str,
    title: Optional[str] = None,
    commit: bool = True,
) -> VideoLink:
    link = session.exec(
        select(VideoLink).where(
            VideoLink.platform == platform, VideoLink.contest_id == contest_id
        )
    ).first()
    if link is None:
        link = VideoLink(platform=platform, contest_id=contest_id, youtube_url=youtube_url)
    link.youtube_url = youtube_url
    if title is not None:
        link.title = title
    link.updated_at = utcnow()
    session.add(link)
    if commit:
        session.commit()
        session.refresh(link)
    return link


async def fetch_playlist_videos(
    client: httpx.AsyncClient, playlist_id: str
) -> List[Dict[str, Any]]:
    try:
        data = await get_json(
            client,
            PLAYLIST_ITEMS_URL,
            {
                "part": "snippet",
                "maxResults": 50,
                "playlistId": playlist_id,
                "key": YOUTUBE_API_KEY,
            },
        )
        return data.get("items") or []
    except UPSTREAM_ERRORS as exc:
        logger.error("Error fetching playlist %s: %s", playlist_id, exc)
        return []


async def sync_playlists(
    session: Session,
    client: httpx.AsyncClient,
    playlists: Optional[Mapping[str, str]] = None,
) -> int:
    """Upsert a video link for every recognisable contest in the playlists."""

    playlists = PLAYLIST_IDS if playlists is None else playlists
    count = 0
    for platform, playlist_id in playlists.items():
        if not playlist_id:
            continue
        for video in await fetch_playlist_videos(client, playlist_id):
            snippet = video.get("snippet") or {}
            title = snippet.get("title") or ""
            contest_id = extract_contest_id(title, platform)
            video_id = (snippet.get("resourceId") or {}).get("videoId")
            if not contest_id or not video_id:
                continue
            save_link(
                session,
                platform,
                contest_id,
                f"https://youtube.com/watch?v={video_id}",
                title=title,
                commit=False,
            )
            count += 1
    session.commit()
    return count


__all__ = [
    "build_link_map",
    "extract_contest_id",
    "fetch_playlist_videos",
    "save_link",
    "sync_playlists",
]

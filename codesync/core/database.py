"""Database configuration and session helpers."""

from __future__ import annotations

from pathlib import Path
from typing import Iterator

from sqlmodel import Session, create_engine

from .config import DATABASE_URL

_connect_args = {}
if DATABASE_URL.startswith("sqlite"):
    _connect_args = {"check_same_thread": False}
    _db_file = DATABASE_URL.split("sqlite:///", 1)[-1]
    if _db_file and _db_file != DATABASE_URL:
        Path(_db_file).parent.mkdir(parents=True, exist_ok=True)

engine = create_engine(DATABASE_URL, connect_args=_connect_args)


def get_session() -> Iterator[Session]:
    """FastAPI dependency that yields a database session."""

    with Session(engine) as session:
        yield session


__all__ = ["engine", "get_session"]

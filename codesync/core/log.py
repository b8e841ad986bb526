"""Logging setup."""

from __future__ import annotations

import logging

_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def configure_logging(level: str = "INFO") -> None:
    """Configure the root logger once for the whole process."""

    logging.basicConfig(level=getattr(logging, level, logging.INFO), format=_FORMAT)
    # httpx logs every request at INFO.
    logging.getLogger("httpx").setLevel(logging.WARNING)


__all__ = ["configure_logging"]

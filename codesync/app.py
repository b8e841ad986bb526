"""FastAPI application factory and configuration."""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from sqlmodel import SQLModel
from starlette.middleware.sessions import SessionMiddleware

from . import models  # noqa: F401 - ensure models are registered with SQLModel
from .api import register_routes
from .core import (
    ALLOWED_CORS_ORIGINS,
    COOKIE_DOMAIN,
    COOKIE_SAMESITE,
    COOKIE_SECURE,
    DB_RESET,
    LOG_LEVEL,
    SECRET_KEY,
    engine,
)
from .core.log import configure_logging

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    if DB_RESET:
        SQLModel.metadata.drop_all(engine)
    SQLModel.metadata.create_all(engine)
    logger.info("Database ready at %s", engine.url)
    yield


def create_app() -> FastAPI:
    configure_logging(LOG_LEVEL)
    app = FastAPI(title="CodeSync Pro API", version="0.3.0", lifespan=lifespan)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=ALLOWED_CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["GET", "POST", "DELETE", "OPTIONS"],
        allow_headers=["*"],
    )
    app.add_middleware(
        SessionMiddleware,
        secret_key=SECRET_KEY,
        session_cookie="sid",
        https_only=COOKIE_SECURE,
        same_site=COOKIE_SAMESITE,
        domain=COOKIE_DOMAIN,
    )

    register_routes(app)
    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run("codesync.app:app", host="127.0.0.1", port=3000, reload=True)

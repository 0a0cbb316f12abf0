"""Web entry point — FastAPI application factory and lifespan."""

from __future__ import annotations

import logging
import secrets
import time
from contextlib import asynccontextmanager
from typing import TYPE_CHECKING

import uvicorn
from fastapi import FastAPI, Request
from fastapi import status as status_codes
from fastapi.responses import JSONResponse
from starlette.middleware.sessions import SessionMiddleware

from article_review.config import load_settings
from article_review.database.client import CosmosClient
from article_review.errors import ArticleReviewError
from article_review.health import check_emulators
from article_review.logging import configure_logging
from article_review.routes import articles, status

if TYPE_CHECKING:
    from collections.abc import AsyncIterator

    from article_review.config import Settings

logger = logging.getLogger(__name__)


async def init_database(settings: Settings) -> CosmosClient:
    """Open the Cosmos DB client and ensure containers exist."""
    cosmos = CosmosClient(settings.cosmos)
    await cosmos.initialize()
    return cosmos


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    settings = app.state.settings
    if settings.app.is_development and not await check_emulators(settings):
        raise RuntimeError("Cosmos DB is unreachable — see log for details")

    app.state.cosmos = await init_database(settings)
    app.state.start_time = time.monotonic()
    logger.info("Article review service started — env=%s", settings.app.env)
    try:
        yield
    finally:
        await app.state.cosmos.close()
        logger.info("Article review service stopped")


async def _handle_service_error(request: Request, exc: ArticleReviewError) -> JSONResponse:
    if exc.status_code >= status_codes.HTTP_500_INTERNAL_SERVER_ERROR:
        logger.error("%s %s failed — %s", request.method, request.url.path, exc.message)
    return JSONResponse(status_code=exc.status_code, content={"message": exc.message})


def _session_secret(settings: Settings) -> str:
    if settings.app.secret_key:
        return settings.app.secret_key
    if not settings.app.is_development:
        raise RuntimeError("SESSION_SECRET must be set outside development")
    logger.warning("SESSION_SECRET is not set — using an ephemeral key")
    return secrets.token_urlsafe(32)


def create_app() -> FastAPI:
    """Build the FastAPI application."""
    settings = load_settings()
    configure_logging(settings.app.log_level)

    app = FastAPI(title="Article Review", lifespan=lifespan)
    app.state.settings = settings
    app.add_middleware(SessionMiddleware, secret_key=_session_secret(settings))
    app.add_exception_handler(ArticleReviewError, _handle_service_error)
    app.include_router(articles.router)
    app.include_router(status.router)
    return app


def main() -> None:
    """Entry point for the web process."""
    settings = load_settings()
    uvicorn.run(
        "article_review.app:create_app",
        factory=True,
        host=settings.app.host,
        port=settings.app.port,
    )


if __name__ == "__main__":
    main()

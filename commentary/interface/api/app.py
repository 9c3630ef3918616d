"""FastAPI application."""

import logfire
from dishka import AsyncContainer
from fastapi import FastAPI, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from commentary.config import Settings
from commentary.domain.error import NotFoundError, PersistenceError
from commentary.interface.api.routes import (
    comments,
    health,
    moderation,
    remote,
    votes,
)
from commentary.util.di.container import create_container, setup_di
from commentary.util.observability import instrument_fastapi


async def _persistence_error_handler(
    request: Request, exc: PersistenceError
) -> JSONResponse:
    logfire.error(
        "Request failed on persistence error",
        path=request.url.path,
        operation=exc.operation,
    )
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"detail": "An error occurred"},
    )


async def _not_found_handler(request: Request, exc: NotFoundError) -> JSONResponse:
    return JSONResponse(
        status_code=status.HTTP_404_NOT_FOUND, content={"detail": str(exc)}
    )


def create_app(container: AsyncContainer | None = None) -> FastAPI:
    """Create FastAPI application.

    Note: Logfire should be configured before calling this function.
    In production, start_app.py handles this.

    Args:
        container: DI container, the production container when omitted
    """
    settings = Settings()

    app_instance = FastAPI(
        title="Commentary API",
        description="Threaded comments with moderation, votes and reply notifications",
        version="0.1.0",
    )

    instrument_fastapi(app_instance)

    app_instance.add_middleware(
        CORSMiddleware,
        allow_origins=[settings.api.public_url],
        allow_credentials=False,
        allow_methods=["GET", "POST", "PATCH", "DELETE", "OPTIONS"],
        allow_headers=[
            "Content-Type",
            "Accept",
            "Origin",
            "User-Agent",
            "X-User-Id",
            "X-Moderator-Key",
        ],
        max_age=600,  # Cache preflight requests for 10 minutes
    )

    setup_di(app_instance, container or create_container())

    app_instance.add_exception_handler(PersistenceError, _persistence_error_handler)
    app_instance.add_exception_handler(NotFoundError, _not_found_handler)

    app_instance.include_router(health.router)
    app_instance.include_router(comments.router)
    app_instance.include_router(votes.router)
    app_instance.include_router(remote.router)
    app_instance.include_router(moderation.router)

    return app_instance

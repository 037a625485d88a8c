"""FastAPI application factory."""

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse

from fitness_tracker.api.ai import router as ai_router
from fitness_tracker.api.metrics import router as metrics_router
from fitness_tracker.api.progress import router as progress_router
from fitness_tracker.api.users import router as users_router
from fitness_tracker.app_logging import configure_logging
from fitness_tracker.containers import AppContainer
from fitness_tracker.domain.errors import (
    DivisionByZeroError,
    DuplicateEntryError,
    InvalidInputError,
    NotFoundError,
)

UNPROCESSABLE_STATUS = 422


def create_app(container: AppContainer) -> FastAPI:
    """Create a FastAPI app configured with dependencies."""
    configure_logging()
    logger = logging.getLogger(__name__)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        yield
        try:
            await app.state.container.close_resources()
        except Exception:
            logger.exception("Failed to close application resources")

    app = FastAPI(lifespan=lifespan)
    app.state.container = container

    app.include_router(metrics_router)
    app.include_router(users_router)
    app.include_router(progress_router)
    app.include_router(ai_router)

    @app.exception_handler(InvalidInputError)
    async def invalid_input(_request: Request, exc: InvalidInputError) -> JSONResponse:
        return JSONResponse(
            status_code=UNPROCESSABLE_STATUS,
            content={"detail": str(exc)},
        )

    @app.exception_handler(DivisionByZeroError)
    async def division_by_zero(
        _request: Request, exc: DivisionByZeroError
    ) -> JSONResponse:
        logger.warning("Degenerate progress baseline: %s", exc)
        return JSONResponse(
            status_code=UNPROCESSABLE_STATUS,
            content={"detail": str(exc)},
        )

    @app.exception_handler(NotFoundError)
    async def not_found(_request: Request, exc: NotFoundError) -> JSONResponse:
        return JSONResponse(
            status_code=status.HTTP_404_NOT_FOUND, content={"detail": str(exc)}
        )

    @app.exception_handler(DuplicateEntryError)
    async def duplicate_entry(
        _request: Request, exc: DuplicateEntryError
    ) -> JSONResponse:
        return JSONResponse(
            status_code=status.HTTP_409_CONFLICT,
            content={
                "detail": str(exc),
                "existing_entry_id": str(exc.existing_entry_id),
            },
        )

    @app.get("/health")
    async def health() -> dict[str, str]:
        """Simple health check endpoint."""
        return {"status": "ok"}

    return app

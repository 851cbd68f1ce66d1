"""FastAPI application factory."""

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse

from fitness_tracker.api.account import router as account_router
from fitness_tracker.api.activity import router as activity_router
from fitness_tracker.api.insights import router as insights_router
from fitness_tracker.api.social import router as social_router
from fitness_tracker.app_logging import configure_logging
from fitness_tracker.containers import AppContainer
from fitness_tracker.domain.errors import (
    FitnessTrackerError,
    NotFound,
    OracleUnavailable,
    Unauthorized,
    ValidationError,
)

_ERROR_STATUS: dict[type[FitnessTrackerError], int] = {
    NotFound: status.HTTP_404_NOT_FOUND,
    Unauthorized: status.HTTP_403_FORBIDDEN,
    ValidationError: status.HTTP_400_BAD_REQUEST,
    OracleUnavailable: status.HTTP_503_SERVICE_UNAVAILABLE,
}


def create_app(container: AppContainer) -> FastAPI:
    """Create a FastAPI app configured with dependencies."""
    configure_logging(container.settings.log_level)
    logger = logging.getLogger(__name__)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        yield
        await app.state.container.close_resources()

    app = FastAPI(lifespan=lifespan)
    app.state.container = container

    app.include_router(activity_router)
    app.include_router(insights_router)
    app.include_router(social_router)
    app.include_router(account_router)

    @app.exception_handler(FitnessTrackerError)
    async def handle_domain_error(
        request: Request, exc: FitnessTrackerError
    ) -> JSONResponse:
        status_code = error_status(exc)
        if status_code >= status.HTTP_500_INTERNAL_SERVER_ERROR:
            logger.exception(
                "Request failed", extra={"path": request.url.path}, exc_info=exc
            )
        return JSONResponse(status_code=status_code, content={"msg": str(exc)})

    @app.get("/health")
    async def health() -> dict[str, str]:
        """Simple health check endpoint."""
        return {"status": "ok"}

    return app


def error_status(exc: FitnessTrackerError) -> int:
    """Return the HTTP status for a domain error."""
    for error_type, status_code in _ERROR_STATUS.items():
        if isinstance(exc, error_type):
            return status_code
    return status.HTTP_500_INTERNAL_SERVER_ERROR

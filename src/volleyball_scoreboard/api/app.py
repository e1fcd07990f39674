"""FastAPI application factory."""

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from volleyball_scoreboard.api.operator import router as operator_router
from volleyball_scoreboard.api.remote import panel_router
from volleyball_scoreboard.api.remote import router as remote_router
from volleyball_scoreboard.app_logging import configure_logging
from volleyball_scoreboard.containers import AppContainer
from volleyball_scoreboard.domain.errors import (
    MatchNotLoadedError,
    MatchRuleError,
    SessionInvalidError,
)


def _error(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(
        status_code=status_code, content={"success": False, "error": message}
    )


def _validation_message(exc: RequestValidationError) -> str:
    errors = exc.errors()
    if not errors:
        return "Invalid request"
    first = errors[0]
    location = ".".join(str(part) for part in first.get("loc", ()) if part != "body")
    message = str(first.get("msg", "Invalid request"))
    return f"{location}: {message}" if location else message


def create_app(container: AppContainer) -> FastAPI:
    """Create a FastAPI app configured with dependencies."""
    configure_logging(container.settings.log_level)
    logger = logging.getLogger(__name__)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        state_container: AppContainer = app.state.container
        if state_container.settings.overlay_enabled:
            try:
                if not await state_container.overlay_transport.test_connection():
                    logger.warning("Overlay system is not reachable at startup")
            except Exception:
                logger.exception("Failed to probe the overlay system")
        yield
        await state_container.close_resources()

    app = FastAPI(lifespan=lifespan)
    app.state.container = container

    app.include_router(operator_router)
    app.include_router(remote_router)
    app.include_router(panel_router)

    @app.exception_handler(SessionInvalidError)
    async def session_invalid(
        request: Request, exc: SessionInvalidError
    ) -> JSONResponse:
        return _error(status.HTTP_403_FORBIDDEN, str(exc))

    @app.exception_handler(MatchNotLoadedError)
    async def match_not_loaded(
        request: Request, exc: MatchNotLoadedError
    ) -> JSONResponse:
        return _error(status.HTTP_404_NOT_FOUND, str(exc))

    @app.exception_handler(MatchRuleError)
    async def match_rule_violation(
        request: Request, exc: MatchRuleError
    ) -> JSONResponse:
        logger.info("Rejected match transition", extra={"error": str(exc)})
        return _error(status.HTTP_400_BAD_REQUEST, str(exc))

    @app.exception_handler(RequestValidationError)
    async def invalid_request(
        request: Request, exc: RequestValidationError
    ) -> JSONResponse:
        return _error(status.HTTP_400_BAD_REQUEST, _validation_message(exc))

    @app.get("/health")
    async def health() -> dict[str, str]:
        """Simple health check endpoint."""
        return {"status": "ok"}

    return app

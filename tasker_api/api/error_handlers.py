"""Error Handlers — the single centralized responder for every failure.

Invariants:
    - TaskerError → its http_status with {"success": false, "error": message}
    - RequestValidationError → 400 with field messages joined by ", "
    - Exception (catch-all) → 500 "Server Error", never leaks internal details

Design Decisions:
    - Three-layer handler: domain (TaskerError), validation (Pydantic), catch-all (Exception)
    - Extracted from main.py so tests can mount it on a bare app
"""

import logging

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse
from fastapi.exceptions import RequestValidationError

from tasker_api.core.errors import ErrorSeverity, TaskerError

logger = logging.getLogger(__name__)


def register_error_handlers(app: FastAPI) -> None:
    """Register all global error handlers on the FastAPI app."""
    _register_tasker_error_handler(app)
    _register_validation_error_handler(app)
    _register_generic_error_handler(app)


def _register_tasker_error_handler(app: FastAPI) -> None:

    @app.exception_handler(TaskerError)
    async def tasker_error_handler(request: Request, exc: TaskerError):
        """Handle all Tasker domain/infrastructure errors."""
        log = logger.error if exc.severity is ErrorSeverity.CRITICAL else logger.warning
        log(
            f"TaskerError: {exc.message}",
            extra={**exc.log_extra(), "path": request.url.path},
        )
        return JSONResponse(
            status_code=exc.http_status, content=exc.to_response(),
        )


def _register_validation_error_handler(app: FastAPI) -> None:

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(
        request: Request, exc: RequestValidationError,
    ):
        """Handle Pydantic validation errors."""
        logger.warning(
            f"Validation error on {request.url.path}: {exc.errors()}",
            extra={"error_code": "VALIDATION_FAILED", "path": request.url.path},
        )
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content=_build_validation_error_response(exc),
        )


def _register_generic_error_handler(app: FastAPI) -> None:

    @app.exception_handler(Exception)
    async def generic_error_handler(request: Request, exc: Exception):
        """Catch-all — never leaks internal details."""
        logger.error(
            f"Unhandled exception on {request.url.path}: {exc}",
            exc_info=True,
        )
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"success": False, "error": "Server Error"},
        )


def _build_validation_error_response(exc: RequestValidationError) -> dict:
    messages = [
        f"{'.'.join(str(loc) for loc in e['loc'] if loc != 'body')}: {e['msg']}"
        for e in exc.errors()
    ]
    return {"success": False, "error": ", ".join(messages)}

"""Error Handlers — global exception handlers for the journal API.

Invariants:
    - JournalError → its own status and flat body ({message, code}, + field for validation)
    - RequestValidationError → 400 with the FIRST failing field only: {message, field, code}
    - Exception (catch-all) → 500, never leaks internal details

Design Decisions:
    - Three-layer handler: domain (JournalError), validation (Pydantic), catch-all (Exception)
    - Fail-fast validation body: the web client shows one message next to one field
    - Field path drops the body/path/query prefix and uses wire (camelCase) names
"""

import logging

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse
from fastapi.exceptions import RequestValidationError

from devjournal.core.errors import JournalError, ErrorSeverity

logger = logging.getLogger(__name__)

_LOCATION_PREFIXES = {"body", "path", "query", "header", "cookie"}


def register_error_handlers(app: FastAPI) -> None:
    """Register all global error handlers on the FastAPI app."""
    _register_journal_error_handler(app)
    _register_validation_error_handler(app)
    _register_generic_error_handler(app)


def _register_journal_error_handler(app: FastAPI) -> None:

    @app.exception_handler(JournalError)
    async def journal_error_handler(request: Request, exc: JournalError):
        """Handle all journal domain/infrastructure errors."""
        log = logger.error if exc.severity == ErrorSeverity.CRITICAL else logger.info
        log(
            f"JournalError: {exc.message}",
            extra={"error_code": exc.code, "path": request.url.path},
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
        )
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content=build_validation_error_response(exc.errors()),
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
            content={
                "message": "An unexpected error occurred",
                "code": "INTERNAL_ERROR",
            },
        )


def build_validation_error_response(errors: list[dict]) -> dict:
    """Body for the first validation error: {message, field, code}."""
    if not errors:
        return {"message": "Invalid request data", "field": "", "code": "VALIDATION_ERROR"}
    first = errors[0]
    loc = [str(part) for part in first.get("loc", ())]
    if loc and loc[0] in _LOCATION_PREFIXES:
        loc = loc[1:]
    return {
        "message": first.get("msg", "Invalid value"),
        "field": ".".join(loc),
        "code": "VALIDATION_ERROR",
    }

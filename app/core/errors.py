"""
Error taxonomy and HTTP mapping.

Handlers raise AppError subclasses; register_exception_handlers() turns each
one into a single JSON response of the form {"error": "..."}.
Store failures are classified right after the data-access call
(see classify_store_error) so routes never inspect driver error codes.
"""

from typing import Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from sqlalchemy.exc import DBAPIError

from app.core.logging_config import get_logger

logger = get_logger(__name__)

# PostgreSQL SQLSTATE for unique_violation
UNIQUE_VIOLATION = "23505"


class AppError(Exception):
    status_code = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ValidationError(AppError):
    status_code = 400


class UnauthorizedError(AppError):
    status_code = 401


class NotFoundError(AppError):
    status_code = 404


class ConflictError(AppError):
    status_code = 409


class UnsupportedMediaError(AppError):
    status_code = 415


class UpstreamUnavailableError(AppError):
    status_code = 500


class InternalError(AppError):
    status_code = 500


def _sqlstate(exc: DBAPIError) -> Optional[str]:
    orig = getattr(exc, "orig", None)
    return getattr(orig, "pgcode", None) or getattr(orig, "sqlstate", None)


def classify_store_error(exc: DBAPIError, conflict_message: Optional[str] = None) -> AppError:
    """
    Translate a raw driver failure into the error taxonomy.

    Unique violations become ConflictError with the caller's domain message;
    everything else is an InternalError carrying the driver's message.
    """
    if _sqlstate(exc) == UNIQUE_VIOLATION:
        logger.info("Unique violation: %s", conflict_message)
        return ConflictError(conflict_message or "Record already exists")
    orig = getattr(exc, "orig", None)
    message = str(orig).strip() if orig is not None else str(exc)
    logger.error("Store failure: %s", message)
    return InternalError(message)


def _describe_validation_error(exc: RequestValidationError) -> str:
    parts = []
    for err in exc.errors():
        loc = [str(item) for item in err.get("loc", ()) if item not in ("body", "path", "query")]
        field = ".".join(loc) or "request"
        parts.append(f"{field}: {err.get('msg', 'invalid value')}")
    return "; ".join(parts) or "Invalid request"


def register_exception_handlers(app: FastAPI) -> None:
    """Attach the taxonomy-to-response mapping to the app."""

    @app.exception_handler(AppError)
    async def app_error_handler(request: Request, exc: AppError):
        return JSONResponse(status_code=exc.status_code, content={"error": exc.message})

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(request: Request, exc: RequestValidationError):
        return JSONResponse(status_code=400, content={"error": _describe_validation_error(exc)})

    @app.exception_handler(Exception)
    async def unhandled_error_handler(request: Request, exc: Exception):
        logger.exception("Unhandled error on %s %s", request.method, request.url.path)
        return JSONResponse(status_code=500, content={"error": str(exc)})

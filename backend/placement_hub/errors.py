"""
Error taxonomy for the coordinator backend and its HTTP status table.

Services raise these; the handlers registered by ``register_exception_handlers``
turn them into ``{"error": ..., "details": [...]}`` responses.
"""
import logging
from typing import Any, Dict, List, Optional, Type

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

logger = logging.getLogger(__name__)


class PlacementError(Exception):
    """Base class for every error the services raise on purpose."""

    def __init__(self, message: str, details: Optional[List[Any]] = None):
        super().__init__(message)
        self.message = message
        self.details = details


class StructuralInputError(PlacementError):
    """The uploaded file is missing, unsupported or unreadable."""


class RowValidationError(PlacementError):
    """One or more uploaded rows failed validation; nothing was persisted."""


class InvalidInputError(PlacementError):
    """A request field has an invalid value."""


class PersistenceError(PlacementError):
    """A single record could not be written; the store rolled it back."""


class PersistenceConflictError(PersistenceError):
    """A write collided with an existing unique value."""


class NotFoundError(PlacementError):
    """The requested record (or set of records) does not exist."""


class ResourceCleanupError(PlacementError):
    """An object-store destroy failed. Counted, logged, never surfaced."""


class ObjectStoreUnavailableError(PlacementError):
    """The object store is not configured or refused the request."""


# Checked in order, so subclasses must precede their bases
ERROR_STATUS: Dict[Type[PlacementError], int] = {
    StructuralInputError: 400,
    RowValidationError: 400,
    InvalidInputError: 400,
    NotFoundError: 404,
    PersistenceConflictError: 409,
    PersistenceError: 500,
    ResourceCleanupError: 500,
    ObjectStoreUnavailableError: 500,
}


def status_for(exc: PlacementError) -> int:
    for kind, status_code in ERROR_STATUS.items():
        if isinstance(exc, kind):
            return status_code
    return 500


def error_body(message: str, details: Optional[List[Any]] = None) -> dict:
    body: Dict[str, Any] = {"error": message}
    if details:
        body["details"] = details
    return body


async def placement_error_handler(request: Request, exc: PlacementError) -> JSONResponse:
    status_code = status_for(exc)
    if status_code >= 500:
        logger.error(f"{request.method} {request.url.path} failed: {exc.message}")
    return JSONResponse(status_code=status_code, content=error_body(exc.message, exc.details))


async def http_error_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    return JSONResponse(
        status_code=exc.status_code,
        content=error_body(str(exc.detail)),
        headers=getattr(exc, "headers", None),
    )


async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    details = [
        f"{'.'.join(str(part) for part in err.get('loc', ()))}: {err.get('msg', '')}"
        for err in exc.errors()
    ]
    return JSONResponse(status_code=400, content=error_body("Invalid request", details))


async def unexpected_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception(f"Unhandled error on {request.method} {request.url.path}: {exc}")
    return JSONResponse(status_code=500, content=error_body("Internal server error"))


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(PlacementError, placement_error_handler)
    app.add_exception_handler(StarletteHTTPException, http_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.add_exception_handler(Exception, unexpected_error_handler)

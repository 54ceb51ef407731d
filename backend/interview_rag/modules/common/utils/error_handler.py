"""Translate domain exceptions into HTTP responses."""

from typing import Optional

from fastapi import FastAPI, HTTPException, Request, status
from fastapi.responses import JSONResponse

from ....infrastructure.logging import get_logger
from ..constants import EXCEPTION_MAPPING
from ..exceptions import DomainError

logger = get_logger(__name__)


def map_exception(error: DomainError) -> HTTPException:
    """Map a domain exception to the HTTP exception registered for its class."""
    for exception_class, mapper in EXCEPTION_MAPPING.items():
        if isinstance(error, exception_class):
            return mapper(str(error))

    return HTTPException(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=f"An unexpected error occurred: {str(error)}"
    )


def register_exception_handlers(app: FastAPI) -> None:
    """Install an app-wide handler turning any ``DomainError`` into a JSON error."""

    @app.exception_handler(DomainError)
    async def domain_exception_handler(request: Request, exc: DomainError) -> JSONResponse:
        http_exception = map_exception(exc)
        if http_exception.status_code >= status.HTTP_500_INTERNAL_SERVER_ERROR:
            logger.error(
                f"Request failed: {exc}",
                extra={"path": request.url.path, "error_type": type(exc).__name__},
            )
        return JSONResponse(
            status_code=http_exception.status_code,
            content={"detail": http_exception.detail},
        )


def handle_exception(error: Exception) -> Optional[HTTPException]:
    """Return the HTTP exception for ``error`` or None when it is not a known type.

    For route handlers that catch broadly and re-raise as HTTP errors.
    """
    if isinstance(error, DomainError):
        return map_exception(error)
    if isinstance(error, HTTPException):
        return error
    return None


def to_http_exception(error: Exception) -> HTTPException:
    """Like ``handle_exception`` but never None: unknown errors are logged and become a 500."""
    http_exception = handle_exception(error)
    if http_exception is not None:
        return http_exception

    logger.error("Unhandled error in API endpoint", extra={"error_type": type(error).__name__, "error": str(error)})
    return HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Internal server error")

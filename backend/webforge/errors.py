"""
Domain Errors

Every handler raises one of these on the first violated precondition.
The API layer maps them onto HTTP status codes.
"""
import logging

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

logger = logging.getLogger(__name__)


class WebforgeError(Exception):
    """Base exception for domain errors."""

    status_code = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class NotFoundError(WebforgeError):
    """Referenced session, project, file, version or template does not exist."""
    status_code = 404


class AccessDeniedError(WebforgeError):
    """Acting session does not own the resource."""
    status_code = 403


class ConflictError(WebforgeError):
    """A uniqueness or consistency rule would be violated."""
    status_code = 409


class ValidationError(WebforgeError):
    """Malformed input caught before touching storage."""
    status_code = 400


async def _handle_domain_error(request: Request, exc: WebforgeError) -> JSONResponse:
    logger.info(f"{request.method} {request.url.path} -> {exc.status_code}: {exc.message}")
    return JSONResponse(status_code=exc.status_code, content={"detail": exc.message})


def register_exception_handlers(app: FastAPI) -> None:
    """Map domain errors to JSON responses."""
    app.add_exception_handler(WebforgeError, _handle_domain_error)

"""
Error types for the application and the FastAPI handlers that render them.

Account errors are turned into ``{success, message}`` envelopes by the auth
route itself; everything else that reaches the handlers below is rendered as
``{error, details?}``.
"""

from typing import Any, Optional

import structlog
from fastapi import Request, status
from fastapi.responses import JSONResponse

logger = structlog.get_logger(__name__)

# Kept here so error responses built outside the middleware stack still carry them.
CORS_HEADERS = {
    "Access-Control-Allow-Origin": "*",
    "Access-Control-Allow-Headers": "Content-Type",
    "Access-Control-Allow-Methods": "GET, POST, OPTIONS",
}


class AppError(Exception):
    """Base class for all application exceptions."""
    def __init__(
        self,
        message: str,
        status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR,
        details: Optional[Any] = None,
    ):
        self.message = message
        self.status_code = status_code
        self.details = details
        super().__init__(self.message)


class ValidationError(AppError):
    """Malformed or missing input; user-correctable."""
    def __init__(self, message: str = "Invalid request", details: Optional[Any] = None):
        super().__init__(message, status.HTTP_400_BAD_REQUEST, details)


class MissingFieldsError(ValidationError):
    def __init__(self, message: str = "All fields are required"):
        super().__init__(message)


class DuplicateUserError(ValidationError):
    def __init__(self, message: str = "User already exists"):
        super().__init__(message)


class InvalidEmailError(ValidationError):
    def __init__(self, message: str = "Invalid email format"):
        super().__init__(message)


class WeakPasswordError(ValidationError):
    def __init__(self, message: str = "Password must be at least 6 characters long"):
        super().__init__(message)


class InvalidActionError(ValidationError):
    def __init__(self, message: str = "Invalid action"):
        super().__init__(message)


class MissingGenreError(ValidationError):
    def __init__(self, message: str = "Genre parameter is required"):
        super().__init__(message)


class InvalidGenreError(ValidationError):
    def __init__(self, message: str = "Invalid genre ID"):
        super().__init__(message)


class AuthError(AppError):
    """Credential mismatch."""
    def __init__(self, message: str = "Unauthorized"):
        super().__init__(message, status.HTTP_401_UNAUTHORIZED)


class InvalidCredentialsError(AuthError):
    """Raised for both an unknown email and a wrong password."""
    def __init__(self, message: str = "Invalid email or password"):
        super().__init__(message)


class ConfigurationError(AppError):
    """A required server-side setting is missing."""
    def __init__(self, message: str):
        super().__init__(message, status.HTTP_500_INTERNAL_SERVER_ERROR)


class UpstreamError(AppError):
    """The catalog provider failed or could not be reached."""
    def __init__(self, details: str, message: str = "Failed to fetch movies"):
        super().__init__(message, status.HTTP_500_INTERNAL_SERVER_ERROR, details)


class TransportError(Exception):
    """The client could not talk to the MovieHub API. Never rendered by the server."""
    def __init__(self, message: str = "Could not reach the server"):
        self.message = message
        super().__init__(message)


async def app_error_handler(request: Request, exc: AppError) -> JSONResponse:
    """Render an ``AppError`` raised by a route."""
    content: dict = {"error": exc.message}
    if exc.details is not None:
        content["details"] = exc.details

    log = logger.warning if exc.status_code < 500 else logger.error
    log(
        "Request rejected",
        code=exc.__class__.__name__,
        status_code=exc.status_code,
        path=request.url.path,
        details=exc.details,
    )
    return JSONResponse(status_code=exc.status_code, content=content)


async def global_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Handle all uncaught exceptions globally."""
    if isinstance(exc, AppError):
        return await app_error_handler(request, exc)

    logger.exception("Unexpected error occurred", path=request.url.path)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"error": "An unexpected error occurred. Please try again later."},
        headers=CORS_HEADERS,
    )

"""
Model-layer errors and their translation into client-facing responses.
"""
import logging
from typing import Any

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

logger = logging.getLogger(__name__)


class AppError(Exception):
    """Base application error."""
    def __init__(self, message: str, status_code: int = 500, details: dict | None = None):
        self.message = message
        self.status_code = status_code
        self.details = details or {}
        super().__init__(self.message)


class ValidationError(AppError):
    """
    A candidate record was rejected.

    `errors` holds one entry per failing field, each a dict with `field`,
    `reason` (missing / invalid_type / coercion_failed / invalid_value) and a
    human readable `message`. Every field is checked before this is raised.
    """
    def __init__(self, errors: list[dict], message: str | None = None):
        self.errors = list(errors)
        super().__init__(
            message or get_error_message("validation_error"),
            status_code=400,
            details={"errors": self.errors},
        )

    @property
    def fields(self) -> list[str]:
        return [e["field"] for e in self.errors]


class NotFoundError(AppError):
    """Resource not found error."""
    def __init__(self, message: str = "Resource not found", details: dict | None = None):
        super().__init__(message, status_code=404, details=details)


class ReferentialIntegrityError(AppError):
    """A foreign key does not name an existing row."""
    def __init__(self, field: str, value: Any = None, message: str | None = None):
        self.field = field
        self.value = value
        super().__init__(
            message or f"{field}={value!r} does not reference an existing record",
            status_code=409,
            details={"field": field, "value": value},
        )


class UniquenessError(AppError):
    """A value that must be unique collided with an existing row."""
    def __init__(self, field: str, value: Any = None, message: str | None = None):
        self.field = field
        self.value = value
        super().__init__(
            message or get_error_message(f"{field}_exists", f"{field} already exists"),
            status_code=409,
            details={"field": field, "value": value},
        )


class DatabaseError(AppError):
    """Database error."""
    def __init__(self, message: str = "Database operation failed", details: dict | None = None):
        super().__init__(message, status_code=500, details=details)


# User-friendly error messages
ERROR_MESSAGES = {
    # Users
    "username_exists": "That username is already taken. Please choose another.",
    "user_not_found": "User not found.",

    # Jobs
    "job_not_found": "Job posting not found or has been removed.",
    "employer_not_found": "The employer for this job no longer exists.",
    "invalid_job_status": "Invalid job status.",

    # Applications
    "application_not_found": "Application not found. It may have been withdrawn.",
    "invalid_application_status": "Invalid application status.",

    # General
    "not_found": "The requested resource was not found.",
    "server_error": "Something went wrong on our end. Please try again later.",
    "database_error": "Database connection issue. Please try again later.",
    "validation_error": "Please check your input and try again.",
}


def get_error_message(error_key: str, default: str | None = None) -> str:
    """Get a user-friendly error message."""
    return ERROR_MESSAGES.get(error_key, default or ERROR_MESSAGES["server_error"])


def create_error_response(
    status_code: int,
    message: str,
    details: dict | None = None
) -> JSONResponse:
    """Create a standardized error response."""
    content = {
        "success": False,
        "error": message,
    }

    if details:
        content["details"] = details

    return JSONResponse(
        status_code=status_code,
        content=content
    )


def register_error_handlers(app: FastAPI) -> None:
    """Install handlers that turn model-layer errors into JSON responses."""

    @app.exception_handler(AppError)
    async def app_error_handler(request: Request, exc: AppError):
        if exc.status_code >= 500:
            logger.error("%s on %s: %s", type(exc).__name__, request.url.path, exc.message)
        else:
            logger.info("%s on %s: %s", type(exc).__name__, request.url.path, exc.message)
        return create_error_response(exc.status_code, exc.message, exc.details)

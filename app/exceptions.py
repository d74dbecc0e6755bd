# =============================================================================
# app/exceptions.py - Custom Exception Handlers
# =============================================================================
# Centralized exception handling for the API.
#
# Clients only ever see {"error": "<short message>"}. Codes, suggestions and
# details stay in the logs.
# =============================================================================

import logging
from typing import Any

from fastapi import Request
from fastapi.responses import JSONResponse

logger = logging.getLogger(__name__)


class SiteException(Exception):
    """
    Base exception for the site API.

    All custom exceptions inherit from this class.
    """

    def __init__(
        self,
        message: str,
        code: str = "SITE_ERROR",
        status_code: int = 500,
        suggestion: str | None = None,
        details: dict[str, Any] | None = None,
    ):
        super().__init__(message)
        self.message = message
        self.code = code
        self.status_code = status_code
        self.suggestion = suggestion
        self.details = details or {}

    def to_dict(self) -> dict[str, Any]:
        """Convert exception to API response dict."""
        return {"error": self.message}


# =============================================================================
# Content Exceptions
# =============================================================================

class ContentNotFoundError(SiteException):
    """Raised when no row matches a slug or id."""

    def __init__(self, label: str, key: str, value: str):
        super().__init__(
            message=f"{label.capitalize()} not found",
            code="CONTENT_NOT_FOUND",
            status_code=404,
            suggestion=f"Check that the {key} is correct",
            details={key: value}
        )


class InvalidContentError(SiteException):
    """Raised when a request body does not describe a valid entity."""

    def __init__(self, label: str, error: str):
        super().__init__(
            message=f"Invalid {label} data",
            code="INVALID_CONTENT",
            status_code=400,
            suggestion="Check required fields and the slug format (lowercase letters, digits, hyphens)",
            details={"error": error}
        )


class MissingFieldError(SiteException):
    """Raised when a required request field (id, path) is absent."""

    def __init__(self, message: str, field: str):
        super().__init__(
            message=message,
            code="MISSING_FIELD",
            status_code=400,
            details={"field": field}
        )


class ContentOperationError(SiteException):
    """
    Raised when a database operation fails behind a route.

    The message is the generic "Failed to ..." text; the cause is logged.
    """

    def __init__(self, message: str, cause: Exception | None = None):
        super().__init__(
            message=message,
            code="CONTENT_OPERATION_FAILED",
            status_code=500,
            suggestion="Try again later or check the database connection",
            details={"cause": str(cause)} if cause else None
        )


# =============================================================================
# Exception Handlers
# =============================================================================

async def site_exception_handler(
    request: Request,
    exc: SiteException
) -> JSONResponse:
    """Convert SiteException to JSON response."""
    if exc.status_code >= 500:
        logger.error(f"{exc.code} on {request.method} {request.url.path}: {exc.details}")
    return JSONResponse(
        status_code=exc.status_code,
        content=exc.to_dict()
    )


async def validation_exception_handler(
    request: Request,
    exc: Exception
) -> JSONResponse:
    """
    Handle request validation errors (malformed JSON, wrong query types).
    """
    logger.warning(f"Invalid request to {request.url.path}: {exc}")
    return JSONResponse(
        status_code=400,
        content={"error": "Invalid request body"}
    )

# =============================================================================
# app/exceptions.py - Custom Exceptions and Handlers
# =============================================================================
# Centralized exception handling for the API.
# Every error leaves the API in the same envelope:
#   {"status": "fail" | "error", "message": "...", "code": "..."}
# "fail" is used for client errors (4xx), "error" for server errors (5xx).
# Route handlers never catch; they raise and the handlers below translate.
# =============================================================================

import logging
from typing import Any

from fastapi import Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from pydantic import ValidationError
from pymongo.errors import DuplicateKeyError
from starlette.exceptions import HTTPException as StarletteHTTPException

from app.config import settings
from lib.utils import ApplicationError

logger = logging.getLogger(__name__)


def error_envelope(status_code: int, message: str, code: str | None = None) -> dict[str, Any]:
    """Build the error response body for a status code."""
    body = {
        "status": "fail" if 400 <= status_code < 500 else "error",
        "message": message,
    }
    if code:
        body["code"] = code
    return body


class RestaurantApiException(Exception):
    """
    Base exception for the Restaurant Directory API.

    All custom exceptions inherit from this class.
    """

    def __init__(
        self,
        message: str,
        code: str = "API_ERROR",
        status_code: int = 500,
    ):
        super().__init__(message)
        self.message = message
        self.code = code
        self.status_code = status_code

    def to_dict(self) -> dict[str, Any]:
        """Convert exception to API response dict."""
        return error_envelope(self.status_code, self.message, self.code)


# =============================================================================
# Resource Exceptions
# =============================================================================

class NotFoundError(RestaurantApiException):
    """Raised when an identifier doesn't resolve to a document."""

    def __init__(self, resource: str, resource_id: str):
        super().__init__(
            message=f"A {resource} with the id of '{resource_id}' is not found.",
            code="NOT_FOUND",
            status_code=404,
        )
        self.resource = resource
        self.resource_id = resource_id


class BadRequestError(RestaurantApiException):
    """Raised for malformed request parameters (geo params, query fields)."""

    def __init__(self, message: str):
        super().__init__(message=message, code="BAD_REQUEST", status_code=400)


# =============================================================================
# Auth Exceptions
# =============================================================================

class UnauthorizedError(RestaurantApiException):
    """Raised when the bearer token is missing, invalid or expired."""

    def __init__(self, message: str = "You are not logged in. Please log in to get access."):
        super().__init__(message=message, code="UNAUTHORIZED", status_code=401)


class ForbiddenError(RestaurantApiException):
    """Raised when the authenticated role may not perform the action."""

    def __init__(self, role: str):
        super().__init__(
            message=f"The role '{role}' does not have permission to perform this action.",
            code="FORBIDDEN",
            status_code=403,
        )


# =============================================================================
# Exception Handlers
# =============================================================================

async def api_exception_handler(request: Request, exc: RestaurantApiException) -> JSONResponse:
    return JSONResponse(status_code=exc.status_code, content=exc.to_dict())


async def application_error_handler(request: Request, exc: ApplicationError) -> JSONResponse:
    """Errors raised by lib/ helpers (bad ids, unparseable query strings)."""
    return JSONResponse(
        status_code=400,
        content=error_envelope(400, exc.message, exc.code),
    )


def _format_validation_errors(errors: list[dict[str, Any]]) -> str:
    parts = []
    for error in errors:
        location = ".".join(str(part) for part in error.get("loc", ()) if part != "body")
        parts.append(f"{location}: {error.get('msg')}" if location else str(error.get("msg")))
    return "Invalid input data. " + "; ".join(parts)


async def validation_exception_handler(
    request: Request,
    exc: RequestValidationError | ValidationError,
) -> JSONResponse:
    """
    Handle request and model validation errors.

    Both FastAPI's RequestValidationError and pydantic's ValidationError
    are reported as 400 with the field errors joined into the message.
    """
    return JSONResponse(
        status_code=400,
        content=error_envelope(400, _format_validation_errors(exc.errors()), "VALIDATION_ERROR"),
    )


async def duplicate_key_handler(request: Request, exc: DuplicateKeyError) -> JSONResponse:
    key_value = (exc.details or {}).get("keyValue") or {}
    fields = ", ".join(f"{field}={value!r}" for field, value in key_value.items())
    message = f"Duplicate field value: {fields}. Please use another value." if fields else \
        "Duplicate field value. Please use another value."
    return JSONResponse(status_code=400, content=error_envelope(400, message, "DUPLICATE_KEY"))


async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    return JSONResponse(
        status_code=exc.status_code,
        content=error_envelope(exc.status_code, str(exc.detail)),
        headers=getattr(exc, "headers", None),
    )


async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception(f"Unexpected error on {request.method} {request.url.path}: {exc}")
    message = str(exc) if settings.DEBUG else "Something went very wrong!"
    return JSONResponse(status_code=500, content=error_envelope(500, message, "INTERNAL_ERROR"))

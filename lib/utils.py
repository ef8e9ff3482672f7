# =============================================================================
# lib/utils.py - Shared Utilities
# =============================================================================
# Common utilities used across the application.
# =============================================================================

from typing import Any

from bson import ObjectId
from bson.errors import InvalidId
from beanie import PydanticObjectId


# =============================================================================
# Base Error Class
# =============================================================================

class ApplicationError(Exception):
    """
    Base error class for lib/ errors.

    The API reports these as 400 responses, so the message should tell
    the caller what to change.

    Attributes:
        code: Error code for categorization
        message: Human-readable error message
        details: Additional context for debugging
    """

    def __init__(
        self,
        message: str,
        code: str = "APPLICATION_ERROR",
        details: dict[str, Any] | None = None,
    ):
        super().__init__(message)
        self.code = code
        self.message = message
        self.details = details or {}

    def __str__(self) -> str:
        return f"[{self.code}] {self.message}"

    def to_dict(self) -> dict[str, Any]:
        """Convert error to dictionary for API responses."""
        return {
            "code": self.code,
            "message": self.message,
            "details": self.details,
        }


class InvalidObjectIdError(ApplicationError):
    """Raised when a path identifier is not a 24-character hex ObjectId."""

    def __init__(self, value: str):
        super().__init__(
            message=f"Invalid id: '{value}'.",
            code="INVALID_ID",
            details={"value": value},
        )


# =============================================================================
# ObjectId Utilities
# =============================================================================

def parse_object_id(value: str | ObjectId) -> PydanticObjectId:
    """
    Parse a document identifier.

    Args:
        value: ObjectId or its 24-character hex string

    Returns:
        PydanticObjectId usable in Beanie queries

    Raises:
        InvalidObjectIdError: If the value is not a valid ObjectId
    """
    try:
        return PydanticObjectId(value)
    except (InvalidId, TypeError):
        raise InvalidObjectIdError(str(value))


def normalize_document(document: dict[str, Any]) -> dict[str, Any]:
    """
    Turn a raw Mongo document into its API shape.

    Renames "_id" to "id" and stringifies ObjectIds at the top level.

    Example:
        normalize_document({"_id": ObjectId("..."), "name": "Fratelli"})
        # {"id": "...", "name": "Fratelli"}
    """
    result = {}
    for key, value in document.items():
        if key == "_id":
            key = "id"
        result[key] = str(value) if isinstance(value, ObjectId) else value
    return result

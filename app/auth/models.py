# =============================================================================
# app/auth/models.py - Authentication Models
# =============================================================================
# Pydantic models for authentication data.
# =============================================================================

from enum import Enum
from typing import Optional

from pydantic import BaseModel


class UserRole(str, Enum):
    """
    Roles carried in the access token's "role" claim.

    - user: may write reviews
    - staff: may create and edit restaurants
    - owner: staff rights plus deleting restaurants
    - admin: everything
    """
    USER = "user"
    STAFF = "staff"
    OWNER = "owner"
    ADMIN = "admin"


class AuthUser(BaseModel):
    """
    Authenticated user extracted from the access token.

    This is the identity available from the token itself,
    without querying the database.
    """
    id: str
    email: Optional[str] = None
    role: UserRole = UserRole.USER

    model_config = {"frozen": True}


class TokenPayload(BaseModel):
    """Decoded access token claims."""
    sub: str  # User ID
    email: Optional[str] = None
    role: UserRole = UserRole.USER
    aud: str
    exp: int
    iat: int

# =============================================================================
# app/auth/dependencies.py - FastAPI Auth Dependencies
# =============================================================================
# Provides dependency injection for authentication and role checks.
#
# Usage:
#   from app.auth import get_current_user, require_roles, AuthUser
#
#   @router.post("")
#   async def create(user: AuthUser = Depends(require_roles("staff", "admin"))):
#       return {"user_id": user.id}
# =============================================================================

import logging
from typing import Callable, Optional

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from jose import ExpiredSignatureError, JWTError
from pydantic import ValidationError

from app.auth.models import AuthUser, UserRole
from app.auth.tokens import decode_access_token
from app.exceptions import ForbiddenError, UnauthorizedError

logger = logging.getLogger(__name__)

# HTTP Bearer token extractor; a missing header is reported by get_current_user
security = HTTPBearer(auto_error=False)


async def get_current_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security)
) -> AuthUser:
    """
    Extract and validate the user from the Bearer token.

    This dependency:
    1. Extracts the Bearer token from the Authorization header
    2. Verifies signature, audience and expiry
    3. Returns an AuthUser with the user's ID, email and role

    Raises:
        UnauthorizedError: 401 if the token is missing, invalid or expired
    """
    if credentials is None:
        raise UnauthorizedError()

    try:
        payload = decode_access_token(credentials.credentials)

    except ExpiredSignatureError:
        logger.warning("Access token has expired")
        raise UnauthorizedError("Your token has expired. Please log in again.")

    except JWTError as e:
        logger.warning(f"Access token validation failed: {e}")
        raise UnauthorizedError("Invalid token. Please log in again.")

    except ValidationError as e:
        logger.warning(f"Access token has invalid claims: {e}")
        raise UnauthorizedError("Invalid token. Please log in again.")

    logger.debug(f"Authenticated user: {payload.sub} ({payload.role.value})")
    return AuthUser(id=payload.sub, email=payload.email, role=payload.role)


def require_roles(*roles: UserRole | str) -> Callable[..., AuthUser]:
    """
    Build a dependency that admits only the given roles.

    Args:
        roles: Roles allowed through

    Returns:
        Dependency returning the AuthUser, raising 401 without a valid
        token and 403 for any other role
    """
    allowed = {UserRole(role) for role in roles}

    async def dependency(user: AuthUser = Depends(get_current_user)) -> AuthUser:
        if user.role not in allowed:
            logger.warning(f"User {user.id} with role '{user.role.value}' denied")
            raise ForbiddenError(user.role.value)
        return user

    return dependency

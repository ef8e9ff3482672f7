# =============================================================================
# app/auth/__init__.py - Authentication Module
# =============================================================================
# Provides JWT-based authentication and role checks.
#
# Usage:
#   from app.auth import require_roles, AuthUser
#
#   @router.delete("/{id}")
#   async def delete(user: AuthUser = Depends(require_roles("owner", "admin"))):
#       ...
# =============================================================================

from app.auth.dependencies import get_current_user, require_roles
from app.auth.models import AuthUser, UserRole
from app.auth.tokens import create_access_token, decode_access_token

__all__ = [
    "get_current_user",
    "require_roles",
    "AuthUser",
    "UserRole",
    "create_access_token",
    "decode_access_token",
]

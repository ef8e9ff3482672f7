# =============================================================================
# app/auth/routes.py - Authentication Routes
# =============================================================================
# Signup/login is handled by another service. These routes only report on
# the identity carried by the current token.
# =============================================================================

from fastapi import APIRouter, Depends

from app.auth.dependencies import get_current_user
from app.auth.models import AuthUser

router = APIRouter()


@router.get("/me")
async def get_current_user_info(
    user: AuthUser = Depends(get_current_user)
) -> dict:
    """
    Get the identity of the current token.

    Raises:
        401: If not authenticated
    """
    return {
        "status": "success",
        "data": user.model_dump(mode="json"),
    }


@router.get("/verify")
async def verify_token(
    user: AuthUser = Depends(get_current_user)
) -> dict:
    """
    Verify that the current token is valid.

    Useful for checking if a stored token is still valid.
    """
    return {
        "status": "success",
        "data": {"valid": True, "id": user.id, "role": user.role.value},
    }

# =============================================================================
# app/auth/tokens.py - Access Token Encoding / Decoding
# =============================================================================
# Tokens are HS256 JWTs signed with SECRET_KEY. Sign-up and login live in
# another service; create_access_token exists for scripts and tests.
# =============================================================================

from datetime import datetime, timedelta, timezone
from typing import Any

from jose import jwt

from app.auth.models import TokenPayload, UserRole
from app.config import settings


def create_access_token(
    user_id: str,
    role: UserRole | str = UserRole.USER,
    email: str | None = None,
    expires_minutes: int | None = None,
) -> str:
    """
    Mint a signed access token.

    Args:
        user_id: Value of the "sub" claim
        role: Value of the "role" claim
        email: Optional "email" claim
        expires_minutes: Lifetime; defaults to ACCESS_TOKEN_EXPIRE_MINUTES.
            Negative values produce an already-expired token.
    """
    now = datetime.now(timezone.utc)
    lifetime = settings.ACCESS_TOKEN_EXPIRE_MINUTES if expires_minutes is None else expires_minutes
    claims: dict[str, Any] = {
        "sub": user_id,
        "role": UserRole(role).value,
        "aud": settings.JWT_AUDIENCE,
        "iat": int(now.timestamp()),
        "exp": int((now + timedelta(minutes=lifetime)).timestamp()),
    }
    if email:
        claims["email"] = email
    return jwt.encode(claims, settings.SECRET_KEY, algorithm=settings.JWT_ALGORITHM)


def decode_access_token(token: str) -> TokenPayload:
    """
    Verify signature, audience and expiry and return the claims.

    Raises:
        jose.ExpiredSignatureError: If the token has expired
        jose.JWTError: If the token is otherwise invalid
        pydantic.ValidationError: If required claims are missing
    """
    payload = jwt.decode(
        token,
        settings.SECRET_KEY,
        algorithms=[settings.JWT_ALGORITHM],
        audience=settings.JWT_AUDIENCE,
    )
    return TokenPayload(**payload)

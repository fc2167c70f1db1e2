"""
Caller identity for private routes.

Tokens are issued elsewhere; this module only decodes the ``x-auth-token``
header and hands the user id to the route as a plain value.
"""

from datetime import datetime, timedelta, timezone
from typing import Any, Dict, Optional

from fastapi import Header
from jose import JWTError, jwt

from dev_profiles.config import settings
from dev_profiles.exceptions import AuthenticationError


def create_access_token(user_id: str, expires_minutes: Optional[int] = None) -> str:
    """Sign a token carrying ``{"user": {"id": user_id}}``."""
    expire = datetime.now(timezone.utc) + timedelta(
        minutes=expires_minutes or settings.jwt_expire_minutes
    )
    to_encode = {"user": {"id": user_id}, "exp": expire}
    return jwt.encode(to_encode, settings.jwt_secret_key, algorithm=settings.jwt_algorithm)


def decode_access_token(token: str) -> Dict[str, Any]:
    """
    Decode and validate a token.

    Raises:
        ValueError: If the signature, expiry or payload shape is invalid.
    """
    try:
        payload = jwt.decode(token, settings.jwt_secret_key, algorithms=[settings.jwt_algorithm])
    except JWTError as exc:
        raise ValueError("Invalid token") from exc
    user = payload.get("user")
    if not isinstance(user, dict) or not user.get("id"):
        raise ValueError("Token has no user id")
    return payload


def get_current_user_id(x_auth_token: Optional[str] = Header(None)) -> str:
    """FastAPI dependency returning the authenticated user's id."""
    if not x_auth_token:
        raise AuthenticationError("No token, authorization denied")
    try:
        payload = decode_access_token(x_auth_token)
    except ValueError:
        raise AuthenticationError("Token is not valid") from None
    return str(payload["user"]["id"])

"""JWT token creation and verification utilities.

Tokens are stateless, signed with the configured secret and carry the user id
in the 'sub' claim.
"""

from __future__ import annotations

from datetime import datetime, timedelta, timezone

from jose import ExpiredSignatureError, JWTError, jwt
from loguru import logger

from fitfeed.config.settings import settings
from fitfeed.core.errors import AuthenticationError


def create_access_token(user_id: str, email: str | None = None) -> str:
    """Create a JWT access token for a user.

    Args:
        user_id: User ID to encode in token
        email: Optional email claim

    Returns:
        JWT token string
    """
    user_id_str = str(user_id) if user_id is not None else ""
    if not user_id_str:
        raise ValueError("user_id cannot be None or empty")

    now = datetime.now(timezone.utc)
    payload = {
        "sub": user_id_str,
        "exp": now + timedelta(days=settings.auth_token_expire_days),
        "iat": now,
        "iss": "fitfeed-backend",
    }
    if email:
        payload["email"] = email
    return jwt.encode(
        payload,
        settings.auth_secret_key,
        algorithm=settings.auth_algorithm,
    )


def decode_access_token(token: str) -> str:
    """Decode and verify a JWT access token.

    Args:
        token: JWT token string

    Returns:
        User ID (string) from token 'sub' claim

    Raises:
        AuthenticationError: If token is invalid or expired
    """
    try:
        payload = jwt.decode(
            token,
            settings.auth_secret_key,
            algorithms=[settings.auth_algorithm],
        )
    except ExpiredSignatureError as e:
        logger.info("[AUTH] Token expired")
        raise AuthenticationError("Token expired") from e
    except JWTError as e:
        logger.warning(f"[AUTH] JWT decode failed: {e}")
        raise AuthenticationError("Invalid token") from e

    user_id = payload.get("sub")
    if not user_id:
        raise AuthenticationError("Invalid token")
    return str(user_id)

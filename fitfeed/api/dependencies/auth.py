"""FastAPI authentication dependencies for JWT-based auth.

Provides get_current_user_id (required auth) and get_optional_user_id
(public routes that personalize when a valid token is present).
"""

from __future__ import annotations

from fastapi import Depends, Request
from fastapi.security import OAuth2PasswordBearer
from loguru import logger

from fitfeed.core.auth_jwt import decode_access_token
from fitfeed.core.errors import AuthenticationError
from fitfeed.db.models import User
from fitfeed.db.session import get_session

oauth2_scheme = OAuth2PasswordBearer(tokenUrl="auth/login", auto_error=False)


def _user_exists(user_id: str) -> bool:
    with get_session() as session:
        return session.get(User, user_id) is not None


def get_current_user_id(request: Request, token: str | None = Depends(oauth2_scheme)) -> str:
    """Get the authenticated user ID from the bearer token.

    Raises:
        AuthenticationError: If the token is missing, invalid, expired, or names an unknown user
    """
    if not token:
        logger.warning(f"[AUTH] Missing bearer token, Path: {request.url.path}, Method: {request.method}")
        raise AuthenticationError("No token provided")

    user_id = decode_access_token(token)

    if not _user_exists(user_id):
        logger.warning(f"[AUTH] User not found user_id={user_id}, Path: {request.url.path}")
        raise AuthenticationError("User not found")

    return user_id


def get_optional_user_id(request: Request, token: str | None = Depends(oauth2_scheme)) -> str | None:
    """Like get_current_user_id, but returns None instead of failing."""
    if not token:
        return None

    try:
        user_id = decode_access_token(token)
    except AuthenticationError:
        logger.debug(f"[AUTH] Optional auth: invalid token for path={request.url.path}")
        return None

    if not _user_exists(user_id):
        logger.debug(f"[AUTH] Optional auth: user not found user_id={user_id}")
        return None

    return user_id

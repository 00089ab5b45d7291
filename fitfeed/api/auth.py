"""Authentication endpoints: email/password registration and login."""

from __future__ import annotations

from fastapi import APIRouter, Depends, status
from loguru import logger
from sqlalchemy import select

from fitfeed.api.dependencies.auth import get_current_user_id
from fitfeed.core.auth_jwt import create_access_token
from fitfeed.core.errors import AuthenticationError, ConflictError, NotFoundError, ValidationError
from fitfeed.core.password import hash_password, verify_password
from fitfeed.db.models import User
from fitfeed.db.session import get_session
from fitfeed.schemas import LoginRequest, RegisterRequest, UserSchema

router = APIRouter(prefix="/auth", tags=["auth"])

MIN_PASSWORD_LENGTH = 6


def _normalize_email(email: str) -> str:
    """Normalize email to lowercase."""
    return email.lower().strip()


@router.post("/register", status_code=status.HTTP_201_CREATED)
def register(request: RegisterRequest) -> dict:
    """Create an account and return a token for it.

    Raises:
        ValidationError: 400 if a field is empty or the password is too short
        ConflictError: 409 if the email is already registered
    """
    name = request.name.strip()
    if not request.password or not name:
        raise ValidationError("All fields are required")
    if len(request.password) < MIN_PASSWORD_LENGTH:
        raise ValidationError(f"Password must be at least {MIN_PASSWORD_LENGTH} characters")

    email = _normalize_email(request.email)
    logger.info(f"[AUTH] Registration requested for email={email}")

    with get_session() as session:
        existing = session.execute(select(User).where(User.email == email)).scalar_one_or_none()
        if existing is not None:
            logger.warning(f"[AUTH] Registration failed: email already exists={email}")
            raise ConflictError("User already exists")

        user = User(
            email=email,
            password_hash=hash_password(request.password),
            name=name,
            avatar=None,
            total_workouts=0,
            total_hours=0.0,
            current_streak=0,
            longest_streak=0,
        )
        session.add(user)
        session.flush()

        token = create_access_token(user.id, user.email)
        logger.info(f"[AUTH] User created: user_id={user.id}, email={email}")
        return {"token": token, "user": UserSchema.model_validate(user).to_json()}


@router.post("/login")
def login(request: LoginRequest) -> dict:
    """Exchange email/password for a token.

    Raises:
        AuthenticationError: 401 on unknown email or wrong password
    """
    email = _normalize_email(request.email)

    with get_session() as session:
        user = session.execute(select(User).where(User.email == email)).scalar_one_or_none()
        if user is None or not verify_password(request.password, user.password_hash):
            logger.warning(f"[AUTH] Login failed for email={email}")
            raise AuthenticationError("Invalid credentials")

        token = create_access_token(user.id, user.email)
        logger.info(f"[AUTH] Login successful for user_id={user.id}")
        return {"token": token, "user": UserSchema.model_validate(user).to_json()}


@router.get("/me")
def me(user_id: str = Depends(get_current_user_id)) -> dict:
    """Current user's account and lifetime counters."""
    with get_session() as session:
        user = session.get(User, user_id)
        if user is None:
            raise NotFoundError("User not found")
        return {"user": UserSchema.model_validate(user).to_json()}

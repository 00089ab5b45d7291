"""Profile API endpoint."""

from __future__ import annotations

from fastapi import APIRouter, Depends
from loguru import logger

from fitfeed.api.dependencies.auth import get_current_user_id
from fitfeed.db.session import get_session
from fitfeed.profile.aggregator import get_profile

router = APIRouter(prefix="/profile", tags=["profile"])


@router.get("")
def profile(user_id: str = Depends(get_current_user_id)) -> dict:
    """User, lifetime stats, 30-day consistency and the five most recent workouts."""
    logger.info(f"[PROFILE] GET /profile user_id={user_id}")
    with get_session() as session:
        return get_profile(session, user_id).to_json()

"""Workout streak rules.

A streak continues when a new session starts no more than one whole day
after the previous session finished. The gap is measured in whole elapsed
days (floor of the 24h periods), not calendar dates.
"""

from __future__ import annotations

import math
from datetime import datetime

from loguru import logger
from sqlalchemy import select
from sqlalchemy.orm import Session

from fitfeed.db.models import User, WorkoutSession
from fitfeed.utils.formatting import SECONDS_PER_DAY

MAX_GAP_DAYS = 1


def next_streak(current_streak: int, started_at: datetime, previous_finished_at: datetime | None) -> int:
    """Streak value after finishing a session that started at started_at.

    Args:
        current_streak: User's streak before this session
        started_at: Start time of the session being finished
        previous_finished_at: Finish time of the user's previous finished session, if any

    Returns:
        current_streak + 1 if the gap is at most one whole day, else 1
    """
    if previous_finished_at is None:
        return 1

    days_since = math.floor((started_at - previous_finished_at).total_seconds() / SECONDS_PER_DAY)
    if days_since <= MAX_GAP_DAYS:
        return (current_streak or 0) + 1
    return 1


def find_previous_finished(session: Session, user_id: str, exclude_session_id: str) -> WorkoutSession | None:
    """Most recently finished session of a user, other than exclude_session_id."""
    stmt = (
        select(WorkoutSession)
        .where(WorkoutSession.user_id == user_id)
        .where(WorkoutSession.finished_at.is_not(None))
        .where(WorkoutSession.id != exclude_session_id)
        .order_by(WorkoutSession.finished_at.desc())
        .limit(1)
    )
    return session.execute(stmt).scalar_one_or_none()


def update_streak(session: Session, user: User, finished: WorkoutSession) -> int:
    """Apply the streak rule to user for the session just finished.

    longest_streak only ever grows.

    Returns:
        The new current streak
    """
    previous = find_previous_finished(session, user.id, finished.id)
    previous_finished_at = previous.finished_at if previous else None

    streak = next_streak(user.current_streak, finished.started_at, previous_finished_at)
    user.current_streak = streak
    if streak > (user.longest_streak or 0):
        user.longest_streak = streak

    logger.debug(
        f"[STREAK] user_id={user.id} session_id={finished.id} "
        f"previous_finished_at={previous_finished_at} streak={streak} longest={user.longest_streak}"
    )
    return streak

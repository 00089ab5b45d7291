"""Profile statistics.

Read-only rollups over a user's finished sessions. Volume and duration
totals only cover the most recent STATS_WINDOW sessions.
"""

from __future__ import annotations

from collections.abc import Iterable
from datetime import date, datetime, timedelta

from loguru import logger
from sqlalchemy import func, select
from sqlalchemy.orm import Session

from fitfeed.core.errors import NotFoundError
from fitfeed.db.models import User, WorkoutSession
from fitfeed.schemas import ProfileSchema, ProfileStatsSchema, RecentWorkoutSchema, UserSchema
from fitfeed.utils.formatting import format_duration, format_relative_date, round_half_up
from fitfeed.utils.timezone import utcnow

STATS_WINDOW = 100
RECENT_WORKOUTS = 5
CONSISTENCY_DAYS = 30
WEEKLY_DAYS = 7
ACTIVE_DAY = 1
# Non-zero so the heatmap keeps a visible minimum bar
INACTIVE_DAY = 0.1


def build_consistency(finished_at: Iterable[datetime], today: date, days: int = CONSISTENCY_DAYS) -> list[float]:
    """Per-day activity flags for the last `days` days, oldest first, today last."""
    active_days = {moment.date() for moment in finished_at}
    return [
        ACTIVE_DAY if (today - timedelta(days=days - 1 - i)) in active_days else INACTIVE_DAY
        for i in range(days)
    ]


def format_volume(workout: WorkoutSession) -> str:
    if workout.type in ("run", "circuit"):
        return f"{(workout.distance or 0):.1f} mi"
    return f"{round_half_up(workout.total_volume or 0)} lbs"


def format_recent_workout(workout: WorkoutSession, now: datetime) -> RecentWorkoutSchema:
    return RecentWorkoutSchema(
        id=workout.id,
        name=workout.name,
        date=format_relative_date(workout.finished_at, now),
        duration=format_duration(workout.duration or 0),
        volume=format_volume(workout),
        type=workout.type,
        location=workout.location,
    )


def get_profile(session: Session, user_id: str, now: datetime | None = None) -> ProfileSchema:
    """Assemble the profile view for a user.

    Raises:
        NotFoundError: If the user does not exist
    """
    now = now or utcnow()

    user = session.get(User, user_id)
    if user is None:
        raise NotFoundError("User not found")

    window = session.execute(
        select(WorkoutSession)
        .where(WorkoutSession.user_id == user_id)
        .where(WorkoutSession.finished_at.is_not(None))
        .order_by(WorkoutSession.finished_at.desc())
        .limit(STATS_WINDOW)
    ).scalars().all()
    total_volume = sum(w.total_volume or 0 for w in window)
    total_duration = sum(w.duration or 0 for w in window)

    weekly_workouts = session.execute(
        select(func.count())
        .select_from(WorkoutSession)
        .where(WorkoutSession.user_id == user_id)
        .where(WorkoutSession.finished_at >= now - timedelta(days=WEEKLY_DAYS))
    ).scalar_one()

    thirty_day_finishes = session.execute(
        select(WorkoutSession.finished_at)
        .where(WorkoutSession.user_id == user_id)
        .where(WorkoutSession.finished_at >= now - timedelta(days=CONSISTENCY_DAYS))
    ).scalars().all()
    consistency = build_consistency(thirty_day_finishes, now.date())

    logger.debug(
        f"[PROFILE] user_id={user_id} window={len(window)} weekly={weekly_workouts} "
        f"active_days={sum(1 for v in consistency if v == ACTIVE_DAY)}"
    )

    return ProfileSchema(
        user=UserSchema.model_validate(user),
        stats=ProfileStatsSchema(
            workouts=user.total_workouts,
            hours=round_half_up(user.total_hours or 0),
            streak=user.current_streak,
            volume=round_half_up(total_volume),
        ),
        consistency=consistency,
        weekly_workouts=weekly_workouts,
        recent_workouts=[format_recent_workout(w, now) for w in window[:RECENT_WORKOUTS]],
        total_volume=round_half_up(total_volume),
        total_duration=round_half_up(total_duration),
    )

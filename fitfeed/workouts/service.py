"""Workout session lifecycle.

All session and set mutations go through this module. Functions take an open
SQLAlchemy session and flush but never commit; the caller's transaction
(fitfeed.db.session.get_session) decides when work becomes durable.

Aggregate recomputation in log_set is a read-then-write without row locks,
so two concurrent completions on one session can lose an update.
"""

from __future__ import annotations

from datetime import datetime

from loguru import logger
from sqlalchemy import select
from sqlalchemy.orm import Session, selectinload

from fitfeed.core.errors import NotFoundError, ValidationError
from fitfeed.db.models import FeedItem, User, WorkoutSession, WorkoutSet
from fitfeed.feed.synthesizer import create_feed_item
from fitfeed.utils.timezone import to_naive_utc, utcnow
from fitfeed.workouts.streak import update_streak

SESSION_TYPES = ("lift", "run", "circuit")
SECONDS_PER_HOUR = 3600


def start_workout(session: Session, *, user_id: str, name: str | None, workout_type: str | None) -> WorkoutSession:
    """Open a new workout session with zeroed aggregates.

    Raises:
        ValidationError: If name or type is missing, or type is unknown
    """
    name = (name or "").strip()
    if not name or not workout_type:
        raise ValidationError("Name and type are required")
    if workout_type not in SESSION_TYPES:
        raise ValidationError(f"Type must be one of: {', '.join(SESSION_TYPES)}")

    workout = WorkoutSession(
        user_id=user_id,
        name=name,
        type=workout_type,
        total_volume=0.0,
        total_sets=0,
        total_reps=0,
    )
    session.add(workout)
    session.flush()

    logger.info(f"[WORKOUT] Started session id={workout.id} user_id={user_id} type={workout_type}")
    return workout


def get_owned_session(session: Session, session_id: str, user_id: str) -> WorkoutSession:
    """Get a session by id or raise NotFoundError if missing or owned by someone else."""
    stmt = select(WorkoutSession).where(WorkoutSession.id == session_id).where(WorkoutSession.user_id == user_id)
    workout = session.execute(stmt).scalar_one_or_none()
    if workout is None:
        raise NotFoundError("Workout session not found")
    return workout


def recompute_totals(session: Session, workout: WorkoutSession) -> None:
    """Recompute volume, set count and rep count from the session's completed sets."""
    completed = session.execute(
        select(WorkoutSet).where(WorkoutSet.session_id == workout.id).where(WorkoutSet.completed.is_(True))
    ).scalars().all()

    workout.total_volume = float(sum(s.weight * s.reps for s in completed))
    workout.total_sets = len(completed)
    workout.total_reps = sum(s.reps for s in completed)


def log_set(
    session: Session,
    *,
    user_id: str,
    session_id: str,
    exercise_id: str,
    exercise_name: str,
    order: int,
    weight: float,
    reps: int,
    completed: bool,
    notes: str | None = None,
) -> WorkoutSet:
    """Create or overwrite the set keyed by (session, exercise, order).

    When the set is logged as completed (or a completed set is reverted), the
    session aggregates are recomputed from all of its completed sets.

    Raises:
        NotFoundError: If the session is unknown, not owned by the caller, or already finished
    """
    workout = get_owned_session(session, session_id, user_id)
    if workout.finished_at is not None:
        raise NotFoundError("Workout session not found or already finished")

    stmt = (
        select(WorkoutSet)
        .where(WorkoutSet.session_id == session_id)
        .where(WorkoutSet.exercise_id == exercise_id)
        .where(WorkoutSet.order == order)
    )
    workout_set = session.execute(stmt).scalar_one_or_none()
    was_completed = bool(workout_set and workout_set.completed)

    if workout_set is None:
        workout_set = WorkoutSet(
            session_id=session_id,
            exercise_id=exercise_id,
            exercise_name=exercise_name,
            order=order,
            weight=weight,
            reps=reps,
            completed=completed,
            notes=notes,
        )
        session.add(workout_set)
    else:
        workout_set.weight = weight
        workout_set.reps = reps
        workout_set.completed = completed
        if notes is not None:
            workout_set.notes = notes
    session.flush()

    # Un-completing a set also has to drop it from the totals.
    if completed or was_completed:
        recompute_totals(session, workout)
        session.flush()

    logger.debug(
        f"[WORKOUT] Logged set session_id={session_id} exercise_id={exercise_id} order={order} "
        f"completed={completed} total_volume={workout.total_volume}"
    )
    return workout_set


def finish_workout(
    session: Session,
    *,
    user_id: str,
    session_id: str,
    post_to_feed: bool = True,
    description: str | None = None,
    distance: float | None = None,
    pace: str | None = None,
    calories: int | None = None,
    location: str | None = None,
    now: datetime | None = None,
) -> tuple[WorkoutSession, FeedItem | None]:
    """Finish an open session, update the owner's streak and totals, and optionally post to the feed.

    Args:
        session: Database session; the whole finish is one transaction
        user_id: Caller
        session_id: Session to finish
        post_to_feed: Create a feed item for recognized session types
        description: Feed item description
        distance, pace, calories, location: Optional run/circuit details recorded before finishing
        now: Finish time (defaults to current UTC time)

    Returns:
        (finished session, feed item or None)

    Raises:
        NotFoundError: If the session is unknown, not owned, or already finished
    """
    stmt = (
        select(WorkoutSession)
        .where(WorkoutSession.id == session_id)
        .where(WorkoutSession.user_id == user_id)
        .where(WorkoutSession.finished_at.is_(None))
        .options(selectinload(WorkoutSession.sets))
        .execution_options(populate_existing=True)
    )
    workout = session.execute(stmt).scalar_one_or_none()
    if workout is None:
        raise NotFoundError("Workout session not found or already finished")

    if distance is not None:
        workout.distance = distance
    if pace is not None:
        workout.pace = pace
    if calories is not None:
        workout.calories = calories
    if location is not None:
        workout.location = location

    finished_at = to_naive_utc(now) if now is not None else utcnow()
    workout.finished_at = finished_at
    workout.duration = max(int((finished_at - workout.started_at).total_seconds()), 0)

    user = session.get(User, user_id)
    if user is None:
        raise NotFoundError("User not found")

    update_streak(session, user, workout)
    user.total_workouts = (user.total_workouts or 0) + 1
    user.total_hours = (user.total_hours or 0.0) + workout.duration / SECONDS_PER_HOUR
    session.flush()

    logger.info(
        f"[WORKOUT] Finished session id={workout.id} user_id={user_id} duration={workout.duration}s "
        f"total_workouts={user.total_workouts} streak={user.current_streak}"
    )

    feed_item = None
    if post_to_feed:
        feed_item = create_feed_item(session, workout, description)

    return workout, feed_item


def get_active_workout(session: Session, user_id: str) -> WorkoutSession | None:
    """The caller's open session (most recently started), with all sets loaded."""
    stmt = (
        select(WorkoutSession)
        .where(WorkoutSession.user_id == user_id)
        .where(WorkoutSession.finished_at.is_(None))
        .order_by(WorkoutSession.started_at.desc())
        .options(selectinload(WorkoutSession.sets))
        .limit(1)
    )
    return session.execute(stmt).scalar_one_or_none()


def get_workout_history(session: Session, user_id: str, limit: int = 10, offset: int = 0) -> list[WorkoutSession]:
    """Finished sessions, newest finish first."""
    stmt = (
        select(WorkoutSession)
        .where(WorkoutSession.user_id == user_id)
        .where(WorkoutSession.finished_at.is_not(None))
        .order_by(WorkoutSession.finished_at.desc())
        .offset(offset)
        .limit(limit)
        .options(selectinload(WorkoutSession.sets))
    )
    return list(session.execute(stmt).scalars().all())

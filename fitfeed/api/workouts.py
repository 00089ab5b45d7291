"""Workout session endpoints: start, log sets, finish, active session and history."""

from __future__ import annotations

from fastapi import APIRouter, Depends, Query, status

from fitfeed.api.dependencies.auth import get_current_user_id
from fitfeed.api.params import page_limit, page_offset
from fitfeed.db.session import get_session
from fitfeed.feed.service import serialize_feed_item
from fitfeed.schemas import (
    FinishWorkoutRequest,
    LogSetRequest,
    StartWorkoutRequest,
    WorkoutSessionSchema,
    WorkoutSetSchema,
)
from fitfeed.workouts.service import (
    finish_workout,
    get_active_workout,
    get_workout_history,
    log_set,
    start_workout,
)

router = APIRouter(prefix="/workouts", tags=["workouts"])


@router.post("/start", status_code=status.HTTP_201_CREATED)
def start(request: StartWorkoutRequest, user_id: str = Depends(get_current_user_id)) -> dict:
    with get_session() as session:
        workout = start_workout(session, user_id=user_id, name=request.name, workout_type=request.type)
        return {"session": WorkoutSessionSchema.model_validate(workout).to_json()}


@router.post("/set")
def log_workout_set(request: LogSetRequest, user_id: str = Depends(get_current_user_id)) -> dict:
    with get_session() as session:
        workout_set = log_set(
            session,
            user_id=user_id,
            session_id=request.session_id,
            exercise_id=request.exercise_id,
            exercise_name=request.exercise_name,
            order=request.order,
            weight=request.weight,
            reps=request.reps,
            completed=request.completed,
            notes=request.notes,
        )
        return {"set": WorkoutSetSchema.model_validate(workout_set).to_json()}


@router.post("/finish")
def finish(request: FinishWorkoutRequest, user_id: str = Depends(get_current_user_id)) -> dict:
    """Finish the session; the feed item (if any) is created in the same transaction."""
    with get_session() as session:
        workout, feed_item = finish_workout(
            session,
            user_id=user_id,
            session_id=request.session_id,
            post_to_feed=request.post_to_feed,
            description=request.description,
            distance=request.distance,
            pace=request.pace,
            calories=request.calories,
            location=request.location,
        )
        return {
            "session": WorkoutSessionSchema.model_validate(workout).to_json(exclude={"sets"}),
            "feedItem": serialize_feed_item(feed_item).to_json(exclude_none=True) if feed_item else None,
        }


@router.get("/active")
def active(user_id: str = Depends(get_current_user_id)) -> dict:
    with get_session() as session:
        workout = get_active_workout(session, user_id)
        return {"session": WorkoutSessionSchema.model_validate(workout).to_json() if workout else None}


@router.get("/history")
def history(
    limit: str | None = Query(default=None),
    offset: str | None = Query(default=None),
    user_id: str = Depends(get_current_user_id),
) -> dict:
    """Finished sessions, newest first, each with its completed sets."""
    with get_session() as session:
        sessions = get_workout_history(session, user_id, limit=page_limit(limit, 10), offset=page_offset(offset))
        payload = []
        for workout in sessions:
            item = WorkoutSessionSchema.model_validate(workout)
            item.sets = [s for s in item.sets if s.completed]
            payload.append(item.to_json())
        return {"sessions": payload}

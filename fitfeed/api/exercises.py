"""Exercise catalog endpoints (public, read-only)."""

from __future__ import annotations

from fastapi import APIRouter, Query
from loguru import logger
from sqlalchemy import or_, select

from fitfeed.core.errors import NotFoundError
from fitfeed.db.models import Exercise
from fitfeed.db.session import get_session
from fitfeed.schemas import ExerciseSchema

router = APIRouter(prefix="/exercises", tags=["exercises"])


@router.get("")
def list_exercises(
    search: str = Query(default=""),
    muscle_group: str = Query(default="", alias="muscleGroup"),
    exercise_type: str = Query(default="", alias="type"),
) -> dict:
    """List catalog exercises ordered by name.

    Args:
        search: Case-insensitive substring of name or muscle group
        muscle_group: Case-insensitive substring of muscle group
        exercise_type: Exact type (strength, cardio, hiit)
    """
    stmt = select(Exercise)
    if search:
        pattern = f"%{search}%"
        stmt = stmt.where(or_(Exercise.name.ilike(pattern), Exercise.muscle_group.ilike(pattern)))
    if muscle_group:
        stmt = stmt.where(Exercise.muscle_group.ilike(f"%{muscle_group}%"))
    if exercise_type:
        stmt = stmt.where(Exercise.type == exercise_type)
    stmt = stmt.order_by(Exercise.name.asc())

    with get_session() as session:
        exercises = session.execute(stmt).scalars().all()
        logger.debug(f"Exercise search search={search!r} muscle_group={muscle_group!r} type={exercise_type!r} -> {len(exercises)}")
        return {"exercises": [ExerciseSchema.model_validate(e).to_json() for e in exercises]}


@router.get("/{exercise_id}")
def get_exercise(exercise_id: str) -> dict:
    with get_session() as session:
        exercise = session.get(Exercise, exercise_id)
        if exercise is None:
            raise NotFoundError("Exercise not found")
        return {"exercise": ExerciseSchema.model_validate(exercise).to_json()}

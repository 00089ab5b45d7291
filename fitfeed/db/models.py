from __future__ import annotations

import uuid
from datetime import datetime

from sqlalchemy import Boolean, DateTime, Float, ForeignKey, Index, Integer, String, Text, UniqueConstraint
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column, relationship

from fitfeed.utils.timezone import utcnow


def _uuid() -> str:
    return str(uuid.uuid4())


class Base(DeclarativeBase):
    """Base class for all database models."""


class User(Base):
    """User account and lifetime counters.

    Counters (total_workouts, total_hours, current_streak, longest_streak) are
    mutated incrementally when a workout finishes. They are never recomputed
    from session history.
    """

    __tablename__ = "users"

    id: Mapped[str] = mapped_column(String, primary_key=True, default=_uuid, index=True)
    email: Mapped[str] = mapped_column(String, nullable=False, unique=True, index=True)
    password_hash: Mapped[str] = mapped_column(String, nullable=False)
    name: Mapped[str] = mapped_column(String, nullable=False)
    avatar: Mapped[str | None] = mapped_column(String, nullable=True)
    total_workouts: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    total_hours: Mapped[float] = mapped_column(Float, nullable=False, default=0.0)
    current_streak: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    longest_streak: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    created_at: Mapped[datetime] = mapped_column(DateTime, nullable=False, default=utcnow)

    sessions: Mapped[list[WorkoutSession]] = relationship("WorkoutSession", back_populates="user")


class Exercise(Base):
    """Exercise catalog entry with default prescription (sets/reps/rest)."""

    __tablename__ = "exercises"

    id: Mapped[str] = mapped_column(String, primary_key=True, default=_uuid, index=True)
    name: Mapped[str] = mapped_column(String, nullable=False, unique=True)
    muscle_group: Mapped[str] = mapped_column(String, nullable=False)
    type: Mapped[str] = mapped_column(String, nullable=False, index=True)  # strength, cardio, hiit
    image: Mapped[str | None] = mapped_column(Text, nullable=True)
    default_sets: Mapped[int] = mapped_column(Integer, nullable=False, default=3)
    default_reps: Mapped[str] = mapped_column(String, nullable=False, default="10")
    default_rest: Mapped[int] = mapped_column(Integer, nullable=False, default=60)
    created_at: Mapped[datetime] = mapped_column(DateTime, nullable=False, default=utcnow)


class WorkoutSession(Base):
    """One workout attempt.

    Open while finished_at is null. Transitions once to finished and is never
    reopened. Aggregates (total_volume, total_sets, total_reps) cover completed
    sets only.
    """

    __tablename__ = "workout_sessions"

    id: Mapped[str] = mapped_column(String, primary_key=True, default=_uuid, index=True)
    user_id: Mapped[str] = mapped_column(String, ForeignKey("users.id"), nullable=False, index=True)
    name: Mapped[str] = mapped_column(String, nullable=False)
    type: Mapped[str] = mapped_column(String, nullable=False)  # lift, run, circuit
    started_at: Mapped[datetime] = mapped_column(DateTime, nullable=False, default=utcnow)
    finished_at: Mapped[datetime | None] = mapped_column(DateTime, nullable=True, index=True)
    duration: Mapped[int | None] = mapped_column(Integer, nullable=True)  # seconds
    total_volume: Mapped[float] = mapped_column(Float, nullable=False, default=0.0)
    total_sets: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    total_reps: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    distance: Mapped[float | None] = mapped_column(Float, nullable=True)
    pace: Mapped[str | None] = mapped_column(String, nullable=True)
    calories: Mapped[int | None] = mapped_column(Integer, nullable=True)
    location: Mapped[str | None] = mapped_column(String, nullable=True)

    user: Mapped[User] = relationship("User", back_populates="sessions")
    sets: Mapped[list[WorkoutSet]] = relationship(
        "WorkoutSet",
        back_populates="session",
        order_by="WorkoutSet.order",
        cascade="all, delete-orphan",
    )

    __table_args__ = (Index("idx_workout_sessions_user_finished", "user_id", "finished_at"),)


class WorkoutSet(Base):
    """One logged attempt at an exercise within a session.

    (session_id, exercise_id, order) is the natural key: logging the same key
    again overwrites weight/reps/completed instead of adding a row.
    """

    __tablename__ = "workout_sets"

    id: Mapped[str] = mapped_column(String, primary_key=True, default=_uuid, index=True)
    session_id: Mapped[str] = mapped_column(String, ForeignKey("workout_sessions.id"), nullable=False, index=True)
    exercise_id: Mapped[str] = mapped_column(String, nullable=False)
    exercise_name: Mapped[str] = mapped_column(String, nullable=False)
    order: Mapped[int] = mapped_column(Integer, nullable=False)
    weight: Mapped[float] = mapped_column(Float, nullable=False, default=0.0)
    reps: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    completed: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    notes: Mapped[str | None] = mapped_column(Text, nullable=True)
    created_at: Mapped[datetime] = mapped_column(DateTime, nullable=False, default=utcnow)

    session: Mapped[WorkoutSession] = relationship("WorkoutSession", back_populates="sets")

    __table_args__ = (UniqueConstraint("session_id", "exercise_id", "order", name="uq_workout_set_natural_key"),)


class FeedItem(Base):
    """Shareable snapshot of a finished session.

    tags and stats hold JSON-serialized lists; use fitfeed.feed.synthesizer
    to convert to and from the structured form.
    """

    __tablename__ = "feed_items"

    id: Mapped[str] = mapped_column(String, primary_key=True, default=_uuid, index=True)
    user_id: Mapped[str] = mapped_column(String, ForeignKey("users.id"), nullable=False, index=True)
    session_id: Mapped[str] = mapped_column(String, ForeignKey("workout_sessions.id"), nullable=False, unique=True)
    type: Mapped[str] = mapped_column(String, nullable=False)
    title: Mapped[str] = mapped_column(String, nullable=False)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    tags: Mapped[str] = mapped_column(Text, nullable=False, default="[]")
    stats: Mapped[str] = mapped_column(Text, nullable=False, default="[]")
    likes: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    comments: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    image_url: Mapped[str | None] = mapped_column(String, nullable=True)
    map_image_url: Mapped[str | None] = mapped_column(String, nullable=True)
    location: Mapped[str | None] = mapped_column(String, nullable=True)
    exercises_count: Mapped[int | None] = mapped_column(Integer, nullable=True)
    created_at: Mapped[datetime] = mapped_column(DateTime, nullable=False, default=utcnow, index=True)

    user: Mapped[User] = relationship("User")


class Like(Base):
    """A user's like on a feed item. At most one per (user, feed item)."""

    __tablename__ = "likes"

    id: Mapped[str] = mapped_column(String, primary_key=True, default=_uuid)
    user_id: Mapped[str] = mapped_column(String, ForeignKey("users.id"), nullable=False, index=True)
    feed_item_id: Mapped[str] = mapped_column(String, ForeignKey("feed_items.id"), nullable=False, index=True)
    created_at: Mapped[datetime] = mapped_column(DateTime, nullable=False, default=utcnow)

    __table_args__ = (UniqueConstraint("user_id", "feed_item_id", name="uq_like_user_feed_item"),)


class Comment(Base):
    __tablename__ = "comments"

    id: Mapped[str] = mapped_column(String, primary_key=True, default=_uuid)
    user_id: Mapped[str] = mapped_column(String, ForeignKey("users.id"), nullable=False, index=True)
    feed_item_id: Mapped[str] = mapped_column(String, ForeignKey("feed_items.id"), nullable=False, index=True)
    content: Mapped[str] = mapped_column(Text, nullable=False)
    created_at: Mapped[datetime] = mapped_column(DateTime, nullable=False, default=utcnow)

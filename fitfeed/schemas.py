"""API contract schemas (Pydantic).

Field names are snake_case in Python and camelCase on the wire.
"""

from __future__ import annotations

from datetime import datetime
from typing import Literal

from pydantic import BaseModel, ConfigDict, EmailStr, Field
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, from_attributes=True)

    def to_json(self, **kwargs) -> dict:
        return self.model_dump(by_alias=True, mode="json", **kwargs)


# Requests


class RegisterRequest(CamelModel):
    email: EmailStr
    password: str
    name: str


class LoginRequest(CamelModel):
    email: EmailStr
    password: str


class StartWorkoutRequest(CamelModel):
    name: str | None = None
    type: str | None = None


class LogSetRequest(CamelModel):
    session_id: str
    exercise_id: str
    exercise_name: str
    order: int = Field(ge=0)
    weight: float = Field(default=0.0, ge=0)
    reps: int = Field(default=0, ge=0)
    completed: bool = False
    notes: str | None = None


class FinishWorkoutRequest(CamelModel):
    session_id: str
    post_to_feed: bool = True
    description: str | None = None
    distance: float | None = Field(default=None, ge=0)
    pace: str | None = None
    calories: int | None = Field(default=None, ge=0)
    location: str | None = None


class CommentRequest(CamelModel):
    content: str | None = None


# Responses


class UserSchema(CamelModel):
    id: str
    email: str
    name: str
    avatar: str | None
    total_workouts: int
    total_hours: float
    current_streak: int
    longest_streak: int
    created_at: datetime


class ExerciseSchema(CamelModel):
    id: str
    name: str
    muscle_group: str
    type: str
    image: str | None
    sets: int = Field(validation_alias="default_sets")
    reps: str = Field(validation_alias="default_reps")
    rest: int = Field(validation_alias="default_rest")


class WorkoutSetSchema(CamelModel):
    id: str
    session_id: str
    exercise_id: str
    exercise_name: str
    order: int
    weight: float
    reps: int
    completed: bool
    notes: str | None = None


class WorkoutSessionSchema(CamelModel):
    id: str
    user_id: str
    name: str
    type: str
    started_at: datetime
    finished_at: datetime | None
    duration: int | None
    total_volume: float
    total_sets: int
    total_reps: int
    distance: float | None = None
    pace: str | None = None
    calories: int | None = None
    location: str | None = None
    sets: list[WorkoutSetSchema] = Field(default_factory=list)


class FeedTagSchema(CamelModel):
    label: str
    type: Literal["duration", "intensity", "meta"]


class FeedStatSchema(CamelModel):
    label: str
    value: str
    unit: str | None = None


class FeedUserSchema(CamelModel):
    id: str
    name: str
    avatar: str = ""


class FeedItemSchema(CamelModel):
    id: str
    user: FeedUserSchema
    time_ago: str
    title: str
    tags: list[FeedTagSchema]
    description: str | None = None
    stats: list[FeedStatSchema]
    likes: int
    comments: int
    image: str | None = None
    map_image: str | None = None
    location: str | None = None
    exercises_count: int | None = None
    type: str
    is_liked: bool | None = None


class CommentSchema(CamelModel):
    id: str
    user_id: str
    feed_item_id: str
    content: str
    created_at: datetime


class ProfileStatsSchema(CamelModel):
    workouts: int
    hours: int
    streak: int
    volume: int


class RecentWorkoutSchema(CamelModel):
    id: str
    name: str
    date: str
    duration: str
    volume: str
    type: str
    location: str | None = None


class ProfileSchema(CamelModel):
    user: UserSchema
    stats: ProfileStatsSchema
    consistency: list[int | float]
    weekly_workouts: int
    recent_workouts: list[RecentWorkoutSchema]
    total_volume: int
    total_duration: int

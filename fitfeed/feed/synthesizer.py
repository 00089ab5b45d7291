"""Feed post synthesis from finished workout sessions.

Tags and stats are plain dataclasses in the domain and JSON text only in
the feed_items table (see dump_tags/load_tags and dump_stats/load_stats).
"""

from __future__ import annotations

import json
from collections import Counter
from collections.abc import Iterable
from dataclasses import asdict, dataclass, field
from typing import Literal

from loguru import logger
from sqlalchemy.orm import Session

from fitfeed.db.models import FeedItem, WorkoutSession, WorkoutSet
from fitfeed.utils.formatting import format_duration, format_number, format_one_decimal, round_half_up

TagKind = Literal["duration", "intensity", "meta"]

INTENSITY_BY_TYPE: dict[str, str] = {
    "lift": "STRENGTH",
    "run": "CARDIO",
    "circuit": "HIIT",
}

VOLUME_STAT_THRESHOLD = 1000


@dataclass(frozen=True)
class FeedTag:
    label: str
    kind: TagKind


@dataclass(frozen=True)
class FeedStat:
    label: str
    value: str
    unit: str | None = None


@dataclass
class FeedPost:
    """Display payload derived from a finished session."""

    tags: list[FeedTag] = field(default_factory=list)
    stats: list[FeedStat] = field(default_factory=list)
    exercises_count: int | None = None


def duration_tag(duration_seconds: int | None) -> FeedTag:
    return FeedTag(label=format_duration(duration_seconds), kind="duration")


def _top_exercise(completed_sets: list[WorkoutSet]) -> str | None:
    """Exercise name with the most completed sets; ties go to the first one logged."""
    counts = Counter(s.exercise_name for s in completed_sets)
    if not counts:
        return None
    # Counter preserves insertion order and max() keeps the first maximum.
    return max(counts, key=lambda name: counts[name])


def _lift_stats(total_volume: float, completed_sets: list[WorkoutSet]) -> list[FeedStat]:
    stats: list[FeedStat] = []
    top = _top_exercise(completed_sets)
    if top is not None:
        stats.append(FeedStat(label=top, value=str(round_half_up(total_volume)), unit="LBS"))
    if total_volume > VOLUME_STAT_THRESHOLD:
        stats.append(FeedStat(label="Volume", value=format_one_decimal(total_volume / 1000), unit="K LBS"))
    return stats


def _cardio_stats(distance: float | None, pace: str | None, calories: int | None) -> list[FeedStat]:
    stats: list[FeedStat] = []
    if distance:
        stats.append(FeedStat(label="Distance", value=format_number(distance), unit="km"))
    if pace:
        stats.append(FeedStat(label="Pace", value=pace, unit="/km"))
    if calories:
        stats.append(FeedStat(label="Cal", value=format_number(calories), unit="kcal"))
    return stats


def synthesize_post(workout: WorkoutSession, completed_sets: Iterable[WorkoutSet] | None = None) -> FeedPost | None:
    """Build tags/stats for a finished session.

    Args:
        workout: Finished session (duration and aggregates already set)
        completed_sets: Completed sets in logging order; defaults to the
            completed subset of workout.sets

    Returns:
        FeedPost, or None for unrecognized session types
    """
    intensity = INTENSITY_BY_TYPE.get(workout.type)
    if intensity is None:
        logger.info(f"[FEED] No feed post for unrecognized session type={workout.type!r} session_id={workout.id}")
        return None

    if completed_sets is None:
        completed_sets = [s for s in workout.sets if s.completed]
    sets = list(completed_sets)

    post = FeedPost(tags=[duration_tag(workout.duration), FeedTag(label=intensity, kind="intensity")])

    if workout.type == "lift":
        post.stats = _lift_stats(workout.total_volume or 0.0, sets)
        post.exercises_count = len({s.exercise_id for s in sets})
    else:
        post.stats = _cardio_stats(workout.distance, workout.pace, workout.calories)

    return post


def dump_tags(tags: list[FeedTag]) -> str:
    return json.dumps([{"label": t.label, "type": t.kind} for t in tags])


def load_tags(raw: str | None) -> list[FeedTag]:
    return [FeedTag(label=item["label"], kind=item["type"]) for item in json.loads(raw or "[]")]


def dump_stats(stats: list[FeedStat]) -> str:
    return json.dumps([{k: v for k, v in asdict(s).items() if v is not None} for s in stats])


def load_stats(raw: str | None) -> list[FeedStat]:
    return [FeedStat(label=item["label"], value=item["value"], unit=item.get("unit")) for item in json.loads(raw or "[]")]


def create_feed_item(session: Session, workout: WorkoutSession, description: str | None = None) -> FeedItem | None:
    """Persist a feed item for a finished session.

    Returns:
        The new FeedItem, or None if the session type gets no post
    """
    post = synthesize_post(workout)
    if post is None:
        return None

    feed_item = FeedItem(
        user_id=workout.user_id,
        session_id=workout.id,
        type=workout.type,
        title=workout.name,
        description=description,
        tags=dump_tags(post.tags),
        stats=dump_stats(post.stats),
        exercises_count=post.exercises_count,
        location=workout.location if workout.type != "lift" else None,
    )
    session.add(feed_item)
    session.flush()

    logger.info(f"[FEED] Created feed item id={feed_item.id} session_id={workout.id} type={workout.type}")
    return feed_item

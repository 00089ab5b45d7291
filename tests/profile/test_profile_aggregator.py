"""Unit tests for the profile aggregator."""

from datetime import date, datetime, timedelta

import pytest

from fitfeed.core.errors import NotFoundError
from fitfeed.db.models import WorkoutSession
from fitfeed.profile.aggregator import build_consistency, format_volume, get_profile

NOW = datetime(2024, 6, 15, 18, 0, 0)


def _finished(db_session, user, finished_at, **kwargs):
    values = {"name": "Workout", "type": "lift", "duration": 3600, "total_volume": 1000.0}
    values.update(kwargs)
    workout = WorkoutSession(
        user_id=user.id,
        started_at=finished_at - timedelta(seconds=values["duration"]),
        finished_at=finished_at,
        **values,
    )
    db_session.add(workout)
    db_session.flush()
    return workout


def test_consistency_is_oldest_first_with_today_last():
    today = date(2024, 6, 15)
    finished = [datetime(2024, 6, 15, 7, 0), datetime(2024, 5, 17, 20, 0), datetime(2024, 6, 10, 9, 0)]

    consistency = build_consistency(finished, today)

    assert len(consistency) == 30
    assert consistency[-1] == 1
    assert consistency[0] == 1
    assert consistency[-6] == 1
    assert consistency.count(1) == 3
    assert consistency.count(0.1) == 27


def test_consistency_without_workouts():
    assert build_consistency([], date(2024, 6, 15)) == [0.1] * 30


def test_format_volume():
    assert format_volume(WorkoutSession(type="lift", total_volume=12345.5)) == "12346 lbs"
    assert format_volume(WorkoutSession(type="run", distance=5.26)) == "5.3 mi"
    assert format_volume(WorkoutSession(type="circuit", distance=None)) == "0.0 mi"


def test_profile_for_unknown_user(db_session):
    with pytest.raises(NotFoundError):
        get_profile(db_session, "missing", now=NOW)


def test_profile_for_new_user(db_session, make_user):
    user = make_user(name="Rookie")

    profile = get_profile(db_session, user.id, now=NOW)

    assert profile.user.name == "Rookie"
    assert profile.stats.workouts == 0
    assert profile.stats.volume == 0
    assert profile.weekly_workouts == 0
    assert profile.recent_workouts == []
    assert profile.consistency == [0.1] * 30
    assert profile.total_duration == 0


def test_profile_rollups(db_session, make_user):
    user = make_user()
    user.total_workouts = 3
    user.total_hours = 2.5
    user.current_streak = 2
    _finished(db_session, user, NOW - timedelta(hours=2), name="Today Lift", total_volume=1500.0)
    _finished(db_session, user, NOW - timedelta(days=1, hours=1), name="Run", type="run", distance=8.04, total_volume=0.0)
    _finished(db_session, user, NOW - timedelta(days=20), name="Old Lift", total_volume=2000.0, duration=5400)
    db_session.add(WorkoutSession(user_id=user.id, name="Open", type="lift", started_at=NOW))
    db_session.flush()

    profile = get_profile(db_session, user.id, now=NOW)

    assert profile.stats.workouts == 3
    assert profile.stats.hours == 3
    assert profile.stats.streak == 2
    assert profile.stats.volume == 3500
    assert profile.total_volume == 3500
    assert profile.total_duration == 3600 + 3600 + 5400
    assert profile.weekly_workouts == 2
    assert profile.consistency.count(1) == 3

    recent = profile.recent_workouts
    assert [w.name for w in recent] == ["Today Lift", "Run", "Old Lift"]
    assert recent[0].date == "Today"
    assert recent[0].duration == "1h 0m"
    assert recent[0].volume == "1500 lbs"
    assert recent[1].date == "Yesterday"
    assert recent[1].volume == "8.0 mi"
    assert recent[2].date == "Sun, May 26"


def test_profile_lists_at_most_five_recent(db_session, make_user):
    user = make_user()
    for i in range(7):
        _finished(db_session, user, NOW - timedelta(days=i, hours=1), name=f"W{i}")

    profile = get_profile(db_session, user.id, now=NOW)

    assert [w.name for w in profile.recent_workouts] == ["W0", "W1", "W2", "W3", "W4"]
    assert profile.weekly_workouts == 7


def test_profile_json_uses_camel_case(db_session, make_user):
    user = make_user()

    payload = get_profile(db_session, user.id, now=NOW).to_json()

    assert set(payload) == {"user", "stats", "consistency", "weeklyWorkouts", "recentWorkouts", "totalVolume", "totalDuration"}
    assert payload["user"]["totalWorkouts"] == 0
    assert payload["consistency"][0] == 0.1

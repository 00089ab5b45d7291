"""Unit tests for the workout session lifecycle."""

from datetime import timedelta

import pytest

from fitfeed.core.errors import NotFoundError, ValidationError
from fitfeed.db.models import FeedItem, User, WorkoutSet
from fitfeed.workouts.service import (
    finish_workout,
    get_active_workout,
    get_workout_history,
    log_set,
    start_workout,
)


def _log(db_session, user, workout, exercise_id="bench", name="Bench Press", order=0, weight=100, reps=2, completed=True):
    return log_set(
        db_session,
        user_id=user.id,
        session_id=workout.id,
        exercise_id=exercise_id,
        exercise_name=name,
        order=order,
        weight=weight,
        reps=reps,
        completed=completed,
    )


def test_start_workout_zeroes_aggregates(db_session, make_user):
    user = make_user()

    workout = start_workout(db_session, user_id=user.id, name="Push Day", workout_type="lift")

    assert workout.id
    assert workout.finished_at is None
    assert workout.duration is None
    assert (workout.total_volume, workout.total_sets, workout.total_reps) == (0.0, 0, 0)


@pytest.mark.parametrize(
    ("name", "workout_type", "message"),
    [
        (None, "lift", "Name and type are required"),
        ("  ", "lift", "Name and type are required"),
        ("Leg Day", None, "Name and type are required"),
        ("Leg Day", "swim", "Type must be one of: lift, run, circuit"),
    ],
)
def test_start_workout_rejects_bad_input(db_session, make_user, name, workout_type, message):
    user = make_user()

    with pytest.raises(ValidationError) as exc_info:
        start_workout(db_session, user_id=user.id, name=name, workout_type=workout_type)

    assert exc_info.value.message == message
    assert exc_info.value.status_code == 400


def test_log_completed_set_updates_aggregates(db_session, make_user):
    user = make_user()
    workout = start_workout(db_session, user_id=user.id, name="Push", workout_type="lift")

    _log(db_session, user, workout, weight=100, reps=2)

    assert workout.total_volume == 200
    assert workout.total_sets == 1
    assert workout.total_reps == 2


def test_volume_sums_weight_times_reps(db_session, make_user):
    user = make_user()
    workout = start_workout(db_session, user_id=user.id, name="Push", workout_type="lift")

    _log(db_session, user, workout, order=0, weight=10, reps=10)
    _log(db_session, user, workout, order=1, weight=20, reps=5)

    assert workout.total_volume == 200
    assert workout.total_sets == 2
    assert workout.total_reps == 15


def test_incomplete_set_does_not_count(db_session, make_user):
    user = make_user()
    workout = start_workout(db_session, user_id=user.id, name="Push", workout_type="lift")

    _log(db_session, user, workout, completed=False)

    assert workout.total_sets == 0
    assert workout.total_volume == 0


def test_relogging_same_key_overwrites_set(db_session, make_user):
    user = make_user()
    workout = start_workout(db_session, user_id=user.id, name="Push", workout_type="lift")

    first = _log(db_session, user, workout, weight=100, reps=5)
    second = _log(db_session, user, workout, weight=110, reps=4)

    assert first.id == second.id
    assert db_session.query(WorkoutSet).filter_by(session_id=workout.id).count() == 1
    assert workout.total_volume == 440
    assert workout.total_reps == 4


def test_uncompleting_set_removes_it_from_totals(db_session, make_user):
    user = make_user()
    workout = start_workout(db_session, user_id=user.id, name="Push", workout_type="lift")
    _log(db_session, user, workout, order=0, weight=100, reps=5)
    _log(db_session, user, workout, order=1, weight=50, reps=10)

    _log(db_session, user, workout, order=0, weight=100, reps=5, completed=False)

    assert workout.total_volume == 500
    assert workout.total_sets == 1
    assert workout.total_reps == 10


def test_log_set_on_foreign_session_is_not_found(db_session, make_user):
    owner = make_user()
    stranger = make_user()
    workout = start_workout(db_session, user_id=owner.id, name="Push", workout_type="lift")

    with pytest.raises(NotFoundError):
        _log(db_session, stranger, workout)


def test_finish_workout_updates_user_and_posts(db_session, make_user):
    user = make_user()
    workout = start_workout(db_session, user_id=user.id, name="Push", workout_type="lift")
    workout.started_at = workout.started_at - timedelta(minutes=90)
    _log(db_session, user, workout, exercise_id="bench", name="Bench", order=0, weight=100, reps=5)
    _log(db_session, user, workout, exercise_id="squat", name="Squat", order=0, weight=200, reps=5)
    _log(db_session, user, workout, exercise_id="squat", name="Squat", order=1, weight=200, reps=5, completed=False)

    finished, feed_item = finish_workout(db_session, user_id=user.id, session_id=workout.id, description="Good one")

    assert finished.finished_at is not None
    assert finished.duration >= 90 * 60
    assert user.total_workouts == 1
    assert user.current_streak == 1
    assert user.longest_streak == 1
    assert user.total_hours == pytest.approx(finished.duration / 3600)

    assert feed_item is not None
    assert feed_item.session_id == workout.id
    assert feed_item.exercises_count == 2
    assert feed_item.description == "Good one"


def test_finish_without_feed_post(db_session, make_user):
    user = make_user()
    workout = start_workout(db_session, user_id=user.id, name="Easy Run", workout_type="run")

    _, feed_item = finish_workout(db_session, user_id=user.id, session_id=workout.id, post_to_feed=False)

    assert feed_item is None
    assert db_session.query(FeedItem).count() == 0


def test_finishing_twice_is_not_found_and_counts_once(db_session, make_user):
    user = make_user()
    workout = start_workout(db_session, user_id=user.id, name="Push", workout_type="lift")
    finish_workout(db_session, user_id=user.id, session_id=workout.id)

    with pytest.raises(NotFoundError) as exc_info:
        finish_workout(db_session, user_id=user.id, session_id=workout.id)

    assert exc_info.value.message == "Workout session not found or already finished"
    assert db_session.get(User, user.id).total_workouts == 1
    assert db_session.query(FeedItem).count() == 1


def test_log_set_on_finished_session_is_rejected(db_session, make_user):
    user = make_user()
    workout = start_workout(db_session, user_id=user.id, name="Push", workout_type="lift")
    finish_workout(db_session, user_id=user.id, session_id=workout.id)

    with pytest.raises(NotFoundError):
        _log(db_session, user, workout)


def test_streak_counts_consecutive_workouts(db_session, make_user):
    user = make_user()

    for _ in range(3):
        workout = start_workout(db_session, user_id=user.id, name="Daily", workout_type="circuit")
        finish_workout(db_session, user_id=user.id, session_id=workout.id)

    assert user.current_streak == 3
    assert user.longest_streak == 3
    assert user.total_workouts == 3


def test_run_details_are_recorded_on_finish(db_session, make_user):
    user = make_user()
    workout = start_workout(db_session, user_id=user.id, name="Morning Run", workout_type="run")

    finished, feed_item = finish_workout(
        db_session,
        user_id=user.id,
        session_id=workout.id,
        distance=5.2,
        pace="5:30",
        location="Central Park",
    )

    assert finished.distance == 5.2
    assert finished.pace == "5:30"
    assert feed_item.location == "Central Park"
    assert feed_item.exercises_count is None


def test_active_and_history(db_session, make_user):
    user = make_user()
    done = start_workout(db_session, user_id=user.id, name="Done", workout_type="lift")
    finish_workout(db_session, user_id=user.id, session_id=done.id)
    open_workout = start_workout(db_session, user_id=user.id, name="Open", workout_type="lift")

    active = get_active_workout(db_session, user.id)
    history = get_workout_history(db_session, user.id)

    assert active.id == open_workout.id
    assert [w.id for w in history] == [done.id]


def test_no_active_workout(db_session, make_user):
    user = make_user()

    assert get_active_workout(db_session, user.id) is None

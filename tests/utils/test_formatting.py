"""Tests for display formatting helpers."""

from datetime import datetime, timedelta

import pytest

from fitfeed.utils.formatting import (
    format_duration,
    format_number,
    format_one_decimal,
    format_relative_date,
    format_time_ago,
    round_half_up,
)

NOW = datetime(2024, 1, 10, 12, 0, 0)


@pytest.mark.parametrize(("value", "expected"), [(2.5, 3), (2.4, 2), (0, 0), (1199.5, 1200)])
def test_round_half_up(value, expected):
    assert round_half_up(value) == expected


@pytest.mark.parametrize(("value", "expected"), [(5.0, "5"), (5, "5"), (5.25, "5.25"), (21.1, "21.1")])
def test_format_number(value, expected):
    assert format_number(value) == expected


@pytest.mark.parametrize(("value", "expected"), [(1.25, "1.3"), (2.25, "2.3"), (1.2, "1.2"), (1.24, "1.2"), (12.0, "12.0")])
def test_format_one_decimal(value, expected):
    assert format_one_decimal(value) == expected


@pytest.mark.parametrize(
    ("seconds", "expected"),
    [(0, "0m"), (None, "0m"), (59, "0m"), (47 * 60, "47m"), (3600, "1h 0m"), (2 * 3600 + 5 * 60 + 30, "2h 5m")],
)
def test_format_duration(seconds, expected):
    assert format_duration(seconds) == expected


def test_relative_date_labels():
    assert format_relative_date(NOW - timedelta(hours=23), NOW) == "Today"
    assert format_relative_date(NOW - timedelta(hours=30), NOW) == "Yesterday"
    assert format_relative_date(datetime(2024, 1, 5, 9, 0), NOW) == "Fri, Jan 5"


def test_time_ago_labels():
    assert format_time_ago(NOW, NOW) == "0m ago"
    assert format_time_ago(NOW - timedelta(minutes=59), NOW) == "59m ago"
    assert format_time_ago(NOW - timedelta(hours=5, minutes=10), NOW) == "5h ago"
    assert format_time_ago(NOW - timedelta(days=3, hours=2), NOW) == "3d ago"

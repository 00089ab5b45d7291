"""Display formatting shared by the feed and profile views."""

from __future__ import annotations

import math
from datetime import datetime
from decimal import ROUND_HALF_UP, Decimal

SECONDS_PER_DAY = 86400


def round_half_up(value: float) -> int:
    """Round to the nearest integer, halves away from zero for positives (2.5 -> 3)."""
    return int(math.floor(value + 0.5))


def format_one_decimal(value: float) -> str:
    """One decimal place, halves rounded up (1.25 -> '1.3')."""
    return str(Decimal(str(value)).quantize(Decimal("0.1"), rounding=ROUND_HALF_UP))


def format_number(value: float | int) -> str:
    """Render a number without a trailing '.0' for whole values (5.0 -> '5', 5.25 -> '5.25')."""
    number = float(value)
    if number.is_integer():
        return str(int(number))
    return str(number)


def format_duration(seconds: int | float | None) -> str:
    """Format a duration as '{h}h {m}m', or '{m}m' when under an hour."""
    total_minutes = int((seconds or 0) // 60)
    hours, minutes = divmod(total_minutes, 60)
    if hours > 0:
        return f"{hours}h {minutes}m"
    return f"{minutes}m"


def format_relative_date(moment: datetime, now: datetime) -> str:
    """Label a past timestamp as 'Today', 'Yesterday' or e.g. 'Mon, Jan 5'.

    Days are whole 24h periods elapsed, not calendar boundaries.
    """
    days = math.floor((now - moment).total_seconds() / SECONDS_PER_DAY)
    if days == 0:
        return "Today"
    if days == 1:
        return "Yesterday"
    return f"{moment:%a}, {moment:%b} {moment.day}"


def format_time_ago(moment: datetime, now: datetime) -> str:
    """Compact age label: '5m ago', '3h ago', '2d ago'."""
    minutes = math.floor((now - moment).total_seconds() / 60)
    hours = math.floor(minutes / 60)
    days = math.floor(hours / 24)
    if minutes < 60:
        return f"{max(minutes, 0)}m ago"
    if hours < 24:
        return f"{hours}h ago"
    return f"{days}d ago"

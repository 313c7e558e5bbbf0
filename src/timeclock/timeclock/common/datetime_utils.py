from __future__ import annotations

import math
from datetime import datetime, time, timedelta

MINUTES_PER_DAY = 24 * 60


def now_local() -> datetime:
    """Current local time.

    Note: Wrapped so tests can patch/mocked easier.
    """
    return datetime.now()


def elapsed_ms(start: datetime, end: datetime) -> int:
    return int((end - start).total_seconds() * 1000)


def round_minutes(delta: timedelta) -> int:
    """Whole minutes in ``delta``, halves rounded up."""
    return int(math.floor(delta.total_seconds() / 60 + 0.5))


def to_wall_clock(value: datetime) -> str:
    """Format as HH:MM (24h)."""
    return value.strftime("%H:%M")


def parse_wall_clock(value: str) -> int:
    """Minutes since midnight for an ``HH:MM`` (or ``HH:MM:SS``) string."""
    parts = (value or "").strip().split(":")
    if len(parts) < 2:
        raise ValueError(f"Invalid wall-clock time: {value!r}")
    hours, minutes = int(parts[0]), int(parts[1])
    if not (0 <= hours < 24 and 0 <= minutes < 60):
        raise ValueError(f"Invalid wall-clock time: {value!r}")
    return hours * 60 + minutes


def wall_clock_span_minutes(start: str, end: str) -> int:
    """Minutes from ``start`` to ``end``; an end before the start wraps past midnight."""
    start_min = parse_wall_clock(start)
    end_min = parse_wall_clock(end)
    if end_min < start_min:
        return (MINUTES_PER_DAY - start_min) + end_min
    return end_min - start_min


def start_of_day(value: datetime) -> datetime:
    return datetime.combine(value.date(), time.min)


def end_of_day(value: datetime) -> datetime:
    return datetime.combine(value.date(), time.max)


def start_of_week(value: datetime) -> datetime:
    """Monday 00:00 of the week containing ``value``."""
    return start_of_day(value) - timedelta(days=value.weekday())


def start_of_month(value: datetime) -> datetime:
    return datetime.combine(value.date().replace(day=1), time.min)

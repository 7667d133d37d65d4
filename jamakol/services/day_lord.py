"""Weekday rulers under the two day-start conventions.

The sunrise convention keys the general chart; the fixed 06:00 clock
convention keys the planetary-hour (Jama Graha) tables. They disagree for
moments between 06:00 and sunrise (or between sunrise and 06:00), and both
are reported as-is.
"""

from __future__ import annotations

from datetime import date, datetime, timedelta
from typing import NamedTuple

from .vedic_day import VedicDay

FIXED_CLOCK_BOUNDARY_HOUR = 6

WEEKDAY_RULERS = {
    "Sunday": "Sun",
    "Monday": "Moon",
    "Tuesday": "Mars",
    "Wednesday": "Mercury",
    "Thursday": "Jupiter",
    "Friday": "Venus",
    "Saturday": "Saturn",
}

WEEKDAY_NAMES = ["Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday", "Sunday"]

# Indexed by ``date.weekday()`` (Monday == 0).
DAY_LORDS = [WEEKDAY_RULERS[name] for name in WEEKDAY_NAMES]


class DayLords(NamedTuple):
    sunrise: str
    fixed_clock: str


def weekday_name(day: date) -> str:
    return WEEKDAY_NAMES[day.weekday()]


def day_lord_for(day: date) -> str:
    return DAY_LORDS[day.weekday()]


def sunrise_day_lord(vedic_date: date) -> str:
    return day_lord_for(vedic_date)


def fixed_clock_day_lord(timestamp: datetime, boundary_hour: int = FIXED_CLOCK_BOUNDARY_HOUR) -> str:
    """Day lord with the day starting at ``boundary_hour`` on the wall clock."""

    day = timestamp.date()
    if timestamp.hour < boundary_hour:
        day -= timedelta(days=1)
    return day_lord_for(day)


def resolve_day_lords(vedic_day: VedicDay, timestamp: datetime) -> DayLords:
    return DayLords(
        sunrise=sunrise_day_lord(vedic_day.vedic_date),
        fixed_clock=fixed_clock_day_lord(timestamp),
    )

"""
Calendar windows for aggregation.

Windows are inclusive date ranges. Session dates are plain dates, so
comparing dates avoids the end-of-day millisecond games a timestamp
range would need.
"""

import calendar
from dataclasses import dataclass
from datetime import date, datetime, timedelta
from typing import Union


DateLike = Union[date, datetime]


@dataclass(frozen=True)
class DateWindow:
    """Inclusive [start, end] range of calendar days."""
    start: date
    end: date

    def contains(self, day: date) -> bool:
        return self.start <= day <= self.end


def _as_date(value: DateLike) -> date:
    if isinstance(value, datetime):
        return value.date()
    return value


def start_of_week(now: DateLike) -> date:
    """Monday of the week containing `now`."""
    today = _as_date(now)
    return today - timedelta(days=today.weekday())


def end_of_week(now: DateLike) -> date:
    """Sunday of the week containing `now`."""
    return start_of_week(now) + timedelta(days=6)


def start_of_month(now: DateLike) -> date:
    return _as_date(now).replace(day=1)


def end_of_month(now: DateLike) -> date:
    today = _as_date(now)
    last_day = calendar.monthrange(today.year, today.month)[1]
    return today.replace(day=last_day)


def start_of_year(now: DateLike) -> date:
    return _as_date(now).replace(month=1, day=1)


def week_window(now: DateLike) -> DateWindow:
    return DateWindow(start_of_week(now), end_of_week(now))


def month_window(now: DateLike) -> DateWindow:
    return DateWindow(start_of_month(now), end_of_month(now))


def year_to_date_window(now: DateLike) -> DateWindow:
    """From January 1st up to and including today."""
    return DateWindow(start_of_year(now), _as_date(now))


def months_back(now: DateLike, count: int) -> date:
    """First day of the month `count` calendar months before `now`'s month."""
    today = _as_date(now)
    index = today.year * 12 + (today.month - 1) - count
    return date(index // 12, index % 12 + 1, 1)


def percentage(part: int, whole: int, default: int = 0) -> int:
    """
    Whole-number percentage, rounding halves up.

    Returns `default` instead of dividing by zero.
    """
    if whole <= 0:
        return default
    return (200 * part + whole) // (2 * whole)

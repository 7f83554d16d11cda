"""
Timetable layout: interval arithmetic and the day grid.
"""

from .intervals import SessionInterval, format_clock, parse_clock, session_interval
from .layout import (
    ColumnSlot,
    ColumnStrategy,
    DayTimetable,
    LocationColumn,
    OverlapColumnLayout,
    SameStartLayout,
    SessionBlock,
    SessionRect,
    layout_day,
    layout_timetable,
    strategy_for,
)

__all__ = [
    "SessionInterval",
    "format_clock",
    "parse_clock",
    "session_interval",
    "ColumnSlot",
    "ColumnStrategy",
    "DayTimetable",
    "LocationColumn",
    "OverlapColumnLayout",
    "SameStartLayout",
    "SessionBlock",
    "SessionRect",
    "layout_day",
    "layout_timetable",
    "strategy_for",
]

"""
Day-relative time intervals.

Sessions store wall-clock strings. Everything that positions or compares
sessions works in minutes since local midnight instead.
"""

from dataclasses import dataclass

from ..models import Session


def parse_clock(value: str) -> int:
    """
    Convert "HH:MM" (or "HH:MM:SS", seconds ignored) to minutes since midnight.

    No validation beyond what int() does: "ab:cd" raises ValueError and
    that is left to the caller.
    """
    parts = value.split(":")
    hour = int(parts[0])
    minute = int(parts[1]) if len(parts) > 1 else 0
    return hour * 60 + minute


def format_clock(minutes: int) -> str:
    """Inverse of parse_clock for whole minutes."""
    return f"{minutes // 60:02d}:{minutes % 60:02d}"


@dataclass(frozen=True)
class SessionInterval:
    """
    A session's [start, end) span in day-relative minutes.

    end > start is assumed. Zero or negative durations are a data
    problem upstream and are not corrected here.
    """
    start_minutes: int
    end_minutes: int

    @property
    def duration_minutes(self) -> int:
        return self.end_minutes - self.start_minutes

    def offset_from(self, origin_minutes: int) -> int:
        """Minutes from the grid origin to the start. Negative if earlier."""
        return self.start_minutes - origin_minutes

    def overlaps(self, other: "SessionInterval") -> bool:
        # Half-open: a session ending at 10:00 does not overlap one starting at 10:00
        return self.start_minutes < other.end_minutes and other.start_minutes < self.end_minutes


def session_interval(session: Session) -> SessionInterval:
    return SessionInterval(
        start_minutes=parse_clock(session.start_time),
        end_minutes=parse_clock(session.end_time),
    )

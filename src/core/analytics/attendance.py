"""
Attendance statistics for swimmer profiles and squad rosters.

A record only exists for sessions where a coach completed the register,
so "total" means registers taken, not sessions scheduled. A session
nobody took attendance for is not an absence.

Whether a record counts as attended is decided by one rule,
AttendanceStatus.is_attended, shared with the distance aggregator.
Punctuality is a separate classification over attended records only.
"""

import logging
from dataclasses import dataclass
from typing import Iterable, Optional

from ..models import Attendance, Punctuality, Session, Swimmer
from .windows import (
    DateLike,
    DateWindow,
    month_window,
    months_back,
    percentage,
    week_window,
)

logger = logging.getLogger(__name__)


WEEKDAY_LABELS = ("Mon", "Tue", "Wed", "Thu", "Fri", "Sat", "Sun")
MONTH_LABELS = (
    "Jan", "Feb", "Mar", "Apr", "May", "Jun",
    "Jul", "Aug", "Sep", "Oct", "Nov", "Dec",
)
DEFAULT_TREND_MONTHS = 6


@dataclass(frozen=True)
class RateStats:
    """Attended out of total for one bucket (a window, a weekday, a month)."""
    label: str
    attended: int
    total: int

    @property
    def percentage(self) -> int:
        return percentage(self.attended, self.total)


@dataclass(frozen=True)
class AttendanceStats:
    """Everything the swimmer profile shows about attendance."""
    swimmer_id: str
    attended: int
    total: int
    this_week: RateStats
    this_month: RateStats
    on_time_count: int
    late_count: int
    very_late_count: int
    by_weekday: tuple[RateStats, ...]
    by_month: tuple[RateStats, ...]

    @property
    def overall_percentage(self) -> int:
        return percentage(self.attended, self.total)

    @property
    def on_time_percentage(self) -> int:
        # No attended sessions means nothing was late
        return percentage(self.on_time_count, self.attended, default=100)


def _rate(label: str, records: Iterable[Attendance]) -> RateStats:
    records = list(records)
    return RateStats(
        label=label,
        attended=sum(1 for r in records if r.is_attended),
        total=len(records),
    )


def swimmer_records(swimmer_id: str, attendance: Iterable[Attendance]) -> list[Attendance]:
    return [a for a in attendance if a.swimmer_id == swimmer_id]


def attendance_stats(
    swimmer_id: str,
    sessions: Iterable[Session],
    attendance: Iterable[Attendance],
    now: DateLike,
    trend_months: int = DEFAULT_TREND_MONTHS,
) -> AttendanceStats:
    """
    Compute a swimmer's attendance statistics as of `now`.

    Windowed figures (week, month, weekday, trailing months) use the date
    of each record's session. Records pointing at a session that is not
    in `sessions` still count toward the overall figures but can't be
    placed in any window.
    """
    records = swimmer_records(swimmer_id, attendance)
    session_dates = {session.id: session.date for session in sessions}
    dated = [
        (record, session_dates[record.session_id])
        for record in records
        if record.session_id in session_dates
    ]

    def within(window: DateWindow) -> list[Attendance]:
        return [record for record, day in dated if window.contains(day)]

    attended_records = [r for r in records if r.is_attended]
    late_count = sum(1 for r in attended_records if r.punctuality is Punctuality.LATE)
    very_late_count = sum(1 for r in attended_records if r.punctuality is Punctuality.VERY_LATE)

    by_weekday = tuple(
        _rate(label, (record for record, day in dated if day.weekday() == index))
        for index, label in enumerate(WEEKDAY_LABELS)
    )

    by_month = []
    for offset in range(trend_months - 1, -1, -1):
        month_start = months_back(now, offset)
        by_month.append(_rate(MONTH_LABELS[month_start.month - 1], within(month_window(month_start))))

    if len(dated) < len(records):
        logger.debug(
            "Attendance records reference unknown sessions",
            extra={"swimmer_id": swimmer_id, "undated": len(records) - len(dated)},
        )

    return AttendanceStats(
        swimmer_id=swimmer_id,
        attended=len(attended_records),
        total=len(records),
        this_week=_rate("This week", within(week_window(now))),
        this_month=_rate("This month", within(month_window(now))),
        on_time_count=len(attended_records) - late_count - very_late_count,
        late_count=late_count,
        very_late_count=very_late_count,
        by_weekday=by_weekday,
        by_month=tuple(by_month),
    )


# ---------------------------------------------------------------------------
# Squad roster and leaderboard
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class SwimmerAttendance:
    """One row of the roster: a swimmer and their overall attendance."""
    swimmer: Swimmer
    attended: int
    total: int

    @property
    def percentage(self) -> int:
        return percentage(self.attended, self.total)


@dataclass(frozen=True)
class AttendanceRanking:
    """Roster rows ordered best to worst, with the dashboard highlights."""
    ranked: tuple[SwimmerAttendance, ...]
    top: tuple[SwimmerAttendance, ...]
    bottom: tuple[SwimmerAttendance, ...]
    average_percentage: int


def _matches_name(swimmer: Swimmer, term: str) -> bool:
    return (
        term in swimmer.first_name.lower()
        or term in swimmer.last_name.lower()
        or term in swimmer.full_name.lower()
    )


def roster_attendance(
    swimmers: Iterable[Swimmer],
    attendance: Iterable[Attendance],
    squad_ids: Optional[Iterable[str]] = None,
    name_query: Optional[str] = None,
) -> list[SwimmerAttendance]:
    """
    Overall attendance for each swimmer, sorted by name.

    `squad_ids` restricts to those squads; `name_query` keeps swimmers
    whose first, last or full name contains it (case-insensitive).
    """
    attendance = list(attendance)
    selected = list(swimmers)

    if squad_ids is not None:
        wanted = set(squad_ids)
        selected = [s for s in selected if s.squad_id in wanted]

    term = (name_query or "").strip().lower()
    if term:
        selected = [s for s in selected if _matches_name(s, term)]

    selected.sort(key=lambda s: s.full_name.casefold())

    rows = []
    for swimmer in selected:
        rate = _rate(swimmer.full_name, swimmer_records(swimmer.id, attendance))
        rows.append(SwimmerAttendance(swimmer=swimmer, attended=rate.attended, total=rate.total))
    return rows


def rank_by_attendance(rows: Iterable[SwimmerAttendance], podium: int = 3) -> AttendanceRanking:
    """
    Order roster rows by percentage, best first.

    Ties keep roster (name) order. `bottom` lists the lowest rows worst
    first.
    """
    ranked = sorted(rows, key=lambda row: row.percentage, reverse=True)
    count = len(ranked)
    average = 0
    if count:
        total = sum(row.percentage for row in ranked)
        average = (2 * total + count) // (2 * count)

    return AttendanceRanking(
        ranked=tuple(ranked),
        top=tuple(ranked[:podium]),
        bottom=tuple(reversed(ranked[-podium:])) if count else (),
        average_percentage=average,
    )

"""
Training distance totals.

Distance belongs to the session, not the swimmer: a swimmer who
attended a 4km session swam 4km. Eligibility uses the same attended
rule as the attendance statistics.
"""

from dataclasses import dataclass, field
from typing import Iterable

from ..models import Attendance, DistanceBreakdown, Session, StrokeBreakdown
from .windows import DateLike, DateWindow, month_window, week_window, year_to_date_window


@dataclass(frozen=True)
class DistanceStats:
    """Kilometers swum in the current week, month and year to date."""
    this_week_km: float
    this_month_km: float
    this_year_km: float


def attended_sessions(
    swimmer_id: str,
    sessions: Iterable[Session],
    attendance: Iterable[Attendance],
) -> list[Session]:
    """Sessions the swimmer attended, each once, in `sessions` order."""
    attended_ids = {
        record.session_id
        for record in attendance
        if record.swimmer_id == swimmer_id and record.is_attended
    }
    return [session for session in sessions if session.id in attended_ids]


def _kilometers(sessions: Iterable[Session], window: DateWindow) -> float:
    meters = sum(s.distance_meters for s in sessions if window.contains(s.date))
    return meters / 1000


def distance_stats(
    swimmer_id: str,
    sessions: Iterable[Session],
    attendance: Iterable[Attendance],
    now: DateLike,
) -> DistanceStats:
    """
    Sum attended session distance into week/month/year-to-date buckets.

    Sessions without a distance breakdown contribute nothing.
    """
    attended = attended_sessions(swimmer_id, sessions, attendance)
    return DistanceStats(
        this_week_km=_kilometers(attended, week_window(now)),
        this_month_km=_kilometers(attended, month_window(now)),
        this_year_km=_kilometers(attended, year_to_date_window(now)),
    )


# ---------------------------------------------------------------------------
# Squad weekly volume
# ---------------------------------------------------------------------------

STROKE_FIELDS = {
    "freestyle": "front_crawl",
    "backstroke": "backstroke",
    "breaststroke": "breaststroke",
    "butterfly": "butterfly",
    "individual_medley": "individual_medley",
}

WORK_TYPES = ("swim", "kick", "drill", "pull")


@dataclass
class SquadVolume:
    """A squad's planned meters this week, split by stroke and by kind of work."""
    total_m: int = 0
    by_stroke: dict[str, int] = field(default_factory=lambda: dict.fromkeys(STROKE_FIELDS, 0))
    by_type: dict[str, int] = field(default_factory=lambda: dict.fromkeys(WORK_TYPES, 0))
    session_count: int = 0

    def add(self, distance: DistanceBreakdown) -> None:
        self.total_m += distance.total or 0
        for stroke, attribute in STROKE_FIELDS.items():
            breakdown: StrokeBreakdown = getattr(distance, attribute)
            self.by_stroke[stroke] += breakdown.total
            for work_type in WORK_TYPES:
                self.by_type[work_type] += getattr(breakdown, work_type)


def squad_week_volume(sessions: Iterable[Session], squad_id: str, now: DateLike) -> SquadVolume:
    """
    Total the current week's sessions for one squad.

    Counts what was programmed, regardless of who turned up. No1 (own
    best stroke) work is in the total but in neither split, because it
    isn't tied to one stroke.
    """
    window = week_window(now)
    volume = SquadVolume()
    for session in sessions:
        if session.squad_id != squad_id or not window.contains(session.date):
            continue
        volume.session_count += 1
        if session.distance is not None:
            volume.add(session.distance)
    return volume

"""
Domain models for squad training sessions and attendance.

These models mirror the rows the coaching app stores, but they have no
dependency on the database, the API, or any framework. Everything in the
core works on snapshots of these objects handed in by the caller.
"""

from dataclasses import dataclass, field
from datetime import date
from enum import Enum
from typing import Optional


class SessionFocus(Enum):
    """Training emphasis a coach attaches to a session."""
    AEROBIC_CAPACITY = "Aerobic capacity"
    ANAEROBIC_CAPACITY = "Anaerobic capacity"
    SPEED = "Speed"
    TECHNIQUE = "Technique"
    RECOVERY = "Recovery"
    STARTS_AND_TURNS = "Starts & turns"


class AttendanceStatus(Enum):
    """
    Normalized attendance status.

    Coaches have recorded status in a few spellings over time
    ("Present", "present", "1st half only", "first_half_only"...).
    Everything is folded into these values before any counting happens.
    """
    PRESENT = "present"
    FIRST_HALF_ONLY = "first_half_only"
    SECOND_HALF_ONLY = "second_half_only"
    ABSENT = "absent"
    UNKNOWN = "unknown"

    @property
    def is_attended(self) -> bool:
        """The one rule for "this swimmer trained in this session"."""
        return self is AttendanceStatus.PRESENT


class Punctuality(Enum):
    """How on time an attending swimmer was."""
    ON_TIME = "on_time"
    LATE = "late"
    VERY_LATE = "very_late"


_STATUS_ALIASES = {
    "present": AttendanceStatus.PRESENT,
    "late": AttendanceStatus.PRESENT,
    "very_late": AttendanceStatus.PRESENT,
    "first_half_only": AttendanceStatus.FIRST_HALF_ONLY,
    "1st_half_only": AttendanceStatus.FIRST_HALF_ONLY,
    "second_half_only": AttendanceStatus.SECOND_HALF_ONLY,
    "2nd_half_only": AttendanceStatus.SECOND_HALF_ONLY,
    "absent": AttendanceStatus.ABSENT,
}

_LEGACY_PUNCTUALITY = {
    "late": Punctuality.LATE,
    "very_late": Punctuality.VERY_LATE,
}


def _status_key(raw: Optional[str]) -> str:
    if not raw:
        return ""
    return "_".join(raw.strip().lower().replace("-", " ").replace("_", " ").split())


def normalize_status(raw: Optional[str]) -> AttendanceStatus:
    """
    Fold a raw status string into an AttendanceStatus.

    Matching ignores case and treats spaces, hyphens and underscores
    the same. Legacy "late"/"very_late" statuses count as present;
    their lateness is carried by classify_punctuality instead.
    """
    return _STATUS_ALIASES.get(_status_key(raw), AttendanceStatus.UNKNOWN)


def classify_punctuality(notes: Optional[str], raw_status: Optional[str] = None) -> Punctuality:
    """
    Work out punctuality from the free-text notes.

    Notes are the primary source ("Late", "very late - traffic").
    "very late" wins over "late". Legacy statuses that encoded lateness
    are used only when the notes say nothing.
    """
    text = (notes or "").lower()
    if "very late" in text:
        return Punctuality.VERY_LATE
    if "late" in text:
        return Punctuality.LATE
    return _LEGACY_PUNCTUALITY.get(_status_key(raw_status), Punctuality.ON_TIME)


@dataclass(frozen=True)
class StrokeBreakdown:
    """Meters of one stroke split by kind of work."""
    swim: int = 0
    drill: int = 0
    kick: int = 0
    pull: int = 0

    @property
    def total(self) -> int:
        return self.swim + self.drill + self.kick + self.pull


@dataclass(frozen=True)
class DistanceBreakdown:
    """
    Recorded distance for a session.

    `total` is precomputed by whoever wrote the session and is what the
    aggregators sum. The per-stroke breakdowns feed the squad volume view.
    """
    total: int = 0
    front_crawl: StrokeBreakdown = field(default_factory=StrokeBreakdown)
    backstroke: StrokeBreakdown = field(default_factory=StrokeBreakdown)
    breaststroke: StrokeBreakdown = field(default_factory=StrokeBreakdown)
    butterfly: StrokeBreakdown = field(default_factory=StrokeBreakdown)
    individual_medley: StrokeBreakdown = field(default_factory=StrokeBreakdown)
    no1: StrokeBreakdown = field(default_factory=StrokeBreakdown)


@dataclass(frozen=True)
class Squad:
    id: str
    name: str
    color: str = "#3B82F6"


@dataclass(frozen=True)
class Coach:
    id: str
    name: str


@dataclass(frozen=True)
class Location:
    """A pool. Layout is computed per location per day."""
    id: str
    name: str


@dataclass(frozen=True)
class Swimmer:
    id: str
    first_name: str
    last_name: str
    squad_id: str
    date_of_birth: Optional[date] = None

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}"


@dataclass(frozen=True)
class Session:
    """
    A scheduled training session.

    Times are local wall-clock strings ("HH:MM"). They are kept as
    strings here and parsed by the interval model, so a bad value fails
    where it is used rather than when the snapshot is built.
    """
    id: str
    date: date
    start_time: str
    end_time: str
    squad_id: str
    location_id: str
    focus: str = SessionFocus.AEROBIC_CAPACITY.value
    content: Optional[str] = None
    content_html: Optional[str] = None
    distance: Optional[DistanceBreakdown] = None
    lead_coach_id: Optional[str] = None
    second_coach_id: Optional[str] = None
    helper_id: Optional[str] = None
    set_writer_id: Optional[str] = None

    @property
    def distance_meters(self) -> int:
        if self.distance is None:
            return 0
        return self.distance.total or 0

    @property
    def coach_ids(self) -> list[Optional[str]]:
        """Coach role ids in display order: lead, second, helper, set writer."""
        return [
            self.lead_coach_id,
            self.second_coach_id,
            self.helper_id,
            self.set_writer_id,
        ]


@dataclass(frozen=True)
class Attendance:
    """
    One swimmer's attendance at one session.

    `status` keeps the raw string as recorded. Use the `normalized_status`
    and `punctuality` properties for anything that counts.
    """
    id: str
    session_id: str
    swimmer_id: str
    status: str
    notes: Optional[str] = None

    @property
    def normalized_status(self) -> AttendanceStatus:
        return normalize_status(self.status)

    @property
    def is_attended(self) -> bool:
        return self.normalized_status.is_attended

    @property
    def punctuality(self) -> Punctuality:
        return classify_punctuality(self.notes, self.status)

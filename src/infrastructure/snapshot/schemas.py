"""
Inbound schemas for coaching data snapshots.

Snapshots arrive as JSON exported from the coaching app (camelCase keys,
"distanceBreakdown", "Present"/"1st half only" statuses). These pydantic
models validate that shape and translate it into the core's domain
models. Time strings are checked here so the core can assume
well-formed "HH:MM" values.
"""

import re
from dataclasses import dataclass, field
from datetime import date
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator
from pydantic.alias_generators import to_camel

from ...core.models import (
    Attendance,
    Coach,
    DistanceBreakdown,
    Location,
    Session,
    Squad,
    StrokeBreakdown,
    Swimmer,
)
from ...core.timetable.intervals import parse_clock


CLOCK_PATTERN = re.compile(r"^([01]?\d|2[0-3]):[0-5]\d(:[0-5]\d)?$")


class SnapshotModel(BaseModel):
    """Base for snapshot rows: accepts camelCase or snake_case keys, ignores extras."""
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="ignore",
    )


class StrokeBreakdownIn(SnapshotModel):
    swim: int = Field(default=0, ge=0)
    drill: int = Field(default=0, ge=0)
    kick: int = Field(default=0, ge=0)
    pull: int = Field(default=0, ge=0)

    def to_domain(self) -> StrokeBreakdown:
        return StrokeBreakdown(swim=self.swim, drill=self.drill, kick=self.kick, pull=self.pull)


class DistanceBreakdownIn(SnapshotModel):
    """Session distance: precomputed total plus per-stroke splits (meters)."""
    total: int = Field(default=0, ge=0, description="Total meters for the session")
    front_crawl: StrokeBreakdownIn = Field(default_factory=StrokeBreakdownIn, alias="frontCrawlBreakdown")
    backstroke: StrokeBreakdownIn = Field(default_factory=StrokeBreakdownIn, alias="backstrokeBreakdown")
    breaststroke: StrokeBreakdownIn = Field(default_factory=StrokeBreakdownIn, alias="breaststrokeBreakdown")
    butterfly: StrokeBreakdownIn = Field(default_factory=StrokeBreakdownIn, alias="butterflyBreakdown")
    individual_medley: StrokeBreakdownIn = Field(
        default_factory=StrokeBreakdownIn, alias="individualMedleyBreakdown"
    )
    no1: StrokeBreakdownIn = Field(default_factory=StrokeBreakdownIn, alias="no1Breakdown")

    def to_domain(self) -> DistanceBreakdown:
        return DistanceBreakdown(
            total=self.total,
            front_crawl=self.front_crawl.to_domain(),
            backstroke=self.backstroke.to_domain(),
            breaststroke=self.breaststroke.to_domain(),
            butterfly=self.butterfly.to_domain(),
            individual_medley=self.individual_medley.to_domain(),
            no1=self.no1.to_domain(),
        )


class SessionIn(SnapshotModel):
    """A training session row."""
    id: str
    date: date
    start_time: str = Field(description="Local start time, HH:MM")
    end_time: str = Field(description="Local end time, HH:MM")
    squad_id: str
    location_id: str
    focus: str = "Aerobic capacity"
    content: Optional[str] = None
    content_html: Optional[str] = None
    distance: Optional[DistanceBreakdownIn] = Field(default=None, alias="distanceBreakdown")
    lead_coach_id: Optional[str] = None
    second_coach_id: Optional[str] = None
    helper_id: Optional[str] = None
    set_writer_id: Optional[str] = None

    @field_validator("start_time", "end_time")
    @classmethod
    def check_clock(cls, value: str) -> str:
        if not CLOCK_PATTERN.match(value):
            raise ValueError(f"'{value}' is not a valid HH:MM time")
        return value

    @model_validator(mode="after")
    def check_duration(self) -> "SessionIn":
        if parse_clock(self.end_time) <= parse_clock(self.start_time):
            raise ValueError(
                f"Session {self.id} must end after it starts "
                f"({self.start_time} - {self.end_time})"
            )
        return self

    def to_domain(self) -> Session:
        return Session(
            id=self.id,
            date=self.date,
            start_time=self.start_time,
            end_time=self.end_time,
            squad_id=self.squad_id,
            location_id=self.location_id,
            focus=self.focus,
            content=self.content,
            content_html=self.content_html,
            distance=self.distance.to_domain() if self.distance else None,
            lead_coach_id=self.lead_coach_id,
            second_coach_id=self.second_coach_id,
            helper_id=self.helper_id,
            set_writer_id=self.set_writer_id,
        )


class SquadIn(SnapshotModel):
    id: str
    name: str
    color: str = "#3B82F6"

    def to_domain(self) -> Squad:
        return Squad(id=self.id, name=self.name, color=self.color)


class CoachIn(SnapshotModel):
    """Coach row. `name` is built from first/last name when not given."""
    id: str
    name: str = ""
    first_name: str = ""
    last_name: str = ""

    def to_domain(self) -> Coach:
        name = self.name or f"{self.first_name} {self.last_name}".strip()
        return Coach(id=self.id, name=name)


class LocationIn(SnapshotModel):
    id: str
    name: str

    def to_domain(self) -> Location:
        return Location(id=self.id, name=self.name)


class SwimmerIn(SnapshotModel):
    id: str
    first_name: str
    last_name: str
    squad_id: str
    date_of_birth: Optional[date] = None

    def to_domain(self) -> Swimmer:
        return Swimmer(
            id=self.id,
            first_name=self.first_name,
            last_name=self.last_name,
            squad_id=self.squad_id,
            date_of_birth=self.date_of_birth,
        )


class AttendanceIn(SnapshotModel):
    """Attendance row. Status is kept raw; the core normalizes it."""
    id: str
    session_id: str
    swimmer_id: str
    status: str
    notes: Optional[str] = None

    def to_domain(self) -> Attendance:
        return Attendance(
            id=self.id,
            session_id=self.session_id,
            swimmer_id=self.swimmer_id,
            status=self.status,
            notes=self.notes,
        )


@dataclass
class CoachingSnapshot:
    """Domain objects for one read of the coaching data."""
    sessions: list[Session] = field(default_factory=list)
    squads: list[Squad] = field(default_factory=list)
    coaches: list[Coach] = field(default_factory=list)
    locations: list[Location] = field(default_factory=list)
    swimmers: list[Swimmer] = field(default_factory=list)
    attendance: list[Attendance] = field(default_factory=list)


class SnapshotIn(SnapshotModel):
    """A full snapshot as exported by the coaching app."""
    sessions: list[SessionIn] = Field(default_factory=list)
    squads: list[SquadIn] = Field(default_factory=list)
    coaches: list[CoachIn] = Field(default_factory=list)
    locations: list[LocationIn] = Field(default_factory=list)
    swimmers: list[SwimmerIn] = Field(default_factory=list)
    attendance: list[AttendanceIn] = Field(default_factory=list)

    def to_domain(self) -> CoachingSnapshot:
        return CoachingSnapshot(
            sessions=[s.to_domain() for s in self.sessions],
            squads=[s.to_domain() for s in self.squads],
            coaches=[c.to_domain() for c in self.coaches],
            locations=[loc.to_domain() for loc in self.locations],
            swimmers=[s.to_domain() for s in self.swimmers],
            attendance=[a.to_domain() for a in self.attendance],
        )

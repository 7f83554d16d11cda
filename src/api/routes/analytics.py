"""
Swimmer and squad analytics API endpoints.

Backs the swimmer profile (attendance and distance cards), the squad
roster, and the dashboard's weekly volume panel. Statistics are
recomputed from the payload on every call and never stored.

If `now` is omitted the server's current local time is used.
"""

import logging
from datetime import datetime
from typing import Optional

from fastapi import APIRouter, status
from pydantic import BaseModel, Field

from ...core.analytics.attendance import (
    AttendanceStats,
    RateStats,
    SwimmerAttendance,
    attendance_stats,
    rank_by_attendance,
    roster_attendance,
)
from ...core.analytics.distance import distance_stats, squad_week_volume
from ...infrastructure.snapshot.schemas import AttendanceIn, SessionIn, SwimmerIn
from ..dependencies import NowDep, SettingsDep

logger = logging.getLogger(__name__)

router = APIRouter()


# ---------------------------------------------------------------------------
# Request/Response Models
# ---------------------------------------------------------------------------

class SwimmerStatsRequest(BaseModel):
    """Sessions and attendance to compute one swimmer's figures from."""
    sessions: list[SessionIn] = Field(
        default_factory=list,
        description="Sessions referenced by the attendance records (for dates and distance)"
    )
    attendance: list[AttendanceIn] = Field(
        default_factory=list,
        description="Attendance records; other swimmers' records are ignored"
    )
    now: Optional[datetime] = Field(
        default=None,
        description="Reference instant for week/month/year windows"
    )


class RateResponse(BaseModel):
    label: str
    attended: int
    total: int
    percentage: int

    @classmethod
    def from_rate(cls, rate: RateStats) -> "RateResponse":
        return cls(
            label=rate.label,
            attended=rate.attended,
            total=rate.total,
            percentage=rate.percentage,
        )


class AttendanceStatsResponse(BaseModel):
    """Attendance card for a swimmer profile."""
    swimmer_id: str
    attended: int = Field(description="Registers marked present")
    total: int = Field(description="Registers taken")
    overall_percentage: int
    this_week: RateResponse
    this_month: RateResponse
    on_time_count: int
    late_count: int
    very_late_count: int
    on_time_percentage: int = Field(description="Share of attended sessions arrived on time")
    by_weekday: list[RateResponse] = Field(description="Monday to Sunday")
    by_month: list[RateResponse] = Field(description="Oldest month first, current month last")

    @classmethod
    def from_stats(cls, stats: AttendanceStats) -> "AttendanceStatsResponse":
        return cls(
            swimmer_id=stats.swimmer_id,
            attended=stats.attended,
            total=stats.total,
            overall_percentage=stats.overall_percentage,
            this_week=RateResponse.from_rate(stats.this_week),
            this_month=RateResponse.from_rate(stats.this_month),
            on_time_count=stats.on_time_count,
            late_count=stats.late_count,
            very_late_count=stats.very_late_count,
            on_time_percentage=stats.on_time_percentage,
            by_weekday=[RateResponse.from_rate(r) for r in stats.by_weekday],
            by_month=[RateResponse.from_rate(r) for r in stats.by_month],
        )


class DistanceStatsResponse(BaseModel):
    swimmer_id: str
    this_week_km: float
    this_month_km: float
    this_year_km: float


class RosterRequest(BaseModel):
    swimmers: list[SwimmerIn] = Field(default_factory=list)
    attendance: list[AttendanceIn] = Field(default_factory=list)
    squad_ids: Optional[list[str]] = Field(
        default=None,
        description="Only include swimmers in these squads"
    )
    name_query: Optional[str] = Field(
        default=None,
        description="Case-insensitive filter on first, last or full name"
    )


class RosterRow(BaseModel):
    swimmer_id: str
    name: str
    squad_id: str
    attended: int
    total: int
    percentage: int

    @classmethod
    def from_row(cls, row: SwimmerAttendance) -> "RosterRow":
        return cls(
            swimmer_id=row.swimmer.id,
            name=row.swimmer.full_name,
            squad_id=row.swimmer.squad_id,
            attended=row.attended,
            total=row.total,
            percentage=row.percentage,
        )


class RosterResponse(BaseModel):
    """Roster sorted by name, plus the dashboard leaderboard."""
    swimmers: list[RosterRow] = Field(description="Sorted by name")
    top: list[RosterRow] = Field(description="Best attendance first")
    bottom: list[RosterRow] = Field(description="Worst attendance first")
    average_percentage: int


class SquadVolumeRequest(BaseModel):
    sessions: list[SessionIn] = Field(default_factory=list)
    now: Optional[datetime] = None


class SquadVolumeResponse(BaseModel):
    squad_id: str
    session_count: int
    total_m: int
    by_stroke: dict[str, int]
    by_type: dict[str, int]


# ---------------------------------------------------------------------------
# Endpoints
# ---------------------------------------------------------------------------

@router.post(
    "/swimmers/{swimmer_id}/attendance",
    response_model=AttendanceStatsResponse,
    status_code=status.HTTP_200_OK,
    summary="Swimmer attendance statistics",
    description="Attendance rate, punctuality, weekday breakdown and monthly trend",
)
async def get_attendance_stats(
    swimmer_id: str,
    request: SwimmerStatsRequest,
    settings: SettingsDep,
    now: NowDep,
) -> AttendanceStatsResponse:
    """
    Compute the attendance card for one swimmer.

    A swimmer with no records gets zeros everywhere and a 100% on-time
    rate; the client renders that as its empty state.
    """
    reference = request.now or now

    stats = attendance_stats(
        swimmer_id,
        sessions=[s.to_domain() for s in request.sessions],
        attendance=[a.to_domain() for a in request.attendance],
        now=reference,
        trend_months=settings.trend_months,
    )

    logger.info(
        "Computed attendance stats",
        extra={
            "swimmer_id": swimmer_id,
            "records": stats.total,
            "now": reference.isoformat(),
        }
    )

    return AttendanceStatsResponse.from_stats(stats)


@router.post(
    "/swimmers/{swimmer_id}/distance",
    response_model=DistanceStatsResponse,
    status_code=status.HTTP_200_OK,
    summary="Swimmer distance totals",
    description="Kilometers swum this week, this month and this year",
)
async def get_distance_stats(
    swimmer_id: str,
    request: SwimmerStatsRequest,
    now: NowDep,
) -> DistanceStatsResponse:
    """Sum the distance of sessions the swimmer attended."""
    reference = request.now or now

    stats = distance_stats(
        swimmer_id,
        sessions=[s.to_domain() for s in request.sessions],
        attendance=[a.to_domain() for a in request.attendance],
        now=reference,
    )

    logger.info(
        "Computed distance stats",
        extra={"swimmer_id": swimmer_id, "this_year_km": stats.this_year_km}
    )

    return DistanceStatsResponse(
        swimmer_id=swimmer_id,
        this_week_km=stats.this_week_km,
        this_month_km=stats.this_month_km,
        this_year_km=stats.this_year_km,
    )


@router.post(
    "/swimmers/roster",
    response_model=RosterResponse,
    status_code=status.HTTP_200_OK,
    summary="Squad roster with attendance",
    description="Filtered roster sorted by name, with top/bottom attendance and squad average",
)
async def get_roster(request: RosterRequest) -> RosterResponse:
    rows = roster_attendance(
        [s.to_domain() for s in request.swimmers],
        [a.to_domain() for a in request.attendance],
        squad_ids=request.squad_ids,
        name_query=request.name_query,
    )
    ranking = rank_by_attendance(rows)

    logger.info(
        "Computed roster",
        extra={"swimmers": len(rows), "average_percentage": ranking.average_percentage}
    )

    return RosterResponse(
        swimmers=[RosterRow.from_row(r) for r in rows],
        top=[RosterRow.from_row(r) for r in ranking.top],
        bottom=[RosterRow.from_row(r) for r in ranking.bottom],
        average_percentage=ranking.average_percentage,
    )


@router.post(
    "/squads/{squad_id}/week-volume",
    response_model=SquadVolumeResponse,
    status_code=status.HTTP_200_OK,
    summary="Squad volume this week",
    description="Programmed meters for the current week, by stroke and by kind of work",
)
async def get_squad_week_volume(
    squad_id: str,
    request: SquadVolumeRequest,
    now: NowDep,
) -> SquadVolumeResponse:
    volume = squad_week_volume(
        [s.to_domain() for s in request.sessions],
        squad_id=squad_id,
        now=request.now or now,
    )

    return SquadVolumeResponse(
        squad_id=squad_id,
        session_count=volume.session_count,
        total_m=volume.total_m,
        by_stroke=volume.by_stroke,
        by_type=volume.by_type,
    )

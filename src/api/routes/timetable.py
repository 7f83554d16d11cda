"""
Timetable layout API endpoints.

The day view draws one column per pool with sessions positioned on an
hourly grid. These endpoints do the positioning server-side so every
client lays out double-booked pools the same way.

Requests carry the sessions to lay out; nothing is read from or
written to storage.
"""

import logging
from datetime import date
from typing import Optional

from fastapi import APIRouter, status
from pydantic import BaseModel, Field

from ...core.timetable.intervals import parse_clock
from ...core.timetable.layout import SessionRect, layout_day, layout_timetable
from ...infrastructure.snapshot.schemas import LocationIn, SessionIn, SquadIn
from ..dependencies import LayoutStrategyDep, SettingsDep

logger = logging.getLogger(__name__)

router = APIRouter()

CLOCK_REGEX = r"^([01]?\d|2[0-3]):[0-5]\d$"


# ---------------------------------------------------------------------------
# Request/Response Models
# ---------------------------------------------------------------------------

class GridOverrides(BaseModel):
    """Optional per-request grid geometry. Defaults come from settings."""
    day_origin: Optional[str] = Field(
        default=None,
        pattern=CLOCK_REGEX,
        description="Time at the top of the grid (HH:MM)"
    )
    hour_height_px: Optional[float] = Field(
        default=None,
        gt=0,
        description="Pixel height of one hour"
    )


class DayLayoutRequest(GridOverrides):
    """Lay out one pool's sessions for one day."""
    location_id: str = Field(description="Pool to lay out")
    day: date = Field(description="Calendar day")
    sessions: list[SessionIn] = Field(
        default_factory=list,
        description="Sessions to consider; other pools and days are ignored"
    )


class RectResponse(BaseModel):
    """Block position: top/height in pixels, left/width in percent."""
    top: float
    height: float
    left: float
    width: float

    @classmethod
    def from_rect(cls, rect: SessionRect) -> "RectResponse":
        return cls(top=rect.top, height=rect.height, left=rect.left, width=rect.width)


class DayLayoutResponse(BaseModel):
    location_id: str
    day: date
    layout_strategy: str = Field(description="Column strategy used")
    rects: dict[str, RectResponse] = Field(description="Block positions keyed by session id")


class DayTimetableRequest(GridOverrides):
    """Build the full day view across pools."""
    day: date
    sessions: list[SessionIn] = Field(default_factory=list)
    squads: list[SquadIn] = Field(default_factory=list)
    locations: list[LocationIn] = Field(
        default_factory=list,
        description="Pools in display order"
    )


class SessionBlockResponse(BaseModel):
    session_id: str
    squad_name: str
    squad_color: str
    time_label: str
    focus: str
    rect: RectResponse


class LocationColumnResponse(BaseModel):
    location_id: str
    location_name: str
    blocks: list[SessionBlockResponse]


class DayTimetableResponse(BaseModel):
    day: date
    is_empty: bool = Field(description="True when no pool has sessions that day")
    time_slots: list[str] = Field(description="Row labels for the grid")
    columns: list[LocationColumnResponse]


def _grid(request: GridOverrides, settings) -> tuple[int, float]:
    origin = parse_clock(request.day_origin) if request.day_origin else settings.day_origin_minutes
    hour_height = request.hour_height_px or settings.hour_height_px
    return origin, hour_height


# ---------------------------------------------------------------------------
# Endpoints
# ---------------------------------------------------------------------------

@router.post(
    "/layout",
    response_model=DayLayoutResponse,
    status_code=status.HTTP_200_OK,
    summary="Lay out one pool for one day",
    description="Position each session so concurrent sessions sit side by side",
)
async def lay_out_day(
    request: DayLayoutRequest,
    settings: SettingsDep,
    strategy: LayoutStrategyDep,
) -> DayLayoutResponse:
    """
    Compute block rectangles for one location and day.

    Sessions for other locations or days in the payload are skipped,
    so a client can send its whole cached week.
    """
    origin, hour_height = _grid(request, settings)

    rects = layout_day(
        [s.to_domain() for s in request.sessions],
        location_id=request.location_id,
        day=request.day,
        day_origin_minutes=origin,
        hour_height_px=hour_height,
        strategy=strategy,
    )

    logger.info(
        "Laid out day",
        extra={
            "location_id": request.location_id,
            "day": request.day.isoformat(),
            "sessions": len(rects),
            "layout_strategy": strategy.name,
        }
    )

    return DayLayoutResponse(
        location_id=request.location_id,
        day=request.day,
        layout_strategy=strategy.name,
        rects={session_id: RectResponse.from_rect(rect) for session_id, rect in rects.items()},
    )


@router.post(
    "/day",
    response_model=DayTimetableResponse,
    status_code=status.HTTP_200_OK,
    summary="Build the day view",
    description="Time rows plus one column of positioned sessions per busy pool",
)
async def build_day_timetable(
    request: DayTimetableRequest,
    settings: SettingsDep,
    strategy: LayoutStrategyDep,
) -> DayTimetableResponse:
    """
    Compute the whole day view.

    Pools with no sessions are left out. An empty response
    (is_empty = true) is the "no sessions scheduled" state, not an error.
    """
    origin, hour_height = _grid(request, settings)

    timetable = layout_timetable(
        [s.to_domain() for s in request.sessions],
        squads=[s.to_domain() for s in request.squads],
        locations=[loc.to_domain() for loc in request.locations],
        day=request.day,
        day_origin_minutes=origin,
        hour_height_px=hour_height,
        strategy=strategy,
    )

    logger.info(
        "Built day timetable",
        extra={
            "day": request.day.isoformat(),
            "columns": len(timetable.columns),
            "layout_strategy": strategy.name,
        }
    )

    return DayTimetableResponse(
        day=timetable.day,
        is_empty=timetable.is_empty,
        time_slots=list(timetable.time_slots),
        columns=[
            LocationColumnResponse(
                location_id=column.location.id,
                location_name=column.location.name,
                blocks=[
                    SessionBlockResponse(
                        session_id=block.session.id,
                        squad_name=block.squad_name,
                        squad_color=block.squad_color,
                        time_label=block.time_label,
                        focus=block.focus,
                        rect=RectResponse.from_rect(block.rect),
                    )
                    for block in column.blocks
                ],
            )
            for column in timetable.columns
        ],
    )

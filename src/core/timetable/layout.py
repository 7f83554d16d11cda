"""
Day timetable layout.

Turns one day's sessions into absolutely positioned blocks, one column
of blocks per pool. Vertical position comes straight from the clock:
pixels-per-hour times elapsed time since the grid origin. Horizontal
position is where the work is, because pools get double-booked and
concurrent sessions must sit side by side instead of on top of each
other.

Two column strategies are provided:
- SameStartLayout (the default) tiles sessions that share an exact start
  time, so every same-start group fills the full column width.
- OverlapColumnLayout packs any overlapping sessions into the fewest
  columns. For sessions that only collide with same-start sessions it
  produces exactly the same result as SameStartLayout. When an earlier
  session overlaps a same-start group the group shares the cluster's
  columns and no longer fills the width, so it is opt-in.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from datetime import date
from typing import Iterable, Optional

from ..models import Location, Session, Squad
from .intervals import SessionInterval, format_clock, parse_clock, session_interval


DEFAULT_DAY_ORIGIN = "05:30"
DEFAULT_HOUR_HEIGHT_PX = 80.0

# Row labels on the left of the day grid
DEFAULT_TIME_SLOTS = (
    "05:30", "06:00", "07:00", "08:00", "09:00", "10:00", "11:00",
    "12:00", "13:00", "14:00", "15:00", "16:00", "17:00", "18:00",
    "19:00", "20:00", "21:00", "22:00",
)

UNKNOWN_SQUAD_NAME = "Unknown Squad"
UNKNOWN_SQUAD_COLOR = "#3B82F6"


@dataclass(frozen=True)
class SessionRect:
    """
    Where a session block goes.

    top/height are pixels from the grid origin; left/width are
    percentages of the location column.
    """
    top: float
    height: float
    left: float
    width: float


@dataclass(frozen=True)
class ColumnSlot:
    """Column index assigned to a session, out of `columns` in its group."""
    column: int
    columns: int


# ---------------------------------------------------------------------------
# Column Strategies
# ---------------------------------------------------------------------------

class ColumnStrategy(ABC):
    """
    Decides how sessions in one location share the column width.

    Strategies get intervals in input order and return one slot per
    interval, in the same order.
    """

    name: str = ""

    @abstractmethod
    def assign_columns(self, intervals: list[SessionInterval]) -> list[ColumnSlot]:
        ...


class SameStartLayout(ColumnStrategy):
    """
    Tile sessions that start at exactly the same minute.

    Sessions that overlap but start at different times get a full-width
    column each and end up stacked on top of each other.
    """

    name = "same_start"

    def assign_columns(self, intervals: list[SessionInterval]) -> list[ColumnSlot]:
        groups: dict[int, list[int]] = {}
        for index, interval in enumerate(intervals):
            groups.setdefault(interval.start_minutes, []).append(index)

        slots: list[Optional[ColumnSlot]] = [None] * len(intervals)
        for members in groups.values():
            for column, index in enumerate(members):
                slots[index] = ColumnSlot(column=column, columns=len(members))
        return slots


class OverlapColumnLayout(ColumnStrategy):
    """
    Greedy interval-graph column assignment.

    Sessions are swept in start order (ties keep input order). Each takes
    the lowest column whose previous occupant has already finished. A
    cluster closes once a session starts after everything in it has
    ended; every session in a cluster gets the cluster's column count as
    its divisor, so blocks in the same cluster have equal width.
    """

    name = "overlap"

    def assign_columns(self, intervals: list[SessionInterval]) -> list[ColumnSlot]:
        order = sorted(range(len(intervals)), key=lambda i: intervals[i].start_minutes)
        slots: list[Optional[ColumnSlot]] = [None] * len(intervals)

        cluster: list[tuple[int, int]] = []
        # Last interval placed in each column of the open cluster
        occupants: list[SessionInterval] = []
        span: Optional[SessionInterval] = None

        for index in order:
            interval = intervals[index]

            if span is not None and not span.overlaps(interval):
                self._close_cluster(cluster, len(occupants), slots)
                cluster, occupants, span = [], [], None

            column = self._free_column(occupants, interval)
            if column is None:
                column = len(occupants)
                occupants.append(interval)
            else:
                occupants[column] = interval

            if span is None:
                span = interval
            else:
                span = SessionInterval(span.start_minutes, max(span.end_minutes, interval.end_minutes))
            cluster.append((index, column))

        if cluster:
            self._close_cluster(cluster, len(occupants), slots)

        return slots

    @staticmethod
    def _free_column(occupants: list[SessionInterval], interval: SessionInterval) -> Optional[int]:
        for column, occupant in enumerate(occupants):
            if not occupant.overlaps(interval):
                return column
        return None

    @staticmethod
    def _close_cluster(
        cluster: list[tuple[int, int]],
        columns: int,
        slots: list[Optional[ColumnSlot]],
    ) -> None:
        for index, column in cluster:
            slots[index] = ColumnSlot(column=column, columns=columns)


_STRATEGIES = {
    SameStartLayout.name: SameStartLayout,
    OverlapColumnLayout.name: OverlapColumnLayout,
}


def strategy_for(name: str) -> ColumnStrategy:
    """Look up a column strategy by its settings name."""
    try:
        return _STRATEGIES[name]()
    except KeyError:
        raise ValueError(
            f"Unknown layout strategy '{name}'. Expected one of: {', '.join(sorted(_STRATEGIES))}"
        )


# ---------------------------------------------------------------------------
# Layout
# ---------------------------------------------------------------------------

def sessions_for(sessions: Iterable[Session], location_id: str, day: date) -> list[Session]:
    """Sessions at one location on one day, input order preserved."""
    return [s for s in sessions if s.location_id == location_id and s.date == day]


def _rect(
    interval: SessionInterval,
    slot: ColumnSlot,
    day_origin_minutes: int,
    hour_height_px: float,
) -> SessionRect:
    width = 100 / slot.columns
    return SessionRect(
        top=interval.offset_from(day_origin_minutes) / 60 * hour_height_px,
        height=interval.duration_minutes / 60 * hour_height_px,
        left=slot.column * width,
        width=width,
    )


def layout_sessions(
    sessions: list[Session],
    day_origin_minutes: int,
    hour_height_px: float,
    strategy: Optional[ColumnStrategy] = None,
) -> list[SessionRect]:
    """
    Position sessions that already share a location and day.

    Returns one rect per session, in input order. Sessions outside the
    visible grid are positioned anyway (negative top, or past the last
    row); clipping is up to the renderer.
    """
    strategy = strategy or SameStartLayout()
    intervals = [session_interval(s) for s in sessions]
    slots = strategy.assign_columns(intervals)
    return [
        _rect(interval, slot, day_origin_minutes, hour_height_px)
        for interval, slot in zip(intervals, slots)
    ]


def layout_day(
    sessions: Iterable[Session],
    location_id: str,
    day: date,
    day_origin_minutes: int = parse_clock(DEFAULT_DAY_ORIGIN),
    hour_height_px: float = DEFAULT_HOUR_HEIGHT_PX,
    strategy: Optional[ColumnStrategy] = None,
) -> dict[str, SessionRect]:
    """Lay out one location's sessions for one day, keyed by session id."""
    selected = sessions_for(sessions, location_id, day)
    rects = layout_sessions(selected, day_origin_minutes, hour_height_px, strategy)
    return {session.id: rect for session, rect in zip(selected, rects)}


@dataclass(frozen=True)
class SessionBlock:
    """A positioned session with the labels the day grid shows on it."""
    session: Session
    rect: SessionRect
    squad_name: str
    squad_color: str

    @property
    def time_label(self) -> str:
        """"HH:MM - HH:MM", seconds dropped from database-style times."""
        interval = session_interval(self.session)
        return f"{format_clock(interval.start_minutes)} - {format_clock(interval.end_minutes)}"

    @property
    def focus(self) -> str:
        return self.session.focus


@dataclass(frozen=True)
class LocationColumn:
    location: Location
    blocks: tuple[SessionBlock, ...]


@dataclass(frozen=True)
class DayTimetable:
    """The whole day view: row labels plus one column per busy pool."""
    day: date
    time_slots: tuple[str, ...]
    columns: tuple[LocationColumn, ...]

    @property
    def is_empty(self) -> bool:
        return not self.columns


def layout_timetable(
    sessions: Iterable[Session],
    squads: Iterable[Squad],
    locations: Iterable[Location],
    day: date,
    day_origin_minutes: int = parse_clock(DEFAULT_DAY_ORIGIN),
    hour_height_px: float = DEFAULT_HOUR_HEIGHT_PX,
    strategy: Optional[ColumnStrategy] = None,
    time_slots: tuple[str, ...] = DEFAULT_TIME_SLOTS,
) -> DayTimetable:
    """
    Build the day view across all locations.

    Locations keep their given order; a location with nothing on that
    day gets no column. Sessions whose squad is missing from `squads`
    still render, under a placeholder name.
    """
    sessions = list(sessions)
    squads_by_id = {squad.id: squad for squad in squads}

    columns = []
    for location in locations:
        selected = sessions_for(sessions, location.id, day)
        if not selected:
            continue

        rects = layout_sessions(selected, day_origin_minutes, hour_height_px, strategy)
        blocks = []
        for session, rect in zip(selected, rects):
            squad = squads_by_id.get(session.squad_id)
            blocks.append(SessionBlock(
                session=session,
                rect=rect,
                squad_name=squad.name if squad else UNKNOWN_SQUAD_NAME,
                squad_color=squad.color if squad else UNKNOWN_SQUAD_COLOR,
            ))
        columns.append(LocationColumn(location=location, blocks=tuple(blocks)))

    return DayTimetable(day=day, time_slots=tuple(time_slots), columns=tuple(columns))

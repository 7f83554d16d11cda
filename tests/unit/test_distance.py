"""
Unit tests for distance totals and squad weekly volume.
"""

from datetime import date, datetime

import pytest

from src.core.analytics.distance import (
    attended_sessions,
    distance_stats,
    squad_week_volume,
)
from src.core.models import Attendance, DistanceBreakdown, Session, StrokeBreakdown


NOW = datetime(2026, 10, 14, 18, 0)


def make_session(session_id: str, day: date, meters: int = 0, squad_id: str = "sq1", distance=None) -> Session:
    if distance is None and meters:
        distance = DistanceBreakdown(total=meters)
    return Session(
        id=session_id,
        date=day,
        start_time="06:00",
        end_time="07:30",
        squad_id=squad_id,
        location_id="pool-a",
        distance=distance,
    )


def present(session_id: str, swimmer_id: str = "w1", status: str = "Present") -> Attendance:
    return Attendance(id=f"{swimmer_id}-{session_id}", session_id=session_id, swimmer_id=swimmer_id, status=status)


@pytest.fixture
def sessions() -> list[Session]:
    return [
        make_session("wk", date(2026, 10, 13), meters=4000),
        make_session("month", date(2026, 10, 2), meters=3000),
        make_session("year", date(2026, 3, 10), meters=5000),
        make_session("last-year", date(2025, 12, 30), meters=6000),
        make_session("future", date(2026, 10, 16), meters=2500),
        make_session("no-plan", date(2026, 10, 12)),
    ]


# ---------------------------------------------------------------------------
# Distance Stats Tests
# ---------------------------------------------------------------------------

class TestDistanceStats:
    """Tests for a swimmer's week/month/year kilometers."""

    def test_buckets(self, sessions):
        attendance = [present(s.id) for s in sessions]

        stats = distance_stats("w1", sessions, attendance, NOW)

        # Sunday the 18th is still this week; the year stops today
        assert stats.this_week_km == pytest.approx(6.5)
        assert stats.this_month_km == pytest.approx(9.5)
        assert stats.this_year_km == pytest.approx(12.0)

    def test_year_covers_month_covers_week(self, sessions):
        """
        Widening windows never lose distance, except for sessions after `now`.

        Week and month are whole calendar periods but the year stops at
        `now`, so a session later this week counts toward the week and
        month and not the year. Here the year's earlier sessions outweigh
        it.
        """
        attendance = [present(s.id) for s in sessions]

        stats = distance_stats("w1", sessions, attendance, NOW)

        assert stats.this_year_km >= stats.this_month_km >= stats.this_week_km

    def test_session_later_this_week_is_not_in_year_to_date(self, sessions):
        stats = distance_stats("w1", sessions, [present("future")], NOW)

        assert stats.this_week_km == pytest.approx(2.5)
        assert stats.this_month_km == pytest.approx(2.5)
        assert stats.this_year_km == 0

    def test_only_attended_sessions_count(self, sessions):
        attendance = [
            present("wk", status="Absent"),
            present("month", status="2nd half only"),
            present("year", status="late"),
        ]

        stats = distance_stats("w1", sessions, attendance, NOW)

        assert stats.this_week_km == 0
        assert stats.this_month_km == 0
        assert stats.this_year_km == pytest.approx(5.0)

    def test_other_swimmers_are_ignored(self, sessions):
        stats = distance_stats("w1", sessions, [present("wk", swimmer_id="w2")], NOW)
        assert stats.this_week_km == 0

    def test_duplicate_records_count_session_once(self, sessions):
        attendance = [present("wk"), present("wk")]

        assert [s.id for s in attended_sessions("w1", sessions, attendance)] == ["wk"]
        assert distance_stats("w1", sessions, attendance, NOW).this_week_km == pytest.approx(4.0)

    def test_session_without_distance_contributes_nothing(self, sessions):
        stats = distance_stats("w1", sessions, [present("no-plan")], NOW)
        assert stats.this_week_km == 0


# ---------------------------------------------------------------------------
# Squad Volume Tests
# ---------------------------------------------------------------------------

class TestSquadWeekVolume:
    """Tests for the squad's programmed meters this week."""

    def test_splits_by_stroke_and_work_type(self):
        distance = DistanceBreakdown(
            total=2600,
            front_crawl=StrokeBreakdown(swim=800, drill=200, kick=200, pull=400),
            backstroke=StrokeBreakdown(swim=400),
            no1=StrokeBreakdown(swim=600),
        )
        sessions = [
            make_session("s1", date(2026, 10, 13), distance=distance),
            make_session("s2", date(2026, 10, 15), meters=1000),
            make_session("other-squad", date(2026, 10, 13), meters=9000, squad_id="sq2"),
            make_session("last-week", date(2026, 10, 9), meters=9000),
        ]

        volume = squad_week_volume(sessions, "sq1", NOW)

        assert volume.session_count == 2
        assert volume.total_m == 3600
        assert volume.by_stroke["freestyle"] == 1600
        assert volume.by_stroke["backstroke"] == 400
        assert volume.by_stroke["butterfly"] == 0
        assert volume.by_type == {"swim": 1200, "kick": 200, "drill": 200, "pull": 400}

    def test_empty_week(self):
        volume = squad_week_volume([], "sq1", NOW)

        assert volume.session_count == 0
        assert volume.total_m == 0
        assert set(volume.by_stroke.values()) == {0}

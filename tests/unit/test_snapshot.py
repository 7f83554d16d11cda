"""
Unit tests for snapshot parsing and loading.
"""

import json
from datetime import date

import pytest

from src.core.models import AttendanceStatus
from src.infrastructure.snapshot import SnapshotLoadError, load_snapshot, parse_snapshot


def snapshot_json(**overrides) -> str:
    payload = {
        "sessions": [
            {
                "id": "s1",
                "date": "2026-10-14",
                "startTime": "06:00",
                "endTime": "07:30:00",
                "squadId": "sq1",
                "locationId": "pool-a",
                "focus": "Threshold",
                "leadCoachId": "c1",
                "distanceBreakdown": {
                    "total": 3200,
                    "frontCrawlBreakdown": {"swim": 1200, "kick": 400},
                    "no1Breakdown": {"swim": 800},
                },
                "createdAt": "2026-10-01T09:00:00Z",
            }
        ],
        "squads": [{"id": "sq1", "name": "Performance", "color": "#FFB3BA"}],
        "coaches": [{"id": "c1", "firstName": "Maria", "lastName": "Lopez"}],
        "locations": [{"id": "pool-a", "name": "Main Pool"}],
        "swimmers": [
            {
                "id": "w1",
                "firstName": "Ada",
                "lastName": "Byron",
                "squadId": "sq1",
                "dateOfBirth": "2012-05-01",
            }
        ],
        "attendance": [
            {"id": "a1", "sessionId": "s1", "swimmerId": "w1", "status": "Present", "notes": "Late"}
        ],
    }
    payload.update(overrides)
    return json.dumps(payload)


class TestParseSnapshot:
    """Tests for camelCase JSON to domain objects."""

    def test_full_snapshot(self):
        snapshot = parse_snapshot(snapshot_json())

        session = snapshot.sessions[0]
        assert session.date == date(2026, 10, 14)
        assert session.end_time == "07:30:00"
        assert session.lead_coach_id == "c1"
        assert session.distance_meters == 3200
        assert session.distance.front_crawl.total == 1600
        assert session.distance.no1.swim == 800

        assert snapshot.squads[0].color == "#FFB3BA"
        assert snapshot.coaches[0].name == "Maria Lopez"
        assert snapshot.swimmers[0].full_name == "Ada Byron"
        assert snapshot.swimmers[0].date_of_birth == date(2012, 5, 1)
        assert snapshot.attendance[0].normalized_status is AttendanceStatus.PRESENT

    def test_snake_case_keys_are_accepted(self):
        raw = snapshot_json(locations=[{"id": "pool-a", "name": "Main Pool"}], sessions=[{
            "id": "s1",
            "date": "2026-10-14",
            "start_time": "06:00",
            "end_time": "07:00",
            "squad_id": "sq1",
            "location_id": "pool-a",
        }])

        assert parse_snapshot(raw).sessions[0].squad_id == "sq1"

    def test_empty_snapshot(self):
        snapshot = parse_snapshot("{}")
        assert snapshot.sessions == []
        assert snapshot.attendance == []

    @pytest.mark.parametrize("bad_time", ["6am", "24:00", "09:60", ""])
    def test_malformed_time_is_rejected(self, bad_time):
        raw = snapshot_json(sessions=[{
            "id": "s1",
            "date": "2026-10-14",
            "startTime": bad_time,
            "endTime": "23:59",
            "squadId": "sq1",
            "locationId": "pool-a",
        }])

        with pytest.raises(SnapshotLoadError, match="validation error"):
            parse_snapshot(raw)

    @pytest.mark.parametrize("end", ["09:00", "08:30"])
    def test_session_must_end_after_it_starts(self, end):
        raw = snapshot_json(sessions=[{
            "id": "s1",
            "date": "2026-10-14",
            "startTime": "09:00",
            "endTime": end,
            "squadId": "sq1",
            "locationId": "pool-a",
        }])

        with pytest.raises(SnapshotLoadError, match="must end after it starts"):
            parse_snapshot(raw)

    def test_negative_distance_is_rejected(self):
        raw = snapshot_json(sessions=[{
            "id": "s1",
            "date": "2026-10-14",
            "startTime": "09:00",
            "endTime": "10:00",
            "squadId": "sq1",
            "locationId": "pool-a",
            "distanceBreakdown": {"total": -100},
        }])

        with pytest.raises(SnapshotLoadError):
            parse_snapshot(raw)

    def test_invalid_json(self):
        with pytest.raises(SnapshotLoadError):
            parse_snapshot("{not json")


class TestLoadSnapshot:
    def test_reads_file(self, tmp_path):
        path = tmp_path / "snapshot.json"
        path.write_text(snapshot_json())

        snapshot = load_snapshot(path)

        assert [s.id for s in snapshot.sessions] == ["s1"]

    def test_missing_file(self, tmp_path):
        with pytest.raises(SnapshotLoadError, match="Cannot read snapshot"):
            load_snapshot(tmp_path / "missing.json")

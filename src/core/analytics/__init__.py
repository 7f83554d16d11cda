"""
Attendance and distance analytics.

Pure functions over snapshots: same inputs and same `now` give the
same output, and nothing is cached or stored.
"""

from .attendance import (
    AttendanceRanking,
    AttendanceStats,
    RateStats,
    SwimmerAttendance,
    attendance_stats,
    rank_by_attendance,
    roster_attendance,
)
from .distance import DistanceStats, SquadVolume, distance_stats, squad_week_volume

__all__ = [
    "AttendanceRanking",
    "AttendanceStats",
    "RateStats",
    "SwimmerAttendance",
    "attendance_stats",
    "rank_by_attendance",
    "roster_attendance",
    "DistanceStats",
    "SquadVolume",
    "distance_stats",
    "squad_week_volume",
]

"""
Coaching data snapshots: validation, translation to domain models, file loading.
"""

from .loader import SnapshotLoadError, load_snapshot, parse_snapshot
from .schemas import CoachingSnapshot, SnapshotIn

__all__ = [
    "CoachingSnapshot",
    "SnapshotIn",
    "SnapshotLoadError",
    "load_snapshot",
    "parse_snapshot",
]

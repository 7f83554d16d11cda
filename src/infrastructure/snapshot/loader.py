"""
Load coaching data snapshots from JSON files.

Used by the report script and for local development, where exporting a
snapshot from the coaching app stands in for a database connection.
"""

import logging
from pathlib import Path
from typing import Union

from pydantic import ValidationError

from .schemas import CoachingSnapshot, SnapshotIn

logger = logging.getLogger(__name__)


class SnapshotLoadError(Exception):
    """Raised when a snapshot file can't be read or doesn't validate."""
    pass


def parse_snapshot(raw: Union[str, bytes]) -> CoachingSnapshot:
    """Validate snapshot JSON and convert it to domain objects."""
    try:
        payload = SnapshotIn.model_validate_json(raw)
    except ValidationError as e:
        raise SnapshotLoadError(f"Invalid snapshot: {e.error_count()} validation error(s)\n{e}") from e
    return payload.to_domain()


def load_snapshot(path: Union[str, Path]) -> CoachingSnapshot:
    """
    Read and validate a snapshot file.

    Raises SnapshotLoadError for a missing/unreadable file or bad content,
    so callers only have one failure type to handle.
    """
    path = Path(path)
    try:
        raw = path.read_bytes()
    except OSError as e:
        logger.error(
            "Failed to read snapshot",
            extra={"path": str(path), "error": str(e)}
        )
        raise SnapshotLoadError(f"Cannot read snapshot {path}: {e}") from e

    snapshot = parse_snapshot(raw)

    logger.info(
        "Loaded snapshot",
        extra={
            "path": str(path),
            "sessions": len(snapshot.sessions),
            "attendance": len(snapshot.attendance),
        }
    )
    return snapshot

"""
Infrastructure layer - where data comes from.

- snapshot: JSON snapshots exported by the coaching app, validated with
  pydantic and translated into domain models

These wrappers translate between external formats and our domain models.
"""

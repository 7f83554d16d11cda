"""
Application configuration using Pydantic settings.

Configuration comes from environment variables with sensible defaults,
including the day-grid geometry shared with the frontend.
"""

from .settings import Settings, get_settings

__all__ = ["Settings", "get_settings"]

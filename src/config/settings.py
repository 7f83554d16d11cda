"""
Application configuration using Pydantic settings.

Configuration is loaded from environment variables with sensible defaults.
Using Pydantic's BaseSettings means we get:
- Type validation at startup (fail fast if config is wrong)
- Documentation of what's configurable
- Easy testing with different configurations

The timetable settings describe the day grid the frontend draws, so the
API can return positions in the same units.
"""

from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from ..core.timetable.intervals import parse_clock
from ..core.timetable.layout import strategy_for


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.

    All settings can be overridden via environment variables.
    For lists (like cors_origins), use comma-separated values in env.
    """

    # API Configuration
    api_title: str = "Poolside Timetable API"
    api_version: str = "v1"

    # Timetable layout
    day_origin: str = Field(
        default="05:30",
        description="Time at the top of the day grid (HH:MM). Sessions are positioned relative to it."
    )
    hour_height_px: float = Field(
        default=80.0,
        gt=0,
        description="Pixel height of one hour row in the day grid."
    )
    layout_strategy: str = Field(
        default="same_start",
        description="Column strategy: 'same_start' tiles equal start times, 'overlap' also packs partially overlapping sessions."
    )

    # Analytics
    trend_months: int = Field(
        default=6,
        ge=1,
        le=24,
        description="Number of calendar months in the attendance trend, current month included."
    )

    # Search
    excerpt_radius: int = Field(
        default=50,
        ge=0,
        description="Characters of context either side of a content match."
    )
    preview_length: int = Field(
        default=100,
        ge=0,
        description="Characters of content shown when there is no match excerpt."
    )

    # Logging
    log_level: str = Field(
        default="INFO",
        description="Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)"
    )

    # CORS
    cors_origins: str = Field(
        default="http://localhost:3000,http://localhost:5173",
        description="Comma-separated list of allowed CORS origins. Use * for development only."
    )

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
    )

    @property
    def cors_origins_list(self) -> list[str]:
        """Parse comma-separated CORS origins into a list."""
        if self.cors_origins == "*":
            return ["*"]
        return [origin.strip() for origin in self.cors_origins.split(",") if origin.strip()]

    @property
    def day_origin_minutes(self) -> int:
        """Grid origin as minutes since midnight."""
        return parse_clock(self.day_origin)

    def validate_configuration(self) -> list[str]:
        """
        Check settings that Pydantic's field types can't express.

        Returns a list of problems, empty if everything is usable.
        Kept separate from field validation so a bad value shows up in
        the readiness check instead of stopping the process at import.
        """
        problems = []

        try:
            minutes = self.day_origin_minutes
            if not 0 <= minutes < 24 * 60:
                problems.append(f"DAY_ORIGIN out of range: {self.day_origin}")
        except (ValueError, IndexError):
            problems.append(f"DAY_ORIGIN is not HH:MM: {self.day_origin}")

        try:
            strategy_for(self.layout_strategy)
        except ValueError as e:
            problems.append(f"LAYOUT_STRATEGY: {e}")

        if self.log_level.upper() not in {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}:
            problems.append(f"LOG_LEVEL not recognised: {self.log_level}")

        return problems


@lru_cache()
def get_settings() -> Settings:
    """
    Get cached settings instance.

    Using lru_cache means we only load settings once per process.
    This is safe because settings don't change during runtime.
    For tests, you can call get_settings.cache_clear() to reset.
    """
    return Settings()

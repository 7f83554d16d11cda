"""
FastAPI dependency injection.

Dependencies provide configuration and services to route handlers.
Using dependency injection means:
- Routes don't build their own collaborators (easier to test)
- Dependencies can be overridden in tests (app.dependency_overrides)
- Configuration is centralized

Each dependency is a function that FastAPI calls when needed.
"""

import logging
from datetime import datetime
from typing import Annotated

from fastapi import Depends, HTTPException, status

from ..config.settings import Settings, get_settings
from ..core.timetable.layout import ColumnStrategy, strategy_for

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Service Dependencies
# ---------------------------------------------------------------------------

def get_layout_strategy(
    settings: Annotated[Settings, Depends(get_settings)],
) -> ColumnStrategy:
    """
    Provide the configured column strategy for the day grid.

    Strategies are stateless, so a new one per request is fine.
    A bad LAYOUT_STRATEGY surfaces here as a 500 and in /health/ready.
    """
    try:
        strategy = strategy_for(settings.layout_strategy)
    except ValueError as e:
        logger.error(
            "Layout strategy misconfigured",
            extra={"layout_strategy": settings.layout_strategy, "error": str(e)}
        )
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Timetable layout is misconfigured",
        )

    logger.debug("Using layout strategy", extra={"layout_strategy": strategy.name})
    return strategy


def get_now() -> datetime:
    """
    Reference instant for statistics when a request doesn't supply one.

    A dependency rather than a direct datetime.now() call so tests can
    pin the clock.
    """
    return datetime.now()


# ---------------------------------------------------------------------------
# Convenience Type Aliases
# ---------------------------------------------------------------------------

# These type aliases make route signatures cleaner
SettingsDep = Annotated[Settings, Depends(get_settings)]
LayoutStrategyDep = Annotated[ColumnStrategy, Depends(get_layout_strategy)]
NowDep = Annotated[datetime, Depends(get_now)]

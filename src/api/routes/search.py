"""
Session search API endpoint.

Coaches search their session library by squad, coach, pool, focus or
set content ("that IM pyramid from March"). Results come back newest
first with highlight segments, so clients don't each reimplement
case-insensitive matching.
"""

import logging
from datetime import date
from typing import Optional

from fastapi import APIRouter, status
from pydantic import BaseModel, Field

from ...core.search.engine import SearchResult, SessionSearch, TextSegment
from ...infrastructure.snapshot.schemas import CoachIn, LocationIn, SessionIn, SquadIn
from ..dependencies import SettingsDep

logger = logging.getLogger(__name__)

router = APIRouter()


# ---------------------------------------------------------------------------
# Request/Response Models
# ---------------------------------------------------------------------------

class SearchRequest(BaseModel):
    """Query plus the sessions and lookup tables to search across."""
    query: str = Field(
        default="",
        max_length=200,
        description="Free text; blank returns every session newest first"
    )
    sessions: list[SessionIn] = Field(default_factory=list)
    squads: list[SquadIn] = Field(default_factory=list)
    coaches: list[CoachIn] = Field(default_factory=list)
    locations: list[LocationIn] = Field(default_factory=list)


class SegmentResponse(BaseModel):
    text: str
    highlighted: bool

    @classmethod
    def from_segment(cls, segment: TextSegment) -> "SegmentResponse":
        return cls(text=segment.text, highlighted=segment.highlighted)


class SearchResultItem(BaseModel):
    """One matching session with its display fields."""
    session_id: str
    date: date
    start_time: str
    end_time: str
    squad_name: str
    location_name: str
    focus: str
    coach_names: dict[str, str] = Field(description="Filled coach roles by role name")
    excerpt: Optional[str] = Field(None, description="Content around the first match")
    preview: str = Field(description="Excerpt, or the start of the content")
    matched_fields: list[str]
    highlighted_fields: dict[str, list[SegmentResponse]]

    @classmethod
    def from_result(cls, result: SearchResult) -> "SearchResultItem":
        session = result.session
        return cls(
            session_id=session.id,
            date=session.date,
            start_time=session.start_time,
            end_time=session.end_time,
            squad_name=result.squad_name,
            location_name=result.location_name,
            focus=session.focus,
            coach_names=result.coach_names,
            excerpt=result.excerpt,
            preview=result.preview,
            matched_fields=list(result.matched_fields),
            highlighted_fields={
                name: [SegmentResponse.from_segment(s) for s in segments]
                for name, segments in result.highlighted_fields.items()
            },
        )


class SearchResponse(BaseModel):
    query: str
    count: int
    results: list[SearchResultItem]


# ---------------------------------------------------------------------------
# Endpoints
# ---------------------------------------------------------------------------

@router.post(
    "/sessions",
    response_model=SearchResponse,
    status_code=status.HTTP_200_OK,
    summary="Search sessions",
    description="Case-insensitive substring search across squad, coaches, pool, focus and content",
)
async def search_sessions(
    request: SearchRequest,
    settings: SettingsDep,
) -> SearchResponse:
    """
    Search the supplied sessions.

    No matches is an empty result list, not an error.
    """
    engine = SessionSearch(
        squads=[s.to_domain() for s in request.squads],
        coaches=[c.to_domain() for c in request.coaches],
        locations=[loc.to_domain() for loc in request.locations],
        excerpt_radius=settings.excerpt_radius,
        preview_length=settings.preview_length,
    )
    results = engine.search([s.to_domain() for s in request.sessions], request.query)

    logger.info(
        "Searched sessions",
        extra={
            "query_length": len(request.query),
            "candidates": len(request.sessions),
            "results": len(results),
        }
    )

    return SearchResponse(
        query=request.query,
        count=len(results),
        results=[SearchResultItem.from_result(r) for r in results],
    )

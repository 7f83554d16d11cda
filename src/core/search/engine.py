"""
Free-text session search with highlighting.

A session is searchable by what a coach would remember about it: the
squad, who coached or wrote it, the pool, its focus, and the set itself.
Names live on other entities, so the search joins them in first and
then does a plain case-insensitive substring match on each field.

Session content is rich text. It's reduced to plain text before
matching so a query can't hit tag names or attributes.
"""

import logging
import re
from dataclasses import dataclass, field
from typing import Iterable, Optional

from bs4 import BeautifulSoup

from ..models import Coach, Location, Session, Squad

logger = logging.getLogger(__name__)


UNKNOWN_SQUAD = "Unknown Squad"
UNKNOWN_LOCATION = "Unknown"
DEFAULT_EXCERPT_RADIUS = 50
DEFAULT_PREVIEW_LENGTH = 100
ELLIPSIS = "..."

COACH_ROLES = ("lead_coach", "second_coach", "helper", "set_writer")


def strip_html(markup: Optional[str]) -> str:
    """Text content of a rich-text fragment, tags dropped and entities decoded."""
    if not markup:
        return ""
    if "<" not in markup and "&" not in markup:
        return markup
    return BeautifulSoup(markup, "html.parser").get_text()


def content_excerpt(
    content: Optional[str],
    query: str,
    radius: int = DEFAULT_EXCERPT_RADIUS,
) -> Optional[str]:
    """
    Plain-text window around the first match of `query` in `content`.

    Takes `radius` characters either side of the match, with an ellipsis
    on whichever ends were cut. None when there is no match.
    """
    if not content or not query:
        return None

    plain = strip_html(content)
    match = re.search(re.escape(query), plain, flags=re.IGNORECASE)
    if match is None:
        return None

    start = max(0, match.start() - radius)
    end = min(len(plain), match.end() + radius)

    excerpt = plain[start:end]
    if start > 0:
        excerpt = ELLIPSIS + excerpt
    if end < len(plain):
        excerpt = excerpt + ELLIPSIS
    return excerpt


@dataclass(frozen=True)
class TextSegment:
    """A run of display text, marked if it matched the query."""
    text: str
    highlighted: bool = False


def highlight(text: str, query: str) -> list[TextSegment]:
    """
    Split `text` into plain and matching runs.

    The query is matched literally (regex characters escaped) and
    case-insensitively; every occurrence is marked and the original
    casing of the text is kept.
    """
    if not text:
        return []
    if not query:
        return [TextSegment(text)]

    lowered = query.lower()
    parts = re.split(f"({re.escape(query)})", text, flags=re.IGNORECASE)
    return [
        TextSegment(part, highlighted=part.lower() == lowered)
        for part in parts
        if part
    ]


def render_highlight(
    text: str,
    query: str,
    open_tag: str = "<mark>",
    close_tag: str = "</mark>",
) -> str:
    """Join highlight() output back together with markers around matches."""
    return "".join(
        f"{open_tag}{segment.text}{close_tag}" if segment.highlighted else segment.text
        for segment in highlight(text, query)
    )


@dataclass
class SearchResult:
    """
    One matching session and what to display for it.

    `matched_fields` names the fields the query hit. `highlighted_fields`
    holds the display strings (squad, location, focus, coaches, preview)
    split into highlight segments.
    """
    session: Session
    squad_name: str
    location_name: str
    coach_names: dict[str, str] = field(default_factory=dict)
    excerpt: Optional[str] = None
    preview: str = ""
    matched_fields: tuple[str, ...] = ()
    highlighted_fields: dict[str, list[TextSegment]] = field(default_factory=dict)


class SessionSearch:
    """
    Search over sessions with squads, coaches and locations joined in.

    Build one per snapshot; `search` can then be called per query.
    Lookups that miss fall back to placeholder names rather than failing.
    """

    def __init__(
        self,
        squads: Iterable[Squad],
        coaches: Iterable[Coach],
        locations: Iterable[Location],
        excerpt_radius: int = DEFAULT_EXCERPT_RADIUS,
        preview_length: int = DEFAULT_PREVIEW_LENGTH,
    ) -> None:
        self._squads = {squad.id: squad.name for squad in squads}
        self._coaches = {coach.id: coach.name for coach in coaches}
        self._locations = {location.id: location.name for location in locations}
        self.excerpt_radius = excerpt_radius
        self.preview_length = preview_length

    def squad_name(self, squad_id: str) -> str:
        return self._squads.get(squad_id, UNKNOWN_SQUAD)

    def location_name(self, location_id: str) -> str:
        return self._locations.get(location_id, UNKNOWN_LOCATION)

    def coach_names(self, session: Session) -> dict[str, str]:
        """Names for the coach roles that are filled and resolvable."""
        names = {}
        for role, coach_id in zip(COACH_ROLES, session.coach_ids):
            if coach_id and coach_id in self._coaches:
                names[role] = self._coaches[coach_id]
        return names

    @staticmethod
    def _contents(session: Session) -> list[str]:
        return [text for text in (session.content, session.content_html) if text]

    def matched_fields(self, session: Session, query: str) -> tuple[str, ...]:
        """Names of the fields containing `query` (already lowercased)."""
        matched = []
        if query in self.squad_name(session.squad_id).lower():
            matched.append("squad")
        for role, name in self.coach_names(session).items():
            if query in name.lower():
                matched.append(role)
        if query in self.location_name(session.location_id).lower():
            matched.append("location")
        if query in session.focus.lower():
            matched.append("focus")
        if any(query in strip_html(text).lower() for text in self._contents(session)):
            matched.append("content")
        return tuple(matched)

    def _preview(self, session: Session, excerpt: Optional[str]) -> str:
        if excerpt:
            return excerpt
        plain = strip_html(session.content_html or session.content or "")
        if len(plain) > self.preview_length:
            return plain[:self.preview_length] + ELLIPSIS
        return plain

    def _result(self, session: Session, query: str, matched: tuple[str, ...]) -> SearchResult:
        coach_names = self.coach_names(session)
        excerpt = None
        if query:
            excerpt = content_excerpt(
                session.content_html or session.content or "",
                query,
                radius=self.excerpt_radius,
            )
        preview = self._preview(session, excerpt)

        display = {
            "squad": self.squad_name(session.squad_id),
            "location": self.location_name(session.location_id),
            "focus": session.focus,
            **coach_names,
            "preview": preview,
        }
        return SearchResult(
            session=session,
            squad_name=display["squad"],
            location_name=display["location"],
            coach_names=coach_names,
            excerpt=excerpt,
            preview=preview,
            matched_fields=matched,
            highlighted_fields={
                name: highlight(value, query) for name, value in display.items()
            },
        )

    def search(self, sessions: Iterable[Session], query: str) -> list[SearchResult]:
        """
        Sessions matching `query`, newest first.

        A blank query matches everything. Surrounding whitespace in the
        query is ignored.
        """
        query = (query or "").strip()
        lowered = query.lower()

        results = []
        for session in sessions:
            if not query:
                results.append(self._result(session, "", ()))
                continue
            matched = self.matched_fields(session, lowered)
            if matched:
                results.append(self._result(session, query, matched))

        results.sort(key=lambda result: result.session.date, reverse=True)

        logger.debug(
            "Session search complete",
            extra={"query_length": len(query), "results": len(results)},
        )
        return results


def search_sessions(
    sessions: Iterable[Session],
    squads: Iterable[Squad],
    coaches: Iterable[Coach],
    locations: Iterable[Location],
    query: str,
    excerpt_radius: int = DEFAULT_EXCERPT_RADIUS,
    preview_length: int = DEFAULT_PREVIEW_LENGTH,
) -> list[SearchResult]:
    """One-shot form of SessionSearch(...).search(sessions, query)."""
    engine = SessionSearch(
        squads,
        coaches,
        locations,
        excerpt_radius=excerpt_radius,
        preview_length=preview_length,
    )
    return engine.search(sessions, query)

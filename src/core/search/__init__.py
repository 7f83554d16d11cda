"""
Session search and match highlighting.
"""

from .engine import (
    SearchResult,
    SessionSearch,
    TextSegment,
    content_excerpt,
    highlight,
    render_highlight,
    search_sessions,
    strip_html,
)

__all__ = [
    "SearchResult",
    "SessionSearch",
    "TextSegment",
    "content_excerpt",
    "highlight",
    "render_highlight",
    "search_sessions",
    "strip_html",
]

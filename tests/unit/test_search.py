"""
Unit tests for session search and highlighting.
"""

from datetime import date

import pytest

from src.core.models import Coach, Location, Session, Squad
from src.core.search.engine import (
    SessionSearch,
    TextSegment,
    content_excerpt,
    highlight,
    render_highlight,
    search_sessions,
    strip_html,
)


SQUADS = [Squad(id="sq1", name="Performance"), Squad(id="sq2", name="Development")]
COACHES = [Coach(id="c1", name="Maria Lopez"), Coach(id="c2", name="Tom Reid")]
LOCATIONS = [Location(id="pool-a", name="Main Pool"), Location(id="pool-b", name="Teaching Pool")]


def make_session(session_id: str, day: date, **kwargs) -> Session:
    defaults = dict(
        start_time="06:00",
        end_time="07:30",
        squad_id="sq1",
        location_id="pool-a",
    )
    defaults.update(kwargs)
    return Session(id=session_id, date=day, **defaults)


def search(sessions, query):
    return search_sessions(sessions, SQUADS, COACHES, LOCATIONS, query)


# ---------------------------------------------------------------------------
# Text Helper Tests
# ---------------------------------------------------------------------------

class TestStripHtml:
    def test_tags_removed_and_entities_decoded(self):
        assert strip_html("<p>Kick &amp; <strong>pull</strong></p>") == "Kick & pull"

    def test_plain_text_unchanged(self):
        assert strip_html("8 x 100 free") == "8 x 100 free"

    def test_empty(self):
        assert strip_html(None) == ""
        assert strip_html("") == ""


class TestContentExcerpt:
    """Tests for the match window shown under a result."""

    def test_long_content_gets_ellipses_both_sides(self):
        """'free' inside 'freestyle' with plenty of text around it."""
        prefix = "x" * 70 + " warm up "
        content = prefix + "freestyle set " + "y" * 70

        excerpt = content_excerpt(content, "free")

        assert excerpt.startswith("...")
        assert excerpt.endswith("...")
        body = excerpt[3:-3]
        assert len(body) == 50 + len("free") + 50
        assert body == content[len(prefix) - 50:len(prefix) + 54]
        assert "freestyle set" in body

    def test_short_content_is_not_truncated(self):
        assert content_excerpt("easy freestyle", "FREE") == "easy freestyle"

    def test_only_truncated_end_gets_ellipsis(self):
        content = "free" + "z" * 80
        excerpt = content_excerpt(content, "free")

        assert not excerpt.startswith("...")
        assert excerpt.endswith("...")

    def test_window_is_measured_on_original_text(self):
        """'İ' lowercases to two characters; the window must not drift."""
        content = "İ" * 10 + " freestyle"

        assert content_excerpt(content, "free", radius=3) == "...İİ freesty..."

    def test_match_is_on_plain_text(self):
        assert content_excerpt("<p>Main <b>set</b></p>", "main set") == "Main set"

    def test_no_match(self):
        assert content_excerpt("backstroke drills", "fly") is None
        assert content_excerpt(None, "fly") is None


class TestHighlight:
    """Tests for splitting display text into highlighted runs."""

    def test_every_occurrence_keeps_original_case(self):
        segments = highlight("Free free FREE", "free")

        assert segments == [
            TextSegment("Free", True),
            TextSegment(" "),
            TextSegment("free", True),
            TextSegment(" "),
            TextSegment("FREE", True),
        ]

    def test_match_inside_word(self):
        assert render_highlight("Freestyle", "free") == "<mark>Free</mark>style"

    def test_regex_characters_are_literal(self):
        assert render_highlight("a+b = c, aab", "a+b") == "<mark>a+b</mark> = c, aab"
        assert render_highlight("x.y", ".") == "x<mark>.</mark>y"

    def test_text_is_reassembled_unchanged(self):
        text = "Kick, pull and kick again"
        assert "".join(s.text for s in highlight(text, "kick")) == text

    def test_empty_query_highlights_nothing(self):
        assert highlight("Main Pool", "") == [TextSegment("Main Pool")]
        assert highlight("", "pool") == []

    def test_custom_markers(self):
        assert render_highlight("Main Pool", "pool", "[", "]") == "Main [Pool]"


# ---------------------------------------------------------------------------
# Search Tests
# ---------------------------------------------------------------------------

class TestSessionSearch:
    """Tests for matching and ordering sessions."""

    def test_matches_each_joined_field(self):
        session = make_session(
            "s1",
            date(2026, 10, 14),
            lead_coach_id="c1",
            set_writer_id="c2",
            focus="Speed",
            content="Sprint set",
        )

        assert search([session], "perform")[0].matched_fields == ("squad",)
        assert search([session], "lopez")[0].matched_fields == ("lead_coach",)
        assert search([session], "reid")[0].matched_fields == ("set_writer",)
        assert search([session], "main")[0].matched_fields == ("location",)
        assert search([session], "sprint")[0].matched_fields == ("content",)
        assert search([session], "speed")[0].matched_fields == ("focus",)

    def test_query_hitting_several_fields(self):
        session = make_session("s1", date(2026, 10, 14), location_id="pool-b", content="Pool games")
        result = search([session], "pool")[0]
        assert result.matched_fields == ("location", "content")

    def test_markup_is_not_searchable(self):
        session = make_session("s1", date(2026, 10, 14), content_html="<p>Kick &amp; pull</p>")

        assert search([session], "amp") == []
        assert search([session], "strong") == []
        assert len(search([session], "kick & pull")) == 1

    def test_no_match(self):
        assert search([make_session("s1", date(2026, 10, 14))], "butterfly") == []

    def test_blank_query_returns_everything(self):
        sessions = [make_session("s1", date(2026, 10, 1)), make_session("s2", date(2026, 10, 2))]

        results = search(sessions, "   ")

        assert [r.session.id for r in results] == ["s2", "s1"]
        assert all(r.matched_fields == () for r in results)

    def test_query_whitespace_is_stripped(self):
        session = make_session("s1", date(2026, 10, 14))
        assert len(search([session], "  performance  ")) == 1

    def test_newest_first_with_stable_ties(self):
        sessions = [
            make_session("old", date(2026, 9, 1)),
            make_session("new-a", date(2026, 10, 14)),
            make_session("mid", date(2026, 10, 1)),
            make_session("new-b", date(2026, 10, 14)),
        ]

        results = search(sessions, "performance")

        assert [r.session.id for r in results] == ["new-a", "new-b", "mid", "old"]

    def test_missing_lookups_use_placeholders(self):
        session = make_session(
            "s1",
            date(2026, 10, 14),
            squad_id="gone",
            location_id="gone",
            lead_coach_id="nobody",
            helper_id="c2",
        )

        result = search([session], "")[0]

        assert result.squad_name == "Unknown Squad"
        assert result.location_name == "Unknown"
        assert result.coach_names == {"helper": "Tom Reid"}

    def test_placeholder_names_are_searchable(self):
        session = make_session("s1", date(2026, 10, 14), squad_id="gone")
        assert search([session], "unknown squad")[0].matched_fields == ("squad",)

    def test_excerpt_becomes_preview(self):
        content = "Warm up " + "a" * 80 + " then freestyle " + "b" * 80
        session = make_session("s1", date(2026, 10, 14), content=content)

        result = search([session], "free")[0]

        assert result.excerpt is not None
        assert result.preview == result.excerpt
        highlighted = [s.text for s in result.highlighted_fields["preview"] if s.highlighted]
        assert highlighted == ["free"]

    def test_preview_without_content_match_is_truncated(self):
        content = "c" * 150
        session = make_session("s1", date(2026, 10, 14), content=content)

        result = search([session], "performance")[0]

        assert result.excerpt is None
        assert result.preview == "c" * 100 + "..."

    def test_highlighted_fields_cover_display_strings(self):
        session = make_session("s1", date(2026, 10, 14), lead_coach_id="c1")

        result = search([session], "main")[0]

        assert set(result.highlighted_fields) == {"squad", "location", "focus", "lead_coach", "preview"}
        assert result.highlighted_fields["location"][0] == TextSegment("Main", True)

    def test_engine_settings(self):
        engine = SessionSearch(SQUADS, COACHES, LOCATIONS, excerpt_radius=5, preview_length=10)
        session = make_session("s1", date(2026, 10, 14), content="0123456789 kick 0123456789")

        result = engine.search([session], "kick")[0]

        assert result.excerpt == "...6789 kick 0123..."

    @pytest.mark.parametrize("query", ["(", "[a-z]+", "*"])
    def test_regex_queries_do_not_raise(self, query):
        session = make_session("s1", date(2026, 10, 14), content="plain text")
        assert search([session], query) == []

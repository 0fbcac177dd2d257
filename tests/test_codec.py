# Area: Shared Tests
# PRD: docs/protocol.md
"""Tests for stlucia._shared.codec — line splitting and rendering."""

import pytest

from stlucia._shared.codec import MAX_MESSAGE_LENGTH, parse, render
from stlucia.errors import InvalidMessageError


class TestParse:
    """Tests for parse()."""

    def test_strips_terminator_and_splits(self):
        assert parse("attacks A 3 in\n") == ["attacks", "A", "3", "in"]

    def test_unterminated_line_still_parses(self):
        assert parse("keepall") == ["keepall"]

    def test_keeps_empty_fields(self):
        """Splitting is on single spaces, so doubled spaces give empty fields."""
        assert parse("reroll  11\n") == ["reroll", "", "11"]
        assert parse("reroll \n") == ["reroll", ""]

    def test_five_fields_allowed(self):
        assert len(parse("a b c d e\n")) == 5

    def test_more_than_five_fields_rejected(self):
        with pytest.raises(InvalidMessageError):
            parse("a b c d e f\n")

    def test_field_longer_than_limit_rejected(self):
        with pytest.raises(InvalidMessageError) as exc_info:
            parse("x" * (MAX_MESSAGE_LENGTH + 1))
        assert exc_info.value.raw_line == "x" * (MAX_MESSAGE_LENGTH + 1)

    def test_embedded_newline_rejected(self):
        with pytest.raises(InvalidMessageError):
            parse("stay\ngo\n")

    def test_no_semantic_validation(self):
        assert parse("bogus 9 9\n") == ["bogus", "9", "9"]


class TestRender:
    """Tests for render()."""

    def test_render_joins_and_terminates(self):
        assert render("points", "A", 3) == "points A 3\n"

    def test_render_bare_command(self):
        assert render("stay?") == "stay?\n"

    def test_render_parse_inverse(self):
        line = render("rolled", "B", "111AAA")
        assert parse(line) == ["rolled", "B", "111AAA"]

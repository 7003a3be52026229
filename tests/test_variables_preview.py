"""
Tests for {name} placeholders and the plain-text preview.
"""
from __future__ import annotations

from ticket_designer.core.models import TicketElement
from ticket_designer.core.render import align_line, display_width, render_preview
from ticket_designer.core.variables import (
    has_placeholder,
    placeholder_names,
    resolve_placeholders,
)


class TestPlaceholders:
    def test_detection(self):
        assert has_placeholder("No. {num}")
        assert not has_placeholder("plain")
        assert not has_placeholder("")

    def test_names_in_order_without_duplicates(self):
        assert placeholder_names("{date} {num} {date}") == ["date", "num"]

    def test_resolve(self):
        assert resolve_placeholders("數量 {num}", {"num": "5"}) == "數量 5"

    def test_unknown_stays_literal(self):
        assert resolve_placeholders("{a} {b}", {"a": "1"}) == "1 {b}"

    def test_no_variables(self):
        assert resolve_placeholders("{a}", None) == "{a}"


class TestPreview:
    def test_display_width_counts_cjk_double(self):
        assert display_width("ab") == 2
        assert display_width("北斗") == 4

    def test_alignment(self):
        assert align_line("ab", "right", 6) == "    ab"
        assert align_line("ab", "center", 6) == "  ab"
        assert align_line("ab", "left", 6) == "ab"

    def test_render_ticket(self):
        elements = [
            TicketElement(kind="image", variable_name="logo.bin", align="center"),
            TicketElement(kind="text", content="AB", size="large", is_bold=True),
            TicketElement(kind="spacing", spacing_height=48),
            TicketElement(kind="text", content="n={num}\nend", align="right"),
            TicketElement(kind="spacing", spacing_height=-170),
            TicketElement(kind="spacing", spacing_height=0),
        ]
        lines = render_preview(elements, {"num": "5"}, columns=20)
        assert lines == [
            " [image: logo.bin]",
            "*A B*",
            "",
            "",
            " " * 17 + "n=5",
            " " * 17 + "end",
            "~~ overlay 170 ~~",
        ]

    def test_small_feed_still_one_line(self):
        assert render_preview([TicketElement(kind="spacing", spacing_height=3)]) == [""]

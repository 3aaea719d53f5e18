"""Tests for gitpr.render.table."""

from __future__ import annotations

from gitpr.render.table import display_width, render_table


class TestDisplayWidth:
    def test_ascii(self):
        assert display_width("abc") == 3

    def test_wide_characters_count_double(self):
        assert display_width("漢字") == 4

    def test_combining_marks_are_zero_width(self):
        assert display_width("e\u0301") == 1


class TestRenderTable:
    def test_layout(self):
        text = render_table(["A", "Name"], [["1", "x"], ["22", "yy"]])
        assert text.splitlines() == [
            "╭────┬──────╮",
            "│ A  │ Name │",
            "├────┼──────┤",
            "│ 1  │ x    │",
            "│ 22 │ yy   │",
            "╰────┴──────╯",
        ]

    def test_empty_rows_render_header_box(self):
        lines = render_table(["Number", "Title"], []).splitlines()
        assert len(lines) == 4
        assert lines[0].startswith("╭") and lines[-1].startswith("╰")
        assert "Number" in lines[1]

    def test_multiline_cells_expand_row(self):
        lines = render_table(["N", "Description"], [["#1", "first line\nsecond"]]).splitlines()
        assert lines[3].startswith("│ #1 │ first line")
        assert lines[4].startswith("│    │ second")
        assert lines[5].startswith("╰")
        assert len(lines[3]) == len(lines[4]) == len(lines[0])

    def test_all_lines_same_width(self):
        text = render_table(["PR", "Title"], [["#7", "日本語のタイトル"], ["#8", "ascii"]])
        widths = {display_width(line) for line in text.splitlines()}
        assert len(widths) == 1

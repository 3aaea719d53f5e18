"""Rounded-border Unicode tables for terminal output."""

from __future__ import annotations

import unicodedata
from collections.abc import Sequence

# ╭─┬─╮ / ├─┼─┤ / ╰─┴─╯
_TOP = ("╭", "┬", "╮")
_MID = ("├", "┼", "┤")
_BOTTOM = ("╰", "┴", "╯")
_H = "─"
_V = "│"


def display_width(text: str) -> int:
    """Terminal columns taken by ``text`` (wide CJK/emoji count as two)."""
    width = 0
    for ch in text:
        if unicodedata.combining(ch):
            continue
        width += 2 if unicodedata.east_asian_width(ch) in ("W", "F") else 1
    return width


def _pad(text: str, width: int) -> str:
    return text + " " * (width - display_width(text))


def _rule(widths: Sequence[int], left: str, join: str, right: str) -> str:
    return left + join.join(_H * (w + 2) for w in widths) + right


def render_table(headers: Sequence[str], rows: Sequence[Sequence[str]]) -> str:
    """Render ``rows`` under ``headers``; cells may contain newlines.

    An empty ``rows`` still renders the header box.
    """
    split_rows = [[str(cell).split("\n") for cell in row] for row in rows]
    widths = [display_width(h) for h in headers]
    for row in split_rows:
        for i, lines in enumerate(row):
            widths[i] = max(widths[i], *(display_width(line) for line in lines))

    out = [_rule(widths, *_TOP)]
    out.append(_V + _V.join(f" {_pad(h, w)} " for h, w in zip(headers, widths)) + _V)
    out.append(_rule(widths, *_MID))

    for row in split_rows:
        height = max((len(lines) for lines in row), default=1)
        for n in range(height):
            cells = (lines[n] if n < len(lines) else "" for lines in row)
            out.append(_V + _V.join(f" {_pad(c, w)} " for c, w in zip(cells, widths)) + _V)

    out.append(_rule(widths, *_BOTTOM))
    return "\n".join(out)

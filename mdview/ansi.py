"""ANSI-aware text measurement and clipping utilities.

Used by the renderer to detect empty separator lines and by the list screen to
clip styled rows to the terminal width without cutting escape sequences.
"""

from __future__ import annotations

import re
import unicodedata

ANSI_ESCAPE_RE = re.compile(r"\x1b\[[0-9;?]*[ -/]*[@-~]")
TAB_STOP = 8


def strip_ansi(text: str) -> str:
    """Return ``text`` with all CSI escape sequences removed."""
    return ANSI_ESCAPE_RE.sub("", text)


def is_empty_line(line: str) -> bool:
    """Return whether a line holds nothing but escape sequences."""
    return not strip_ansi(line)


def char_display_width(ch: str, col: int) -> int:
    """Return terminal column width for one character at visual column ``col``.

    Tabs expand to the next 8-column stop, combining marks consume no columns,
    and East Asian wide/fullwidth characters consume two.
    """
    if ch == "\t":
        return TAB_STOP - (col % TAB_STOP)
    if unicodedata.combining(ch):
        return 0
    if unicodedata.east_asian_width(ch) in {"W", "F"}:
        return 2
    return 1


def display_width(text: str) -> int:
    """Return the number of terminal columns ``text`` occupies."""
    col = 0
    for ch in strip_ansi(text):
        col += char_display_width(ch, col)
    return col


def clip_ansi_line(text: str, max_cols: int) -> str:
    """Trim a styled line to at most ``max_cols`` display columns.

    ANSI escape sequences are preserved verbatim and do not count toward width.
    Tabs are expanded into spaces so clipping aligns with rendered terminal cells.
    """
    if max_cols <= 0 or not text:
        return ""

    out: list[str] = []
    col = 0
    i = 0
    n = len(text)
    while i < n:
        if text[i] == "\x1b":
            match = ANSI_ESCAPE_RE.match(text, i)
            if match:
                out.append(match.group(0))
                i = match.end()
                continue
        if col >= max_cols:
            i += 1
            continue
        ch = text[i]
        w = char_display_width(ch, col)
        if col + w > max_cols:
            col = max_cols
            i += 1
            continue
        out.append(" " * w if ch == "\t" else ch)
        col += w
        i += 1

    return "".join(out)

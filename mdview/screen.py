"""Full-screen rendering of the document list and search views.

``build_screen_lines`` is presentation-only and side-effect free; the runtime
repaints the whole screen from its output after every state change.
"""

from __future__ import annotations

from .ansi import clip_ansi_line
from .state import MODE_SEARCH, BrowserState
from .ui_theme import UITheme

BROWSE_TITLE = "Markdown files"
SEARCH_TITLE = "Search"
BROWSE_HINTS = "↑/↓ navigate  / search  Enter open  q quit"
SEARCH_HINTS = "↑/↓ navigate  Enter open  Esc back  Ctrl+C quit"
EMPTY_QUERY_HINT = "type to search"
NO_MATCHES_HINT = "no matches"

# Blank line, title, blank line above the list; blank line, hints and the
# status row below it.
_CHROME_ROWS = 6


def visible_window(cursor: int, total: int, capacity: int) -> tuple[int, int]:
    """Return the ``[start, end)`` slice of a list that keeps ``cursor`` visible.

    The cursor is kept near the middle of the window once the list scrolls.
    """
    capacity = max(1, capacity)
    if total <= capacity:
        return 0, total
    start = max(0, cursor - capacity // 2)
    start = min(start, total - capacity)
    return start, start + capacity


def _row(theme: UITheme, text: str, selected: bool) -> str:
    if selected:
        return f"{theme.selected}  > {text}  {theme.reset}"
    return f"    {text}"


def _browse_lines(state: BrowserState, theme: UITheme, capacity: int) -> list[str]:
    count = len(state.documents)
    lines = ["", f"  {theme.title}{BROWSE_TITLE}{theme.reset} {theme.hint}({count}){theme.reset}", ""]
    start, end = visible_window(state.cursor, count, capacity)
    for idx in range(start, end):
        name = state.documents[idx].display_name
        if idx == state.cursor:
            lines.append(_row(theme, name, selected=True))
        else:
            lines.append(_row(theme, f"{theme.item}{name}{theme.reset}", selected=False))
    lines.extend(["", f"  {theme.hint}{BROWSE_HINTS}{theme.reset}"])
    return lines


def _search_lines(state: BrowserState, theme: UITheme, capacity: int) -> list[str]:
    count_label = f" {theme.hint}({len(state.results)}){theme.reset}" if state.query else ""
    lines = [
        "",
        f"  {theme.title}{SEARCH_TITLE}:{theme.reset} {theme.query}{state.query}{theme.reset}_{count_label}",
        "",
    ]
    if not state.query:
        lines.append(f"    {theme.hint}{EMPTY_QUERY_HINT}{theme.reset}")
    elif not state.results:
        lines.append(f"    {theme.hint}{NO_MATCHES_HINT}{theme.reset}")
    else:
        start, end = visible_window(state.cursor, len(state.results), capacity)
        for idx in range(start, end):
            result = state.results[idx]
            location = f"{result.document.display_name}:{result.line}"
            if idx == state.cursor:
                lines.append(_row(theme, f"{location}  {result.preview}", selected=True))
            else:
                styled = (
                    f"{theme.location}{location}{theme.reset}  "
                    f"{theme.preview}{result.preview}{theme.reset}"
                )
                lines.append(_row(theme, styled, selected=False))
    lines.extend(["", f"  {theme.hint}{SEARCH_HINTS}{theme.reset}"])
    return lines


def build_screen_lines(state: BrowserState, theme: UITheme, rows: int, columns: int) -> list[str]:
    """Build every visible row for ``state`` clipped to ``columns``."""
    capacity = max(1, rows - _CHROME_ROWS)
    if state.mode == MODE_SEARCH:
        lines = _search_lines(state, theme, capacity)
    else:
        lines = _browse_lines(state, theme, capacity)
    return [clip_ansi_line(line, columns) for line in lines]


def status_line(message: str, theme: UITheme, columns: int) -> str:
    """Format an in-session error message for the bottom row."""
    return clip_ansi_line(f"  {theme.status}{message}{theme.reset}", columns)

"""UI theme definitions and selection helpers.

Themes are ANSI palettes for the document list and search screens. The
markdown styles handed to the renderer live in ``MARKDOWN_THEME`` and are
independent of the list palette, as is the pygments code style.
"""

from __future__ import annotations

from dataclasses import dataclass

from rich.theme import Theme


@dataclass(frozen=True)
class UITheme:
    """Semantic ANSI palette used by the list screen."""

    name: str
    reset: str
    title: str
    item: str
    selected: str
    location: str
    preview: str
    query: str
    hint: str
    status: str


DEFAULT_THEME = UITheme(
    name="default",
    reset="\033[0m",
    title="\033[1;38;5;81m",
    item="\033[38;5;252m",
    selected="\033[1;38;5;231;48;5;25m",
    location="\033[38;5;110m",
    preview="\033[2;38;5;250m",
    query="\033[1;38;5;81m",
    hint="\033[2;38;5;250m",
    status="\033[38;5;203m",
)

# Palette of the original tool: blue headings and selection, dark text,
# intended for light terminal backgrounds.
LIGHT_THEME = UITheme(
    name="light",
    reset="\033[0m",
    title="\033[1;38;2;0;0;255m",
    item="\033[38;2;0;0;0m",
    selected="\033[38;2;255;255;255;48;2;0;0;255m",
    location="\033[38;2;0;0;170m",
    preview="\033[2;38;2;0;0;0m",
    query="\033[1;38;2;0;0;255m",
    hint="\033[38;2;170;170;170m",
    status="\033[31m",
)

PLAIN_THEME = UITheme(
    name="plain",
    reset="",
    title="",
    item="",
    selected="\033[7m",
    location="",
    preview="",
    query="",
    hint="",
    status="",
)

# Fully unstyled palette used when colour output is disabled.
NO_COLOR_THEME = UITheme(
    name="no-color",
    reset="",
    title="",
    item="",
    selected="",
    location="",
    preview="",
    query="",
    hint="",
    status="",
)

_THEMES: dict[str, UITheme] = {
    DEFAULT_THEME.name: DEFAULT_THEME,
    LIGHT_THEME.name: LIGHT_THEME,
    PLAIN_THEME.name: PLAIN_THEME,
}

MARKDOWN_THEME = Theme(
    {
        "markdown.h1": "bold blue",
        "markdown.h2": "bold blue",
        "markdown.h3": "bold blue",
        "markdown.h4": "bold blue",
        "markdown.h5": "bold blue",
        "markdown.h6": "bold blue",
        "markdown.code": "black on #e0e0e0",
        "markdown.block_quote": "dim",
        "markdown.hr": "#aaaaaa",
        "markdown.link": "underline",
        "markdown.link_url": "dim",
    }
)


def available_theme_names() -> list[str]:
    """Return selectable theme names in stable order."""
    return sorted(_THEMES)


def get_theme(name: str | None, no_color: bool = False) -> UITheme:
    """Return the palette for ``name``; unknown names use the default theme.

    When colour is disabled every style is empty regardless of ``name``.
    """
    if no_color:
        return NO_COLOR_THEME
    if not name:
        return DEFAULT_THEME
    return _THEMES.get(name.strip().lower(), DEFAULT_THEME)

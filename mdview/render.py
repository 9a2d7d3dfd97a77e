"""Markdown-to-terminal rendering.

Structural conversion (headings, emphasis, code, quotes, tables, rules,
links) is delegated to ``rich.markdown``. The converted text is then
post-processed so the result is compact, never shows raw emphasis markers,
and carries a fixed left margin. Rendering is pure: the same text and
``RenderOptions`` always produce byte-identical output.
"""

from __future__ import annotations

import io
import logging
import re
from dataclasses import dataclass

from pygments.styles import get_all_styles, get_style_by_name
from pygments.util import ClassNotFound
from rich.color import ColorSystem
from rich.console import Console, ConsoleOptions, RenderResult
from rich.emoji import Emoji
from rich.markdown import Heading, Markdown
from rich.style import Style
from rich.text import Text

from .ansi import is_empty_line
from .config import DEFAULT_STYLE, DEFAULT_WIDTH, Settings
from .ui_theme import MARKDOWN_THEME

logger = logging.getLogger(__name__)

MARGIN = "  "

_BOLD_RE = re.compile(r"\*\*([^*\n]+)\*\*")
_ITALIC_RE = re.compile(r"\*([^*\n]+)\*")
_CODE_RE = re.compile(r"`([^`\n]+)`")

_BOLD_STYLE = Style(bold=True)
_ITALIC_STYLE = Style(italic=True)
_HEADER_STYLE = Style(reverse=True)


@dataclass(frozen=True)
class RenderOptions:
    width: int = DEFAULT_WIDTH
    code_theme: str = DEFAULT_STYLE
    no_color: bool = False


@dataclass(frozen=True)
class RenderedArtifact:
    """Styled, ready-to-page text for one document."""

    name: str
    body: str


class PrefixedHeading(Heading):
    """Left-aligned heading shown with one ``#`` per level."""

    def __rich_console__(self, console: Console, options: ConsoleOptions) -> RenderResult:
        level = int(self.tag[1:]) if self.tag[1:].isdigit() else 1
        text = Text.assemble(("#" * level + " ", self.style_name), self.text)
        text.justify = "left"
        yield text


class DocumentMarkdown(Markdown):
    """Markdown with prefixed headings and emoji shortcodes in prose only."""

    elements = {**Markdown.elements, "heading_open": PrefixedHeading}

    def __init__(self, markup: str, **kwargs) -> None:
        super().__init__(markup, **kwargs)
        _replace_emoji(self.parsed)


def _replace_emoji(tokens) -> None:
    # Code spans and fences are separate token types and keep their text.
    for token in tokens:
        if token.type == "text":
            token.content = Emoji.replace(token.content)
        if token.children:
            _replace_emoji(token.children)


def available_code_styles() -> list[str]:
    """Return pygments style names usable for fenced code blocks."""
    return sorted(get_all_styles())


def resolve_code_style(name: str | None) -> str:
    """Return ``name`` if pygments knows it, otherwise the default style."""
    if not name:
        return DEFAULT_STYLE
    try:
        get_style_by_name(name)
    except ClassNotFound:
        logger.warning("Unknown code style %r, using %s", name, DEFAULT_STYLE)
        return DEFAULT_STYLE
    return name


def options_from_settings(settings: Settings) -> RenderOptions:
    return RenderOptions(
        width=settings.width,
        code_theme=resolve_code_style(settings.style),
        no_color=settings.no_color,
    )


def _make_console(options: RenderOptions) -> Console:
    return Console(
        file=io.StringIO(),
        width=options.width,
        force_terminal=True,
        force_jupyter=False,
        force_interactive=False,
        color_system=None if options.no_color else "truecolor",
        no_color=options.no_color,
        emoji=False,
        markup=False,
        highlight=False,
        legacy_windows=False,
        theme=MARKDOWN_THEME,
    )


def convert_markdown(raw_text: str, options: RenderOptions) -> str:
    """Run the markdown conversion service and return its styled text."""
    console = _make_console(options)
    markdown = DocumentMarkdown(
        raw_text,
        code_theme=options.code_theme,
        hyperlinks=False,
    )
    with console.capture() as capture:
        console.print(markdown)
    return capture.get()


def collapse_blank_lines(text: str) -> str:
    """Collapse every run of empty lines into a single empty line.

    Only lines with no characters besides escape sequences count. Rows
    holding padding spaces, such as blank lines inside code blocks, are kept.
    """
    out: list[str] = []
    previous_blank = False
    for line in text.split("\n"):
        blank = is_empty_line(line)
        if blank and previous_blank:
            continue
        out.append(line)
        previous_blank = blank
    return "\n".join(out)


def _styled(style: Style, text: str, no_color: bool) -> str:
    if no_color:
        return text
    return style.render(text, color_system=ColorSystem.TRUECOLOR)


def restyle_leftover_markup(text: str, no_color: bool = False) -> str:
    """Turn literal ``**bold**``, ``*italic*`` and `` `code` `` into styling.

    Catches markers the converter left untouched so raw markup syntax never
    reaches the terminal. With ``no_color`` the markers are simply dropped.
    """
    code_style = MARKDOWN_THEME.styles["markdown.code"]
    text = _BOLD_RE.sub(lambda m: _styled(_BOLD_STYLE, m.group(1), no_color), text)
    text = _ITALIC_RE.sub(lambda m: _styled(_ITALIC_STYLE, m.group(1), no_color), text)
    return _CODE_RE.sub(lambda m: _styled(code_style, m.group(1), no_color), text)


def indent_lines(text: str, margin: str = MARGIN) -> str:
    return "\n".join(margin + line for line in text.split("\n"))


def render(raw_text: str, options: RenderOptions | None = None) -> str:
    """Render markdown ``raw_text`` into a styled, margin-indented block."""
    if options is None:
        options = RenderOptions()
    converted = convert_markdown(raw_text, options).rstrip("\n")
    compact = collapse_blank_lines(converted)
    restyled = restyle_leftover_markup(compact, no_color=options.no_color)
    return indent_lines(restyled)


def render_header(name: str, no_color: bool = False) -> str:
    return MARGIN + _styled(_HEADER_STYLE, f" {name} ", no_color)


def build_artifact(raw_text: str, name: str, options: RenderOptions | None = None) -> RenderedArtifact:
    """Render a document and prefix it with its name header and a blank line."""
    if options is None:
        options = RenderOptions()
    body = render_header(name, options.no_color) + "\n\n" + render(raw_text, options) + "\n"
    return RenderedArtifact(name=name, body=body)

"""Command-line front door for mdview.

Parses CLI options, resolves the target into documents, and dispatches to
the interactive browser (directories) or a one-shot view (files and piped
standard input). Discovery errors end the process with status 1 before any
interactive state is entered.
"""

from __future__ import annotations

import argparse
import sys
from pathlib import Path

from .app import run_browser, view_document
from .config import Settings, resolve_settings
from .documents import STDIN_NAME, decode_bytes, load_document, resolve
from .errors import DocumentNotFound, EmptyDirectory, UnreadableFile, ViewerLaunchFailure
from .logging import configure_logging
from .ui_theme import available_theme_names

HELP_EPILOG = """\
keys (file list):
  Up/k  Down/j   move selection
  Enter          open document
  /              search document contents
  q / Ctrl+C     quit

keys (search):
  type           refine query
  Backspace      delete last character
  Up/Down        move selection
  Enter          open document at the matching line
  Esc            back to file list
  Ctrl+C         quit

keys (in less):
  j/Down/Enter   scroll down
  k/Up           scroll up
  Space/PgDn     page down
  b/PgUp         page up
  g / G          go to top / bottom
  /pattern       search forward
  ?pattern       search backward
  n / N          next / previous match
  q              close document
"""


def _positive_int(value: str) -> int:
    """argparse type for positive integer values."""
    try:
        parsed = int(value)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(f"invalid integer value: {value!r}") from exc
    if parsed <= 0:
        raise argparse.ArgumentTypeError("value must be >= 1")
    return parsed


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="mdview",
        description="Browse, search and read markdown documents in the terminal.",
        epilog=HELP_EPILOG,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "path",
        nargs="?",
        default=None,
        help="Markdown file or directory. Defaults to the current directory, or stdin when piped.",
    )
    parser.add_argument("--width", type=_positive_int, default=None, help="Render width in columns (default: 100).")
    parser.add_argument("--style", default=None, help="Pygments style name for code blocks (default: monokai).")
    parser.add_argument(
        "--theme",
        default=None,
        help=f"UI theme name ({', '.join(available_theme_names())}).",
    )
    parser.add_argument("--pager", default=None, help="Pager command (default: less, or $MDVIEW_PAGER).")
    parser.add_argument("--no-color", action="store_true", default=None, help="Disable color output.")
    parser.add_argument(
        "--nopager",
        action="store_true",
        help="Print rendered output (or the document list for a directory) without paging.",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Log debug details to stderr.")
    return parser


def _view(text: str, name: str, settings: Settings, nopager: bool) -> None:
    try:
        view_document(text, name, settings, nopager=nopager)
    except ViewerLaunchFailure as exc:
        raise SystemExit(f"Error: {exc}") from None


def _run(args: argparse.Namespace, settings: Settings, default_path: Path | None) -> None:
    if args.path is None and not sys.stdin.isatty():
        content = decode_bytes(sys.stdin.buffer.read())
        if content.strip():
            _view(content, STDIN_NAME, settings, args.nopager)
        return

    if default_path is None:
        default_path = Path.cwd()
    target = Path(args.path) if args.path else default_path
    try:
        documents = resolve(target, settings.exclude_dirs)
    except (DocumentNotFound, EmptyDirectory) as exc:
        raise SystemExit(f"Error: {exc}") from None

    if target.is_dir():
        if args.nopager:
            for document in documents:
                sys.stdout.write(document.display_name + "\n")
            return
        if not sys.stdin.isatty():
            raise SystemExit("Error: browsing a directory needs an interactive terminal.")
        run_browser(documents, settings)
        return

    document = documents[0]
    try:
        text = load_document(document)
    except UnreadableFile as exc:
        raise SystemExit(f"Error: {exc}") from None
    _view(text, document.display_name, settings, args.nopager)


def main(argv: list[str] | None = None, default_path: Path | None = None) -> None:
    """Parse CLI arguments and browse or view the requested documents.

    ``default_path`` is primarily for tests; when omitted the current working
    directory is used.
    """
    args = build_parser().parse_args(argv)
    settings = resolve_settings(args)
    configure_logging(settings.log_level, no_color=settings.no_color)
    try:
        _run(args, settings, default_path)
    except KeyboardInterrupt:
        raise SystemExit(0) from None


if __name__ == "__main__":
    main()

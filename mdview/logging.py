"""
Logging helpers for mdview.

Provides a single entrypoint `configure_logging` that routes all log records
to stderr through a Rich handler, so diagnostics never mix with the rendered
document stream on stdout.
"""

from __future__ import annotations

import logging

from rich.console import Console
from rich.logging import RichHandler


def configure_logging(level: int = logging.WARNING, no_color: bool = False) -> None:
    """Configure application logging.

    Args:
        level: Root logging level (default: logging.WARNING).
        no_color: Disable Rich styling of log lines.
    """
    # Remove any pre-existing handlers to avoid duplicate output
    root = logging.getLogger()
    for h in list(root.handlers):
        root.removeHandler(h)

    root.setLevel(level)

    handler = RichHandler(
        console=Console(stderr=True, no_color=no_color),
        show_time=False,
        show_path=False,
        markup=False,
        rich_tracebacks=level <= logging.DEBUG,
    )
    # Use a concise format to avoid duplicating level text
    handler.setFormatter(logging.Formatter("%(message)s"))
    root.addHandler(handler)

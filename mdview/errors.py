"""Error types raised by document discovery, loading, and viewing.

Discovery errors (``DocumentNotFound``, ``EmptyDirectory``) are fatal and end
the process before any interactive state exists. ``UnreadableFile`` and
``ViewerLaunchFailure`` are recoverable while browsing and are reported as a
one-line status instead.
"""

from __future__ import annotations

from pathlib import Path


class MdviewError(Exception):
    """Base class for all mdview errors."""


class DocumentNotFound(MdviewError):
    """Raised when the invocation target does not exist."""

    def __init__(self, path: Path) -> None:
        self.path = path
        super().__init__(f"Not found: {path}")


class EmptyDirectory(MdviewError):
    """Raised when a directory target contains no markdown documents.

    Kept distinct from ``DocumentNotFound`` so the command line can tell the
    user the directory exists but holds nothing viewable.
    """

    def __init__(self, path: Path) -> None:
        self.path = path
        super().__init__(f"No markdown files found in {path}")


class UnreadableFile(MdviewError):
    """Raised when a listed document cannot be read, e.g. it vanished."""

    def __init__(self, path: Path, reason: str = "") -> None:
        self.path = path
        self.reason = reason
        message = f"Cannot read {path}"
        if reason:
            message = f"{message}: {reason}"
        super().__init__(message)


class ViewerLaunchFailure(MdviewError):
    """Raised when the external pager could not be started."""

from __future__ import annotations

import logging
from collections.abc import Iterable
from dataclasses import dataclass

from .documents import DocumentRef, read_text

logger = logging.getLogger(__name__)

PREVIEW_MAX_CHARS = 80


@dataclass(frozen=True)
class SearchResult:
    document: DocumentRef
    line: int  # 1-based
    preview: str


def _preview_line(text: str, max_chars: int = PREVIEW_MAX_CHARS) -> str:
    return text.strip()[:max_chars]


def first_match(text: str, needle: str) -> tuple[int, str] | None:
    """Return ``(line_number, line)`` of the first line containing ``needle``.

    ``needle`` must already be case-folded.
    """
    for line_number, line in enumerate(text.split("\n"), start=1):
        if needle in line.casefold():
            return line_number, line
    return None


def search(documents: Iterable[DocumentRef], query: str) -> list[SearchResult]:
    """Scan ``documents`` in order for a case-insensitive ``query``.

    At most one result per document (its first matching line). Documents that
    cannot be read are skipped. Every call rescans from disk.
    """
    if not query:
        return []
    needle = query.casefold()

    results: list[SearchResult] = []
    for document in documents:
        try:
            text = read_text(document.path)
        except OSError as exc:
            logger.debug("Skipping unreadable %s: %s", document.path, exc)
            continue
        match = first_match(text, needle)
        if match is None:
            continue
        line_number, line = match
        results.append(SearchResult(document=document, line=line_number, preview=_preview_line(line)))
    return results

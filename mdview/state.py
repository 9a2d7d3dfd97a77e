"""Immutable browser state and the helpers that keep its invariants.

``cursor`` always indexes the active list (documents in browse mode, search
results in search mode) and is 0 whenever that list is empty.
"""

from __future__ import annotations

from dataclasses import dataclass, replace

from .documents import DocumentRef
from .search import SearchResult

MODE_BROWSE = "browse"
MODE_SEARCH = "search"


@dataclass(frozen=True)
class BrowserState:
    documents: tuple[DocumentRef, ...]
    mode: str = MODE_BROWSE
    cursor: int = 0
    query: str = ""
    results: tuple[SearchResult, ...] = ()
    status: str = ""


def move_cursor(cursor: int, delta: int, count: int) -> int:
    """Move ``cursor`` by ``delta`` with wrap-around over ``count`` items."""
    if count <= 0:
        return 0
    return (cursor + delta) % count


def initial_state(documents: list[DocumentRef] | tuple[DocumentRef, ...]) -> BrowserState:
    return BrowserState(documents=tuple(documents))


def enter_search(state: BrowserState) -> BrowserState:
    return replace(state, mode=MODE_SEARCH, cursor=0, query="", results=(), status="")


def return_to_browse(state: BrowserState) -> BrowserState:
    """Browse mode at the top of the list with any search discarded."""
    return replace(state, mode=MODE_BROWSE, cursor=0, query="", results=(), status="")


def with_status(state: BrowserState, message: str) -> BrowserState:
    """Record a one-line status message without touching mode or cursor."""
    return replace(state, status=message)

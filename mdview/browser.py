"""Keystroke transitions for the document browser.

``handle_key`` is a pure function of the current state and one key token.
It never touches the terminal: opening a document and quitting are returned
as requests for the runtime loop to carry out.
"""

from __future__ import annotations

from collections.abc import Callable, Sequence
from dataclasses import dataclass, replace

from .documents import DocumentRef
from .search import SearchResult, search
from .state import (
    MODE_SEARCH,
    BrowserState,
    enter_search,
    move_cursor,
    return_to_browse,
)

SearchFn = Callable[[Sequence[DocumentRef], str], list[SearchResult]]

ENTER_KEYS = frozenset({"ENTER_CR", "ENTER_LF"})
UP_KEYS = frozenset({"UP", "k"})
DOWN_KEYS = frozenset({"DOWN", "j"})


@dataclass(frozen=True)
class OpenRequest:
    document: DocumentRef
    resume_line: int | None = None


@dataclass(frozen=True)
class Transition:
    """Result of one key press."""

    state: BrowserState
    redraw: bool = False
    open_request: OpenRequest | None = None
    quit: bool = False


def is_printable_key(key: str) -> bool:
    return len(key) == 1 and key.isprintable()


def _handle_browse_key(state: BrowserState, key: str, redraw: bool) -> Transition:
    count = len(state.documents)
    if key in UP_KEYS:
        return Transition(replace(state, cursor=move_cursor(state.cursor, -1, count)), redraw=True)
    if key in DOWN_KEYS:
        return Transition(replace(state, cursor=move_cursor(state.cursor, 1, count)), redraw=True)
    if key == "/":
        return Transition(enter_search(state), redraw=True)
    if key in ENTER_KEYS:
        if not state.documents:
            return Transition(state, redraw=redraw)
        return Transition(state, redraw=redraw, open_request=OpenRequest(state.documents[state.cursor]))
    if key in {"q", "CTRL_C"}:
        return Transition(state, quit=True)
    return Transition(state, redraw=redraw)


def _with_query(state: BrowserState, query: str, search_fn: SearchFn) -> BrowserState:
    results = tuple(search_fn(state.documents, query)) if query else ()
    return replace(state, query=query, results=results, cursor=0)


def _handle_search_key(state: BrowserState, key: str, redraw: bool, search_fn: SearchFn) -> Transition:
    if key == "ESC":
        return Transition(return_to_browse(state), redraw=True)
    if key == "CTRL_C":
        return Transition(state, quit=True)
    if key == "BACKSPACE":
        return Transition(_with_query(state, state.query[:-1], search_fn), redraw=True)
    if key in {"UP", "DOWN"}:
        if not state.results:
            return Transition(state, redraw=redraw)
        delta = -1 if key == "UP" else 1
        return Transition(replace(state, cursor=move_cursor(state.cursor, delta, len(state.results))), redraw=True)
    if key in ENTER_KEYS:
        if not state.results:
            return Transition(state, redraw=redraw)
        result = state.results[state.cursor]
        return Transition(state, redraw=redraw, open_request=OpenRequest(result.document, result.line))
    if is_printable_key(key):
        return Transition(_with_query(state, state.query + key, search_fn), redraw=True)
    return Transition(state, redraw=redraw)


def handle_key(state: BrowserState, key: str, search_fn: SearchFn = search) -> Transition:
    """Apply one key token to ``state``.

    A pending status message is cleared by any key press, which also forces
    a repaint so the message disappears from the screen.
    """
    redraw = False
    if state.status:
        state = replace(state, status="")
        redraw = True
    if state.mode == MODE_SEARCH:
        return _handle_search_key(state, key, redraw, search_fn)
    return _handle_browse_key(state, key, redraw)

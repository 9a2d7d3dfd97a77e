"""Interactive runtime for the document browser and one-shot viewing.

``BrowserApp`` drives the read-key/transition/repaint loop. Raw terminal mode
is held only while keys are being read: it is released before every pager
handoff and re-acquired when the pager exits.
"""

from __future__ import annotations

import logging
import os
import shutil
import sys
from collections.abc import Callable, Sequence
from typing import TextIO

from .browser import OpenRequest, Transition, handle_key
from .config import Settings
from .documents import DocumentRef, load_document
from .errors import UnreadableFile, ViewerLaunchFailure
from .input import read_key
from .pager import display, print_artifact
from .render import build_artifact, options_from_settings
from .screen import build_screen_lines, status_line
from .search import search
from .state import BrowserState, initial_state, return_to_browse, with_status
from .terminal import TerminalController
from .ui_theme import get_theme

logger = logging.getLogger(__name__)


class BrowserApp:
    """Browse and search ``documents``, paging the one the user opens."""

    def __init__(
        self,
        documents: Sequence[DocumentRef],
        settings: Settings,
        *,
        terminal: TerminalController | None = None,
        stdin_fd: int | None = None,
        stderr_fd: int | None = None,
        key_reader: Callable[[int], str] = read_key,
        search_fn: Callable[..., list] = search,
        display_fn: Callable[..., BrowserState] = display,
        terminal_size: Callable[..., os.terminal_size] = shutil.get_terminal_size,
    ) -> None:
        self.documents = tuple(documents)
        self.settings = settings
        self.stdin_fd = sys.stdin.fileno() if stdin_fd is None else stdin_fd
        self.stderr_fd = sys.stderr.fileno() if stderr_fd is None else stderr_fd
        self.terminal = terminal or TerminalController(self.stdin_fd, sys.stdout.fileno())
        self.key_reader = key_reader
        self.search_fn = search_fn
        self.display_fn = display_fn
        self.terminal_size = terminal_size
        self.theme = get_theme(settings.theme, settings.no_color)
        self.render_options = options_from_settings(settings)

    def run(self) -> None:
        """Run until the user quits; returns normally on quit."""
        state = initial_state(self.documents)
        while True:
            with self.terminal.raw_mode():
                transition = self._read_until_request(state)
            if transition.open_request is None:
                self.terminal.clear_screen()
                return
            state = self.open_document(transition.state, transition.open_request)

    def _read_until_request(self, state: BrowserState) -> Transition:
        self.draw(state)
        while True:
            key = self.key_reader(self.stdin_fd)
            if not key:
                return Transition(state, quit=True)
            transition = handle_key(state, key, self.search_fn)
            if transition.quit or transition.open_request is not None:
                return transition
            state = transition.state
            if transition.redraw:
                self.draw(state)

    def draw(self, state: BrowserState) -> None:
        size = self.terminal_size((80, 24))
        self.terminal.paint(build_screen_lines(state, self.theme, size.lines, size.columns))
        if state.status:
            row = f"\x1b[{max(1, size.lines)};1H" + status_line(state.status, self.theme, size.columns)
            os.write(self.stderr_fd, row.encode("utf-8"))

    def open_document(self, state: BrowserState, request: OpenRequest) -> BrowserState:
        """Render and page one document.

        Returns browse mode at the top of the list after the pager exits, or
        ``state`` unchanged with a status message when the document could not
        be shown.
        """
        document = request.document
        try:
            text = load_document(document)
        except UnreadableFile as exc:
            logger.debug("Open failed: %s", exc)
            return with_status(state, str(exc))

        try:
            artifact = build_artifact(text, document.display_name, self.render_options)
        except Exception as exc:
            logger.debug("Rendering %s failed", document.path, exc_info=True)
            return with_status(state, f"Failed to render {document.display_name}: {exc}")

        try:
            return self.display_fn(
                artifact,
                request.resume_line,
                lambda: return_to_browse(state),
                pager=self.settings.pager,
            )
        except ViewerLaunchFailure as exc:
            logger.debug("Pager failed: %s", exc)
            return with_status(state, str(exc))


def run_browser(documents: Sequence[DocumentRef], settings: Settings) -> None:
    BrowserApp(documents, settings).run()


def view_document(
    text: str,
    name: str,
    settings: Settings,
    *,
    nopager: bool = False,
    stream: TextIO | None = None,
) -> None:
    """Show a single document and end the session.

    With ``nopager`` the rendered text is written to ``stream`` (stdout by
    default). Otherwise the pager is launched and the process exits when it
    closes.
    """
    artifact = build_artifact(text, name, options_from_settings(settings))
    if nopager:
        print_artifact(artifact, stream if stream is not None else sys.stdout)
        return
    display(artifact, pager=settings.pager)

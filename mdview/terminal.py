"""Terminal control helpers for the browser session.

Owns the raw-mode lifecycle and alternate-screen switching. Raw mode is a
single process-wide resource: the browser holds it while reading keys and
releases it before the pager takes over the terminal.
"""

from __future__ import annotations

import contextlib
import os
import termios
import tty
from collections.abc import Iterator

CLEAR_SCREEN = b"\x1b[H\x1b[2J"


class TerminalController:
    """Manage raw-mode transitions and full-screen writes."""

    def __init__(self, stdin_fd: int, stdout_fd: int) -> None:
        """Capture tty state and bind stdin/stdout file descriptors."""
        self.stdin_fd = stdin_fd
        self.stdout_fd = stdout_fd
        self._saved_tty_state = termios.tcgetattr(stdin_fd)
        self._raw = False

    @property
    def is_raw(self) -> bool:
        return self._raw

    def enable_tui_mode(self) -> None:
        """Enter raw alternate-screen mode with the cursor hidden."""
        tty.setraw(self.stdin_fd, termios.TCSAFLUSH)
        os.write(self.stdout_fd, b"\x1b[?1049h\x1b[?25l")
        self._raw = True

    def disable_tui_mode(self) -> None:
        """Restore the saved tty state, cursor and main screen buffer."""
        os.write(self.stdout_fd, b"\x1b[?25h\x1b[?1049l")
        termios.tcsetattr(self.stdin_fd, termios.TCSAFLUSH, self._saved_tty_state)
        self._raw = False

    def clear_screen(self) -> None:
        os.write(self.stdout_fd, CLEAR_SCREEN)

    def paint(self, lines: list[str]) -> None:
        """Replace the whole screen with ``lines``."""
        payload = CLEAR_SCREEN.decode("ascii") + "\r\n".join(lines)
        os.write(self.stdout_fd, payload.encode("utf-8"))

    @contextlib.contextmanager
    def raw_mode(self) -> Iterator[None]:
        """Context manager that brackets code with TUI enter/exit calls."""
        try:
            self.enable_tui_mode()
            yield
        finally:
            self.disable_tui_mode()

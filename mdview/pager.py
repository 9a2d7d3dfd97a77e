"""Viewer handoff to an external full-screen pager.

Writes a rendered artifact to a transient file, runs the pager on it with the
terminal's standard streams, and removes the file once the pager exits. The
caller must have released raw terminal mode before calling ``display``.
"""

from __future__ import annotations

import contextlib
import logging
import os
import shlex
import signal
import subprocess
import tempfile
from collections.abc import Callable, Iterator
from pathlib import Path
from typing import TextIO, TypeVar

from .config import DEFAULT_PAGER
from .errors import ViewerLaunchFailure
from .render import RenderedArtifact

logger = logging.getLogger(__name__)

T = TypeVar("T")

ARTIFACT_PREFIX = "mdview-"
ARTIFACT_SUFFIX = ".txt"

LESS_ARGS: tuple[str, ...] = (
    "-R",  # pass colour escape sequences through
    "-i",  # case-insensitive search
    r"-Ps%pt\%",
    r"-Pm%pt\%",
    r"-PM%pt\%",
)


def pager_command(pager: str, path: Path, resume_line: int | None = None) -> list[str]:
    """Build the argv used to page ``path``.

    ``less`` gets raw-colour passthrough, case-insensitive search, percentage
    prompts and, for ``resume_line > 1``, a ``+Ng`` start position. Other
    pagers receive only the file path.
    """
    cmd = shlex.split(pager)
    if not cmd:
        raise ViewerLaunchFailure("Cannot view: pager command is empty.")
    if Path(cmd[0]).name == "less":
        cmd.extend(LESS_ARGS)
        if resume_line is not None and resume_line > 1:
            cmd.append(f"+{resume_line}g")
    cmd.append(str(path))
    return cmd


def write_artifact(artifact: RenderedArtifact, directory: Path | None = None) -> Path:
    """Write ``artifact`` to a uniquely named UTF-8 file and return its path.

    A partially written file is removed before ``ViewerLaunchFailure`` is
    raised.
    """
    try:
        fd, name = tempfile.mkstemp(prefix=ARTIFACT_PREFIX, suffix=ARTIFACT_SUFFIX, dir=directory)
    except OSError as exc:
        raise ViewerLaunchFailure(f"Cannot write view file: {exc}") from exc
    path = Path(name)
    try:
        with os.fdopen(fd, "w", encoding="utf-8") as handle:
            handle.write(artifact.body)
    except (OSError, UnicodeError) as exc:
        remove_artifact(path)
        raise ViewerLaunchFailure(f"Cannot write view file: {exc}") from exc
    return path


def remove_artifact(path: Path) -> None:
    """Delete a transient file; failures are logged, never raised."""
    try:
        path.unlink()
    except FileNotFoundError:
        pass
    except OSError as exc:
        logger.warning("Could not remove %s: %s", path, exc)


@contextlib.contextmanager
def _interrupts_ignored() -> Iterator[None]:
    # Ctrl+C reaches the pager, which shares our process group.
    previous = signal.signal(signal.SIGINT, signal.SIG_IGN)
    try:
        yield
    finally:
        signal.signal(signal.SIGINT, previous)


def _default_interrupts() -> None:
    signal.signal(signal.SIGINT, signal.SIG_DFL)


def run_pager(cmd: list[str]) -> int:
    with _interrupts_ignored():
        try:
            completed = subprocess.run(cmd, check=False, preexec_fn=_default_interrupts)
        except OSError as exc:
            raise ViewerLaunchFailure(f"Failed to launch pager {cmd[0]!r}: {exc}") from exc
    return completed.returncode


def display(
    artifact: RenderedArtifact,
    resume_line: int | None = None,
    on_close: Callable[[], T] | None = None,
    *,
    pager: str = DEFAULT_PAGER,
) -> T:
    """Page ``artifact`` and block until the pager exits.

    The transient file is removed whether or not the pager ran. Afterwards
    ``on_close`` is called and its result returned; without a continuation
    the process ends with status 0.
    """
    path = write_artifact(artifact)
    try:
        cmd = pager_command(pager, path, resume_line)
        logger.debug("Launching pager: %s", shlex.join(cmd))
        returncode = run_pager(cmd)
        if returncode != 0:
            logger.debug("Pager exited with status %d", returncode)
    finally:
        remove_artifact(path)

    if on_close is None:
        raise SystemExit(0)
    return on_close()


def print_artifact(artifact: RenderedArtifact, stream: TextIO) -> None:
    """Write ``artifact`` directly to ``stream`` without paging."""
    stream.write(artifact.body)
    stream.flush()

"""Low-level terminal input decoding.

Reads raw bytes from stdin and translates them into normalized key tokens
such as ``UP``, ``ENTER_CR`` or ``CTRL_C``. Printable input, including
multi-byte UTF-8 characters, is returned as the character itself.
"""

from __future__ import annotations

import os
import select

ESC_SEQUENCE_TIMEOUT_MS = 25
_PENDING_BYTES: list[bytes] = []

_CONTROL_KEYS: dict[bytes, str] = {
    b"\x03": "CTRL_C",
    b"\x04": "CTRL_D",
    b"\x15": "CTRL_U",
    b"\t": "TAB",
    b"\x08": "BACKSPACE",
    b"\x7f": "BACKSPACE",
    b"\r": "ENTER_CR",
    b"\n": "ENTER_LF",
}

_CSI_KEYS: dict[bytes, str] = {
    b"A": "UP",
    b"B": "DOWN",
    b"C": "RIGHT",
    b"D": "LEFT",
    b"H": "HOME",
    b"F": "END",
}


def _read_ready_byte(fd: int, timeout_ms: int) -> bytes | None:
    ready, _, _ = select.select([fd], [], [], max(0.0, timeout_ms / 1000.0))
    if not ready:
        return None
    ch = os.read(fd, 1)
    if not ch:
        return None
    return ch


def _utf8_length(lead: int) -> int:
    if lead >= 0xF0:
        return 4
    if lead >= 0xE0:
        return 3
    if lead >= 0xC0:
        return 2
    return 1


def _decode_utf8(fd: int, first: bytes) -> str:
    data = first
    for _ in range(_utf8_length(first[0]) - 1):
        part = _read_ready_byte(fd, ESC_SEQUENCE_TIMEOUT_MS)
        if part is None:
            break
        data += part
    return data.decode("utf-8", errors="replace")


def read_key(fd: int, timeout_ms: int | None = None) -> str:
    """Read one key from ``fd`` and return its token.

    Returns an empty string on end of input or when ``timeout_ms`` elapses
    without a key press.
    """
    if _PENDING_BYTES:
        ch = _PENDING_BYTES.pop(0)
    else:
        if timeout_ms is not None:
            ready, _, _ = select.select([fd], [], [], max(0.0, timeout_ms / 1000.0))
            if not ready:
                return ""

        ch = os.read(fd, 1)
        if not ch:
            return ""

    if ch in _CONTROL_KEYS:
        return _CONTROL_KEYS[ch]

    if ch != b"\x1b":
        return _decode_utf8(fd, ch)

    # Escape / arrow key sequences.
    seq = _read_ready_byte(fd, ESC_SEQUENCE_TIMEOUT_MS)
    if seq is None:
        return "ESC"
    if seq not in {b"[", b"O"}:
        _PENDING_BYTES.append(seq)
        return "ESC"
    seq = _read_ready_byte(fd, ESC_SEQUENCE_TIMEOUT_MS)
    if seq is None:
        return "ESC"
    if seq in _CSI_KEYS:
        return _CSI_KEYS[seq]
    # Swallow the remainder of unsupported sequences such as ESC [ 3 ~.
    while seq is not None and not (b"@" <= seq <= b"~"):
        seq = _read_ready_byte(fd, ESC_SEQUENCE_TIMEOUT_MS)
    return "UNKNOWN"

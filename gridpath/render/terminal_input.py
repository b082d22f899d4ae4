"""Raw terminal key and mouse decoding for the Rich visualizer."""

from __future__ import annotations

import select
import sys
import termios
import time
import tty
from contextlib import contextmanager
from dataclasses import dataclass

MOUSE_LEFT = 0
MOUSE_RIGHT = 2

ESC_TIMEOUT = 0.05

_ARROWS = {"A": "UP", "B": "DOWN", "C": "RIGHT", "D": "LEFT"}


@dataclass(frozen=True)
class InputEvent:
    kind: str
    key: str | None = None
    x: int | None = None
    y: int | None = None
    button: int | None = None


class InputDecoder:
    """Turn buffered terminal bytes into key and mouse-press events.

    Mouse coordinates are reported 0-based (the terminal sends 1-based).
    A lone ESC is only emitted once ESC_TIMEOUT passes with nothing after it.
    """

    def __init__(self) -> None:
        self._buffer = ""
        self._esc_pending_at: float | None = None

    def feed(self, chunk: str) -> None:
        self._buffer += chunk
        if chunk and chunk[-1] != "\x1b":
            self._esc_pending_at = None

    def next_event(self, *, now: float | None = None) -> InputEvent | None:
        while self._buffer:
            if self._buffer[0] != "\x1b":
                key = self._buffer[0]
                self._buffer = self._buffer[1:]
                return _plain_key(key)
            event, consumed = self._parse_escape(now)
            if consumed == 0:
                return None
            self._buffer = self._buffer[consumed:]
            if event is not None:
                return event
        return None

    def _parse_escape(self, now: float | None) -> tuple[InputEvent | None, int]:
        buffer = self._buffer
        if buffer == "\x1b":
            now = time.monotonic() if now is None else now
            if self._esc_pending_at is None:
                self._esc_pending_at = now
                return None, 0
            if now - self._esc_pending_at < ESC_TIMEOUT:
                return None, 0
            self._esc_pending_at = None
            return InputEvent(kind="key", key="ESC"), 1
        self._esc_pending_at = None
        if buffer.startswith("\x1b[<"):
            ends = [idx for idx in (buffer.find("M", 3), buffer.find("m", 3)) if idx != -1]
            if not ends:
                return None, 0
            end = min(ends)
            return _parse_mouse(buffer[3:end], buffer[end]), end + 1
        if buffer.startswith("\x1b[") or buffer.startswith("\x1bO"):
            for idx in range(2, len(buffer)):
                char = buffer[idx]
                if char.isalpha() or char == "~":
                    return _parse_sequence(buffer[2 : idx + 1]), idx + 1
            return None, 0
        return InputEvent(kind="key", key="ESC"), 1


_DECODER = InputDecoder()


def read_event() -> InputEvent | None:
    while True:
        ready, _, _ = select.select([sys.stdin], [], [], 0)
        if not ready:
            break
        chunk = sys.stdin.read(1)
        if chunk == "":
            break
        _DECODER.feed(chunk)
    return _DECODER.next_event()


@contextmanager
def raw_terminal():
    if not sys.stdin.isatty():
        yield
        return
    fd = sys.stdin.fileno()
    old_settings = termios.tcgetattr(fd)
    try:
        _enable_mouse()
        tty.setcbreak(fd)
        new_settings = termios.tcgetattr(fd)
        new_settings[3] &= ~termios.ECHO
        termios.tcsetattr(fd, termios.TCSADRAIN, new_settings)
        yield
    finally:
        _disable_mouse()
        termios.tcsetattr(fd, termios.TCSADRAIN, old_settings)


def _plain_key(key: str) -> InputEvent:
    if key in {"\r", "\n"}:
        return InputEvent(kind="key", key="ENTER")
    if key == " ":
        return InputEvent(kind="key", key="SPACE")
    return InputEvent(kind="key", key=key)


def _parse_sequence(seq: str) -> InputEvent | None:
    if seq in _ARROWS:
        return InputEvent(kind="key", key=_ARROWS[seq])
    return None


def _parse_mouse(payload: str, char: str) -> InputEvent | None:
    if char == "m":
        return None
    try:
        button, x, y = (int(part) for part in payload.split(";"))
    except ValueError:
        return None
    return InputEvent(kind="mouse", x=x - 1, y=y - 1, button=button)


def _enable_mouse() -> None:
    sys.stdout.write("\x1b[?1000h\x1b[?1006h")
    sys.stdout.flush()


def _disable_mouse() -> None:
    sys.stdout.write("\x1b[?1000l\x1b[?1006l")
    sys.stdout.flush()

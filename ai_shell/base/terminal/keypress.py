"""Keyboard cancellation capability for interactive stream reads.

The stream reader asks an injected :class:`KeypressListener` to watch the
keyboard for the duration of exactly one read. ``TerminalKeypressListener``
switches an interactive stdin into character mode and registers an asyncio
reader that cancels the read's token on ``q`` or a lone ``escape``. Headless
environments (pipes, CI, Windows without ``termios``) get a listener that does
nothing, so reads behave identically minus the cancel feature.

Character mode uses ``tty.setcbreak`` rather than ``tty.setraw`` so output
post-processing stays on and streamed newlines still render as line breaks.
"""

from __future__ import annotations

import asyncio
import contextlib
import os
import sys
from typing import IO, Iterator, Optional, Protocol, Tuple, runtime_checkable

from ..cancellation import CancellationToken
from ..logging import get_logger, log_event

try:
    import termios
    import tty
except ImportError:  # pragma: no cover - non-POSIX platforms
    termios = None  # type: ignore[assignment]
    tty = None  # type: ignore[assignment]

STOP_KEYS = frozenset({"q", "escape"})

_logger = get_logger("ai_shell.terminal")


def key_names(data: bytes) -> Tuple[str, ...]:
    """Return the keypress names in one read from the terminal.

    A read may carry several keys when the user types quickly, so every
    printable character counts. A lone ``ESC`` byte is ``"escape"``; an escape
    sequence (arrow keys, etc.) starts with ``ESC`` but carries more bytes, so
    only its printable tail shows up.
    """
    if data == b"\x1b":
        return ("escape",)
    text = data.decode("utf-8", errors="ignore")
    return tuple(ch for ch in text if ch.isprintable())


@runtime_checkable
class KeypressListener(Protocol):
    """Optional capability: cancel a token when the user presses a stop key."""

    def available(self) -> bool:
        """Return True when interactive cancellation can be offered."""
        ...

    def listen(self, token: CancellationToken) -> contextlib.AbstractContextManager[None]:
        """Watch the keyboard while the returned context is active."""
        ...


class NullKeypressListener:
    """Listener for headless environments; never cancels anything."""

    def available(self) -> bool:
        return False

    def listen(self, token: CancellationToken) -> contextlib.AbstractContextManager[None]:
        return contextlib.nullcontext()


class TerminalKeypressListener:
    """Listen on a TTY for ``q``/``escape`` and cancel the active read."""

    def __init__(self, stream: Optional[IO[str]] = None, stop_keys: frozenset = STOP_KEYS) -> None:
        self._stream = stream if stream is not None else sys.stdin
        self._stop_keys = stop_keys

    def available(self) -> bool:
        if termios is None or self._stream is None:
            return False
        try:
            return self._stream.isatty()
        except (AttributeError, ValueError):
            return False

    @contextlib.contextmanager
    def listen(self, token: CancellationToken) -> Iterator[None]:
        """Install the listener for one read and always tear it down.

        Must be entered from a coroutine: the listener is an event loop reader
        on stdin's file descriptor.
        """
        if not self.available():
            yield
            return
        fd = self._stream.fileno()
        loop = asyncio.get_running_loop()
        saved = termios.tcgetattr(fd)

        def _on_readable() -> None:
            try:
                data = os.read(fd, 8)
            except OSError:
                return
            name = next((key for key in key_names(data) if key in self._stop_keys), None)
            if name is not None:
                log_event(_logger, "keypress.cancel", key=name)
                token.cancel(f"key:{name}")

        tty.setcbreak(fd)
        try:
            loop.add_reader(fd, _on_readable)
            installed = True
        except (NotImplementedError, RuntimeError):
            installed = False
        if not installed:
            termios.tcsetattr(fd, termios.TCSADRAIN, saved)
            yield
            return
        try:
            yield
        finally:
            loop.remove_reader(fd)
            termios.tcsetattr(fd, termios.TCSADRAIN, saved)


def default_keypress_listener() -> KeypressListener:
    """Return the terminal listener when stdin is interactive, else the null one."""
    listener = TerminalKeypressListener()
    return listener if listener.available() else NullKeypressListener()


__all__ = [
    "KeypressListener",
    "NullKeypressListener",
    "TerminalKeypressListener",
    "default_keypress_listener",
    "key_names",
    "STOP_KEYS",
]

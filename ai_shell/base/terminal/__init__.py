"""Terminal capabilities (keyboard cancellation)."""

from .keypress import (
    KeypressListener,
    NullKeypressListener,
    TerminalKeypressListener,
    default_keypress_listener,
)

__all__ = [
    "KeypressListener",
    "NullKeypressListener",
    "TerminalKeypressListener",
    "default_keypress_listener",
]

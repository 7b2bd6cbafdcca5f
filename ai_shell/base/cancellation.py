"""Cooperative cancellation primitives (public API facade).

Purpose
-------
Expose the cancellation constructs via the canonical
``ai_shell.base.cancellation`` import path while the concrete implementations
live under ``cancellation_parts``.

Notes
-----
- ``CancellationToken`` is the cancellation signal shared between the keypress
  listener and the stream reader.
- ``CancelledByUser`` is raised by ``raise_if_cancelled`` and handled by the
  reader, which then resolves with partial output.
"""

from .cancellation_parts.cancelled_by_user import CancelledByUser
from .cancellation_parts.cancellation_token import CancellationToken

__all__ = ["CancellationToken", "CancelledByUser"]

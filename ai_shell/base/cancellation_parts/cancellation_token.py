"""Cooperative cancellation token.

The stream reader polls the token between delta events; the keypress listener
sets it from an event loop callback. Cancelling never interrupts an in-flight
network read, it only stops consumption at the next element.
"""

from __future__ import annotations

import threading
from typing import Optional

from .cancelled_by_user import CancelledByUser


class CancellationToken:
    """One-shot cancellation flag with the reason of the first ``cancel`` call."""

    def __init__(self) -> None:
        self._event = threading.Event()
        self._lock = threading.Lock()
        self._reason: Optional[str] = None

    @property
    def cancelled(self) -> bool:
        return self._event.is_set()

    @property
    def reason(self) -> Optional[str]:
        return self._reason

    def cancel(self, reason: Optional[str] = None) -> None:
        """Request cancellation; later calls keep the first reason."""
        with self._lock:
            if self._event.is_set():
                return
            self._reason = reason
            self._event.set()

    def raise_if_cancelled(self) -> None:
        """Raise ``CancelledByUser`` once the token has been cancelled."""
        if self._event.is_set():
            raise CancelledByUser(self._reason or "stream cancelled by user")

    def __repr__(self) -> str:  # pragma: no cover - introspection aid
        return f"CancellationToken(cancelled={self.cancelled}, reason={self._reason!r})"


__all__ = ["CancellationToken"]

"""Cancellation signal type.

Defines ``CancelledByUser``, raised by ``CancellationToken.raise_if_cancelled``
when an interactive user stopped a stream early. It is a normal outcome, not a
failure: the stream reader handles it and returns the partial output.
"""

from __future__ import annotations

from ..errors_parts.error_code import ErrorCode


class CancelledByUser(RuntimeError):
    """Raised when a read is cancelled cooperatively (e.g., ``q`` pressed).

    This specialized error distinguishes cooperative cancellation from real
    failures so the reader can resolve with the text accumulated so far.
    """

    code = ErrorCode.CANCELLED


__all__ = ["CancelledByUser"]

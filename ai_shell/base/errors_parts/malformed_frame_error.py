"""
Malformed stream frame diagnostic.

A frame whose JSON body fails to decode must not abort an otherwise good
stream. The stream builds a ``MalformedFrameError`` and yields its message as
an ordinary text fragment instead of raising it.
"""
from __future__ import annotations

from .error_code import ErrorCode


class MalformedFrameError(ValueError):
    """Diagnostic for a stream frame whose body is not valid JSON.

    Attributes:
        payload: The offending frame text, unmodified.
        cause: The decoder exception.
    """

    code = ErrorCode.MALFORMED_FRAME

    def __init__(self, payload: str, cause: Exception) -> None:
        super().__init__(f"Error parsing stream frame {payload}.\n{cause}")
        self.payload = payload
        self.cause = cause


__all__ = ["MalformedFrameError"]

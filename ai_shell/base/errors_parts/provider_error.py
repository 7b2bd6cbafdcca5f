"""
Structured provider error exception types.

`ProviderError` is the base of every known, user-facing failure raised by the
completion core. Its message is pre-formatted for display; the CLI prints it
as-is. Subclasses narrow the category so callers can branch on type instead of
inspecting codes.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from .error_code import ErrorCode


@dataclass
class ProviderError(Exception):
    """Represents a known provider failure with a normalized error code.

    Attributes:
        code: Normalized :class:`ErrorCode` classification for the failure.
        message: Human-readable message, already formatted for the user.
        provider: Provider key where the error originated (e.g., ``"openai"``).
        model: Optional model name associated with the failure.
        status: HTTP status code when the failure came from a response.
        payload: Raw (or pretty-printed) provider response body, if any.
        raw: Optional original exception for diagnostics.
    """

    code: ErrorCode
    message: str
    provider: str
    model: Optional[str] = None
    status: Optional[int] = None
    payload: Optional[str] = None
    raw: Optional[Exception] = None

    def __str__(self) -> str:
        return self.message


class TransportError(ProviderError):
    """DNS resolution or connection failure; the message names the host."""


class QuotaError(ProviderError):
    """HTTP 429 from the provider; the message carries remediation guidance."""


class UpstreamError(ProviderError):
    """Any other non-2xx provider response; the message carries the body."""


__all__ = ["ProviderError", "TransportError", "QuotaError", "UpstreamError"]

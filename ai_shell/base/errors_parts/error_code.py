"""
Error codes attached to known failures and to structured log events.

HTTP statuses map onto these through ``classification.status_to_code``;
``TRANSPORT``, ``CANCELLED`` and ``MALFORMED_FRAME`` describe failures that
never reach an HTTP status. The string values appear in logs as ``error_code``.
"""
from __future__ import annotations

from enum import Enum


class ErrorCode(str, Enum):
    # request rejected by the provider
    AUTH = "auth"
    VALIDATION = "validation"
    NOT_FOUND = "not_found"
    CONFLICT = "conflict"
    RATE_LIMIT = "rate_limit"
    # provider side trouble
    SERVER_ERROR = "server_error"
    TRANSIENT = "transient"
    UNAVAILABLE = "unavailable"
    TIMEOUT = "timeout"
    # never carried by a response
    TRANSPORT = "transport"
    CANCELLED = "cancelled"
    MALFORMED_FRAME = "malformed_frame"
    UNKNOWN = "unknown"


__all__ = ["ErrorCode"]

"""Unified completion error taxonomy public surface.

This module re-exports the one-class-per-file implementations under
``ai_shell.base.errors_parts`` to maintain a stable import path.

Known errors (:class:`ProviderError` and its subclasses) are user-facing and
pre-formatted. ``CancelledByUser`` lives with the cancellation primitives and
is re-exported here so callers can import the whole taxonomy from one place.
"""

from .errors_parts.error_code import ErrorCode
from .errors_parts.provider_error import ProviderError, QuotaError, TransportError, UpstreamError
from .errors_parts.malformed_frame_error import MalformedFrameError
from .errors_parts.classification import to_known_error
from .cancellation_parts.cancelled_by_user import CancelledByUser

__all__ = [
    "ErrorCode",
    "ProviderError",
    "TransportError",
    "QuotaError",
    "UpstreamError",
    "MalformedFrameError",
    "CancelledByUser",
    "to_known_error",
]

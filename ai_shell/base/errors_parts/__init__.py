"""Errors parts package public surface.

Re-exports individual error taxonomy components for optional direct imports.
Prefer importing from `ai_shell.base.errors` for the stable surface.
"""

from .error_code import ErrorCode
from .provider_error import ProviderError, QuotaError, TransportError, UpstreamError
from .malformed_frame_error import MalformedFrameError
from .classification import to_known_error

__all__ = [
    "ErrorCode",
    "ProviderError",
    "TransportError",
    "QuotaError",
    "UpstreamError",
    "MalformedFrameError",
    "to_known_error",
]

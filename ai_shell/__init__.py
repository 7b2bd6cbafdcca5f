"""ai_shell package

Streaming completion core of an AI shell-command generator.

Purpose:
    Turn a natural-language request into a shell script by streaming a chat
    completion from OpenAI or Anthropic, stripping code-fence markup as text
    arrives and letting the user cancel from the keyboard.

Public API (re-exported):
    - Version: ``__version__``
    - Exceptions: :class:`ProviderError`, :class:`TransportError`,
      :class:`QuotaError`, :class:`UpstreamError`, :class:`CancelledByUser`,
      :class:`ErrorCode`
    - Data model: :class:`CompletionRequest`, :class:`Provider`, :class:`ModelInfo`
    - Streaming: :class:`DeltaEventStream`, :class:`IncrementalReader`,
      :func:`strip_patterns`
    - Factory: :func:`create_adapter`
"""

from .base.errors import (
    CancelledByUser,
    ErrorCode,
    ProviderError,
    QuotaError,
    TransportError,
    UpstreamError,
)
from .base.factory import create_adapter
from .base.models import CompletionRequest, ModelInfo, Provider
from .base.streaming import DeltaEventStream, IncrementalReader, strip_patterns

__version__ = "0.1.0"

__all__ = [
    "__version__",
    "CancelledByUser",
    "ErrorCode",
    "ProviderError",
    "QuotaError",
    "TransportError",
    "UpstreamError",
    "create_adapter",
    "CompletionRequest",
    "ModelInfo",
    "Provider",
    "DeltaEventStream",
    "IncrementalReader",
    "strip_patterns",
]

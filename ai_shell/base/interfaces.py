"""ProviderAdapter Protocol.

Defines the contract every completion backend satisfies. Adapters issue one
streaming request per ``open`` call and expose it as a
:class:`~ai_shell.base.streaming.DeltaEventStream`; they never leak SDK
objects upstream.
"""

from __future__ import annotations

from typing import List, Protocol, runtime_checkable

from .models import CompletionRequest, ModelInfo, Provider
from .streaming import DeltaEventStream


@runtime_checkable
class ProviderAdapter(Protocol):
    """Minimal interface for streaming completion providers."""

    @property
    def provider(self) -> Provider:
        """Tag identifying the backend."""
        ...

    async def open(self, request: CompletionRequest) -> DeltaEventStream:
        """Open a streaming completion.

        Raises:
            TransportError: DNS or connection failure.
            QuotaError: HTTP 429.
            UpstreamError: Any other non-2xx response.
        """
        ...

    async def list_models(self) -> List[ModelInfo]:
        """Return the models available to this provider."""
        ...


__all__ = ["ProviderAdapter"]

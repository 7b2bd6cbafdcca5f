"""Anthropic provider adapter.

This module implements the Anthropic integration using the ``anthropic``
SDK's Messages API streaming helper (``client.messages.stream``).

Key behaviors / architecture notes:
* Anthropic events are re-encoded into the canonical OpenAI-style frames
  (``stream_helpers.reencode_events``) so the reader parses one wire shape.
* The stream context is entered eagerly inside ``open``: authentication,
  quota and connection failures surface there, before any frame flows.
* Requests carry a fixed ``max_tokens`` budget (``ANTHROPIC_MAX_TOKENS``).
* The request endpoint is used as the SDK base URL unless it is one of the
  stock OpenAI/Anthropic URLs, in which case the SDK default applies.
* Model listing returns a static catalog and never touches the network.
"""

from __future__ import annotations

from contextlib import AsyncExitStack
from typing import Any, AsyncIterator, Callable, Dict, List, Optional

import anthropic
import httpx
from anthropic import AsyncAnthropic

from ..base.errors import ProviderError, to_known_error
from ..base.logging import LogContext, get_logger, normalized_log_event
from ..base.models import CompletionRequest, ModelInfo, Provider
from ..base.streaming import DeltaEventStream
from ..config.defaults import (
    ANTHROPIC_DEFAULT_BASE_URL,
    ANTHROPIC_DEFAULT_MODEL,
    ANTHROPIC_MAX_TOKENS,
    ANTHROPIC_MODEL_CATALOG,
    OPENAI_DEFAULT_BASE_URL,
)
from .stream_helpers import reencode_events

PROVIDER_LABEL = "Anthropic"
_CONNECTION_ERRORS = (anthropic.APIConnectionError, httpx.TransportError)
_STOCK_ENDPOINTS = frozenset({OPENAI_DEFAULT_BASE_URL, ANTHROPIC_DEFAULT_BASE_URL})

__all__ = ["AnthropicAdapter", "resolve_base_url"]


def resolve_base_url(endpoint: Optional[str]) -> Optional[str]:
    """Return the base URL to hand to the SDK, or ``None`` for its default."""
    if not endpoint or endpoint.rstrip("/") in _STOCK_ENDPOINTS:
        return None
    return endpoint


class AnthropicAdapter:
    """Streaming completion adapter for the Anthropic Messages API."""

    def __init__(
        self,
        api_key: Optional[str] = None,
        *,
        endpoint: Optional[str] = None,
        default_model: Optional[str] = None,
        client_factory: Optional[Callable[[Optional[str]], Any]] = None,
    ) -> None:
        self._api_key = api_key
        self._endpoint = endpoint
        self._default_model = default_model or ANTHROPIC_DEFAULT_MODEL
        self._client_factory = client_factory
        self._clients: Dict[Optional[str], Any] = {}
        self._logger = get_logger("ai_shell.providers.anthropic")

    @property
    def provider(self) -> Provider:
        return Provider.ANTHROPIC

    def default_model(self) -> str:
        return self._default_model

    def _client(self, endpoint: Optional[str]) -> Any:
        base_url = resolve_base_url(endpoint)
        client = self._clients.get(base_url)
        if client is None:
            if self._client_factory is not None:
                client = self._client_factory(base_url)
            else:
                client = AsyncAnthropic(api_key=self._api_key, base_url=base_url, max_retries=0)
            self._clients[base_url] = client
        return client

    def _fail(self, exc: Exception, ctx: LogContext, phase: str) -> Optional[ProviderError]:
        known = to_known_error(
            exc,
            provider=Provider.ANTHROPIC.value,
            provider_label=PROVIDER_LABEL,
            connection_errors=_CONNECTION_ERRORS,
            model=ctx.model,
        )
        normalized_log_event(
            self._logger,
            "stream.error",
            ctx,
            phase=phase,
            attempt=1,
            error_code=(known.code.value if known is not None else None),
            failure_class=exc.__class__.__name__,
        )
        return known

    async def open(self, request: CompletionRequest) -> DeltaEventStream:
        """Open a message stream and return it as canonical delta events."""
        model = request.model or self._default_model
        ctx = LogContext(provider=Provider.ANTHROPIC.value, model=model)
        normalized_log_event(self._logger, "stream.start", ctx, phase="start", attempt=1)
        client = self._client(request.endpoint or self._endpoint)
        stack = AsyncExitStack()
        try:
            events = await stack.enter_async_context(
                client.messages.stream(
                    model=model,
                    max_tokens=ANTHROPIC_MAX_TOKENS,
                    messages=request.messages(),
                )
            )
        except Exception as exc:
            await stack.aclose()
            known = self._fail(exc, ctx, "start")
            if known is None:
                raise
            raise known from exc
        normalized_log_event(self._logger, "stream.open", ctx, phase="start", attempt=1, emitted=False)
        return DeltaEventStream(
            self._frames(events, ctx),
            provider=Provider.ANTHROPIC.value,
            model=model,
            on_close=stack.aclose,
        )

    async def _frames(self, events: Any, ctx: LogContext) -> AsyncIterator[str]:
        try:
            async for frame in reencode_events(events):
                yield frame
        except Exception as exc:
            known = self._fail(exc, ctx, "mid_stream")
            if known is None:
                raise
            raise known from exc

    async def list_models(self) -> List[ModelInfo]:
        """Return the fixed Anthropic model catalog."""
        models = [ModelInfo(id=name, provider=Provider.ANTHROPIC.value) for name in ANTHROPIC_MODEL_CATALOG]
        normalized_log_event(
            self._logger,
            "models.list.catalog",
            LogContext(provider=Provider.ANTHROPIC.value, model="models"),
            phase="finalize",
            emitted=True,
            count=len(models),
        )
        return models

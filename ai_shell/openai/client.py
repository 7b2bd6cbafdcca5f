"""OpenAI provider adapter.

Opens chat-completion streams through the ``openai`` SDK (``AsyncOpenAI``)
using ``with_streaming_response`` so that the raw Server-Sent-Event text
reaches :class:`DeltaEventStream` untouched: the OpenAI wire format already is
the canonical frame shape.

Key behaviors:
* One request attempt per ``open`` (``max_retries=0``); retry policy belongs
  to callers.
* HTTP and connection failures are translated into ``TransportError`` /
  ``QuotaError`` / ``UpstreamError`` at ``open`` time, before any text flows.
  A connection dropped mid-stream surfaces as ``TransportError`` from the
  event stream.
* SDK clients are cached per endpoint; ``client_factory`` replaces client
  construction (tests inject clients over ``httpx.MockTransport``).
"""

from __future__ import annotations

from contextlib import AsyncExitStack
from typing import Any, AsyncIterator, Callable, Dict, List, Optional

import httpx
import openai
from openai import AsyncOpenAI

from ..base.errors import ProviderError, to_known_error
from ..base.logging import LogContext, get_logger, normalized_log_event
from ..base.models import CompletionRequest, ModelInfo, Provider
from ..base.streaming import DeltaEventStream
from ..config.defaults import OPENAI_DEFAULT_BASE_URL, OPENAI_DEFAULT_MODEL

PROVIDER_LABEL = "OpenAI"
_CONNECTION_ERRORS = (openai.APIConnectionError, httpx.TransportError)

__all__ = ["OpenAIAdapter", "filter_models"]


def filter_models(items: List[Any]) -> List[ModelInfo]:
    """Keep listing entries whose ``object`` tag equals ``"model"``."""
    return [
        ModelInfo(id=str(item.id), provider=Provider.OPENAI.value)
        for item in items
        if getattr(item, "object", None) == "model"
    ]


class OpenAIAdapter:
    """Streaming completion adapter for OpenAI-compatible chat endpoints."""

    def __init__(
        self,
        api_key: Optional[str] = None,
        *,
        endpoint: Optional[str] = None,
        default_model: Optional[str] = None,
        client_factory: Optional[Callable[[str], Any]] = None,
    ) -> None:
        """
        Args:
            api_key: Key sent as bearer token.
            endpoint: Endpoint used for model listing (requests carry their own).
            default_model: Model used when a request does not name one.
            client_factory: Optional ``endpoint -> AsyncOpenAI`` constructor.
        """
        self._api_key = api_key
        self._endpoint = endpoint or OPENAI_DEFAULT_BASE_URL
        self._default_model = default_model or OPENAI_DEFAULT_MODEL
        self._client_factory = client_factory
        self._clients: Dict[str, Any] = {}
        self._logger = get_logger("ai_shell.providers.openai")

    @property
    def provider(self) -> Provider:
        return Provider.OPENAI

    def default_model(self) -> str:
        return self._default_model

    def _client(self, endpoint: str) -> Any:
        client = self._clients.get(endpoint)
        if client is None:
            if self._client_factory is not None:
                client = self._client_factory(endpoint)
            else:
                client = AsyncOpenAI(api_key=self._api_key, base_url=endpoint, max_retries=0)
            self._clients[endpoint] = client
        return client

    def _fail(self, exc: Exception, event: str, ctx: LogContext, phase: str = "start") -> Optional[ProviderError]:
        known = to_known_error(
            exc,
            provider=Provider.OPENAI.value,
            provider_label=PROVIDER_LABEL,
            connection_errors=_CONNECTION_ERRORS,
            model=ctx.model,
        )
        normalized_log_event(
            self._logger,
            event,
            ctx,
            phase=phase,
            attempt=1,
            error_code=(known.code.value if known is not None else None),
            failure_class=exc.__class__.__name__,
        )
        return known

    async def open(self, request: CompletionRequest) -> DeltaEventStream:
        """Open a chat-completion stream and return its delta events."""
        model = request.model or self._default_model
        ctx = LogContext(provider=Provider.OPENAI.value, model=model)
        normalized_log_event(self._logger, "stream.start", ctx, phase="start", attempt=1, replicas=request.replica_count)
        client = self._client(request.endpoint)
        stack = AsyncExitStack()
        try:
            response = await stack.enter_async_context(
                client.chat.completions.with_streaming_response.create(
                    model=model,
                    messages=request.messages(),
                    n=request.replica_count,
                    stream=True,
                )
            )
        except Exception as exc:
            await stack.aclose()
            known = self._fail(exc, "stream.error", ctx)
            if known is None:
                raise
            raise known from exc
        normalized_log_event(self._logger, "stream.open", ctx, phase="start", attempt=1, emitted=False)
        return DeltaEventStream(
            self._frames(response, ctx),
            provider=Provider.OPENAI.value,
            model=model,
            on_close=stack.aclose,
        )

    async def list_models(self) -> List[ModelInfo]:
        """Call the list-models endpoint and keep entries tagged ``"model"``."""
        ctx = LogContext(provider=Provider.OPENAI.value, model="models")
        client = self._client(self._endpoint)
        try:
            page = await client.models.list()
        except Exception as exc:
            known = self._fail(exc, "models.list.error", ctx)
            if known is None:
                raise
            raise known from exc
        models = filter_models(list(getattr(page, "data", None) or []))
        normalized_log_event(self._logger, "models.list.ok", ctx, phase="finalize", emitted=True, count=len(models))
        return models

    async def _frames(self, response: Any, ctx: LogContext) -> AsyncIterator[str]:
        try:
            async for text in response.iter_text():
                yield text
        except Exception as exc:
            known = self._fail(exc, "stream.error", ctx, "mid_stream")
            if known is None:
                raise
            raise known from exc

"""Anthropic adapter tests.

Stream translation is exercised with an injected fake client whose
``messages.stream`` returns an async context manager over SDK-shaped events;
error mapping uses the real ``AsyncAnthropic`` client over
``httpx.MockTransport``.
"""

from __future__ import annotations

import asyncio
from types import SimpleNamespace
from typing import Any, Dict, List, Optional

import anthropic
import httpx
import pytest
from anthropic import AsyncAnthropic

from ai_shell.anthropic import AnthropicAdapter
from ai_shell.anthropic.client import resolve_base_url
from ai_shell.anthropic.stream_helpers import reencode_events, translate_stream_event
from ai_shell.base.errors import QuotaError, TransportError
from ai_shell.base.models import CompletionRequest
from ai_shell.base.streaming import DONE_FRAME, IncrementalReader, encode_delta_frame
from ai_shell.prompts import SHELL_CODE_EXCLUSIONS

from .utils import frame_stream


def _text(text: str) -> SimpleNamespace:
    return SimpleNamespace(type="content_block_delta", index=0, delta=SimpleNamespace(type="text_delta", text=text))


def _events(*texts: str) -> List[Any]:
    return (
        [SimpleNamespace(type="message_start"), SimpleNamespace(type="content_block_start", index=0)]
        + [_text(t) for t in texts]
        + [SimpleNamespace(type="content_block_stop", index=0), SimpleNamespace(type="message_stop")]
    )


class _FakeMessageStream:
    def __init__(self, events: List[Any], error: Optional[Exception]) -> None:
        self._events = events
        self._error = error

    def __aiter__(self):
        return self._gen()

    async def _gen(self):
        for event in self._events:
            yield event
        if self._error is not None:
            raise self._error


class _FakeStreamManager:
    def __init__(self, events: List[Any], error: Optional[Exception] = None) -> None:
        self._stream = _FakeMessageStream(events, error)
        self.exited = False

    async def __aenter__(self) -> _FakeMessageStream:
        return self._stream

    async def __aexit__(self, *exc_info: object) -> None:
        self.exited = True


class _FakeMessages:
    def __init__(self, manager: _FakeStreamManager) -> None:
        self.manager = manager
        self.calls: List[Dict[str, Any]] = []

    def stream(self, **kwargs: Any) -> _FakeStreamManager:
        self.calls.append(kwargs)
        return self.manager


def _adapter(manager: _FakeStreamManager):
    messages = _FakeMessages(manager)
    client = SimpleNamespace(messages=messages)
    return AnthropicAdapter("sk-ant-test", client_factory=lambda _base_url: client), messages


def _request() -> CompletionRequest:
    return CompletionRequest(prompt="list files", provider="anthropic", endpoint="https://api.anthropic.com")


def _read(adapter: AnthropicAdapter, received: List[str]) -> str:
    async def go():
        stream = await adapter.open(_request())
        return await IncrementalReader(SHELL_CODE_EXCLUSIONS).read(stream, received.append)

    return asyncio.run(go())


def test_translate_stream_event_keeps_text_deltas_only():
    assert translate_stream_event(_text("hi")) == "hi"  # nosec B101 - pytest assert in tests
    assert translate_stream_event(SimpleNamespace(type="message_stop")) is None  # nosec B101 - pytest assert in tests
    json_delta = SimpleNamespace(type="content_block_delta", delta=SimpleNamespace(type="input_json_delta", partial_json="{"))
    assert translate_stream_event(json_delta) is None  # nosec B101 - pytest assert in tests


def test_reencode_events_emits_canonical_frames_then_done():
    async def go():
        return [frame async for frame in reencode_events(_aiter(_events("a", "b")))]

    async def _aiter(items):
        for item in items:
            yield item

    frames = asyncio.run(go())
    assert frames == [encode_delta_frame("a"), encode_delta_frame("b"), DONE_FRAME]  # nosec B101 - pytest assert in tests


def test_reencoded_stream_matches_equivalent_openai_stream():
    texts = ["Here:\n", "```bash\n", "ls", " -la", "\n```"]
    manager = _FakeStreamManager(_events(*texts))
    adapter, messages = _adapter(manager)
    anthropic_received: List[str] = []
    anthropic_text = _read(adapter, anthropic_received)

    openai_received: List[str] = []
    openai_text = asyncio.run(IncrementalReader(SHELL_CODE_EXCLUSIONS).read(frame_stream(texts), openai_received.append))

    assert anthropic_text == openai_text == "ls -la"  # nosec B101 - pytest assert in tests
    assert anthropic_received == openai_received  # nosec B101 - pytest assert in tests
    assert manager.exited is True  # nosec B101 - pytest assert in tests
    call = messages.calls[0]
    assert call["max_tokens"] == 1024 and call["model"] == "claude-sonnet-4-20250514"  # nosec B101 - pytest assert in tests
    assert call["messages"] == [{"role": "user", "content": "list files"}]  # nosec B101 - pytest assert in tests


def test_mid_stream_failure_surfaces_after_partial_output():
    request = httpx.Request("POST", "https://api.anthropic.com/v1/messages")
    manager = _FakeStreamManager(_events("```sh\n", "echo"), error=anthropic.APIConnectionError(request=request))
    adapter, _ = _adapter(manager)
    received: List[str] = []
    with pytest.raises(TransportError) as info:
        _read(adapter, received)
    assert received == ["echo"]  # nosec B101 - pytest assert in tests
    assert "api.anthropic.com" in str(info.value)  # nosec B101 - pytest assert in tests
    assert manager.exited is True  # nosec B101 - pytest assert in tests


def test_raw_read_error_mid_stream_becomes_transport_error():
    request = httpx.Request("POST", "https://api.anthropic.com/v1/messages")
    manager = _FakeStreamManager(_events("```sh\n", "echo"), error=httpx.ReadError("connection reset", request=request))
    adapter, _ = _adapter(manager)
    received: List[str] = []
    with pytest.raises(TransportError) as info:
        _read(adapter, received)
    assert received == ["echo"]  # nosec B101 - pytest assert in tests
    assert str(info.value) == "Error connecting to api.anthropic.com: connection reset"  # nosec B101 - pytest assert in tests
    assert manager.exited is True  # nosec B101 - pytest assert in tests


def test_list_models_returns_catalog_without_a_client():
    def no_client(_base_url):
        raise AssertionError("listing must not build a client")

    adapter = AnthropicAdapter("sk-ant-test", client_factory=no_client)
    models = asyncio.run(adapter.list_models())
    assert [m.id for m in models] == [  # nosec B101 - pytest assert in tests
        "claude-3-5-sonnet-20241022",
        "claude-3-haiku-20240307",
        "claude-3-opus-20240229",
    ]
    assert all(m.object == "model" and m.provider == "anthropic" for m in models)  # nosec B101 - pytest assert in tests


def test_quota_error_on_429_from_real_client():
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(
            429,
            json={"type": "error", "error": {"type": "rate_limit_error", "message": "quota exceeded"}},
        )

    def build(base_url):
        return AsyncAnthropic(
            api_key="sk-ant-test",  # pragma: allowlist secret
            base_url=base_url,
            max_retries=0,
            http_client=httpx.AsyncClient(transport=httpx.MockTransport(handler)),
        )

    adapter = AnthropicAdapter("sk-ant-test", client_factory=build)
    with pytest.raises(QuotaError) as info:
        asyncio.run(adapter.open(_request()))
    message = str(info.value)
    assert "429" in message and "quota exceeded" in message  # nosec B101 - pytest assert in tests
    assert message.startswith("Request to Anthropic failed with status 429.")  # nosec B101 - pytest assert in tests


@pytest.mark.parametrize(
    "endpoint, expected",
    [
        ("https://api.openai.com/v1", None),
        ("https://api.anthropic.com", None),
        ("https://api.anthropic.com/", None),
        (None, None),
        ("https://proxy.internal/anthropic", "https://proxy.internal/anthropic"),
    ],
)
def test_resolve_base_url(endpoint, expected):
    assert resolve_base_url(endpoint) == expected  # nosec B101 - pytest assert in tests

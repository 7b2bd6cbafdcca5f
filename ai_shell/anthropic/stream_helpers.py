"""Anthropic streaming helpers.

Purpose:
- Map Anthropic message-stream events onto the canonical OpenAI-style frames
  so the rest of the pipeline has a single wire shape to parse.
"""

from __future__ import annotations

from typing import Any, AsyncIterable, AsyncIterator, Optional

from ..base.streaming import DONE_FRAME, encode_delta_frame


def translate_stream_event(event: Any) -> Optional[str]:  # noqa: ANN401 - SDK type
    """Return the text of a ``content_block_delta``/``text_delta`` event.

    Every other event type (message start/stop, content block start/stop,
    input JSON deltas, ...) yields ``None``.
    """
    if getattr(event, "type", None) != "content_block_delta":
        return None
    delta = getattr(event, "delta", None)
    if getattr(delta, "type", None) != "text_delta":
        return None
    text = getattr(delta, "text", None)
    return text if isinstance(text, str) else None


async def reencode_events(events: AsyncIterable[Any]) -> AsyncIterator[str]:
    """Yield one canonical frame per text delta, then the done frame.

    The done frame is only produced when ``events`` is exhausted normally; an
    error raised by the event source propagates instead.
    """
    async for event in events:
        text = translate_stream_event(event)
        if text is not None:
            yield encode_delta_frame(text)
    yield DONE_FRAME


__all__ = ["translate_stream_event", "reencode_events"]

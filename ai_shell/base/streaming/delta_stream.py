"""Canonical SSE frame codec and the lazy delta event stream.

Every provider is normalized into the OpenAI chat-completion streaming shape::

    data: {"choices":[{"delta":{"content": "<text>"}}]}\\n\\n
    data: [DONE]\\n\\n

``DeltaEventStream`` turns a transport's chunk stream (``str`` or ``bytes``)
into :class:`DeltaEvent` objects. Frames may be split across chunks; the
partial tail is carried over to the next chunk. A frame whose JSON body does
not decode is surfaced as a diagnostic text fragment so one bad frame does not
abort an otherwise good stream.
"""

from __future__ import annotations

import codecs
import json
import re
from typing import Any, AsyncIterator, Awaitable, Callable, Iterator, Optional, Union

from ..errors import MalformedFrameError
from ..models import DeltaEvent, DONE_EVENT

FRAME_DELIMITER = "\n\n"
DATA_PREFIX = "data:"
DONE_SENTINEL = "[DONE]"
DONE_FRAME = f"{DATA_PREFIX} {DONE_SENTINEL}{FRAME_DELIMITER}"

_DATA_LINE_PREFIX = re.compile(r"^data:[ \t]*", re.MULTILINE)

Chunk = Union[str, bytes]


def encode_delta_frame(text: str) -> str:
    """Encode ``text`` as one canonical delta frame."""
    body = json.dumps({"choices": [{"delta": {"content": text}}]}, ensure_ascii=False)
    return f"{DATA_PREFIX} {body}{FRAME_DELIMITER}"


def _extract_content(payload: Any) -> str:
    if not isinstance(payload, dict):
        return ""
    choices = payload.get("choices")
    if not isinstance(choices, list) or not choices:
        return ""
    first = choices[0]
    if not isinstance(first, dict) or first.get("index", 0) != 0:
        return ""
    delta = first.get("delta")
    if not isinstance(delta, dict):
        return ""
    content = delta.get("content")
    return content if isinstance(content, str) else ""


def parse_frame(frame: str) -> Optional[DeltaEvent]:
    """Parse one SSE frame.

    Returns ``None`` for frames that are not ``data:`` frames, the
    :data:`DONE_EVENT` sentinel for ``data: [DONE]`` and a text event otherwise.
    Only the first choice (index 0) contributes text.
    """
    if not frame.startswith(DATA_PREFIX):
        return None
    body = _DATA_LINE_PREFIX.sub("", frame).strip()
    if body == DONE_SENTINEL:
        return DONE_EVENT
    try:
        payload = json.loads(body)
    except ValueError as exc:
        return DeltaEvent(text=str(MalformedFrameError(frame, exc)))
    return DeltaEvent(text=_extract_content(payload))


class _FrameSplitter:
    """Incrementally split decoded chunks into complete frames."""

    def __init__(self) -> None:
        self._decoder = codecs.getincrementaldecoder("utf-8")(errors="replace")
        self._pending = ""

    def feed(self, chunk: Chunk) -> Iterator[str]:
        text = self._decoder.decode(chunk) if isinstance(chunk, bytes) else chunk
        self._pending += text.replace("\r\n", "\n")
        *frames, self._pending = self._pending.split(FRAME_DELIMITER)
        for frame in frames:
            frame = frame.lstrip("\n")
            if frame:
                yield frame

    def flush(self) -> Iterator[str]:
        tail = (self._pending + self._decoder.decode(b"", final=True)).strip("\n")
        self._pending = ""
        if tail:
            yield tail


class DeltaEventStream:
    """Lazy, single-pass async sequence of :class:`DeltaEvent`.

    The stream ends after yielding the ``done`` sentinel or when the transport
    is exhausted. ``aclose`` releases the transport: it closes the chunk
    iterator and then runs ``on_close`` (adapters pass the callback that exits
    the HTTP response context), even when the stream was never iterated.
    """

    def __init__(
        self,
        chunks: AsyncIterator[Chunk],
        *,
        provider: str = "unknown",
        model: Optional[str] = None,
        on_close: Optional[Callable[[], Awaitable[Any]]] = None,
    ) -> None:
        self._chunks = chunks
        self.provider = provider
        self.model = model
        self._on_close = on_close
        self._events_iter: Optional[Any] = None
        self._closed = False

    def __aiter__(self) -> AsyncIterator[DeltaEvent]:
        if self._events_iter is not None:
            raise RuntimeError("DeltaEventStream is single-pass and was already iterated")
        self._events_iter = self._events()
        return self._events_iter

    async def _events(self) -> AsyncIterator[DeltaEvent]:
        splitter = _FrameSplitter()
        async for chunk in self._chunks:
            for frame in splitter.feed(chunk):
                event = parse_frame(frame)
                if event is None:
                    continue
                yield event
                if event.done:
                    return
        for frame in splitter.flush():
            event = parse_frame(frame)
            if event is not None:
                yield event

    async def aclose(self) -> None:
        """Close the underlying transport iterator (idempotent)."""
        if self._closed:
            return
        self._closed = True
        try:
            if self._events_iter is not None:
                await self._events_iter.aclose()
            closer = getattr(self._chunks, "aclose", None)
            if closer is not None:
                await closer()
        finally:
            if self._on_close is not None:
                await self._on_close()

    async def __aenter__(self) -> "DeltaEventStream":
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.aclose()


__all__ = [
    "DeltaEventStream",
    "encode_delta_frame",
    "parse_frame",
    "DONE_FRAME",
    "DONE_SENTINEL",
    "FRAME_DELIMITER",
]

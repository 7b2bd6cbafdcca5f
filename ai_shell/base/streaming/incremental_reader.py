"""Incremental reader: drain a delta stream into a sink and a final string.

State machine
-------------
``awaiting-start``
    Fragments accumulate in a lookahead buffer that the sink never sees, until
    the buffer contains the start marker (the first exclusion pattern, usually
    a code fence opener). Text after the marker becomes the first emitted
    fragment. Without exclusion patterns the reader starts emitting on the
    first fragment.
``emitting``
    Each fragment is stripped against the full exclusion set (so a closing
    fence is removed too), appended to the result and forwarded to the sink.
``done``
    Reached on the ``done`` sentinel, when the transport ends, or when the
    cancellation token is set. Cancellation is polled before each element and
    truncates the result at what has been accumulated so far.

A regex marker match that touches the end of the buffer is held back until
more text arrives: a greedy marker such as ``` ```[a-zA-Z]*\\n* ``` may still
extend over a language tag that is delivered in the next fragment.
"""

from __future__ import annotations

import re
from enum import Enum
from typing import AsyncIterable, Callable, List, Optional, Sequence

from ..cancellation import CancellationToken, CancelledByUser
from ..logging import LogContext, get_logger, normalized_log_event
from ..terminal.keypress import KeypressListener, NullKeypressListener
from .pattern_stripper import ExclusionPattern, find_marker, strip_patterns
from ..models import DeltaEvent

Sink = Callable[[str], None]

_logger = get_logger("ai_shell.reader")


class ReaderState(str, Enum):
    """States of :class:`IncrementalReader`."""

    AWAITING_START = "awaiting-start"
    EMITTING = "emitting"
    DONE = "done"


class IncrementalReader:
    """Single-use reader owning one accumulated result.

    Parameters:
        exclusions: Ordered exclusion patterns; the first one is the start marker.
        token: Cancellation signal; a fresh token is created when omitted.
        keypress: Optional keyboard capability that may set ``token`` while the
            read is in progress.
    """

    def __init__(
        self,
        exclusions: Sequence[ExclusionPattern] = (),
        *,
        token: Optional[CancellationToken] = None,
        keypress: Optional[KeypressListener] = None,
    ) -> None:
        self.exclusions = tuple(exclusions)
        self.start_marker: Optional[ExclusionPattern] = self.exclusions[0] if self.exclusions else None
        self.token = token if token is not None else CancellationToken()
        self._keypress = keypress if keypress is not None else NullKeypressListener()
        self.state = ReaderState.AWAITING_START
        self.cancelled = False
        self._buffer = ""
        self._parts: List[str] = []
        self._started = False

    @property
    def text(self) -> str:
        """Text accumulated so far."""
        return "".join(self._parts)

    async def read(self, stream: AsyncIterable[DeltaEvent], sink: Sink) -> str:
        """Drain ``stream``, forwarding cleaned fragments to ``sink``.

        Returns the accumulated text when the stream ends or is cancelled. The
        stream is closed before returning, whatever the outcome.

        Raises:
            RuntimeError: If this reader was already used.
        """
        if self._started:
            raise RuntimeError("IncrementalReader is single-use; create a new reader per read")
        self._started = True
        ctx = LogContext(provider=getattr(stream, "provider", None), model=getattr(stream, "model", None))
        try:
            with self._keypress.listen(self.token):
                await self._drain(stream, sink)
        finally:
            self.state = ReaderState.DONE
            closer = getattr(stream, "aclose", None)
            if closer is not None:
                await closer()
        result = self.text
        normalized_log_event(
            _logger,
            "reader.cancelled" if self.cancelled else "reader.finalize",
            ctx,
            phase="finalize",
            emitted=bool(result),
            chars=len(result),
            cancelled=self.cancelled,
        )
        return result

    async def _drain(self, stream: AsyncIterable[DeltaEvent], sink: Sink) -> None:
        async for event in stream:
            try:
                self.token.raise_if_cancelled()
            except CancelledByUser:
                self.cancelled = True
                return
            if event.done:
                return
            self._consume(event.text, sink)

    def _consume(self, fragment: str, sink: Sink) -> None:
        if self.state is ReaderState.AWAITING_START:
            self._buffer += fragment
            span = find_marker(self._buffer, self.start_marker)
            if span is None or self._may_extend(span):
                return
            fragment = self._buffer[span[1]:]
            self._buffer = ""
            self.state = ReaderState.EMITTING
        if not fragment:
            return
        cleaned = strip_patterns(fragment, self.exclusions)
        if not cleaned:
            return
        self._parts.append(cleaned)
        sink(cleaned)

    def _may_extend(self, span: tuple) -> bool:
        return isinstance(self.start_marker, re.Pattern) and span[1] == len(self._buffer)


async def read_stream(
    stream: AsyncIterable[DeltaEvent],
    sink: Sink,
    exclusions: Sequence[ExclusionPattern] = (),
    *,
    keypress: Optional[KeypressListener] = None,
    token: Optional[CancellationToken] = None,
) -> str:
    """Read ``stream`` with a fresh :class:`IncrementalReader`."""
    reader = IncrementalReader(exclusions, token=token, keypress=keypress)
    return await reader.read(stream, sink)


__all__ = ["IncrementalReader", "ReaderState", "Sink", "read_stream"]

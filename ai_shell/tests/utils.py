"""Shared helpers for the ai_shell tests: in-memory frame streams."""

from __future__ import annotations

from typing import AsyncIterator, Iterable, List

from ai_shell.base.streaming import DONE_FRAME, DeltaEventStream, encode_delta_frame


async def iter_chunks(chunks: Iterable) -> AsyncIterator:
    """Yield ``chunks`` one by one as an async transport would."""

    for chunk in chunks:
        yield chunk


def frames_for(texts: Iterable[str], done: bool = True) -> List[str]:
    """Return canonical frames for ``texts`` (plus the done frame)."""

    frames = [encode_delta_frame(t) for t in texts]
    if done:
        frames.append(DONE_FRAME)
    return frames


def frame_stream(texts: Iterable[str], **kwargs) -> DeltaEventStream:
    """Build a :class:`DeltaEventStream` over the canonical frames for ``texts``."""

    return DeltaEventStream(iter_chunks(frames_for(texts)), **kwargs)

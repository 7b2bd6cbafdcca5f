"""Streaming primitives: frame codec, delta event stream, incremental reader.

Public surface
--------------
- ``DeltaEventStream``: lazy single-pass async sequence of ``DeltaEvent``.
- ``encode_delta_frame`` / ``DONE_FRAME``: canonical SSE wire shape.
- ``IncrementalReader`` / ``read_stream``: start detection, stripping,
  cancellation and accumulation.
- ``strip_patterns``: exclusion-pattern filter.
"""

from .pattern_stripper import ExclusionPattern, find_marker, strip_patterns
from .delta_stream import (
    DONE_FRAME,
    DONE_SENTINEL,
    DeltaEventStream,
    encode_delta_frame,
    parse_frame,
)
from .incremental_reader import IncrementalReader, ReaderState, Sink, read_stream

__all__ = [
    "ExclusionPattern",
    "find_marker",
    "strip_patterns",
    "DONE_FRAME",
    "DONE_SENTINEL",
    "DeltaEventStream",
    "encode_delta_frame",
    "parse_frame",
    "IncrementalReader",
    "ReaderState",
    "Sink",
    "read_stream",
]

"""
Normalized delta event emitted by every provider stream.
"""
from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class DeltaEvent:
    """One incremental text fragment, or the terminal sentinel.

    Fields:
      text: textual fragment (empty for the sentinel)
      done: True only on the terminal sentinel event
    """

    text: str = ""
    done: bool = False


DONE_EVENT = DeltaEvent(done=True)


__all__ = ["DeltaEvent", "DONE_EVENT"]

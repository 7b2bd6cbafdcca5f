"""Exclusion-pattern filtering for streamed text fragments.

An exclusion pattern is either a literal string or a compiled regular
expression. Stripping removes every occurrence of every pattern, in order, and
repeats until the text stops changing so the result is a fixed point: stripping
it again is a no-op even when one removal exposes a new match.
"""

from __future__ import annotations

import re
from typing import Iterable, Optional, Pattern, Sequence, Tuple, Union

ExclusionPattern = Union[str, Pattern[str]]


def _strip_once(text: str, patterns: Iterable[ExclusionPattern]) -> str:
    for pattern in patterns:
        if isinstance(pattern, re.Pattern):
            text = pattern.sub("", text)
        elif pattern:
            text = text.replace(pattern, "")
    return text


def strip_patterns(text: str, patterns: Sequence[ExclusionPattern]) -> str:
    """Return ``text`` with all exclusion ``patterns`` removed.

    Each pass only deletes characters, so the loop terminates.
    """
    while True:
        stripped = _strip_once(text, patterns)
        if stripped == text:
            return stripped
        text = stripped


def find_marker(buffer: str, marker: Optional[ExclusionPattern]) -> Optional[Tuple[int, int]]:
    """Locate the start ``marker`` in ``buffer``.

    Returns the ``(start, end)`` span of the first occurrence, ``(0, 0)`` when
    no marker is configured, or ``None`` when the marker has not appeared yet.
    """
    if marker is None:
        return (0, 0)
    if isinstance(marker, re.Pattern):
        match = marker.search(buffer)
        return match.span() if match else None
    idx = buffer.find(marker)
    return (idx, idx + len(marker)) if idx != -1 else None


__all__ = ["ExclusionPattern", "strip_patterns", "find_marker"]

"""Per-stream logging context.

Every event emitted while opening or reading a stream names the provider and
model it belongs to. ``LogContext`` bundles those two fields with free-form
extras; ``to_dict`` flattens them into the event payload and drops unset
values.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Optional


@dataclass
class LogContext:
    provider: Optional[str] = None
    model: Optional[str] = None
    extra: Dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        merged = {"provider": self.provider, "model": self.model, **self.extra}
        return {k: v for k, v in merged.items() if v is not None}


__all__ = ["LogContext"]

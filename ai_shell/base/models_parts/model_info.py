"""
ModelInfo DTO for provider model listings.
"""
from __future__ import annotations

from dataclasses import dataclass, asdict
from typing import Any, Dict


@dataclass(frozen=True)
class ModelInfo:
    """A single model listing entry.

    Attributes:
        id: Stable model identifier.
        provider: Provider key owning this model.
        object: Object tag reported by the listing endpoint (``"model"``).
    """

    id: str
    provider: str
    object: str = "model"

    def to_dict(self) -> Dict[str, Any]:
        """Return a JSON-serializable dictionary representation of the entry."""
        return asdict(self)


__all__ = ["ModelInfo"]

"""
Provider tag enumeration.

The completion core dispatches on this tag rather than on free-form strings;
adding a provider means adding a member here and an adapter satisfying
``ProviderAdapter``.
"""
from __future__ import annotations

from enum import Enum


class Provider(str, Enum):
    """Supported completion backends."""

    OPENAI = "openai"
    ANTHROPIC = "anthropic"

    @classmethod
    def parse(cls, value: "str | Provider | None") -> "Provider":
        """Return the member for ``value`` (case-insensitive, default ``openai``).

        Raises:
            ValueError: If ``value`` names an unsupported provider.
        """
        if isinstance(value, cls):
            return value
        name = (value or cls.OPENAI.value).strip().lower()
        try:
            return cls(name)
        except ValueError:
            supported = ", ".join(p.value for p in cls)
            raise ValueError(f"Unsupported provider '{value}'. Supported providers: {supported}") from None


__all__ = ["Provider"]

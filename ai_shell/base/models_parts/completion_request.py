"""
CompletionRequest DTO for provider-agnostic streaming completions.

External dependencies: Pydantic v2 only. Validation either succeeds or raises
``pydantic.ValidationError``; instances are frozen once constructed.
"""
from __future__ import annotations

from typing import Dict, List, Literal, Optional, Tuple, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator

from .provider import Provider


MAX_REPLICAS = 10

Role = Literal["system", "user", "assistant"]


class ChatMessage(BaseModel):
    """A single chat message in an explicit conversation prompt."""

    model_config = ConfigDict(frozen=True)

    role: Role
    content: str


class CompletionRequest(BaseModel):
    """Normalized streaming completion request handed to a provider adapter.

    Attributes:
        prompt: Either a plain prompt string (sent as one ``user`` message) or
            an ordered tuple of :class:`ChatMessage`.
        provider: Backend the request targets.
        model: Optional model identifier; adapters fall back to their default.
        endpoint: Base URL of the provider API.
        replica_count: Number of completions requested (``n``), 1..10. Larger
            values are truncated to 10.
    """

    model_config = ConfigDict(frozen=True)

    prompt: Union[str, Tuple[ChatMessage, ...]]
    provider: Provider = Provider.OPENAI
    model: Optional[str] = None
    endpoint: str
    replica_count: int = Field(default=1, ge=1, le=MAX_REPLICAS)

    @field_validator("replica_count", mode="before")
    @classmethod
    def _truncate_replicas(cls, value: object) -> object:
        if isinstance(value, int) and not isinstance(value, bool) and value > MAX_REPLICAS:
            return MAX_REPLICAS
        return value

    def messages(self) -> List[Dict[str, str]]:
        """Return the prompt as an ordered list of ``{role, content}`` mappings."""
        if isinstance(self.prompt, str):
            return [{"role": "user", "content": self.prompt}]
        return [{"role": m.role, "content": m.content} for m in self.prompt]


__all__ = ["ChatMessage", "CompletionRequest", "MAX_REPLICAS", "Role"]

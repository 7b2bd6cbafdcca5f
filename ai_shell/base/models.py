"""Core data model public surface.

Re-exports the DTOs under ``ai_shell.base.models_parts``.
"""

from .models_parts.provider import Provider
from .models_parts.completion_request import ChatMessage, CompletionRequest, MAX_REPLICAS, Role
from .models_parts.model_info import ModelInfo
from .models_parts.delta_event import DeltaEvent, DONE_EVENT

__all__ = [
    "Provider",
    "ChatMessage",
    "CompletionRequest",
    "MAX_REPLICAS",
    "Role",
    "ModelInfo",
    "DeltaEvent",
    "DONE_EVENT",
]

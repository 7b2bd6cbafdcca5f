"""Prompt builders and the default exclusion set for script reads."""

from .builder import (
    SHELL_CODE_EXCLUSIONS,
    build_explanation_prompt,
    build_generation_prompt,
    build_revision_prompt,
)

__all__ = [
    "SHELL_CODE_EXCLUSIONS",
    "build_explanation_prompt",
    "build_generation_prompt",
    "build_revision_prompt",
]

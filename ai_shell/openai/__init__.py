"""
OpenAI provider package.

Exports:
- OpenAIAdapter: streaming completion adapter for OpenAI chat endpoints
- filter_models: keep listing entries tagged ``"model"``
"""

from .client import OpenAIAdapter, filter_models

__all__ = ["OpenAIAdapter", "filter_models"]

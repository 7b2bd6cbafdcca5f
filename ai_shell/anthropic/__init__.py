"""
Anthropic provider package.

Exports:
- AnthropicAdapter: streaming adapter that re-encodes Anthropic message
  events into canonical delta frames
"""

from .client import AnthropicAdapter

__all__ = ["AnthropicAdapter"]

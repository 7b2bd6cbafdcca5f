"""ai_shell.config.defaults
========================

Central place for small, stable default values. These can be overridden via
environment variables or an external config file, but provide sensible
fallbacks for local use and tests.

This module intentionally imports nothing from the rest of the package so it
can be used from any layer without circular imports.
"""

from __future__ import annotations

# ---- Provider defaults ----
OPENAI_DEFAULT_MODEL = "gpt-4o-mini"
OPENAI_DEFAULT_BASE_URL = "https://api.openai.com/v1"

ANTHROPIC_DEFAULT_MODEL = "claude-sonnet-4-20250514"
ANTHROPIC_DEFAULT_BASE_URL = "https://api.anthropic.com"
ANTHROPIC_MAX_TOKENS = 1024

# Anthropic exposes no list-models endpoint to this client; listing returns this catalog.
ANTHROPIC_MODEL_CATALOG = (
    "claude-3-5-sonnet-20241022",
    "claude-3-haiku-20240307",
    "claude-3-opus-20240229",
)

# ---- CLI / session defaults ----
DEFAULT_PROVIDER = "openai"
DEFAULT_LANGUAGE = "en"

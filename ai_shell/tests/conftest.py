"""Pytest configuration for the ai_shell test suite.

Provides an isolated configuration environment: no real keys and no ``.env``
pickup from the working directory.
"""

from __future__ import annotations

from typing import Iterator

import pytest

from ai_shell.config import reset_config_cache

_CONFIG_ENV_VARS = (
    "AI_SHELL_PROVIDER",
    "AI_SHELL_LANGUAGE",
    "AI_SHELL_CONFIG_FILE",
    "OPENAI_API_KEY",
    "OPENAI_KEY",
    "OPENAI_MODEL",
    "OPENAI_BASE_URL",
    "OPENAI_API_ENDPOINT",
    "ANTHROPIC_API_KEY",
    "ANTHROPIC_MODEL",
    "ANTHROPIC_BASE_URL",
)


@pytest.fixture()
def clean_env(monkeypatch: pytest.MonkeyPatch, tmp_path) -> Iterator[pytest.MonkeyPatch]:
    """Strip provider variables and point ``.env`` loading at a missing file."""

    for name in _CONFIG_ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    monkeypatch.setenv("DOTENV_FILE", str(tmp_path / "missing.env"))
    reset_config_cache()
    yield monkeypatch
    reset_config_cache()

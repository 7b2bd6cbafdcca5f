"""Unified configuration layer (the credential/config store).

Merge order for a provider section (later wins):
    1. Built-in defaults (``config.defaults``)
    2. Optional external config file pointed to by ``AI_SHELL_CONFIG_FILE``
       (JSON first, YAML via PyYAML otherwise)
    3. Environment variables (``OPENAI_API_KEY``, ``ANTHROPIC_MODEL``, ...)
    4. In-code overrides passed to the helper

External config file example::

    provider: anthropic
    language: de
    openai:
      model: gpt-4o-mini
    anthropic:
      api_key: sk-ant-...

Public API
----------
* ``get_provider_config(provider, overrides=None) -> dict``
* ``load_settings(provider=None, model=None, ...) -> Settings``
"""
from __future__ import annotations

import json
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Optional

import yaml

from ..base.models import Provider
from .defaults import (
    ANTHROPIC_DEFAULT_BASE_URL,
    ANTHROPIC_DEFAULT_MODEL,
    DEFAULT_LANGUAGE,
    DEFAULT_PROVIDER,
    OPENAI_DEFAULT_BASE_URL,
    OPENAI_DEFAULT_MODEL,
)
from .env import (
    CONFIG_FILE_ENV,
    DOTENV_FILE_ENV,
    ENV_FIELD_MAP,
    LANGUAGE_ENV,
    PROVIDER_ENV,
    env_var_candidates,
    is_placeholder,
)


DEFAULTS: Dict[str, Dict[str, Any]] = {
    "openai": {"model": OPENAI_DEFAULT_MODEL, "base_url": OPENAI_DEFAULT_BASE_URL},
    "anthropic": {"model": ANTHROPIC_DEFAULT_MODEL, "base_url": ANTHROPIC_DEFAULT_BASE_URL},
}

_FILE_CACHE: Optional[Dict[str, Any]] = None
_DOTENV_LOADED = False


class ConfigError(Exception):
    """Raised when required settings (such as the API key) are missing."""


def _parse_dotenv(text: str) -> Dict[str, str]:
    """Return ``KEY=VALUE`` pairs from ``.env`` text; comments and junk lines are skipped."""
    pairs: Dict[str, str] = {}
    for raw in text.splitlines():
        line = raw.strip()
        if line.startswith("export "):
            line = line[len("export "):].lstrip()
        key, sep, value = line.partition("=")
        key = key.strip()
        if not sep or not key or key.startswith("#"):
            continue
        pairs[key] = value.strip().strip("\"'")
    return pairs


def _load_dotenv_once() -> None:
    """Apply the ``.env`` file (``DOTENV_FILE``, default ``./.env``) once per process.

    Only variables that are unset or hold a placeholder value are filled in.
    """
    global _DOTENV_LOADED
    if _DOTENV_LOADED:
        return
    _DOTENV_LOADED = True
    path = Path(os.getenv(DOTENV_FILE_ENV, ".env"))
    if not path.is_file():
        return
    for key, value in _parse_dotenv(path.read_text(encoding="utf-8")).items():
        current = os.environ.get(key)
        if current is None or is_placeholder(current):
            os.environ[key] = value


def _load_external_config() -> Dict[str, Any]:
    global _FILE_CACHE
    if _FILE_CACHE is not None:
        return _FILE_CACHE
    path = os.getenv(CONFIG_FILE_ENV)
    if not path or not Path(path).expanduser().exists():
        _FILE_CACHE = {}
        return _FILE_CACHE
    text = Path(path).expanduser().read_text(encoding="utf-8")
    try:
        data = json.loads(text)
    except ValueError:
        data = yaml.safe_load(text) or {}
    _FILE_CACHE = data if isinstance(data, dict) else {}
    return _FILE_CACHE


def reset_config_cache() -> None:
    """Forget the cached config file and .env state (used by tests)."""
    global _FILE_CACHE, _DOTENV_LOADED
    _FILE_CACHE = None
    _DOTENV_LOADED = False


def _env_overrides(provider: str) -> Dict[str, Any]:
    out: Dict[str, Any] = {}
    for field in ENV_FIELD_MAP:
        for name in env_var_candidates(provider, field):
            val = os.getenv(name)
            if val:
                out[field] = val
                break
    return out


def get_provider_config(provider: str, overrides: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
    """Return merged configuration for a provider.

    Merge order (later wins): defaults -> external config -> env vars -> overrides
    """
    _load_dotenv_once()
    name = (provider or "").lower().strip()
    cfg: Dict[str, Any] = {}
    cfg |= DEFAULTS.get(name, {})

    file_cfg = _load_external_config().get(name)
    if isinstance(file_cfg, dict):
        cfg |= file_cfg

    cfg |= _env_overrides(name)

    if overrides:
        cfg |= {k: v for k, v in overrides.items() if v is not None}
    return cfg


def _top_level(key: str, env_name: str, default: str) -> str:
    value = os.getenv(env_name)
    if value:
        return value
    file_value = _load_external_config().get(key)
    return str(file_value) if file_value else default


@dataclass(frozen=True)
class Settings:
    """Already-validated inputs for a completion session."""

    provider: Provider
    api_key: str
    endpoint: str
    model: Optional[str]
    language: str = DEFAULT_LANGUAGE


def load_settings(
    provider: "Provider | str | None" = None,
    *,
    model: Optional[str] = None,
    api_key: Optional[str] = None,
    endpoint: Optional[str] = None,
    language: Optional[str] = None,
) -> Settings:
    """Resolve :class:`Settings` from config sources plus explicit arguments.

    Raises:
        ConfigError: If no API key is configured for the selected provider.
        ValueError: If the provider name is not supported.
    """
    _load_dotenv_once()
    tag = Provider.parse(provider or _top_level("provider", PROVIDER_ENV, DEFAULT_PROVIDER))
    cfg = get_provider_config(tag.value, {"model": model, "api_key": api_key, "base_url": endpoint})
    key = cfg.get("api_key")
    if not key:
        env_name = next(iter(env_var_candidates(tag.value, "api_key")))
        raise ConfigError(
            f"Please set your {tag.value} API key via the {env_name} environment variable "
            f"or the '{tag.value}.api_key' entry of the file named by {CONFIG_FILE_ENV}."
        )
    return Settings(
        provider=tag,
        api_key=str(key),
        endpoint=str(cfg.get("base_url") or DEFAULTS[tag.value]["base_url"]),
        model=cfg.get("model"),
        language=language or _top_level("language", LANGUAGE_ENV, DEFAULT_LANGUAGE),
    )


__all__ = [
    "get_provider_config",
    "load_settings",
    "reset_config_cache",
    "Settings",
    "ConfigError",
    "DEFAULTS",
]

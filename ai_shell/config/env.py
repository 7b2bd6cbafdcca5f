"""ai_shell.config.env
===================

Environment variable names used by the configuration layer and a small helper
for spotting placeholder values.

Conventions
-----------
``<PROVIDER>_API_KEY``, ``<PROVIDER>_MODEL``, ``<PROVIDER>_BASE_URL`` per
provider; ``AI_SHELL_PROVIDER``, ``AI_SHELL_LANGUAGE``, ``AI_SHELL_CONFIG_FILE``
and ``AI_SHELL_LOG_LEVEL`` for the tool itself. ``OPENAI_KEY`` and
``OPENAI_API_ENDPOINT`` are accepted as aliases, matching the variable names
used by earlier shell-assistant configurations.
"""

from __future__ import annotations

from typing import Dict, Iterable, Optional, Tuple

PROVIDER_ENV = "AI_SHELL_PROVIDER"
LANGUAGE_ENV = "AI_SHELL_LANGUAGE"
CONFIG_FILE_ENV = "AI_SHELL_CONFIG_FILE"
DOTENV_FILE_ENV = "DOTENV_FILE"

ENV_FIELD_MAP: Dict[str, str] = {
    "model": "MODEL",
    "api_key": "API_KEY",  # pragma: allowlist secret - env suffix name, not a secret
    "base_url": "BASE_URL",
}

# (provider, field) -> extra accepted names, checked after the canonical one
ENV_ALIASES: Dict[Tuple[str, str], Tuple[str, ...]] = {
    ("openai", "api_key"): ("OPENAI_KEY",),
    ("openai", "base_url"): ("OPENAI_API_ENDPOINT",),
}


def is_placeholder(val: Optional[str]) -> bool:
    """Return True if the provided string looks like a placeholder/test value.

    Heuristics: contains 'placeholder', 'changeme', 'example', or starts with
    'test_'. The check is case-insensitive.
    """
    if val is None:
        return False
    v = str(val).strip().lower()
    return "placeholder" in v or "changeme" in v or "example" in v or v.startswith("test_")


def env_var_candidates(provider: str, field: str) -> Iterable[str]:
    """Yield acceptable env var names for ``field`` of ``provider`` (canonical first)."""
    p = (provider or "").lower()
    suffix = ENV_FIELD_MAP.get(field)
    if suffix:
        yield f"{p.upper()}_{suffix}"
    yield from ENV_ALIASES.get((p, field), ())


__all__ = [
    "PROVIDER_ENV",
    "LANGUAGE_ENV",
    "CONFIG_FILE_ENV",
    "DOTENV_FILE_ENV",
    "ENV_FIELD_MAP",
    "ENV_ALIASES",
    "is_placeholder",
    "env_var_candidates",
]

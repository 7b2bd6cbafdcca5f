"""Provider adapter factory.

Purpose
-------
Resolve the concrete adapter for a :class:`Provider` tag. Adapters are
imported lazily using ``importlib`` so that loading one SDK does not require
the other.

Timeout and fallback semantics
------------------------------
None. The factory performs no retries or fallbacks; it either returns an
instance or raises a clear error.
"""

from __future__ import annotations

from importlib import import_module
from typing import Any, Dict, Tuple, Type

from .interfaces import ProviderAdapter
from .models import Provider


class UnknownProviderError(Exception):
    """Raised when a provider cannot be resolved or its adapter initialized."""


_ADAPTERS: Dict[Provider, Tuple[str, str]] = {
    Provider.OPENAI: ("ai_shell.openai.client", "OpenAIAdapter"),
    Provider.ANTHROPIC: ("ai_shell.anthropic.client", "AnthropicAdapter"),
}


def create_adapter(provider: "Provider | str", **kwargs: Any) -> ProviderAdapter:
    """Create the adapter for ``provider``.

    Parameters
    ----------
    provider:
        Provider tag or its canonical name (e.g., ``"anthropic"``).
    **kwargs:
        Adapter constructor keyword arguments (``api_key``, ``endpoint``,
        ``default_model``, ``client_factory``).

    Raises
    ------
    UnknownProviderError
        If the provider is unknown, the adapter module fails to import, the
        adapter class is missing, or the constructor rejects the arguments.
    """
    try:
        tag = Provider.parse(provider)
    except ValueError as exc:
        raise UnknownProviderError(str(exc)) from exc

    module_path, class_name = _ADAPTERS[tag]
    try:
        mod = import_module(module_path)
    except ImportError as exc:  # pragma: no cover - import failure path
        raise UnknownProviderError(
            f"Failed to import module '{module_path}' for provider '{tag.value}': {exc}"
        ) from exc
    try:
        klass: Type = getattr(mod, class_name)
    except AttributeError as exc:  # pragma: no cover - packaging error
        raise UnknownProviderError(
            f"Adapter class '{class_name}' not found in '{module_path}' for provider '{tag.value}'"
        ) from exc
    try:
        return klass(**kwargs)
    except TypeError as exc:
        raise UnknownProviderError(
            f"Invalid arguments for '{tag.value}' adapter constructor: {exc}"
        ) from exc


def supported() -> Tuple[str, ...]:
    """Return the supported canonical provider names in deterministic order."""
    return tuple(p.value for p in _ADAPTERS)


__all__ = ["create_adapter", "supported", "UnknownProviderError"]

"""Completion session: prompt building, request dispatch and stream reading.

A session binds resolved :class:`~ai_shell.config.Settings` to one provider
adapter. Every operation builds a fresh :class:`CompletionRequest` and a fresh
:class:`IncrementalReader`, so consecutive reads (generation followed by an
explanation) never share buffering state or keyboard listeners.
"""

from __future__ import annotations

from typing import List, Optional, Sequence

from ..base.factory import create_adapter
from ..base.interfaces import ProviderAdapter
from ..base.logging import LogContext, get_logger, log_event
from ..base.models import CompletionRequest, ModelInfo
from ..base.streaming import ExclusionPattern, IncrementalReader, Sink
from ..base.terminal import KeypressListener, default_keypress_listener
from ..config import Settings
from ..prompts import (
    SHELL_CODE_EXCLUSIONS,
    build_explanation_prompt,
    build_generation_prompt,
    build_revision_prompt,
)
from .environment import ShellEnvironment, language_name

_logger = get_logger("ai_shell.session")


class CompletionSession:
    """High-level operations of the shell assistant for one set of settings."""

    def __init__(
        self,
        settings: Settings,
        adapter: Optional[ProviderAdapter] = None,
        environment: Optional[ShellEnvironment] = None,
        keypress: Optional[KeypressListener] = None,
    ) -> None:
        self.settings = settings
        self.adapter = adapter if adapter is not None else create_adapter(
            settings.provider,
            api_key=settings.api_key,
            endpoint=settings.endpoint,
            default_model=settings.model,
        )
        self.environment = (
            environment
            if environment is not None
            else ShellEnvironment(language=language_name(settings.language))
        )
        self._keypress = keypress

    def _request(self, prompt: str) -> CompletionRequest:
        return CompletionRequest(
            prompt=prompt,
            provider=self.settings.provider,
            model=self.settings.model,
            endpoint=self.settings.endpoint,
        )

    async def _complete(self, prompt: str, sink: Sink, exclusions: Sequence[ExclusionPattern]) -> str:
        request = self._request(prompt)
        log_event(
            _logger,
            "session.request",
            LogContext(provider=request.provider.value, model=request.model),
            exclusions=len(exclusions),
        )
        stream = await self.adapter.open(request)
        keypress = self._keypress if self._keypress is not None else default_keypress_listener()
        reader = IncrementalReader(exclusions, keypress=keypress)
        return await reader.read(stream, sink)

    async def generate_script(self, prompt: str, sink: Sink) -> str:
        """Stream a single-line command for ``prompt``; fences and newlines are stripped."""
        full = build_generation_prompt(prompt, self.environment.shell, self.environment.os_name)
        return await self._complete(full, sink, SHELL_CODE_EXCLUSIONS)

    async def explain(self, script: str, sink: Sink) -> str:
        """Stream a step-list explanation of ``script`` in the session language."""
        return await self._complete(build_explanation_prompt(script, self.environment.language), sink, ())

    async def revise(self, prompt: str, code: str, sink: Sink) -> str:
        """Stream an updated version of ``code`` following ``prompt``."""
        full = build_revision_prompt(prompt, code, self.environment.os_name)
        return await self._complete(full, sink, SHELL_CODE_EXCLUSIONS)

    async def list_models(self) -> List[ModelInfo]:
        return await self.adapter.list_models()


__all__ = ["CompletionSession"]

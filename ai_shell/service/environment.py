"""Host environment details fed into prompts.

``detect_shell`` and ``detect_os`` describe where the generated command will
run; ``language_name`` turns the configured language code into the display
name used in the explanation prompt.
"""

from __future__ import annotations

import os
import platform
from dataclasses import dataclass, field
from typing import Mapping, Optional

from ..config.defaults import DEFAULT_LANGUAGE

LANGUAGE_NAMES: Mapping[str, str] = {
    "en": "English",
    "zh-Hans": "Simplified Chinese",
    "zh-Hant": "Traditional Chinese",
    "es": "Spanish",
    "jp": "Japanese",
    "ja": "Japanese",
    "ko": "Korean",
    "fr": "French",
    "de": "German",
    "ru": "Russian",
    "uk": "Ukrainian",
    "vi": "Vietnamese",
    "ar": "Arabic",
    "pt": "Portuguese",
    "tr": "Turkish",
    "id": "Indonesian",
}

_OS_NAMES: Mapping[str, str] = {
    "Darwin": "macOS",
    "Windows": "Windows",
    "Linux": "Linux",
    "FreeBSD": "FreeBSD",
}


def detect_shell(environ: Optional[Mapping[str, str]] = None) -> str:
    """Return the name of the user's shell (``bash``, ``zsh``, ``powershell``...)."""
    env = os.environ if environ is None else environ
    shell = env.get("SHELL")
    if shell:
        return os.path.basename(shell)
    if "PSModulePath" in env and env.get("PSExecutionPolicyPreference") is not None:
        return "powershell"
    comspec = env.get("COMSPEC") or env.get("ComSpec")
    if comspec:
        name = os.path.basename(comspec.replace("\\", "/"))
        return os.path.splitext(name)[0].lower()
    return "sh"


def detect_os(system: Optional[str] = None) -> str:
    """Return a display name for the operating system."""
    name = system if system is not None else platform.system()
    return _OS_NAMES.get(name, name or "unknown")


def language_name(code: str) -> str:
    """Map a language code to its English display name; unknown codes pass through."""
    return LANGUAGE_NAMES.get(code, code)


@dataclass(frozen=True)
class ShellEnvironment:
    """Shell, operating system and display language of the current session."""

    shell: str = field(default_factory=detect_shell)
    os_name: str = field(default_factory=detect_os)
    language: str = language_name(DEFAULT_LANGUAGE)


__all__ = ["ShellEnvironment", "detect_shell", "detect_os", "language_name", "LANGUAGE_NAMES"]

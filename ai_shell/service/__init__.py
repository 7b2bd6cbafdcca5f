"""Service layer: completion session, host environment detection and CLI."""

from .completion import CompletionSession
from .environment import ShellEnvironment, detect_os, detect_shell, language_name

__all__ = ["CompletionSession", "ShellEnvironment", "detect_os", "detect_shell", "language_name"]

"""Data model parts (one type per file); import from ``ai_shell.base.models``."""

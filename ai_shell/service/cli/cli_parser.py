"""CLI parser construction for ai-shell.

This module wires argument shapes only. Execution lives in ``cli_actions`` so
the parser can be built and inspected in tests without side effects.
"""

from __future__ import annotations

import argparse

from ... import __version__
from ...base.factory import supported


def build_parser() -> argparse.ArgumentParser:
    """Construct the ``ai-shell`` argument parser.

    Returns
    -------
    argparse.ArgumentParser
        Parser accepting a free-text prompt (positional words or ``-p``), the
        ``-e/--explain`` verbose switch and provider/model selection flags.
    """
    p = argparse.ArgumentParser(
        prog="ai-shell",
        description="Turn a natural-language request into a shell command.",
    )
    p.add_argument("words", nargs="*", help="Prompt text (joined with spaces)")
    p.add_argument("-p", "--prompt", default=None, help="Prompt to run")
    p.add_argument(
        "-e",
        "--explain",
        action="store_true",
        help="Show detailed explanations (verbose mode)",
    )
    p.add_argument("--provider", choices=supported(), default=None)
    p.add_argument("--model", default=None)
    p.add_argument("--list-models", action="store_true", help="List available models and exit")
    p.add_argument(
        "--log-level",
        default=None,
        help="Logging level for stderr diagnostics (default: AI_SHELL_LOG_LEVEL or WARNING)",
    )
    p.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return p


def prompt_text(args: argparse.Namespace) -> str:
    """Return the prompt from ``-p`` or, failing that, the positional words."""
    if args.prompt:
        return args.prompt
    return " ".join(args.words)


__all__ = ["build_parser", "prompt_text"]

"""CLI action handlers.

Purpose
-------
Drive a :class:`CompletionSession` from parsed arguments and render results
to the terminal. Generated text goes to stdout as it streams; diagnostics and
errors go to stderr.

Error Semantics
---------------
Known errors (:class:`ProviderError`, :class:`ConfigError`) are printed as
``✖ <message>`` and mapped to exit status 1. Anything else propagates.
"""

from __future__ import annotations

import argparse
import asyncio
import sys
from typing import Callable, Optional, TextIO

from ...base.errors import ProviderError
from ...base.logging import LogContext, get_logger, normalized_log_event
from ...config import ConfigError, Settings, load_settings
from ..completion import CompletionSession
from .cli_parser import prompt_text

SessionFactory = Callable[[Settings], CompletionSession]

_logger = get_logger("ai_shell.cli")


def report_error(message: str, err: Optional[TextIO] = None) -> None:
    """Print a user-facing error line to stderr."""
    stream = err if err is not None else sys.stderr
    print(f"\n✖ {message}", file=stream)


def _writer(out: TextIO) -> Callable[[str], None]:
    def _sink(fragment: str) -> None:
        out.write(fragment)
        out.flush()

    return _sink


async def run_session(
    session: CompletionSession,
    args: argparse.Namespace,
    text: str,
    out: TextIO,
) -> int:
    """Execute the requested operation against ``session``.

    Silent mode (the default) prints only the script. With ``--explain`` a
    second request streams an explanation of the script after it.
    """
    if args.list_models:
        for info in await session.list_models():
            print(info.id, file=out)
        return 0
    script = await session.generate_script(text, _writer(out))
    print(file=out)
    if args.explain and script:
        print(file=out)
        await session.explain(script, _writer(out))
        print(file=out)
    normalized_log_event(
        _logger,
        "cli.done",
        LogContext(provider=session.settings.provider.value, model=session.settings.model),
        phase="finalize",
        emitted=bool(script),
        explain=bool(args.explain),
    )
    return 0


def handle_run(
    args: argparse.Namespace,
    *,
    session_factory: SessionFactory = CompletionSession,
    out: Optional[TextIO] = None,
    err: Optional[TextIO] = None,
) -> int:
    """Resolve settings, build a session and run it to completion.

    Returns
    -------
    int
        ``0`` on success, ``1`` on known errors, ``130`` on Ctrl-C.
    """
    out = out if out is not None else sys.stdout
    text = prompt_text(args)
    if not text.strip() and not args.list_models:
        report_error("No prompt given. Pass it as arguments or with -p/--prompt.", err)
        return 1
    try:
        settings = load_settings(args.provider, model=args.model)
    except (ConfigError, ValueError) as exc:
        report_error(str(exc), err)
        return 1
    session = session_factory(settings)
    try:
        return asyncio.run(run_session(session, args, text, out))
    except ProviderError as exc:
        report_error(str(exc), err)
        return 1
    except KeyboardInterrupt:
        return 130


__all__ = ["handle_run", "run_session", "report_error", "SessionFactory"]

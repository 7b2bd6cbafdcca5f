"""ai-shell CLI (package entrypoint).

This package wires argument parsing to the action handler in
``cli_actions``. It performs no provider logic directly.

Public API re-exports:
- ``main``: CLI entrypoint callable
- ``build_parser``: argument parser factory
"""

from __future__ import annotations

import sys
from typing import Optional

from ...base.logging import configure_logger
from .cli_actions import SessionFactory, handle_run
from .cli_parser import build_parser


def main(argv: Optional[list[str]] = None, *, session_factory: Optional[SessionFactory] = None) -> int:
    """CLI entrypoint.

    Parameters
    ----------
    argv: Optional[list[str]]
        Argument vector; when ``None`` uses ``sys.argv[1:]``.
    session_factory: Optional[SessionFactory]
        Builds the session from resolved settings; tests inject fakes here.

    Returns
    -------
    int
        Process exit code (0 success, non-zero on error).
    """
    args = build_parser().parse_args(sys.argv[1:] if argv is None else argv)
    if args.log_level:
        configure_logger(level=args.log_level)
    if session_factory is None:
        return handle_run(args)
    return handle_run(args, session_factory=session_factory)


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())

"""AIDE debugging CLI (package entrypoint).

Usage::

    python -m aide_providers models [--json]
    python -m aide_providers run --model claude-sonnet-4.5 --prompt "Hi" [--system TEXT] [--stream] [--json]

``run`` talks to the gateway configured through ``AIDE_*`` environment
variables (or ``AIDE_CONFIG_FILE``).
"""

from __future__ import annotations

import sys
from typing import Optional

from .cli_actions import handle_models, handle_run
from .cli_parser import build_parser


def main(argv: Optional[list[str]] = None) -> int:
    """CLI entrypoint; returns the process exit code."""
    p = build_parser()
    args = p.parse_args(list(sys.argv[1:] if argv is None else argv))
    if args.cmd == "models":
        return handle_models(args)
    if args.cmd == "run":
        return handle_run(args)
    p.print_help()
    return 2


__all__ = ["main"]

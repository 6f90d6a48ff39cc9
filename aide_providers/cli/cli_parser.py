"""CLI parser construction for aide-cli.

This module wires subparsers but contains no execution logic. Subcommand
handlers live in ``cli_actions``.
"""

from __future__ import annotations

import argparse

from ..config.defaults import PROVIDER_CLI_DEFAULT_MODEL


def _str2bool(v: str | None) -> bool:
    """Best-effort conversion of common truthy/falsey strings to bool.

    ``None`` (flag given without a value) means ``True``.
    """
    if v is None:
        return True
    val = v.strip().lower()
    if val in {"1", "t", "true", "y", "yes", "on"}:
        return True
    return False if val in {"0", "f", "false", "n", "no", "off"} else bool(val)


def add_stream_flags(parser: argparse.ArgumentParser) -> None:
    """Attach ``--stream``/``--no-stream`` flags to a parser."""
    grp = parser.add_mutually_exclusive_group()
    grp.add_argument("--stream", nargs="?", const=True, type=_str2bool, default=False)
    grp.add_argument("--no-stream", dest="stream", action="store_false")


def build_parser() -> argparse.ArgumentParser:
    """Construct the top-level parser with ``models`` and ``run`` subcommands."""
    p = argparse.ArgumentParser(prog="aide-cli", description="AIDE gateway debugging CLI")
    sub = p.add_subparsers(dest="cmd")

    p_models = sub.add_parser("models", help="List the models served through the gateway")
    p_models.add_argument("--json", action="store_true")

    p_run = sub.add_parser("run", help="Send one prompt through the gateway")
    p_run.add_argument("--model", default=PROVIDER_CLI_DEFAULT_MODEL)
    p_run.add_argument("--prompt", required=True)
    p_run.add_argument("--system", default=None)
    p_run.add_argument("--max-tokens", type=int, default=None)
    p_run.add_argument("--temperature", type=float, default=None)
    add_stream_flags(p_run)
    p_run.add_argument("--json", action="store_true")

    return p


__all__ = ["add_stream_flags", "build_parser"]

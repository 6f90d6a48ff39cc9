"""CLI action handlers.

Handlers print to the given streams and return process exit codes. Provider
failures are reported as one line on stderr (JSON with ``--json``) and exit
code ``1``; nothing here retries.
"""

from __future__ import annotations

import argparse
import json
import sys
from typing import Any, Callable, Dict, List, Optional, TextIO

from ..base.cancellation import CancelledError
from ..base.errors import ProviderError
from ..base.models import CallOptions, Message
from ..base.streaming import TextDelta, accumulate_events
from ..base.model_registry import AIDE_MODELS
from ..gateway.provider import AideProvider, aide, get_aide_model_ids

ProviderFactory = Callable[[], AideProvider]


def handle_models(args: argparse.Namespace, out: Optional[TextIO] = None) -> int:
    out = out or sys.stdout
    if args.json:
        payload = {model_id: AIDE_MODELS[model_id].to_dict() for model_id in get_aide_model_ids()}
        out.write(json.dumps(payload, indent=2) + "\n")
        return 0
    for model_id in get_aide_model_ids():
        info = AIDE_MODELS[model_id]
        out.write(f"{model_id}\t{info.family.value}\t{info.display_name}\n")
    return 0


def build_prompt(prompt: str, system: Optional[str]) -> List[Message]:
    messages: List[Message] = []
    if system:
        messages.append(Message.system(system))
    messages.append(Message.user(prompt))
    return messages


def _report_error(exc: Exception, as_json: bool, err: TextIO) -> int:
    if as_json:
        body: Dict[str, Any] = {"error": getattr(exc, "message", str(exc))}
        if isinstance(exc, ProviderError):
            body["code"] = exc.code.value
        err.write(json.dumps(body) + "\n")
    else:
        err.write(f"error: {exc}\n")
    return 1


def handle_run(
    args: argparse.Namespace,
    provider_factory: ProviderFactory = aide,
    out: Optional[TextIO] = None,
    err: Optional[TextIO] = None,
) -> int:
    """Execute one prompt; ``--stream`` prints text deltas as they are pulled."""
    out = out or sys.stdout
    err = err or sys.stderr
    try:
        model = provider_factory().language_model(args.model)
        options = CallOptions(
            prompt=build_prompt(args.prompt, args.system),
            max_output_tokens=args.max_tokens,
            temperature=args.temperature,
        )
        if not args.stream:
            result = model.generate(options)
            if args.json:
                out.write(json.dumps(result.to_dict(), indent=2) + "\n")
            else:
                out.write(result.text + "\n")
            return 0
    except (ProviderError, CancelledError) as exc:
        return _report_error(exc, args.json, err)

    def _echo(events):
        for evt in events:
            if isinstance(evt, TextDelta) and not args.json:
                out.write(evt.delta)
                out.flush()
            yield evt

    acc = accumulate_events(_echo(model.stream(options)))
    if acc.error is not None:
        if not args.json:
            out.write("\n")
        return _report_error(acc.error, args.json, err)  # type: ignore[arg-type]
    if args.json:
        out.write(
            json.dumps(
                {
                    "text": acc.text,
                    "tool_calls": [c.tool_name for c in acc.tool_calls],
                    "finish_reason": acc.finish_reason.unified if acc.finish_reason else None,
                    "usage": acc.usage.to_dict() if acc.usage else None,
                    "request_id": acc.request_id,
                    "events": acc.event_count,
                },
                indent=2,
            )
            + "\n"
        )
    else:
        out.write("\n")
    return 0


__all__ = ["build_prompt", "handle_models", "handle_run"]

"""Unit tests for the debugging CLI.

Covers:
- ``models`` text and JSON listings
- ``run`` generate and ``--stream`` paths against a mocked gateway
- provider errors reported on stderr with exit code 1
- no subcommand prints help and exits 2
"""
from __future__ import annotations

import io
import json

import httpx

from aide_providers.cli import main
from aide_providers.cli.cli_actions import build_prompt, handle_models, handle_run
from aide_providers.cli.cli_parser import _str2bool, build_parser  # type: ignore[attr-defined]

from .helpers import RecordingHandler, anthropic_payload, envelope, json_handler, make_provider


def _run(argv, handler):
    args = build_parser().parse_args(argv)
    out, err = io.StringIO(), io.StringIO()
    code = handle_run(args, provider_factory=lambda: make_provider(handler), out=out, err=err)
    return code, out.getvalue(), err.getvalue()


def test_models_text_listing():
    out = io.StringIO()
    assert handle_models(build_parser().parse_args(["models"]), out=out) == 0  # nosec B101
    lines = out.getvalue().splitlines()
    assert lines[0] == "claude-sonnet-4.5\tanthropic\tClaude Sonnet 4.5"  # nosec B101
    assert len(lines) == 3  # nosec B101


def test_models_json_listing():
    out = io.StringIO()
    handle_models(build_parser().parse_args(["models", "--json"]), out=out)
    data = json.loads(out.getvalue())
    assert data["gpt-4.1"]["family"] == "openai"  # nosec B101


def test_run_generate_prints_text():
    handler = json_handler(envelope({"anthropic": anthropic_payload()}))
    code, out, err = _run(["run", "--prompt", "Hi", "--system", "be brief", "--max-tokens", "64"], handler)
    assert code == 0 and err == ""  # nosec B101
    assert out == "Hello there\n"  # nosec B101
    body = handler.last_json["backend"]["anthropic"]["body"]
    assert body["system"] == "be brief"  # nosec B101
    assert body["max_tokens"] == 64  # nosec B101


def test_run_generate_json():
    handler = json_handler(envelope({"anthropic": anthropic_payload()}))
    code, out, _ = _run(["run", "--prompt", "Hi", "--json"], handler)
    assert code == 0  # nosec B101
    assert json.loads(out)["finish_reason"]["unified"] == "stop"  # nosec B101


def test_run_stream_echoes_deltas():
    handler = json_handler(envelope({"anthropic": anthropic_payload()}))
    code, out, _ = _run(["run", "--prompt", "Hi", "--stream"], handler)
    assert code == 0  # nosec B101
    assert out == "Hello there\n"  # nosec B101


def test_run_stream_json_summary():
    handler = json_handler(envelope({"anthropic": anthropic_payload()}))
    code, out, _ = _run(["run", "--prompt", "Hi", "--stream", "--json"], handler)
    summary = json.loads(out)
    assert code == 0  # nosec B101
    assert summary["text"] == "Hello there"  # nosec B101
    assert summary["events"] == 7  # nosec B101


def test_run_reports_provider_error():
    handler = RecordingHandler(lambda _req: httpx.Response(500, text="down"))
    code, out, err = _run(["run", "--prompt", "Hi", "--json"], handler)
    assert code == 1 and out == ""  # nosec B101
    assert json.loads(err) == {"error": "AIDE API error: 500 Internal Server Error - down", "code": "server_error"}  # nosec B101


def test_run_stream_reports_error_event():
    handler = RecordingHandler(lambda _req: httpx.Response(500, text="down"))
    code, _, err = _run(["run", "--prompt", "Hi", "--stream"], handler)
    assert code == 1  # nosec B101
    assert err.startswith("error: ")  # nosec B101


def test_run_unknown_model():
    handler = json_handler({})
    code, _, err = _run(["run", "--model", "nope", "--prompt", "Hi"], handler)
    assert code == 1  # nosec B101
    assert "Unknown AIDE model: nope" in err  # nosec B101


def test_build_prompt_and_flags():
    assert [m.role for m in build_prompt("hi", "sys")] == ["system", "user"]  # nosec B101
    assert [m.role for m in build_prompt("hi", None)] == ["user"]  # nosec B101
    assert _str2bool(None) is True and _str2bool("off") is False  # nosec B101
    assert build_parser().parse_args(["run", "--prompt", "x", "--no-stream"]).stream is False  # nosec B101


def test_main_without_command_prints_help(capsys):
    assert main([]) == 2  # nosec B101
    assert "aide-cli" in capsys.readouterr().out  # nosec B101


def test_main_models(capsys):
    assert main(["models"]) == 0  # nosec B101
    assert "gpt-4.1" in capsys.readouterr().out  # nosec B101

"""CLI tests with an injected session factory (no network)."""

from __future__ import annotations

from typing import List, Tuple

import pytest

from ai_shell.base.errors import ErrorCode, QuotaError
from ai_shell.base.models import ModelInfo
from ai_shell.service.cli import build_parser, main
from ai_shell.service.cli.cli_parser import prompt_text


class _FakeSession:
    instances: List["_FakeSession"] = []

    def __init__(self, settings) -> None:
        self.settings = settings
        self.calls: List[Tuple[str, str]] = []
        _FakeSession.instances.append(self)

    async def generate_script(self, prompt, sink):
        self.calls.append(("generate", prompt))
        sink("ls -la")
        return "ls -la"

    async def explain(self, script, sink):
        self.calls.append(("explain", script))
        sink("1. Lists all files")
        return "1. Lists all files"

    async def list_models(self):
        return [ModelInfo(id="gpt-4o", provider="openai"), ModelInfo(id="gpt-4o-mini", provider="openai")]


class _QuotaSession(_FakeSession):
    async def generate_script(self, prompt, sink):
        raise QuotaError(
            code=ErrorCode.RATE_LIMIT,
            message="Request to OpenAI failed with status 429. quota exceeded",
            provider="openai",
            status=429,
        )


@pytest.fixture()
def keyed_env(clean_env):
    clean_env.setenv("OPENAI_API_KEY", "sk-cli-test")
    _FakeSession.instances.clear()
    return clean_env


def test_parser_shapes():
    args = build_parser().parse_args(["-p", "list files", "-e", "--provider", "anthropic"])
    assert args.prompt == "list files" and args.explain is True  # nosec B101 - pytest assert in tests
    assert args.provider == "anthropic" and args.list_models is False  # nosec B101 - pytest assert in tests
    assert prompt_text(build_parser().parse_args(["list", "all", "files"])) == "list all files"  # nosec B101 - pytest assert in tests
    with pytest.raises(SystemExit):
        build_parser().parse_args(["--provider", "gemini"])


def test_silent_mode_prints_only_the_script(keyed_env, capsys):
    code = main(["list", "files"], session_factory=_FakeSession)
    out = capsys.readouterr().out
    assert code == 0 and out == "ls -la\n"  # nosec B101 - pytest assert in tests
    assert _FakeSession.instances[0].calls == [("generate", "list files")]  # nosec B101 - pytest assert in tests


def test_explain_flag_streams_explanation(keyed_env, capsys):
    code = main(["-e", "-p", "list files"], session_factory=_FakeSession)
    out = capsys.readouterr().out
    assert code == 0 and "ls -la" in out and "1. Lists all files" in out  # nosec B101 - pytest assert in tests
    assert _FakeSession.instances[0].calls[-1] == ("explain", "ls -la")  # nosec B101 - pytest assert in tests


def test_list_models(keyed_env, capsys):
    assert main(["--list-models"], session_factory=_FakeSession) == 0  # nosec B101 - pytest assert in tests
    assert capsys.readouterr().out.split() == ["gpt-4o", "gpt-4o-mini"]  # nosec B101 - pytest assert in tests


def test_provider_error_prints_cross_and_exits_1(keyed_env, capsys):
    code = main(["list", "files"], session_factory=_QuotaSession)
    err = capsys.readouterr().err
    assert code == 1  # nosec B101 - pytest assert in tests
    assert "✖ Request to OpenAI failed with status 429. quota exceeded" in err  # nosec B101 - pytest assert in tests


def test_missing_key_exits_1(clean_env, capsys):
    code = main(["list", "files"], session_factory=_FakeSession)
    assert code == 1 and "OPENAI_API_KEY" in capsys.readouterr().err  # nosec B101 - pytest assert in tests


def test_empty_prompt_exits_1(keyed_env, capsys):
    assert main([], session_factory=_FakeSession) == 1  # nosec B101 - pytest assert in tests
    assert "No prompt given" in capsys.readouterr().err  # nosec B101 - pytest assert in tests

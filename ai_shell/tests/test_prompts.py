"""Tests for the prompt templates."""

from __future__ import annotations

from ai_shell.prompts import build_explanation_prompt, build_generation_prompt, build_revision_prompt


def test_generation_prompt_targets_shell_and_os():
    text = build_generation_prompt("list all files", "zsh", "macOS")
    assert text.startswith("Create a single line command")  # nosec B101 - pytest assert in tests
    assert "The target shell is zsh" in text  # nosec B101 - pytest assert in tests
    assert "surrounded by three backticks" in text  # nosec B101 - pytest assert in tests
    assert "Make sure the command runs on macOS operating system." in text  # nosec B101 - pytest assert in tests
    assert text.endswith("The prompt is: list all files")  # nosec B101 - pytest assert in tests


def test_user_text_is_inserted_verbatim():
    text = build_generation_prompt("echo {HOME}\nand more", "bash", "Linux")
    assert "echo {HOME}\nand more" in text  # nosec B101 - pytest assert in tests
    assert "    " not in text  # nosec B101 - pytest assert in tests


def test_explanation_prompt_uses_language():
    text = build_explanation_prompt("ls -la", "German")
    assert "Outline the steps in a list format. Please reply in German" in text  # nosec B101 - pytest assert in tests
    assert text.endswith("The script: ls -la")  # nosec B101 - pytest assert in tests


def test_revision_prompt_carries_code_prompt_and_constraints():
    text = build_revision_prompt("only hidden files", "ls -la", "Windows")
    assert text.startswith("Update the following script")  # nosec B101 - pytest assert in tests
    assert "The script: ls -la" in text and "The prompt: only hidden files" in text  # nosec B101 - pytest assert in tests
    assert "Make sure the command runs on Windows operating system." in text  # nosec B101 - pytest assert in tests

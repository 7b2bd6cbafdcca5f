"""Prompt templates for script generation, explanation and revision.

Templates are dedented once at import time and filled with ``str.format``, so
user-supplied text (which may span lines or contain braces) is inserted
verbatim and never re-interpreted.
"""

from __future__ import annotations

import re
import textwrap
from typing import Tuple

from ..base.streaming import ExclusionPattern

# Order matters: the first pattern doubles as the reader's start marker.
SHELL_CODE_EXCLUSIONS: Tuple[ExclusionPattern, ...] = (
    re.compile(r"```[a-zA-Z]*\n*", re.IGNORECASE),
    re.compile(r"```[a-zA-Z]*", re.IGNORECASE),
    re.compile(r"```"),
    "\n",
)

_EXPLAIN_SCRIPT = (
    "Please provide a clear, concise description of the script, using minimal words. "
    "Outline the steps in a list format."
)

_GENERATION_DETAILS = textwrap.dedent(
    """\
    Only reply with the single line command surrounded by three backticks. It must be able to be directly run in the target shell. Do not include any other text.

    Make sure the command runs on {os_name} operating system."""
)

_GENERATION_TEMPLATE = textwrap.dedent(
    """\
    Create a single line command that one can enter in a terminal and run, based on what is specified in the prompt.

    The target shell is {shell}

    {details}

    The prompt is: {prompt}"""
)

_EXPLANATION_TEMPLATE = textwrap.dedent(
    """\
    {explain} Please reply in {language}

    The script: {script}"""
)

_REVISION_TEMPLATE = textwrap.dedent(
    """\
    Update the following script based on what is asked in the following prompt.

    The script: {code}

    The prompt: {prompt}

    {details}"""
)


def _generation_details(os_name: str) -> str:
    return _GENERATION_DETAILS.format(os_name=os_name)


def build_generation_prompt(prompt: str, shell: str, os_name: str) -> str:
    """Ask for exactly one fenced, directly runnable command for ``shell`` on ``os_name``."""
    return _GENERATION_TEMPLATE.format(shell=shell, details=_generation_details(os_name), prompt=prompt)


def build_explanation_prompt(script: str, language: str) -> str:
    """Ask for a short step-list description of ``script`` in ``language``."""
    return _EXPLANATION_TEMPLATE.format(explain=_EXPLAIN_SCRIPT, language=language, script=script)


def build_revision_prompt(prompt: str, code: str, os_name: str) -> str:
    """Ask to update ``code`` per ``prompt`` under the generation constraints."""
    return _REVISION_TEMPLATE.format(code=code, prompt=prompt, details=_generation_details(os_name))


__all__ = [
    "SHELL_CODE_EXCLUSIONS",
    "build_generation_prompt",
    "build_explanation_prompt",
    "build_revision_prompt",
]

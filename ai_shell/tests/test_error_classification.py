"""Unit tests for SDK exception translation into the known error taxonomy."""

from __future__ import annotations

import socket

import httpx

from ai_shell.base.errors import (
    ErrorCode,
    MalformedFrameError,
    ProviderError,
    QuotaError,
    TransportError,
    UpstreamError,
    to_known_error,
)
from ai_shell.base.errors_parts.classification import _extract_status, is_dns_failure, status_to_code


class _StatusError(Exception):
    def __init__(self, status: int, text: str) -> None:
        super().__init__(f"status {status}")
        self.status_code = status
        self.response = httpx.Response(status, text=text)


class _ConnError(Exception):
    def __init__(self, message: str, host: str = "api.example.test") -> None:
        super().__init__(message)
        self.request = httpx.Request("POST", f"https://{host}/v1/chat")


def _translate(exc: BaseException, **kwargs):
    return to_known_error(exc, provider="openai", provider_label="OpenAI", connection_errors=(_ConnError,), **kwargs)


def test_status_extraction_prefers_direct_attributes():
    class WithResponse(Exception):
        response = httpx.Response(418)

    assert _extract_status(_StatusError(404, "")) == 404  # nosec B101 - pytest assert in tests
    assert _extract_status(WithResponse()) == 418  # nosec B101 - pytest assert in tests
    assert _extract_status(ValueError("x")) is None  # nosec B101 - pytest assert in tests


def test_status_table():
    assert status_to_code(401) is ErrorCode.AUTH  # nosec B101 - pytest assert in tests
    assert status_to_code(429) is ErrorCode.RATE_LIMIT  # nosec B101 - pytest assert in tests
    assert status_to_code(503) is ErrorCode.UNAVAILABLE  # nosec B101 - pytest assert in tests
    assert status_to_code(599) is ErrorCode.SERVER_ERROR  # nosec B101 - pytest assert in tests
    assert status_to_code(418) is ErrorCode.UNKNOWN  # nosec B101 - pytest assert in tests


def test_html_body_is_kept_verbatim():
    err = _translate(_StatusError(503, "<html>down</html>"))
    assert isinstance(err, UpstreamError)  # nosec B101 - pytest assert in tests
    assert err.code is ErrorCode.UNAVAILABLE and err.payload == "<html>down</html>"  # nosec B101 - pytest assert in tests
    assert str(err) == "Request to OpenAI failed with status 503:\n\n<html>down</html>\n"  # nosec B101 - pytest assert in tests


def test_json_body_is_pretty_printed_in_quota_message():
    err = _translate(_StatusError(429, '{"error":{"message":"quota exceeded"}}'), model="gpt-4o-mini")
    assert isinstance(err, QuotaError) and err.model == "gpt-4o-mini"  # nosec B101 - pytest assert in tests
    assert '"message": "quota exceeded"' in str(err)  # nosec B101 - pytest assert in tests
    assert "Full message from OpenAI:" in str(err)  # nosec B101 - pytest assert in tests


def test_dns_failure_detected_through_cause_chain():
    try:
        try:
            raise socket.gaierror(-2, "Name or service not known")
        except socket.gaierror as inner:
            raise _ConnError("Connection error.") from inner
    except _ConnError as exc:
        outer = exc
    assert is_dns_failure(outer)  # nosec B101 - pytest assert in tests
    err = _translate(outer)
    assert isinstance(err, TransportError) and err.code is ErrorCode.TRANSPORT  # nosec B101 - pytest assert in tests
    assert str(err) == (  # nosec B101 - pytest assert in tests
        "Error connecting to api.example.test (getaddrinfo). Are you connected to the internet?"
    )


def test_other_connection_failure_names_host_and_reason():
    err = _translate(_ConnError("Connection refused"))
    assert str(err) == "Error connecting to api.example.test: Connection refused"  # nosec B101 - pytest assert in tests


def test_known_errors_pass_through_and_unknown_return_none():
    known = ProviderError(code=ErrorCode.AUTH, message="bad key", provider="openai")
    assert _translate(known) is known  # nosec B101 - pytest assert in tests
    assert _translate(RuntimeError("boom")) is None  # nosec B101 - pytest assert in tests


def test_malformed_frame_error_message():
    try:
        import json

        json.loads("{oops")
    except ValueError as cause:
        err = MalformedFrameError("data: {oops", cause)
    assert str(err).startswith("Error parsing stream frame data: {oops.\n")  # nosec B101 - pytest assert in tests
    assert err.code is ErrorCode.MALFORMED_FRAME and err.payload == "data: {oops"  # nosec B101 - pytest assert in tests

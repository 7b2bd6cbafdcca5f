"""
Translation of SDK exceptions into the known error taxonomy.

Both provider SDKs (``openai`` and ``anthropic``) share the same exception
shape: connection failures carry the ``httpx.Request`` that failed, status
failures carry the ``httpx.Response``. Translation therefore works by duck
typing on ``status_code`` / ``response`` / ``request`` and never imports an SDK.
"""
from __future__ import annotations

import json
import socket
from typing import Dict, Optional, Tuple, Type

from .error_code import ErrorCode
from .provider_error import ProviderError, QuotaError, TransportError, UpstreamError


_DNS_FAILURE_MARKERS = (
    "name or service not known",
    "nodename nor servname",
    "getaddrinfo failed",
    "temporary failure in name resolution",
    "no address associated with hostname",
)

_QUOTA_GUIDANCE = {
    "openai": (
        "This is due to incorrect billing setup or excessive quota usage. Please follow this guide "
        "to fix it: https://help.openai.com/en/articles/6891831-error-code-429-you-exceeded-your-"
        "current-quota-please-check-your-plan-and-billing-details\n\n"
        "You can activate billing here: https://platform.openai.com/account/billing/overview . "
        "Make sure to add a payment method if not under an active grant from OpenAI."
    ),
    "anthropic": (
        "This is due to rate limiting or exhausted credits. Check your usage limits and billing "
        "at https://console.anthropic.com/settings/limits and retry later."
    ),
}


def _extract_status(exc: BaseException) -> Optional[int]:
    """Attempt to extract an HTTP status code from a provider exception.

    Supported attribute shapes (checked in order):
    - ``exc.status_code``
    - ``exc.status``
    - ``exc.response.status_code``
    Returns ``None`` if no valid status can be found.
    """
    for attr in ("status_code", "status"):
        val = getattr(exc, attr, None)
        if isinstance(val, int) and 100 <= val < 600:
            return val
    resp = getattr(exc, "response", None)
    if resp is not None:
        sc = getattr(resp, "status_code", None)
        if isinstance(sc, int) and 100 <= sc < 600:
            return sc
    return None


_HTTP_STATUS_MAP: Dict[int, ErrorCode] = {
    400: ErrorCode.VALIDATION,
    401: ErrorCode.AUTH,
    403: ErrorCode.AUTH,
    404: ErrorCode.NOT_FOUND,
    408: ErrorCode.TIMEOUT,
    409: ErrorCode.CONFLICT,
    422: ErrorCode.VALIDATION,
    429: ErrorCode.RATE_LIMIT,
    500: ErrorCode.SERVER_ERROR,
    502: ErrorCode.TRANSIENT,
    503: ErrorCode.UNAVAILABLE,
    504: ErrorCode.TIMEOUT,
}


def status_to_code(status: int) -> ErrorCode:
    """Map an HTTP status to an :class:`ErrorCode` (``UNKNOWN`` when unmapped)."""
    if status in _HTTP_STATUS_MAP:
        return _HTTP_STATUS_MAP[status]
    return ErrorCode.SERVER_ERROR if status >= 500 else ErrorCode.UNKNOWN


def format_payload(exc: BaseException) -> Optional[str]:
    """Return the provider response body, pretty-printed when it is JSON.

    Bodies are usually JSON but occasionally HTML; both are handled.
    """
    text: Optional[str] = None
    resp = getattr(exc, "response", None)
    if resp is not None:
        try:
            text = resp.text
        except Exception:  # noqa: BLE001 - body may be unread or undecodable
            text = None
    if not text:
        body = getattr(exc, "body", None)
        if body is None:
            return None
        return json.dumps(body, indent=2) if not isinstance(body, str) else body
    try:
        return json.dumps(json.loads(text), indent=2)
    except ValueError:
        return text


def _iter_causes(exc: BaseException):
    seen = set()
    current: Optional[BaseException] = exc
    while current is not None and id(current) not in seen:
        seen.add(id(current))
        yield current
        current = current.__cause__ or current.__context__


def is_dns_failure(exc: BaseException) -> bool:
    """Return True when ``exc`` (or anything in its cause chain) is a DNS failure."""
    for err in _iter_causes(exc):
        if isinstance(err, socket.gaierror):
            return True
        msg = str(err).lower()
        if any(marker in msg for marker in _DNS_FAILURE_MARKERS):
            return True
    return False


def _request_host(exc: BaseException) -> str:
    try:
        request = getattr(exc, "request", None)
    except RuntimeError:  # httpx raises when no request was attached
        request = None
    url = getattr(request, "url", None)
    host = getattr(url, "host", None)
    return host or "the provider endpoint"


def _root_reason(exc: BaseException) -> str:
    reason = str(exc)
    for err in _iter_causes(exc):
        if str(err):
            reason = str(err)
    return reason


def transport_error(exc: BaseException, *, provider: str, model: Optional[str] = None) -> TransportError:
    """Build a :class:`TransportError` naming the unreachable host."""
    host = _request_host(exc)
    if is_dns_failure(exc):
        message = f"Error connecting to {host} (getaddrinfo). Are you connected to the internet?"
    else:
        message = f"Error connecting to {host}: {_root_reason(exc)}"
    return TransportError(
        code=ErrorCode.TRANSPORT,
        message=message,
        provider=provider,
        model=model,
        raw=exc if isinstance(exc, Exception) else None,
    )


def status_error(
    exc: BaseException,
    status: int,
    *,
    provider: str,
    provider_label: str,
    model: Optional[str] = None,
) -> ProviderError:
    """Build a :class:`QuotaError` (429) or :class:`UpstreamError` (other)."""
    payload = format_payload(exc)
    raw = exc if isinstance(exc, Exception) else None
    if status == 429:
        guidance = _QUOTA_GUIDANCE.get(provider, "Please check your plan and billing details.")
        message = (
            f"Request to {provider_label} failed with status 429. {guidance}\n\n"
            f"Full message from {provider_label}:\n\n"
            f"{payload or ''}\n"
        )
        return QuotaError(
            code=ErrorCode.RATE_LIMIT,
            message=message,
            provider=provider,
            model=model,
            status=status,
            payload=payload,
            raw=raw,
        )
    message = f"Request to {provider_label} failed with status {status}:\n\n{payload or ''}\n"
    return UpstreamError(
        code=status_to_code(status),
        message=message,
        provider=provider,
        model=model,
        status=status,
        payload=payload,
        raw=raw,
    )


def to_known_error(
    exc: BaseException,
    *,
    provider: str,
    provider_label: str,
    connection_errors: Tuple[Type[BaseException], ...] = (),
    model: Optional[str] = None,
) -> Optional[ProviderError]:
    """Translate an SDK exception into the known taxonomy.

    Precedence:
        1. ``ProviderError`` passthrough.
        2. Connection failures (``connection_errors``) → :class:`TransportError`.
        3. Exceptions carrying an HTTP status → :class:`QuotaError` /
           :class:`UpstreamError`.

    Returns ``None`` for anything else; callers re-raise the original exception.
    """
    if isinstance(exc, ProviderError):
        return exc
    if connection_errors and isinstance(exc, connection_errors):
        return transport_error(exc, provider=provider, model=model)
    status = _extract_status(exc)
    if status is not None and status >= 300:
        return status_error(exc, status, provider=provider, provider_label=provider_label, model=model)
    return None


__all__ = [
    "to_known_error",
    "transport_error",
    "status_error",
    "status_to_code",
    "format_payload",
    "is_dns_failure",
    "_extract_status",
    "_HTTP_STATUS_MAP",
]

"""Mapping of httpx failures and HTTP responses to `StemSeparatorError`.

Both transports go through these helpers so a 413 or a DNS failure reads
the same regardless of which transport issued the request.
"""

from __future__ import annotations

import json

import httpx

from stem_client.core.domain.errors import StemSeparatorError
from stem_client.core.domain.result import Err, Ok, Result


def _json_detail(response: httpx.Response) -> str | None:
    try:
        data = response.json()
    except (json.JSONDecodeError, UnicodeDecodeError):
        return None
    if isinstance(data, dict) and "detail" in data:
        return str(data["detail"])
    return None


def api_error_from_response(
    response: httpx.Response,
    label: str = "API error",
    *,
    cause: BaseException | None = None,
) -> StemSeparatorError:
    """Best-effort message: JSON `detail`, else status line plus body text."""

    detail = _json_detail(response)
    if detail is not None:
        message = detail
    else:
        message = f"{label}: {response.status_code} {response.reason_phrase}".rstrip()
        text = response.text.strip()
        if text:
            message = f"{message} - {text}"
    return StemSeparatorError.api_error(message, status=response.status_code, cause=cause)


def map_transport_error(
    exc: httpx.HTTPError,
    *,
    timeout_ms: int,
    action: str = "Request",
    label: str = "API error",
) -> StemSeparatorError:
    if isinstance(exc, httpx.HTTPStatusError):
        return api_error_from_response(exc.response, label, cause=exc)
    # Structured timeout signal (connect/read/write/pool) instead of message sniffing.
    if isinstance(exc, httpx.TimeoutException):
        return timeout_error(timeout_ms=timeout_ms, action=action, cause=exc)
    return StemSeparatorError.network_error(str(exc) or f"{action} failed", cause=exc)


def timeout_error(*, timeout_ms: int, action: str = "Request", cause: BaseException | None = None) -> StemSeparatorError:
    return StemSeparatorError.timeout(f"{action} timed out after {timeout_ms}ms", cause=cause)


def decode_json(response: httpx.Response) -> Result[object]:
    try:
        return Ok(response.json())
    except (json.JSONDecodeError, UnicodeDecodeError) as exc:
        return Err(
            StemSeparatorError.invalid_response(
                f"Response is not valid JSON (HTTP {response.status_code})",
                cause=exc,
            )
        )

"""httpx client builders.

Why a wrapper:
- Standardizes headers, redirects and timeouts for both transports.
- Makes testing easy: an `httpx.MockTransport` can be injected here.
"""

from __future__ import annotations

import httpx

from stem_client.core.domain.models import ClientConfig


def _default_headers(config: ClientConfig, extra_headers: dict[str, str] | None) -> dict[str, str]:
    headers: dict[str, str] = {
        "User-Agent": config.user_agent,
        "Accept": "application/json, */*;q=0.8",
    }
    if extra_headers:
        headers.update(extra_headers)
    return headers


def build_async_client(
    config: ClientConfig,
    *,
    timeout: httpx.Timeout | float | None = None,
    transport: httpx.AsyncBaseTransport | None = None,
    extra_headers: dict[str, str] | None = None,
) -> httpx.AsyncClient:
    """Create an `httpx.AsyncClient` for one request.

    `timeout=None` disables httpx's own timeouts; the caller enforces the
    deadline through asyncio cancellation.
    """

    return httpx.AsyncClient(
        timeout=timeout,
        follow_redirects=True,
        headers=_default_headers(config, extra_headers),
        transport=transport,
    )


def build_sync_client(
    config: ClientConfig,
    *,
    timeout: httpx.Timeout | float,
    transport: httpx.BaseTransport | None = None,
    extra_headers: dict[str, str] | None = None,
) -> httpx.Client:
    """Create a blocking `httpx.Client` with httpx's built-in timeout."""

    return httpx.Client(
        timeout=timeout,
        follow_redirects=True,
        headers=_default_headers(config, extra_headers),
        transport=transport,
    )

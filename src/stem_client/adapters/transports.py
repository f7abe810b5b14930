"""HTTP transports and the one-time runtime capability check.

- `NativeTransport`: `httpx.AsyncClient` under `asyncio.timeout()`. When the
  deadline fires the in-flight request is cancelled and TIMEOUT is returned.
- `LegacyTransport`: blocking `httpx.Client` run in a worker thread. httpx's
  own timeout bounds each connect/read/write step; an overall deadline is
  checked between body chunks so a slowly trickling response still fails with
  TIMEOUT. Used on interpreters without `asyncio.timeout` (< 3.11) or when
  forced through configuration.

Both are stateless between calls: each request opens and closes its own
client, so concurrent calls on one facade share nothing mutable.
"""

from __future__ import annotations

import asyncio
import logging
import time
from dataclasses import dataclass
from typing import Any, Iterator

import httpx

from stem_client.adapters.error_mapper import (
    api_error_from_response,
    map_transport_error,
    timeout_error,
)
from stem_client.adapters.http_client import build_async_client, build_sync_client
from stem_client.adapters.request_builder import EncodedFormBuilder, NativeFormBuilder
from stem_client.core.config import TransportMode
from stem_client.core.domain.errors import StemSeparatorError
from stem_client.core.domain.models import ClientConfig
from stem_client.core.domain.result import Err, Ok, Result
from stem_client.core.interfaces.transport import FormBuilder, HttpTransport, MultipartForm

logger = logging.getLogger(__name__)

MockableTransport = Any  # httpx.BaseTransport and/or httpx.AsyncBaseTransport


def _request_kwargs(headers: dict[str, str], form: MultipartForm | None) -> dict[str, Any]:
    kwargs: dict[str, Any] = {"headers": dict(headers)}
    if form is None:
        return kwargs
    kwargs["headers"].update(form.headers)
    if form.files is not None:
        kwargs["files"] = form.files
    if form.content is not None:
        kwargs["content"] = form.content
    return kwargs


class NativeTransport(HttpTransport):
    name = "native"

    def __init__(self, config: ClientConfig, *, http_transport: MockableTransport | None = None) -> None:
        self._config = config
        self._http_transport = http_transport

    async def send(
        self,
        method: str,
        url: str,
        *,
        headers: dict[str, str],
        timeout_ms: int,
        form: MultipartForm | None = None,
        error_label: str = "API error",
        action: str = "Request",
    ) -> Result[httpx.Response]:
        kwargs = _request_kwargs(headers, form)
        try:
            # httpx timeouts disabled: the asyncio deadline is the only clock.
            async with build_async_client(self._config, transport=self._http_transport) as client:
                async with asyncio.timeout(timeout_ms / 1000):
                    response = await client.request(method, url, **kwargs)
        except TimeoutError as exc:
            logger.debug("%s %s cancelled after %sms", method, url, timeout_ms)
            return Err(timeout_error(timeout_ms=timeout_ms, action=action, cause=exc))
        except httpx.HTTPError as exc:
            return Err(map_transport_error(exc, timeout_ms=timeout_ms, action=action, label=error_label))

        if not response.is_success:
            return Err(api_error_from_response(response, error_label))
        return Ok(response)


class _DeadlineStream(httpx.SyncByteStream):
    """Response body stream that fails once the overall deadline has passed."""

    def __init__(self, stream: httpx.SyncByteStream, deadline: float, request: httpx.Request) -> None:
        self._stream = stream
        self._deadline = deadline
        self._request = request

    def _check(self) -> None:
        if time.monotonic() > self._deadline:
            raise httpx.ReadTimeout("overall request deadline exceeded", request=self._request)

    def __iter__(self) -> Iterator[bytes]:
        # Headers may already have arrived past the deadline.
        self._check()
        for chunk in self._stream:
            self._check()
            yield chunk

    def close(self) -> None:
        self._stream.close()


class LegacyTransport(HttpTransport):
    name = "legacy"

    def __init__(self, config: ClientConfig, *, http_transport: MockableTransport | None = None) -> None:
        self._config = config
        self._http_transport = http_transport

    async def send(
        self,
        method: str,
        url: str,
        *,
        headers: dict[str, str],
        timeout_ms: int,
        form: MultipartForm | None = None,
        error_label: str = "API error",
        action: str = "Request",
    ) -> Result[httpx.Response]:
        return await asyncio.to_thread(
            self._send_blocking,
            method,
            url,
            headers=headers,
            timeout_ms=timeout_ms,
            form=form,
            error_label=error_label,
            action=action,
        )

    def _send_blocking(
        self,
        method: str,
        url: str,
        *,
        headers: dict[str, str],
        timeout_ms: int,
        form: MultipartForm | None,
        error_label: str,
        action: str,
    ) -> Result[httpx.Response]:
        kwargs = _request_kwargs(headers, form)
        timeout = httpx.Timeout(timeout_ms / 1000)
        deadline = time.monotonic() + timeout_ms / 1000
        try:
            with build_sync_client(self._config, timeout=timeout, transport=self._http_transport) as client:
                with client.stream(method, url, **kwargs) as response:
                    response.stream = _DeadlineStream(response.stream, deadline, response.request)
                    response.read()
                response.raise_for_status()
        except httpx.HTTPError as exc:
            return Err(map_transport_error(exc, timeout_ms=timeout_ms, action=action, label=error_label))
        return Ok(response)


@dataclass(frozen=True)
class RuntimeCapabilities:
    native_timeout: bool


@dataclass(frozen=True)
class Runtime:
    """Transport + matching form builder, chosen once per client."""

    transport: HttpTransport
    form_builder: FormBuilder


def detect_capabilities() -> RuntimeCapabilities:
    return RuntimeCapabilities(native_timeout=hasattr(asyncio, "timeout"))


def select_runtime(
    config: ClientConfig,
    mode: TransportMode = "auto",
    *,
    http_transport: MockableTransport | None = None,
    capabilities: RuntimeCapabilities | None = None,
) -> Result[Runtime]:
    caps = capabilities or detect_capabilities()
    if mode == "native" and not caps.native_timeout:
        return Err(StemSeparatorError.invalid_argument("native transport requires asyncio.timeout (Python 3.11+)"))
    if mode not in ("auto", "native", "legacy"):
        return Err(StemSeparatorError.invalid_argument(f"unknown transport mode: {mode!r}"))

    use_native = mode == "native" or (mode == "auto" and caps.native_timeout)
    if use_native:
        runtime = Runtime(
            transport=NativeTransport(config, http_transport=http_transport),
            form_builder=NativeFormBuilder(),
        )
    else:
        runtime = Runtime(
            transport=LegacyTransport(config, http_transport=http_transport),
            form_builder=EncodedFormBuilder(),
        )
    logger.debug("Selected %s transport", runtime.transport.name)
    return Ok(runtime)

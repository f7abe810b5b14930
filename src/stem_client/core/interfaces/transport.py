"""Contracts for request building and HTTP transport.

Why Protocol:
- Two interchangeable implementations exist (native asyncio / legacy
  threaded). The capability check runs once at client construction and the
  facade only sees these contracts.
- Tests can plug fakes without inheriting from concrete adapters.
"""

from __future__ import annotations

from contextlib import ExitStack
from dataclasses import dataclass, field
from typing import Any, Iterable, Protocol, runtime_checkable

import httpx

from stem_client.core.domain.result import Result


@dataclass
class MultipartForm:
    """Outbound multipart payload.

    Native builders fill `files` and let httpx set the boundary; the encoded
    builder fills `content` and returns the generated headers that must be
    merged into the request. File handles opened while building are owned by
    `resources` and released by `close()`.
    """

    files: dict[str, tuple[Any, ...]] | None = None
    content: Iterable[bytes] | None = None
    headers: dict[str, str] = field(default_factory=dict)
    resources: ExitStack = field(default_factory=ExitStack, repr=False)

    def close(self) -> None:
        self.resources.close()

    def __enter__(self) -> "MultipartForm":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()


@runtime_checkable
class FormBuilder(Protocol):
    """Builds the multipart `file` field for one upload."""

    def build(self, file_input: object, filename: str) -> Result[MultipartForm]:
        ...


@runtime_checkable
class HttpTransport(Protocol):
    """Issues one HTTP request with a hard deadline.

    Rules:
    - 2xx -> `Ok(response)` with the body already read.
    - non-2xx -> `Err(API_ERROR)`; timeouts -> `Err(TIMEOUT)`; anything else
      at the transport level -> `Err(NETWORK_ERROR)`.
    - Sockets and timers are released on every exit path.
    """

    name: str

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
        ...

"""Unified error type for the client.

Every failure (bad input, HTTP error, transport failure, timeout, malformed
payload) surfaces as `StemSeparatorError`; callers branch on `kind`.
"""

from __future__ import annotations

from enum import Enum


class ErrorKind(str, Enum):
    """Stable discriminator for `StemSeparatorError`.

    - INVALID_ARGUMENT: bad file, base_url, job_id, filename or timeout.
    - API_ERROR: non-2xx status or explicit failure payload; see `status`.
    - NETWORK_ERROR: connection refused, DNS failure, TLS error...
    - TIMEOUT: the request exceeded its deadline.
    - INVALID_RESPONSE: body was not JSON or lacked job_id/output_files.
    """

    INVALID_ARGUMENT = "INVALID_ARGUMENT"
    API_ERROR = "API_ERROR"
    NETWORK_ERROR = "NETWORK_ERROR"
    TIMEOUT = "TIMEOUT"
    INVALID_RESPONSE = "INVALID_RESPONSE"


class StemSeparatorError(Exception):
    """Error raised by the client with a stable `kind`.

    `status` is only populated for `ErrorKind.API_ERROR`.
    """

    __slots__ = ("_kind", "_message", "_status", "_cause")

    def __init__(
        self,
        message: str,
        *,
        kind: ErrorKind,
        status: int | None = None,
        cause: BaseException | None = None,
    ) -> None:
        super().__init__(message)
        self._kind = kind
        self._message = message
        self._status = status if kind is ErrorKind.API_ERROR else None
        self._cause = cause
        if cause is not None:
            self.__cause__ = cause

    @property
    def kind(self) -> ErrorKind:
        return self._kind

    @property
    def message(self) -> str:
        return self._message

    @property
    def status(self) -> int | None:
        return self._status

    @property
    def cause(self) -> BaseException | None:
        return self._cause

    def __repr__(self) -> str:
        status = f", status={self._status}" if self._status is not None else ""
        return f"StemSeparatorError({self._kind.value}: {self._message!r}{status})"

    @classmethod
    def invalid_argument(cls, message: str) -> "StemSeparatorError":
        return cls(message, kind=ErrorKind.INVALID_ARGUMENT)

    @classmethod
    def api_error(
        cls,
        message: str,
        *,
        status: int | None = None,
        cause: BaseException | None = None,
    ) -> "StemSeparatorError":
        return cls(message, kind=ErrorKind.API_ERROR, status=status, cause=cause)

    @classmethod
    def network_error(cls, message: str, *, cause: BaseException | None = None) -> "StemSeparatorError":
        return cls(message, kind=ErrorKind.NETWORK_ERROR, cause=cause)

    @classmethod
    def timeout(cls, message: str, *, cause: BaseException | None = None) -> "StemSeparatorError":
        return cls(message, kind=ErrorKind.TIMEOUT, cause=cause)

    @classmethod
    def invalid_response(cls, message: str, *, cause: BaseException | None = None) -> "StemSeparatorError":
        return cls(message, kind=ErrorKind.INVALID_RESPONSE, cause=cause)

"""Outbound request construction (query string, auth headers, multipart).

Two multipart strategies exist, picked once per client:
- `NativeFormBuilder`: hands a `files=` mapping to httpx, which writes the
  boundary header itself.
- `EncodedFormBuilder`: encodes the body up front and returns the generated
  `Content-Type` (boundary) / length headers; the caller must merge them into
  the request headers. Used by the legacy transport, which sends raw content.
"""

from __future__ import annotations

import io
import logging
import os
from typing import Any
from urllib.parse import urlencode

import httpx

from stem_client.core.domain.errors import ErrorKind, StemSeparatorError
from stem_client.core.domain.models import AudioBlob, SeparationOptions
from stem_client.core.domain.options import OutputFormat, StemCount
from stem_client.core.domain.result import Err, Ok, Result
from stem_client.core.interfaces.transport import FormBuilder, MultipartForm

logger = logging.getLogger(__name__)

FORM_FIELD = "file"
_OCTET_STREAM = "application/octet-stream"
# Only the headers produced by the multipart encoder are forwarded.
_ENCODER_HEADERS = ("Content-Type", "Content-Length", "Transfer-Encoding")


def build_query_string(options: SeparationOptions) -> str:
    """Query for POST /separate; unknown values are omitted, not rejected."""

    params: list[tuple[str, str]] = []
    stems = StemCount.parse(options.stems)
    if stems is not None:
        params.append(("stems", stems.value))
    if isinstance(options.bitrate, str) and options.bitrate.strip():
        params.append(("bitrate", options.bitrate.strip()))
    fmt = OutputFormat.parse(options.format)
    if fmt is not None:
        params.append(("format", fmt.value))
    qs = urlencode(params)
    return f"?{qs}" if qs else ""


def build_auth_headers(api_key: str | None) -> dict[str, str]:
    headers: dict[str, str] = {}
    if api_key and api_key.strip():
        headers["Authorization"] = f"Bearer {api_key.strip()}"
    return headers


def _is_path(value: object) -> bool:
    return isinstance(value, (str, os.PathLike))


def _open_path(form: MultipartForm, path: str) -> Result[io.BufferedReader]:
    try:
        return Ok(form.resources.enter_context(open(path, "rb")))
    except OSError as exc:
        return Err(
            StemSeparatorError(
                f"cannot open file {path!r}: {exc.strerror or exc}",
                kind=ErrorKind.INVALID_ARGUMENT,
                cause=exc,
            )
        )


def _field_for(form: MultipartForm, file_input: object, filename: str) -> Result[tuple[Any, ...]]:
    if isinstance(file_input, AudioBlob):
        return Ok((filename, file_input.data, file_input.content_type))
    if _is_path(file_input):
        path = os.fspath(file_input)
        opened = _open_path(form, path)
        if not opened.ok:
            return opened
        stream_name = os.path.basename(path) or filename
        return Ok((stream_name, opened.unwrap(), _OCTET_STREAM))
    if isinstance(file_input, (bytearray, memoryview)):
        return Ok((filename, bytes(file_input), _OCTET_STREAM))
    # bytes or a binary stream: attach as-is.
    return Ok((filename, file_input, _OCTET_STREAM))


class NativeFormBuilder(FormBuilder):
    """httpx `files=` upload; the transport sets the boundary."""

    def build(self, file_input: object, filename: str) -> Result[MultipartForm]:
        form = MultipartForm()
        field = _field_for(form, file_input, filename)
        if not field.ok:
            form.close()
            return field
        form.files = {FORM_FIELD: field.unwrap()}
        return Ok(form)


class EncodedFormBuilder(FormBuilder):
    """Pre-encoded multipart body plus the headers the encoder generated."""

    def build(self, file_input: object, filename: str) -> Result[MultipartForm]:
        form = MultipartForm()
        field = _field_for(form, file_input, filename)
        if not field.ok:
            form.close()
            return field

        # The request is never sent; it only drives httpx's multipart encoder.
        encoded = httpx.Request("POST", "/", files={FORM_FIELD: field.unwrap()})
        form.content = encoded.stream
        form.headers = {
            name: encoded.headers[name] for name in _ENCODER_HEADERS if name in encoded.headers
        }
        logger.debug("Encoded multipart form (%s)", form.headers.get("Content-Type"))
        return Ok(form)


def build_multipart_form(file_input: object, filename: str, *, native: bool = True) -> Result[MultipartForm]:
    builder: FormBuilder = NativeFormBuilder() if native else EncodedFormBuilder()
    return builder.build(file_input, filename)

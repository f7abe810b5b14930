"""Input validation (runs before any I/O).

Why here:
- job_id and filenames are interpolated into URL path segments, so they are
  checked for traversal patterns before a request is built.
- Every function returns a `Result`; nothing here raises.
"""

from __future__ import annotations

import io
import math
import numbers
import os
import re

from stem_client.core.domain.errors import StemSeparatorError
from stem_client.core.domain.models import AudioBlob
from stem_client.core.domain.options import DEFAULT_FILENAME
from stem_client.core.domain.result import Err, Ok, Result

_TRAVERSAL_RE = re.compile(r"\.\.|/|\\")
_DIR_PREFIX_RE = re.compile(r"^.*[/\\]", re.DOTALL)


def _invalid(message: str) -> Err:
    return Err(StemSeparatorError.invalid_argument(message))


def _is_binary_stream(value: object) -> bool:
    if isinstance(value, io.TextIOBase):
        return False
    return callable(getattr(value, "read", None))


def validate_file_input(value: object) -> Result[object]:
    if value is None:
        return _invalid("file is required")
    if isinstance(value, str):
        if not value.strip():
            return _invalid("file path cannot be empty")
        return Ok(value)
    if isinstance(value, (os.PathLike, bytes, bytearray, memoryview, AudioBlob)):
        return Ok(value)
    if _is_binary_stream(value):
        return Ok(value)
    return _invalid(f"unsupported file input type: {type(value).__name__}")


def normalize_base_url(url: object) -> Result[str]:
    """Trim and strip trailing slashes. Idempotent."""

    if not isinstance(url, str) or not url.strip():
        return _invalid("base_url is required")
    return Ok(url.strip().rstrip("/"))


def validate_job_id(job_id: object) -> Result[str]:
    trimmed = job_id.strip() if isinstance(job_id, str) else ""
    if not trimmed:
        return _invalid("job_id is required")
    if _TRAVERSAL_RE.search(trimmed):
        return _invalid("job_id must not contain path segments")
    return Ok(job_id)


def sanitize_filename(name: object) -> Result[str]:
    """Reject `..`, drop any directory prefix, return the basename."""

    if not isinstance(name, str):
        return _invalid("filename is required and must not be empty")
    if ".." in name:
        return _invalid("filename must not contain ..")
    base = _DIR_PREFIX_RE.sub("", name).strip()
    if not base:
        return _invalid("filename is required and must not be empty")
    return Ok(base)


def validate_timeout(value: object) -> Result[int]:
    # bool is an Integral; True must not pass as a 1ms timeout.
    if (
        isinstance(value, bool)
        or not isinstance(value, numbers.Real)
        or not math.isfinite(value)
        or value < 1
    ):
        return _invalid("timeout must be a positive number")
    return Ok(int(value))


def resolve_upload_filename(filename: str | None) -> Result[str]:
    """Filename for the multipart `file` field (default: "audio")."""

    if filename is None or not filename.strip():
        return Ok(DEFAULT_FILENAME)
    return sanitize_filename(filename.strip())

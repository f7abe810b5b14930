"""Domain models (Pydantic v2 + dataclasses).

Why Pydantic here:
- `SeparationResult` must never exist in an invalid state: job_id and
  output_files are enforced at construction time.
- Serialization (`model_dump`) is free for the JSON exporter and the CLI.

Note:
- These models describe *what* the API exchanges, not *how* it is fetched.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import BinaryIO, Literal, Union

from pydantic import BaseModel, Field, field_validator
from pydantic.config import ConfigDict

from stem_client.core.domain.options import OutputFormat, StemCount


class ClientConfig(BaseModel):
    """Validated, read-only configuration owned by one client instance."""

    model_config = ConfigDict(frozen=True)

    base_url: str = Field(
        ...,
        min_length=1,
        description="API origin + prefix, no trailing slash.",
    )
    api_key: str = Field(
        default="",
        repr=False,
        description="Bearer token; empty means no Authorization header.",
    )
    timeout_ms: int = Field(
        ...,
        ge=1,
        description="Per-request timeout for separate/download (milliseconds).",
    )
    user_agent: str = Field(
        default="stem-separator-client/0.1",
        min_length=1,
        description="User-Agent sent on every request.",
    )


@dataclass(frozen=True)
class SeparationOptions:
    """Per-call options for `separate()`.

    Raw strings are accepted for `stems`/`format`; unknown values are dropped
    by the request builder and the server default applies.
    """

    filename: str | None = None
    stems: StemCount | str | None = None
    bitrate: str | None = None
    format: OutputFormat | str | None = None


@dataclass(frozen=True)
class AudioBlob:
    """In-memory audio payload.

    `filename` is used for the upload when `SeparationOptions.filename` is unset.
    """

    data: bytes
    filename: str | None = None
    content_type: str = "application/octet-stream"


SeparationInput = Union[str, os.PathLike, bytes, bytearray, memoryview, BinaryIO, AudioBlob]


class SeparationResult(BaseModel):
    """Successful response of POST /api/v1/separate."""

    model_config = ConfigDict(frozen=True)

    success: Literal[True] = True
    message: str = Field(default="", description="Server message.")
    job_id: str = Field(..., min_length=1, description="Opaque job identifier.")
    stems: StemCount = Field(default=StemCount.TWO)
    output_files: list[str] = Field(
        default_factory=list,
        description="Produced stem filenames, in server order.",
    )
    processing_time: float = Field(default=0.0, ge=0.0, description="Seconds.")

    @field_validator("job_id")
    @classmethod
    def _job_id_not_blank(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("job_id must not be blank")
        return value

    @field_validator("output_files")
    @classmethod
    def _files_not_empty(cls, value: list[str]) -> list[str]:
        if any(not name for name in value):
            raise ValueError("output_files entries must be non-empty")
        return value


class HealthStatus(BaseModel):
    """Liveness payload of GET /health (unknown fields are preserved)."""

    model_config = ConfigDict(extra="allow")

    status: str
    version: str | None = None
    service: str | None = None

"""Closed option sets understood by the Stem-Separator API.

These live in the domain layer so the request builder, the response parser
and the CLI share a single source of truth for the accepted values.
"""

from __future__ import annotations

from enum import Enum

DEFAULT_BASE_URL = "https://stem-separator-api-production.up.railway.app"
DEFAULT_TIMEOUT_MS = 300_000
HEALTH_TIMEOUT_MS = 10_000

API_PATH_SEPARATE = "/api/v1/separate"
# Download template: /api/v1/separate/<job_id>/download/<filename>
API_PATH_DOWNLOAD = "/api/v1/separate"
API_PATH_HEALTH = "/health"

DEFAULT_FILENAME = "audio"


class StemCount(str, Enum):
    """Number of stems produced by a separation job."""

    TWO = "2stems"
    FOUR = "4stems"
    FIVE = "5stems"

    @classmethod
    def default(cls) -> "StemCount":
        """Server-side default (vocals + accompaniment)."""

        return cls.TWO

    @classmethod
    def parse(cls, value: object) -> "StemCount | None":
        """Return the matching member, or None for anything unrecognized."""

        if isinstance(value, cls):
            return value
        if not isinstance(value, str):
            return None
        try:
            return cls(value)
        except ValueError:
            return None


class OutputFormat(str, Enum):
    """Audio container/codec for the separated stems."""

    WAV = "wav"
    MP3 = "mp3"
    FLAC = "flac"
    M4A = "m4a"
    AAC = "aac"
    OGG = "ogg"

    @classmethod
    def parse(cls, value: object) -> "OutputFormat | None":
        if isinstance(value, cls):
            return value
        if not isinstance(value, str):
            return None
        try:
            return cls(value)
        except ValueError:
            return None

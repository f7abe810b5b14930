"""Async Python client for the Stem-Separator API.

Example:
    from stem_client import StemSeparatorClient, SeparationOptions

    client = StemSeparatorClient()
    result = await client.separate("song.mp3", SeparationOptions(stems="4stems"))
"""

from stem_client.core.domain.errors import ErrorKind, StemSeparatorError
from stem_client.core.domain.models import (
    AudioBlob,
    ClientConfig,
    HealthStatus,
    SeparationOptions,
    SeparationResult,
)
from stem_client.core.domain.options import (
    API_PATH_DOWNLOAD,
    API_PATH_HEALTH,
    API_PATH_SEPARATE,
    DEFAULT_BASE_URL,
    DEFAULT_TIMEOUT_MS,
    HEALTH_TIMEOUT_MS,
    OutputFormat,
    StemCount,
)
from stem_client.core.services.separation_client import StemSeparatorClient

__version__ = "0.1.0"

__all__ = [
    "API_PATH_DOWNLOAD",
    "API_PATH_HEALTH",
    "API_PATH_SEPARATE",
    "AudioBlob",
    "ClientConfig",
    "DEFAULT_BASE_URL",
    "DEFAULT_TIMEOUT_MS",
    "ErrorKind",
    "HEALTH_TIMEOUT_MS",
    "HealthStatus",
    "OutputFormat",
    "SeparationOptions",
    "SeparationResult",
    "StemCount",
    "StemSeparatorClient",
    "StemSeparatorError",
]

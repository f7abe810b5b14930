"""Client facade for the Stem-Separator API.

Each public operation is one linear pipeline:
validate -> build request -> transport -> decode/parse.
Stages forward `Result` values; the public methods unwrap at the edge, so
callers only ever see `StemSeparatorError`.
"""

from __future__ import annotations

import logging
from pathlib import Path
from urllib.parse import quote

from pydantic import ValidationError

from stem_client.adapters.error_mapper import decode_json
from stem_client.adapters.request_builder import build_auth_headers, build_query_string
from stem_client.adapters.transports import MockableTransport, Runtime, select_runtime
from stem_client.core.config import ClientSettings, TransportMode
from stem_client.core.domain.errors import ErrorKind, StemSeparatorError
from stem_client.core.domain.models import (
    AudioBlob,
    ClientConfig,
    HealthStatus,
    SeparationInput,
    SeparationOptions,
    SeparationResult,
)
from stem_client.core.domain.options import (
    API_PATH_DOWNLOAD,
    API_PATH_HEALTH,
    API_PATH_SEPARATE,
    HEALTH_TIMEOUT_MS,
)
from stem_client.core.domain.result import Err, Ok, Result
from stem_client.core.response_parser import parse_health_response, parse_separation_response
from stem_client.core.validation import (
    normalize_base_url,
    resolve_upload_filename,
    sanitize_filename,
    validate_file_input,
    validate_job_id,
    validate_timeout,
)

logger = logging.getLogger(__name__)


def _upload_name(file: object, options: SeparationOptions) -> str | None:
    # An explicit option wins; an AudioBlob may carry its own name.
    if options.filename and options.filename.strip():
        return options.filename
    if isinstance(file, AudioBlob):
        return file.filename
    return None


def _load_settings() -> ClientSettings:
    try:
        return ClientSettings()
    except ValidationError as exc:
        raise StemSeparatorError.invalid_argument(f"invalid STEMSEP_* configuration: {exc}") from exc


class StemSeparatorClient:
    """Async client for the Stem-Separator API.

    With no arguments it targets the public deployment (or whatever the
    `STEMSEP_*` environment configures). Pass `base_url` / `api_key` for a
    self-hosted instance.

    Example:
        client = StemSeparatorClient()
        result = await client.separate("song.mp3", SeparationOptions(stems="4stems"))
        data = await client.download_stem(result.job_id, result.output_files[0])
    """

    def __init__(
        self,
        base_url: str | None = None,
        api_key: str | None = None,
        timeout_ms: int | None = None,
        *,
        settings: ClientSettings | None = None,
        transport: TransportMode | None = None,
        http_transport: MockableTransport | None = None,
    ) -> None:
        settings = settings or _load_settings()

        url = normalize_base_url(base_url if base_url is not None else settings.base_url).unwrap()
        timeout = validate_timeout(timeout_ms if timeout_ms is not None else settings.timeout_ms).unwrap()
        key = api_key if api_key is not None else (settings.api_key or "")

        self._config = ClientConfig(
            base_url=url,
            api_key=key,
            timeout_ms=timeout,
            user_agent=settings.user_agent,
        )
        self._runtime: Runtime = select_runtime(
            self._config,
            transport or settings.transport,
            http_transport=http_transport,
        ).unwrap()

    @property
    def config(self) -> ClientConfig:
        return self._config

    @property
    def base_url(self) -> str:
        return self._config.base_url

    @property
    def timeout_ms(self) -> int:
        return self._config.timeout_ms

    @property
    def transport_name(self) -> str:
        return self._runtime.transport.name

    def __repr__(self) -> str:
        return f"StemSeparatorClient(base_url={self.base_url!r}, transport={self.transport_name!r})"

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    async def separate(
        self,
        file: SeparationInput,
        options: SeparationOptions | None = None,
    ) -> SeparationResult:
        """Upload audio and separate it into stems.

        `file` may be a path (str / PathLike), bytes, a binary stream or an
        `AudioBlob`. Raises `StemSeparatorError` (INVALID_ARGUMENT before any
        I/O; API_ERROR / TIMEOUT / NETWORK_ERROR / INVALID_RESPONSE after).
        """

        result = await self._separate(file, options or SeparationOptions())
        return self._finish("separate", result)

    def get_stem_download_url(self, job_id: str, filename: str) -> str:
        """URL of one stem of a finished job. Pure: no I/O."""

        return self._finish("download_url", self._download_url(job_id, filename))

    async def download_stem(self, job_id: str, filename: str) -> bytes:
        """Download one stem and return its raw bytes."""

        return self._finish("download", await self._download(job_id, filename))

    async def save_stem(self, job_id: str, filename: str, dest_dir: str | Path = ".") -> Path:
        """Download one stem into `dest_dir/<basename>` and return the path."""

        safe_name = sanitize_filename(filename)
        if not safe_name.ok:
            return self._finish("save", safe_name)
        data = await self.download_stem(job_id, filename)

        target = Path(dest_dir) / safe_name.unwrap()
        try:
            target.parent.mkdir(parents=True, exist_ok=True)
            target.write_bytes(data)
        except OSError as exc:
            raise StemSeparatorError(
                f"cannot write {target}: {exc.strerror or exc}",
                kind=ErrorKind.INVALID_ARGUMENT,
                cause=exc,
            ) from exc
        logger.info("Saved %s (%d bytes)", target, len(data))
        return target

    async def check_health(self) -> HealthStatus:
        """GET /health with a fixed short timeout and no Authorization header."""

        url = f"{self.base_url}{API_PATH_HEALTH}"
        sent = await self._runtime.transport.send(
            "GET",
            url,
            headers={},
            timeout_ms=HEALTH_TIMEOUT_MS,
            error_label="Health check failed",
            action="Health check",
        )
        return self._finish("health", sent.and_then(decode_json).and_then(parse_health_response))

    # ------------------------------------------------------------------
    # Pipelines
    # ------------------------------------------------------------------

    async def _separate(self, file: object, options: SeparationOptions) -> Result[SeparationResult]:
        checked = validate_file_input(file)
        if not checked.ok:
            return checked
        filename = resolve_upload_filename(_upload_name(file, options))
        if not filename.ok:
            return filename

        url = f"{self.base_url}{API_PATH_SEPARATE}{build_query_string(options)}"
        built = self._runtime.form_builder.build(file, filename.unwrap())
        if not built.ok:
            return built

        logger.debug("POST %s via %s transport", url, self.transport_name)
        with built.unwrap() as form:
            sent = await self._runtime.transport.send(
                "POST",
                url,
                headers=build_auth_headers(self._config.api_key),
                timeout_ms=self.timeout_ms,
                form=form,
            )
        return sent.and_then(decode_json).and_then(parse_separation_response)

    def _download_url(self, job_id: str, filename: str) -> Result[str]:
        checked = validate_job_id(job_id)
        if not checked.ok:
            return checked
        safe_name = sanitize_filename(filename)
        if not safe_name.ok:
            return safe_name
        encoded_job = quote(job_id, safe="")
        encoded_file = quote(safe_name.unwrap(), safe="")
        return Ok(f"{self.base_url}{API_PATH_DOWNLOAD}/{encoded_job}/download/{encoded_file}")

    async def _download(self, job_id: str, filename: str) -> Result[bytes]:
        url = self._download_url(job_id, filename)
        if not url.ok:
            return url

        logger.debug("GET %s", url.unwrap())
        sent = await self._runtime.transport.send(
            "GET",
            url.unwrap(),
            headers=build_auth_headers(self._config.api_key),
            timeout_ms=self.timeout_ms,
            error_label="Download error",
            action="Download",
        )
        return sent.and_then(lambda response: Ok(response.content))

    @staticmethod
    def _finish(operation: str, result: Result):
        if isinstance(result, Err):
            logger.warning("%s failed [%s]: %s", operation, result.error.kind.value, result.error.message)
        return result.unwrap()

"""Parsing of JSON payloads returned by the API.

Rules:
- A structurally plausible success payload yields a usable result even when
  optional fields are malformed (defaults are applied).
- Missing job_id / output_files fail loudly with INVALID_RESPONSE.
"""

from __future__ import annotations

import math
from typing import Any

from pydantic import ValidationError

from stem_client.core.domain.errors import StemSeparatorError
from stem_client.core.domain.models import HealthStatus, SeparationResult
from stem_client.core.domain.options import StemCount
from stem_client.core.domain.result import Err, Ok, Result


def _is_number(value: object) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool) and math.isfinite(value)


def parse_separation_response(body: object) -> Result[SeparationResult]:
    if not isinstance(body, dict):
        return Err(StemSeparatorError.invalid_response("API response is not an object"))

    obj: dict[str, Any] = body
    success = obj.get("success")

    # Explicit failure reported by the API (e.g. processing error).
    if success is False:
        message = obj.get("message") if isinstance(obj.get("message"), str) else "Separation failed"
        status = obj.get("status")
        return Err(
            StemSeparatorError.api_error(
                message,
                status=status if isinstance(status, int) and not isinstance(status, bool) else None,
            )
        )
    if success is not True:
        return Err(StemSeparatorError.invalid_response("API response missing success: true"))

    job_id = obj.get("job_id")
    if not isinstance(job_id, str) or not job_id.strip():
        return Err(StemSeparatorError.invalid_response("API response missing valid job_id"))

    output_files = obj.get("output_files")
    if not isinstance(output_files, list):
        return Err(StemSeparatorError.invalid_response("API response missing output_files array"))

    processing_time = obj.get("processing_time")
    if not _is_number(processing_time) or processing_time < 0:
        processing_time = 0

    try:
        result = SeparationResult(
            message=obj["message"] if isinstance(obj.get("message"), str) else "",
            job_id=job_id,
            stems=StemCount.parse(obj.get("stems")) or StemCount.default(),
            output_files=[f for f in output_files if isinstance(f, str) and f],
            processing_time=processing_time,
        )
    except ValidationError as exc:  # pragma: no cover - guarded by the checks above
        return Err(StemSeparatorError.invalid_response("API response failed validation", cause=exc))
    return Ok(result)


def parse_health_response(body: object) -> Result[HealthStatus]:
    """Keep the liveness payload verbatim; only `status` is required."""

    if not isinstance(body, dict) or not isinstance(body.get("status"), str):
        return Err(StemSeparatorError.invalid_response("Health response missing status"))
    try:
        return Ok(HealthStatus.model_validate(body))
    except ValidationError as exc:
        return Err(StemSeparatorError.invalid_response("Health response failed validation", cause=exc))

"""JSON export of a separation result.

Why JSON:
- Lets shell pipelines pick up job_id / output_files without re-running the
  (slow) separation.
"""

from __future__ import annotations

import json
from pathlib import Path

from stem_client.core.domain.models import SeparationResult


def export_result_json(*, result: SeparationResult, output_path: Path) -> Path:
    """Write `SeparationResult` as UTF-8 JSON with a stable layout."""

    output_path.parent.mkdir(parents=True, exist_ok=True)
    payload = result.model_dump(mode="json")
    output_path.write_text(
        json.dumps(payload, ensure_ascii=False, indent=2, sort_keys=True) + "\n",
        encoding="utf-8",
    )
    return output_path

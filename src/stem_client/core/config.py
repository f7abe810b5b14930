"""Client configuration.

Why here:
- Centralizes environment variables (pydantic-settings) so the library, the
  CLI and `doctor` read the same values.
- Raw values only: the client facade validates them and maps failures to
  INVALID_ARGUMENT.
"""

from __future__ import annotations

import os
import sys
from pathlib import Path
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from stem_client.core.domain.options import DEFAULT_BASE_URL, DEFAULT_TIMEOUT_MS

TransportMode = Literal["auto", "native", "legacy"]


def get_user_config_dir() -> Path:
    """Per-user configuration directory (cross-platform, no dependencies)."""

    if sys.platform.startswith("win"):
        base = Path(os.environ.get("APPDATA", str(Path.home())))
        return base / "stem-separator-client"
    if sys.platform == "darwin":
        return Path.home() / "Library" / "Application Support" / "stem-separator-client"

    xdg = os.environ.get("XDG_CONFIG_HOME")
    if xdg:
        return Path(xdg) / "stem-separator-client"
    return Path.home() / ".config" / "stem-separator-client"


def get_user_env_file() -> Path:
    return get_user_config_dir() / ".env"


def _parse_env_lines(text: str) -> dict[str, str]:
    data: dict[str, str] = {}
    for raw_line in text.splitlines():
        line = raw_line.strip()
        if not line or line.startswith("#"):
            continue
        if "=" not in line:
            continue
        key, value = line.split("=", 1)
        key = key.strip()
        value = value.strip().strip('"').strip("'")
        if key:
            data[key] = value
    return data


def write_user_env_vars(values: dict[str, str | None]) -> Path:
    """Write/update variables in the user's global .env.

    `None` leaves an existing value untouched; an empty string removes the key.
    """

    env_path = get_user_env_file()
    env_path.parent.mkdir(parents=True, exist_ok=True)

    existing: dict[str, str] = {}
    if env_path.exists():
        existing = _parse_env_lines(env_path.read_text(encoding="utf-8"))

    for key, value in values.items():
        if value is None:
            continue
        if value == "":
            existing.pop(key, None)
        else:
            existing[key] = value

    lines = ["# stem-separator-client user config (.env)"]
    for key in sorted(existing.keys()):
        lines.append(f"{key}={existing[key]}")
    env_path.write_text("\n".join(lines) + "\n", encoding="utf-8")
    return env_path


class ClientSettings(BaseSettings):
    """Environment-driven defaults for `StemSeparatorClient`.

    Explicit constructor arguments always win over these values.
    """

    model_config = SettingsConfigDict(
        env_prefix="STEMSEP_",
        extra="ignore",
        case_sensitive=False,
        # Project .env first (dev), then the user's global config.
        env_file=(".env", str(get_user_env_file())),
        env_file_encoding="utf-8",
    )

    base_url: str = Field(
        default=DEFAULT_BASE_URL,
        description="API base URL (public Railway deployment by default).",
    )
    api_key: str | None = Field(
        default=None,
        description="Optional API key sent as `Authorization: Bearer`.",
    )
    timeout_ms: int = Field(
        default=DEFAULT_TIMEOUT_MS,
        description="Timeout for separate/download requests (milliseconds).",
    )
    transport: TransportMode = Field(
        default="auto",
        description="HTTP transport: auto-detect, native asyncio or legacy threaded.",
    )
    user_agent: str = Field(
        default="stem-separator-client/0.1",
        min_length=1,
        description="User-Agent header.",
    )
    log_level: str = Field(
        default="WARNING",
        description="CLI log level (DEBUG, INFO, WARNING, ERROR).",
    )

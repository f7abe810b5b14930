"""Doctor command for environment diagnostics."""

from __future__ import annotations

import asyncio
import sys

import typer
from rich.console import Console
from rich.table import Table

from stem_client.adapters.transports import detect_capabilities
from stem_client.core.config import ClientSettings, get_user_env_file, write_user_env_vars
from stem_client.core.domain.errors import StemSeparatorError
from stem_client.core.domain.options import DEFAULT_BASE_URL, DEFAULT_TIMEOUT_MS
from stem_client.core.services.separation_client import StemSeparatorClient

app = typer.Typer(no_args_is_help=True, help="Environment diagnostics and configuration checks.")

_console = Console()


async def _check_health(client: StemSeparatorClient) -> tuple[bool, str]:
    try:
        status = await client.check_health()
    except StemSeparatorError as exc:
        return False, f"{exc.kind.value}: {exc.message}"
    details = status.status
    if status.version:
        details += f" (v{status.version})"
    return True, details


@app.command()
def run() -> None:
    """Run baseline diagnostics and show recommended fixes."""

    try:
        settings = ClientSettings()
    except ValueError as exc:
        _console.print(f"[red]Invalid STEMSEP_* configuration:[/red] {exc}")
        raise typer.Exit(code=1) from exc

    table = Table(title="Stem Separator Doctor")
    table.add_column("Check", style="bright_green", no_wrap=True)
    table.add_column("Status", style="white")
    table.add_column("Details", style="dim")

    caps = detect_capabilities()
    python = ".".join(str(part) for part in sys.version_info[:3])
    table.add_row(
        "Python",
        "OK",
        f"{python} (asyncio.timeout {'available' if caps.native_timeout else 'missing'})",
    )

    try:
        client = StemSeparatorClient(settings=settings)
    except StemSeparatorError as exc:
        table.add_row("Config", "FAIL", exc.message)
        _console.print(table)
        raise typer.Exit(code=1) from exc

    table.add_row("Base URL", "OK", client.base_url)
    table.add_row("API key", "OK" if settings.api_key else "OPTIONAL", "set" if settings.api_key else "not set")
    table.add_row("Timeout", "OK", f"{client.timeout_ms} ms")
    table.add_row("Transport", "OK", client.transport_name)

    ok, details = asyncio.run(_check_health(client))
    table.add_row("Health", "OK" if ok else "FAIL", details)

    _console.print(table)
    _console.print(f"[dim]User config: {get_user_env_file()}[/dim]")
    if not ok:
        raise typer.Exit(code=1)


@app.command()
def configure(
    clear_api_key: bool = typer.Option(False, "--clear-api-key", help="Remove a previously saved API key."),
) -> None:
    """Interactive setup (stores config in the user config .env)."""

    base_url = typer.prompt("API base URL", default=DEFAULT_BASE_URL, show_default=True).strip()
    timeout = typer.prompt("Timeout (ms)", default=DEFAULT_TIMEOUT_MS, type=int, show_default=True)
    api_key: str | None = ""
    if not clear_api_key:
        entered = typer.prompt("API key (empty keeps current)", default="", hide_input=True, show_default=False)
        api_key = entered.strip() or None

    if not base_url:
        raise typer.BadParameter("base URL is required")
    if timeout < 1:
        raise typer.BadParameter("timeout must be a positive number")

    env_path = write_user_env_vars(
        {
            "STEMSEP_BASE_URL": base_url.rstrip("/"),
            "STEMSEP_TIMEOUT_MS": str(timeout),
            "STEMSEP_API_KEY": api_key,
        }
    )
    _console.print(f"[green]Saved config to:[/green] {env_path}")

"""`stem-separator` command line interface."""

from __future__ import annotations

import asyncio
from dataclasses import dataclass
from pathlib import Path
from typing import Awaitable, Optional, TypeVar

import typer
from rich.console import Console

from stem_client.adapters.json_exporter import export_result_json
from stem_client.cli import doctor
from stem_client.cli.ui_components import (
    build_error_panel,
    build_health_table,
    build_result_table,
    print_banner,
)
from stem_client.core.config import ClientSettings
from stem_client.core.domain.errors import StemSeparatorError
from stem_client.core.domain.models import SeparationOptions, SeparationResult
from stem_client.core.domain.options import OutputFormat, StemCount
from stem_client.core.logging_config import configure_logging
from stem_client.core.services.separation_client import StemSeparatorClient

T = TypeVar("T")

app = typer.Typer(no_args_is_help=True, help="Split songs into stems with the Stem-Separator API.")
app.add_typer(doctor.app, name="doctor")

_console = Console()
_err_console = Console(stderr=True)


@dataclass
class CliState:
    base_url: str | None = None
    api_key: str | None = None
    timeout_ms: int | None = None


def _fail(error: StemSeparatorError) -> typer.Exit:
    _err_console.print(build_error_panel(error))
    return typer.Exit(code=1)


def _client(ctx: typer.Context) -> StemSeparatorClient:
    state: CliState = ctx.obj or CliState()
    try:
        return StemSeparatorClient(
            base_url=state.base_url,
            api_key=state.api_key,
            timeout_ms=state.timeout_ms,
        )
    except StemSeparatorError as exc:
        raise _fail(exc) from exc


def _run(awaitable: Awaitable[T]) -> T:
    try:
        return asyncio.run(awaitable)
    except StemSeparatorError as exc:
        raise _fail(exc) from exc


@app.callback()
def main(
    ctx: typer.Context,
    base_url: Optional[str] = typer.Option(None, "--base-url", help="API base URL (overrides STEMSEP_BASE_URL)."),
    api_key: Optional[str] = typer.Option(None, "--api-key", help="Bearer API key (overrides STEMSEP_API_KEY)."),
    timeout_ms: Optional[int] = typer.Option(None, "--timeout-ms", help="Request timeout in milliseconds."),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Debug logging."),
) -> None:
    level = "DEBUG"
    if not verbose:
        try:
            level = ClientSettings().log_level
        except ValueError:
            level = "WARNING"
    configure_logging(level)
    ctx.obj = CliState(base_url=base_url, api_key=api_key, timeout_ms=timeout_ms)


async def _separate_flow(
    client: StemSeparatorClient,
    file: str,
    options: SeparationOptions,
    download_dir: Path | None,
) -> tuple[SeparationResult, list[Path]]:
    result = await client.separate(file, options)
    saved: list[Path] = []
    if download_dir is not None:
        for name in result.output_files:
            saved.append(await client.save_stem(result.job_id, name, download_dir))
    return result, saved


@app.command()
def separate(
    ctx: typer.Context,
    file: str = typer.Argument(..., help="Audio file to upload."),
    stems: StemCount = typer.Option(StemCount.TWO, "--stems", "-s", help="Number of stems."),
    output_format: OutputFormat = typer.Option(OutputFormat.WAV, "--format", "-f", help="Output format."),
    bitrate: Optional[str] = typer.Option(None, "--bitrate", "-b", help="Output bitrate, e.g. 320k."),
    filename: Optional[str] = typer.Option(None, "--filename", help="Filename sent in the upload form."),
    json_out: Optional[Path] = typer.Option(None, "--json-out", help="Write the result as JSON."),
    download_dir: Optional[Path] = typer.Option(None, "--download-dir", "-d", help="Download every stem here."),
    quiet: bool = typer.Option(False, "--quiet", "-q", help="No banner."),
) -> None:
    """Separate FILE into stems."""

    if not quiet:
        print_banner(_console)

    client = _client(ctx)
    options = SeparationOptions(filename=filename, stems=stems, bitrate=bitrate, format=output_format)
    result, saved = _run(_separate_flow(client, file, options, download_dir))

    try:
        urls = {name: client.get_stem_download_url(result.job_id, name) for name in result.output_files}
    except StemSeparatorError as exc:
        raise _fail(exc) from exc
    _console.print(build_result_table(result, urls))
    if result.message:
        _console.print(f"[dim]{result.message}[/dim]")

    for path in saved:
        _console.print(f"[green]Saved[/green] {path}")
    if json_out is not None:
        export_result_json(result=result, output_path=json_out)
        _console.print(f"[green]JSON written to[/green] {json_out}")


@app.command()
def url(
    ctx: typer.Context,
    job_id: str = typer.Argument(..., help="job_id returned by `separate`."),
    filename: str = typer.Argument(..., help="One of the job's output files."),
) -> None:
    """Print the download URL of one stem."""

    client = _client(ctx)
    try:
        typer.echo(client.get_stem_download_url(job_id, filename))
    except StemSeparatorError as exc:
        raise _fail(exc) from exc


@app.command()
def download(
    ctx: typer.Context,
    job_id: str = typer.Argument(..., help="job_id returned by `separate`."),
    filename: str = typer.Argument(..., help="One of the job's output files."),
    dest: Path = typer.Option(Path("."), "--dest", help="Target directory."),
) -> None:
    """Download one stem of a finished job."""

    client = _client(ctx)
    path = _run(client.save_stem(job_id, filename, dest))
    _console.print(f"[green]Saved[/green] {path}")


@app.command()
def health(ctx: typer.Context) -> None:
    """Check that the API is reachable."""

    client = _client(ctx)
    status = _run(client.check_health())
    _console.print(build_health_table(status))


def run() -> None:
    app()

"""Rich components for the CLI.

Why separate:
- Keeps command functions free of presentation details.
- Tables/panels are reused by `separate`, `health` and `doctor`.
"""

from __future__ import annotations

from rich.align import Align
from rich.console import Console
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from stem_client.core.domain.errors import StemSeparatorError
from stem_client.core.domain.models import HealthStatus, SeparationResult


def print_banner(console: Console) -> None:
    title = Text("Stem Separator", style="bold cyan")
    subtitle = Text("Vocals • Drums • Bass • Piano • Other", style="dim")
    body = Align.center(Text.assemble(title, "\n", subtitle), vertical="middle")
    console.print(Panel(body, border_style="cyan", padding=(1, 4)))


def build_result_table(result: SeparationResult, urls: dict[str, str] | None = None) -> Table:
    """Output files of a separation job (with download URLs when known)."""

    table = Table(title=f"Job {result.job_id} ({result.stems.value}, {result.processing_time:.1f}s)")
    table.add_column("#", style="dim", no_wrap=True)
    table.add_column("Stem", style="cyan")
    table.add_column("Download URL", style="magenta")
    for index, name in enumerate(result.output_files, start=1):
        table.add_row(str(index), name, (urls or {}).get(name, ""))
    return table


def build_health_table(health: HealthStatus) -> Table:
    table = Table(title="API Health")
    table.add_column("Field", style="bright_green", no_wrap=True)
    table.add_column("Value", style="white")
    for key, value in health.model_dump(exclude_none=True).items():
        table.add_row(key, str(value))
    return table


def build_error_panel(error: StemSeparatorError) -> Panel:
    body = Text(error.message)
    if error.status is not None:
        body.append(f"\nHTTP status: {error.status}", style="dim")
    return Panel(body, title=Text(error.kind.value, style="bold red"), border_style="red")

"""Rich terminal reporter for dry runs and verbose summaries."""

from __future__ import annotations

from typing import Iterable

from rich.console import Console
from rich.table import Table

from rtrim.pipeline import RunResult


def _format_lines(line_numbers: Iterable[int]) -> str:
    return ", ".join(str(n) for n in line_numbers)


def render(result: RunResult, console: Console | None = None, *, show_summary: bool = True) -> None:
    """Print the flagged lines (and what happened to them) to stderr."""
    console = console or Console(stderr=True)

    if not result.flagged:
        console.print("[dim]No staged trailing whitespace.[/dim]")
        if show_summary:
            _print_summary(console, result)
        return

    title = "Trailing whitespace (dry run)" if result.dry_run else "Trailing whitespace removed"
    table = Table(title=title, title_style="bold", border_style="dim", min_width=60)
    table.add_column("File", style="magenta")
    table.add_column("Lines", style="green")
    if not result.dry_run:
        table.add_column("Trimmed", justify="right")

    for file_name in sorted(result.flagged):
        row = [file_name, _format_lines(result.flagged[file_name])]
        if not result.dry_run:
            row.append(str(result.trimmed.get(file_name, 0)))
        table.add_row(*row)

    console.print(table)

    for file_name in result.stale_files:
        console.print(
            f"[yellow]⚠[/yellow]  {file_name} changed after it was staged; "
            "some flagged lines were not found"
        )

    if show_summary:
        _print_summary(console, result)


def _print_summary(console: Console, result: RunResult) -> None:
    console.print(f"[dim]Files flagged:[/dim]  {len(result.flagged)}")
    console.print(f"[dim]Lines flagged:[/dim]  {result.total_flagged}")
    if not result.dry_run:
        console.print(f"[dim]Lines trimmed:[/dim]  {result.total_trimmed}")
        console.print(f"[dim]Re-staged:[/dim]      {len(result.restaged)}")
    console.print(f"[dim]Duration:[/dim]       {result.duration_ms:.0f}ms")

import asyncio
from pathlib import Path
from uuid import UUID

import typer
from rich.console import Console
from rich.table import Table

from cigate.cli.formatters.report_formatter import format_report
from cigate.cli.theme import theme
from cigate.infrastructure.persistence.report_store import ReportStore

console = Console()


def show_history(
    report_dir: Path = typer.Option(Path(".cigate"), "--report-dir", help="Report directory"),
    limit: int = typer.Option(20, "--limit", "-n", help="Show at most N most recent runs"),
) -> None:
    """List previous runs saved with --report-dir."""
    asyncio.run(_show_history(report_dir, limit))


def show_run(
    run_id: str = typer.Argument(..., help="Run ID (hex) as shown by 'cigate history'"),
    report_dir: Path = typer.Option(Path(".cigate"), "--report-dir", help="Report directory"),
) -> None:
    """Show the full report of a previous run."""
    asyncio.run(_show_run(run_id, report_dir))


async def _show_history(report_dir: Path, limit: int) -> None:
    store = ReportStore(report_dir)
    entries = await store.read_history()

    if not entries:
        console.print(f"[{theme.DIM}]No runs found[/]")
        return

    table = Table(title="Runs")
    table.add_column("Run ID", style=theme.INFO)
    table.add_column("Started")
    table.add_column("Status")
    table.add_column("Checks")

    for entry in entries[-limit:]:
        status_style = theme.SUCCESS if entry["status"] == "success" else theme.ERROR
        checks = ", ".join(f"{name}={code}" for name, code in entry["checks"].items())
        table.add_row(
            entry["run_id"],
            entry["started_at"],
            f"[{status_style}]{entry['status'].upper()}[/]",
            checks,
        )

    console.print(table)


async def _show_run(run_id: str, report_dir: Path) -> None:
    try:
        UUID(run_id)
    except ValueError:
        console.print(f"[{theme.ERROR}]Invalid run ID: {run_id}[/]")
        raise typer.Exit(1) from None

    report = await ReportStore(report_dir).load(run_id)
    if report is None:
        console.print(f"[{theme.ERROR}]Run not found: {run_id}[/]")
        raise typer.Exit(1)

    format_report(console, report)

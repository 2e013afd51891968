from pathlib import Path

import typer
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from cigate.cli.theme import theme
from cigate.domain.errors import ConfigError
from cigate.infrastructure.config.config_loader import load_config

console = Console()


def list_checks(
    config_path: Path | None = typer.Option(None, "--config", "-c", help="Config file (JSON)"),
) -> None:
    """List configured toolchain steps and checks, in run order."""
    try:
        config = load_config(config_path)
    except ConfigError as e:
        console.print(f"[{theme.ERROR_BOLD}]Error:[/] {escape(str(e))}")
        raise typer.Exit(2) from None

    if config.toolchain:
        steps = Table(title="Toolchain")
        steps.add_column("#", style=theme.DIM, justify="right")
        steps.add_column("Step", style=theme.INFO)
        steps.add_column("Command", style=theme.COMMAND)
        for i, step in enumerate(config.toolchain, 1):
            steps.add_row(str(i), step.name, escape(step.display_command))
        console.print(steps)

    table = Table(title="Checks")
    table.add_column("#", style=theme.DIM, justify="right")
    table.add_column("Check", style=theme.INFO)
    table.add_column("Kind")
    table.add_column("Command", style=theme.COMMAND)
    table.add_column("Directory", style=theme.DIM)

    for i, check in enumerate(config.checks, 1):
        table.add_row(
            str(i),
            check.name,
            check.kind.value,
            escape(check.display_command),
            check.cwd or str(config.workdir),
        )

    console.print(table)

from collections.abc import Callable

from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table

from cigate.cli.theme import theme
from cigate.domain.entities.check_result import CheckResult
from cigate.domain.entities.run_report import RunReport
from cigate.domain.errors import ToolchainError
from cigate.domain.value_objects.check_types import CheckOutcome, CheckSpec

OUTCOME_LABELS: dict[CheckOutcome, str] = {
    CheckOutcome.PASSED: "PASS",
    CheckOutcome.FAILED: "FAIL",
    CheckOutcome.LAUNCH_FAILED: "NOT RUN",
    CheckOutcome.TIMED_OUT: "TIMEOUT",
}

OUTCOME_STYLES: dict[CheckOutcome, str] = {
    CheckOutcome.PASSED: theme.OUTCOME_PASSED,
    CheckOutcome.FAILED: theme.OUTCOME_FAILED,
    CheckOutcome.LAUNCH_FAILED: theme.OUTCOME_LAUNCH_FAILED,
    CheckOutcome.TIMED_OUT: theme.OUTCOME_TIMED_OUT,
}

# Lines of captured output shown per failed check
OUTPUT_PREVIEW_LINES = 40


def format_check_start(console: Console, check: CheckSpec) -> None:
    console.print(
        f"[{theme.INFO}]▶ {check.name}[/] [{theme.COMMAND}]{escape(check.display_command)}[/]"
    )


def format_check_result(console: Console, result: CheckResult) -> None:
    style = OUTCOME_STYLES[result.outcome]
    label = OUTCOME_LABELS[result.outcome]
    console.print(
        f"  [{style}]{label}[/] {result.name} "
        f"[{theme.DIM}](exit {result.exit_code}, {result.duration_ms}ms)[/]"
    )


def create_progress_callbacks(
    console: Console,
) -> tuple[Callable[[CheckSpec], None], Callable[[CheckResult], None]]:
    """Factory for the (on_check_start, on_check_complete) pair used by run."""

    def on_start(check: CheckSpec) -> None:
        format_check_start(console, check)

    def on_complete(result: CheckResult) -> None:
        format_check_result(console, result)

    return on_start, on_complete


def format_report(console: Console, report: RunReport, show_output: bool = True) -> None:
    table = Table(title="Check Results", show_lines=True)
    table.add_column("Check", style=theme.INFO)
    table.add_column("Status")
    table.add_column("Exit code", justify="right")
    table.add_column("Duration", justify="right")

    for result in report.results:
        style = OUTCOME_STYLES[result.outcome]
        table.add_row(
            result.name,
            f"[{style}]{OUTCOME_LABELS[result.outcome]}[/]",
            str(result.exit_code),
            f"{result.duration_ms}ms",
        )

    console.print(table)

    if show_output:
        for result in report.failed_results:
            format_failure_details(console, result)

    total = len(report.results)
    if report.passed:
        console.print(f"\n[{theme.SUCCESS_BOLD}]✅ All {total} checks passed[/]")
    else:
        console.print(
            f"\n[{theme.ERROR_BOLD}]❌ {report.failed_count}/{total} checks failed:[/] "
            + ", ".join(r.name for r in report.failed_results)
        )


def format_failure_details(console: Console, result: CheckResult) -> None:
    body_parts = [f"[{theme.COMMAND}]$ {escape(result.spec.display_command)}[/]"]
    if result.error:
        body_parts.append(f"[{theme.WARNING}]{escape(result.error)}[/]")

    output = result.output
    if output:
        lines = output.splitlines()
        if len(lines) > OUTPUT_PREVIEW_LINES:
            skipped = len(lines) - OUTPUT_PREVIEW_LINES
            lines = [f"... ({skipped} earlier lines omitted)", *lines[-OUTPUT_PREVIEW_LINES:]]
        body_parts.append(escape("\n".join(lines)))

    console.print(
        Panel(
            "\n".join(body_parts),
            title=f"{result.name} (exit {result.exit_code})",
            border_style=theme.BORDER_ERROR,
        )
    )


def format_fatal_error(console: Console, error: Exception) -> None:
    console.print(f"\n[{theme.ERROR_BOLD}]Error:[/] {escape(str(error))}")

    if isinstance(error, ToolchainError) and error.output:
        tail = error.output.splitlines()[-OUTPUT_PREVIEW_LINES:]
        console.print(
            Panel(
                escape("\n".join(tail)),
                title=f"toolchain: {error.step_name}",
                border_style=theme.BORDER_WARNING,
            )
        )
    console.print(f"[{theme.DIM}]No checks were reported; this is not a check failure.[/]")

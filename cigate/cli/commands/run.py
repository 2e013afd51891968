import asyncio
from pathlib import Path

import typer
from loguru import logger
from rich.console import Console

from cigate.application.dto.pipeline_config import PipelineConfig
from cigate.application.use_cases.run_pipeline import RunPipeline
from cigate.cli.formatters.report_formatter import (
    create_progress_callbacks,
    format_fatal_error,
    format_report,
)
from cigate.domain.entities.run_report import RunReport
from cigate.domain.errors import CigateError
from cigate.domain.value_objects.check_types import CheckSpec
from cigate.infrastructure.checks.command_check_runner import CommandCheckRunner
from cigate.infrastructure.config.config_loader import load_config
from cigate.infrastructure.persistence.report_store import ReportStore
from cigate.infrastructure.toolchain.command_toolchain_provisioner import (
    CommandToolchainProvisioner,
)

# Exit code for runs aborted before a report exists. Non-zero like a check
# failure, but distinguishable from it.
FATAL_EXIT_CODE = 2

console = Console()


def run_checks(
    checks: list[str] | None = typer.Argument(
        None, help="Checks to run (default: all configured)"
    ),
    config_path: Path | None = typer.Option(None, "--config", "-c", help="Config file (JSON)"),
    path: Path | None = typer.Option(None, "--path", "-p", help="Source tree to check"),
    skip_toolchain: bool = typer.Option(
        False, "--skip-toolchain", help="Assume the toolchain is already provisioned"
    ),
    parallel: bool = typer.Option(False, "--parallel", help="Run checks concurrently"),
    capture: bool = typer.Option(
        True, "--capture/--no-capture", help="Capture check output for the report"
    ),
    timeout: int | None = typer.Option(None, "--timeout", "-t", help="Per-check timeout (s)"),
    report_dir: Path | None = typer.Option(None, "--report-dir", help="Save reports here"),
) -> None:
    """Provision the toolchain and run every check, even after failures."""
    try:
        config = load_config(config_path)
        config = _apply_overrides(
            config,
            path=path,
            skip_toolchain=skip_toolchain,
            parallel=parallel,
            capture=capture,
            timeout=timeout,
            report_dir=report_dir,
        )
        selected = config.select_checks(checks) if checks else None
    except (CigateError, ValueError) as e:
        format_fatal_error(console, e)
        raise typer.Exit(FATAL_EXIT_CODE) from None

    try:
        report = asyncio.run(_run(config, selected))
    except CigateError as e:
        logger.error("Run aborted: {}", e)
        format_fatal_error(console, e)
        raise typer.Exit(FATAL_EXIT_CODE) from None

    format_report(console, report, show_output=config.capture_output)
    raise typer.Exit(report.exit_code)


def _apply_overrides(
    config: PipelineConfig,
    *,
    path: Path | None,
    skip_toolchain: bool,
    parallel: bool,
    capture: bool,
    timeout: int | None,
    report_dir: Path | None,
) -> PipelineConfig:
    """Layer CLI options over file values; flags only ever switch a default on."""
    updates: dict[str, object] = {}
    if path is not None:
        if not path.is_dir():
            raise ValueError(f"Source tree does not exist: {path}")
        updates["workdir"] = path.resolve()
    if skip_toolchain:
        updates["skip_toolchain"] = True
    if parallel:
        updates["parallel"] = True
    if not capture:
        updates["capture_output"] = False
    if timeout is not None:
        if timeout <= 0:
            raise ValueError("--timeout must be positive")
        updates["timeout_s"] = timeout
    if report_dir is not None:
        updates["report_dir"] = report_dir
    return config.model_copy(update=updates) if updates else config


async def _run(config: PipelineConfig, checks: list[CheckSpec] | None) -> RunReport:
    check_runner = CommandCheckRunner(
        capture_output=config.capture_output,
        output_tail_lines=config.output_tail_lines,
        default_timeout_s=config.timeout_s,
    )
    report_store = ReportStore(config.report_dir) if config.report_dir else None
    pipeline = RunPipeline(
        check_runner=check_runner,
        toolchain=CommandToolchainProvisioner(),
        report_store=report_store,
    )

    on_start, on_complete = create_progress_callbacks(console)
    return await pipeline.execute(
        config,
        checks=checks,
        on_check_start=on_start,
        on_check_complete=on_complete,
    )

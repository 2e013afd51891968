import sys
from pathlib import Path

import typer
from loguru import logger

from cigate.cli.commands import history, list_checks, run

DEFAULT_LOG_FILE = Path(".cigate") / "cigate.log"


def setup_logging(verbose: bool = False, log_file: Path | None = None) -> Path:
    """Configure loguru logging.

    Everything goes to the log file at DEBUG, including each line a check
    prints. With ``verbose`` the same stream is mirrored to stderr.
    """
    logger.remove()

    file_path = log_file or DEFAULT_LOG_FILE
    logger.add(
        file_path,
        format="{time:YYYY-MM-DD HH:mm:ss.SSS} | {level: <8} | {name}:{function}:{line} - {message}",
        level="DEBUG",
        rotation="10 MB",
        encoding="utf-8",
    )

    if verbose:
        logger.add(
            sys.stderr,
            format="{time:HH:mm:ss} | {level: <8} | {message}",
            level="DEBUG",
        )

    return file_path


app = typer.Typer(
    name="cigate",
    help="cigate - run independent CI checks and fail if any of them fails",
    no_args_is_help=True,
)

# Register commands
app.command(name="run")(run.run_checks)
app.command(name="list")(list_checks.list_checks)
app.command(name="history")(history.show_history)
app.command(name="show")(history.show_run)


@app.callback()
def main(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Verbose output", is_eager=True),
    log_file: Path | None = typer.Option(None, "--log-file", help="Log file path"),
) -> None:
    """cigate - run independent CI checks and fail if any of them fails."""
    setup_logging(verbose=verbose, log_file=log_file)


if __name__ == "__main__":
    app()

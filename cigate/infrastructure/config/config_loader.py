"""Pipeline configuration loading.

Configuration lives in a JSON file (``cigate.json`` by default). A missing
default file means the built-in rustfmt + clippy pipeline is used.
"""

from pathlib import Path

from loguru import logger
from pydantic import ValidationError

from cigate.application.dto.pipeline_config import PipelineConfig
from cigate.domain.errors import ConfigError

DEFAULT_CONFIG_NAME = "cigate.json"


def load_config(path: Path | None = None, search_dir: Path | None = None) -> PipelineConfig:
    """Load pipeline configuration.

    Args:
        path: Explicit config file. Must exist if given.
        search_dir: Directory searched for ``cigate.json`` when no path is
            given (default: current directory).

    Returns:
        The validated configuration. Relative ``workdir`` and ``report_dir``
        are resolved against the directory holding the config file.

    Raises:
        ConfigError: If the file is missing (explicit path only), is not
            valid JSON, or fails validation.
    """
    if path is None:
        candidate = (search_dir or Path.cwd()) / DEFAULT_CONFIG_NAME
        if not candidate.exists():
            logger.debug("No {} found, using built-in defaults", DEFAULT_CONFIG_NAME)
            return PipelineConfig()
        path = candidate
    elif not path.exists():
        raise ConfigError(f"Config file not found: {path}")

    try:
        config = PipelineConfig.model_validate_json(path.read_text(encoding="utf-8"))
    except ValidationError as e:
        raise ConfigError(f"Invalid config {path}:\n{_format_errors(e)}") from e

    base = path.resolve().parent
    updates: dict[str, Path] = {}
    if not config.workdir.is_absolute():
        updates["workdir"] = base / config.workdir
    if config.report_dir is not None and not config.report_dir.is_absolute():
        updates["report_dir"] = base / config.report_dir

    logger.debug("Loaded config from {}", path)
    return config.model_copy(update=updates) if updates else config


def _format_errors(e: ValidationError) -> str:
    lines = []
    for error in e.errors():
        loc = ".".join(str(part) for part in error.get("loc", ()))
        msg = error.get("msg", str(error))
        # Clean up Pydantic message format
        if msg.startswith("Value error, "):
            msg = msg[13:]
        lines.append(f"  {loc}: {msg}" if loc else f"  {msg}")
    return "\n".join(lines)

import json
from pathlib import Path

import pytest

from cigate.application.dto.pipeline_config import default_checks
from cigate.domain.errors import ConfigError
from cigate.infrastructure.config.config_loader import DEFAULT_CONFIG_NAME, load_config


def write_config(path: Path, data: dict) -> Path:
    path.write_text(json.dumps(data), encoding="utf-8")
    return path


class TestLoadConfig:
    def test_missing_default_file_uses_builtin_pipeline(self, tmp_path: Path) -> None:
        config = load_config(search_dir=tmp_path)

        assert config.checks == default_checks()

    def test_finds_default_file(self, tmp_path: Path) -> None:
        write_config(
            tmp_path / DEFAULT_CONFIG_NAME,
            {"checks": [{"name": "lint", "command": "ruff", "args": ["check"]}]},
        )

        config = load_config(search_dir=tmp_path)

        assert [c.name for c in config.checks] == ["lint"]

    def test_explicit_missing_file_is_error(self, tmp_path: Path) -> None:
        with pytest.raises(ConfigError, match="not found"):
            load_config(tmp_path / "nope.json")

    def test_invalid_json_is_error(self, tmp_path: Path) -> None:
        path = tmp_path / "bad.json"
        path.write_text("{not json", encoding="utf-8")

        with pytest.raises(ConfigError, match="Invalid config"):
            load_config(path)

    def test_validation_error_names_field(self, tmp_path: Path) -> None:
        path = write_config(tmp_path / "bad.json", {"checks": [{"name": "lint"}]})

        with pytest.raises(ConfigError, match="checks.0.command"):
            load_config(path)

    def test_relative_paths_resolve_against_config_dir(self, tmp_path: Path) -> None:
        path = write_config(
            tmp_path / "cigate.json",
            {"workdir": "ruma", "report_dir": ".cigate"},
        )

        config = load_config(path)

        assert config.workdir == tmp_path.resolve() / "ruma"
        assert config.report_dir == tmp_path.resolve() / ".cigate"

    def test_absolute_workdir_kept(self, tmp_path: Path) -> None:
        path = write_config(tmp_path / "cigate.json", {"workdir": "/srv/src"})

        config = load_config(path)

        assert config.workdir == Path("/srv/src")

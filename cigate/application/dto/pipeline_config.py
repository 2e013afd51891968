from pathlib import Path

from pydantic import BaseModel, Field, field_validator

from cigate.domain.value_objects.check_types import CheckKind, CheckSpec
from cigate.domain.value_objects.toolchain_types import ToolchainStep


def default_toolchain() -> list[ToolchainStep]:
    """Nightly Rust with only the components the checks need."""
    return [
        ToolchainStep(
            name="install-nightly",
            command="rustup",
            args=(
                "toolchain",
                "install",
                "nightly",
                "--profile",
                "minimal",
                "-c",
                "rustfmt,clippy",
            ),
        ),
        ToolchainStep(
            name="select-nightly",
            command="rustup",
            args=("default", "nightly"),
        ),
    ]


def default_checks() -> list[CheckSpec]:
    """Format check and lint check, both treating warnings as failures."""
    return [
        CheckSpec(
            name="fmt",
            kind=CheckKind.FORMAT,
            command="cargo",
            args=("fmt", "--all", "--", "--check"),
        ),
        CheckSpec(
            name="clippy",
            kind=CheckKind.LINT,
            command="cargo",
            args=(
                "clippy",
                "--all",
                "--all-targets",
                "--all-features",
                "--quiet",
                "--",
                "-D",
                "warnings",
            ),
        ),
    ]


class PipelineConfig(BaseModel):
    """Everything a run needs: where, what to provision, what to check."""

    workdir: Path = Field(default=Path("."), description="Source tree the checks run in")
    toolchain: list[ToolchainStep] = Field(default_factory=default_toolchain)
    checks: list[CheckSpec] = Field(default_factory=default_checks, min_length=1)

    # Execution options
    skip_toolchain: bool = False
    parallel: bool = False
    capture_output: bool = True
    output_tail_lines: int = Field(default=2000, gt=0)
    timeout_s: int | None = Field(default=None, gt=0)

    # Persistence
    report_dir: Path | None = None

    @field_validator("checks")
    @classmethod
    def validate_unique_names(cls, v: list[CheckSpec]) -> list[CheckSpec]:
        names = [c.name for c in v]
        duplicates = sorted({n for n in names if names.count(n) > 1})
        if duplicates:
            raise ValueError(f"Duplicate check names: {', '.join(duplicates)}")
        return v

    def select_checks(self, names: list[str]) -> list[CheckSpec]:
        """Return the named checks in configured order.

        Raises:
            ValueError: If a name does not match any configured check.
        """
        known = {c.name for c in self.checks}
        unknown = sorted(set(names) - known)
        if unknown:
            raise ValueError(
                f"Unknown check(s): {', '.join(unknown)}. "
                f"Available: {', '.join(c.name for c in self.checks)}"
            )
        return [c for c in self.checks if c.name in names]

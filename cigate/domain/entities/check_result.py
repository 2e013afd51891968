from datetime import datetime

from pydantic import BaseModel

from cigate.domain.value_objects.check_types import CheckOutcome, CheckSpec


class CheckResult(BaseModel, frozen=True):
    """Outcome of running one CheckSpec. Created once, right after it terminates."""

    spec: CheckSpec
    exit_code: int
    outcome: CheckOutcome
    stdout: str | None = None
    stderr: str | None = None
    error: str | None = None
    duration_ms: int = 0
    started_at: datetime | None = None

    @property
    def name(self) -> str:
        return self.spec.name

    @property
    def passed(self) -> bool:
        return self.exit_code == 0

    @property
    def output(self) -> str:
        """Captured stdout and stderr joined, empty when capture was off."""
        parts = [p for p in (self.stdout, self.stderr) if p]
        return "\n".join(parts).strip()

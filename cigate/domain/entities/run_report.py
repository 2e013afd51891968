from collections.abc import Sequence
from datetime import UTC, datetime
from uuid import UUID, uuid4

from pydantic import BaseModel, Field, computed_field

from cigate.domain.entities.check_result import CheckResult
from cigate.domain.services.aggregation import aggregate_status
from cigate.domain.value_objects.run_status import RunStatus


class RunReport(BaseModel, frozen=True):
    """All CheckResults of one invocation, in execution order.

    The aggregate status is derived from the results and cannot be set
    independently of them.
    """

    results: tuple[CheckResult, ...]
    run_id: UUID = Field(default_factory=uuid4)
    started_at: datetime = Field(default_factory=lambda: datetime.now(UTC))
    duration_ms: int = 0

    @computed_field  # type: ignore[prop-decorator]
    @property
    def status(self) -> RunStatus:
        return aggregate_status(r.exit_code for r in self.results)

    @classmethod
    def from_results(
        cls,
        results: Sequence[CheckResult],
        started_at: datetime | None = None,
        duration_ms: int = 0,
    ) -> "RunReport":
        return cls(
            results=tuple(results),
            started_at=started_at or datetime.now(UTC),
            duration_ms=duration_ms,
        )

    @property
    def passed(self) -> bool:
        return self.status == RunStatus.SUCCESS

    @property
    def exit_code(self) -> int:
        return self.status.exit_code

    @property
    def failed_results(self) -> tuple[CheckResult, ...]:
        return tuple(r for r in self.results if not r.passed)

    @property
    def passed_count(self) -> int:
        return sum(1 for r in self.results if r.passed)

    @property
    def failed_count(self) -> int:
        return len(self.results) - self.passed_count

import asyncio
from collections.abc import Callable
from datetime import UTC, datetime

import pytest

from cigate.domain.entities.check_result import CheckResult
from cigate.domain.errors import OrchestratorFault
from cigate.domain.ports.check_runner_port import CheckRunnerPort
from cigate.domain.value_objects.check_types import (
    LAUNCH_FAILURE_EXIT_CODE,
    CheckOutcome,
    CheckSpec,
)


def make_spec(name: str, command: str = "true", *args: str, **kwargs: object) -> CheckSpec:
    return CheckSpec(name=name, command=command, args=args, **kwargs)


def make_result(name: str, exit_code: int, outcome: CheckOutcome | None = None) -> CheckResult:
    if outcome is None:
        outcome = CheckOutcome.PASSED if exit_code == 0 else CheckOutcome.FAILED
    return CheckResult(
        spec=make_spec(name),
        exit_code=exit_code,
        outcome=outcome,
        stdout="",
        stderr="",
        started_at=datetime.now(UTC),
    )


class FakeCheckRunner(CheckRunnerPort):
    """Returns scripted exit codes by check name and records call order.

    ``delays`` lets parallel tests make early checks finish last. Checks named in
    ``faults`` raise OrchestratorFault as soon as they are started.
    """

    def __init__(
        self,
        exit_codes: dict[str, int],
        delays: dict[str, float] | None = None,
        missing: set[str] | None = None,
        faults: set[str] | None = None,
    ) -> None:
        self.exit_codes = exit_codes
        self.delays = delays or {}
        self.missing = missing or set()
        self.faults = faults or set()
        self.calls: list[str] = []
        self.finished: list[str] = []

    async def run_check(self, check: CheckSpec, cwd: str) -> CheckResult:
        self.calls.append(check.name)
        if check.name in self.faults:
            raise OrchestratorFault(check.name, "out of memory")
        await asyncio.sleep(self.delays.get(check.name, 0))
        self.finished.append(check.name)

        if check.name in self.missing:
            return CheckResult(
                spec=check,
                exit_code=LAUNCH_FAILURE_EXIT_CODE,
                outcome=CheckOutcome.LAUNCH_FAILED,
                error=f"Could not launch '{check.command}'",
            )

        code = self.exit_codes[check.name]
        return CheckResult(
            spec=check,
            exit_code=code,
            outcome=CheckOutcome.PASSED if code == 0 else CheckOutcome.FAILED,
            stdout=f"{check.name} output",
            stderr="",
        )


@pytest.fixture
def spec_factory() -> Callable[..., CheckSpec]:
    return make_spec


@pytest.fixture
def result_factory() -> Callable[..., CheckResult]:
    return make_result


@pytest.fixture
def fake_runner_factory() -> type[FakeCheckRunner]:
    return FakeCheckRunner

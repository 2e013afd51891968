import asyncio
import time
from collections.abc import Callable, Sequence
from datetime import UTC, datetime

from loguru import logger

from cigate.domain.entities.check_result import CheckResult
from cigate.domain.entities.run_report import RunReport
from cigate.domain.ports.check_runner_port import CheckRunnerPort
from cigate.domain.value_objects.check_types import CheckOutcome, CheckSpec

# Called right before a check is started
CheckStartCallback = Callable[[CheckSpec], None]

# Called once per check, right after its result exists
CheckCompleteCallback = Callable[[CheckResult], None]


class CheckOrchestrator:
    """Runs independent checks and reduces their exit codes to one verdict.

    A failing check never stops the checks after it: the report always holds
    one result per requested check, in the order the checks were given.
    """

    def __init__(
        self,
        check_runner: CheckRunnerPort,
        cwd: str,
        parallel: bool = False,
        on_check_start: CheckStartCallback | None = None,
        on_check_complete: CheckCompleteCallback | None = None,
    ) -> None:
        self.check_runner = check_runner
        self.cwd = cwd
        self.parallel = parallel
        self.on_check_start = on_check_start
        self.on_check_complete = on_check_complete

    async def run(self, checks: Sequence[CheckSpec]) -> RunReport:
        """Run every check and return the complete report.

        Raises:
            ValueError: If no checks were given.
            OrchestratorFault: If the environment cannot run checks at all.
                No report is produced in that case.
        """
        if not checks:
            raise ValueError("At least one check is required")

        started_at = datetime.now(UTC)
        start = time.monotonic()
        logger.info(
            "Running {} checks ({})",
            len(checks),
            "parallel" if self.parallel else "sequential",
        )

        if self.parallel:
            # Let every sibling finish before a fault propagates
            outcomes = await asyncio.gather(
                *(self._run_one(c) for c in checks), return_exceptions=True
            )
            for outcome in outcomes:
                if isinstance(outcome, BaseException):
                    raise outcome
            results = list(outcomes)
        else:
            results = []
            for check in checks:
                results.append(await self._run_one(check))

        report = RunReport.from_results(
            results,
            started_at=started_at,
            duration_ms=int((time.monotonic() - start) * 1000),
        )

        if report.passed:
            logger.info("All {} checks passed", len(results))
        else:
            logger.warning(
                "{} of {} checks failed: {}",
                report.failed_count,
                len(results),
                ", ".join(r.name for r in report.failed_results),
            )
        return report

    async def _run_one(self, check: CheckSpec) -> CheckResult:
        if self.on_check_start:
            self.on_check_start(check)
        logger.info("Check '{}' started: {}", check.name, check.display_command)

        result = await self.check_runner.run_check(check, self.cwd)
        self._log_result(result)

        if self.on_check_complete:
            self.on_check_complete(result)
        return result

    def _log_result(self, result: CheckResult) -> None:
        match result.outcome:
            case CheckOutcome.PASSED:
                logger.info("Check '{}' passed in {}ms", result.name, result.duration_ms)
            case CheckOutcome.LAUNCH_FAILED:
                logger.error(
                    "Check '{}' could not be launched (exit code {}): {}",
                    result.name,
                    result.exit_code,
                    result.error,
                )
            case CheckOutcome.TIMED_OUT:
                logger.warning(
                    "Check '{}' timed out (exit code {}): {}",
                    result.name,
                    result.exit_code,
                    result.error,
                )
            case _:
                logger.warning(
                    "Check '{}' exited with code {}",
                    result.name,
                    result.exit_code,
                )

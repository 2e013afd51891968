from abc import ABC, abstractmethod

from cigate.domain.entities.check_result import CheckResult
from cigate.domain.value_objects.check_types import CheckSpec


class CheckRunnerPort(ABC):
    """Port for running checks."""

    @abstractmethod
    async def run_check(
        self,
        check: CheckSpec,
        cwd: str,
    ) -> CheckResult:
        """Run a single check and return its result.

        Ordinary failures, launch failures and timeouts are all returned as
        results. Only an environment-level fault may raise
        (OrchestratorFault).
        """

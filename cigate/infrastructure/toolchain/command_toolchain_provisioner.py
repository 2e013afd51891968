import asyncio
from collections.abc import Sequence
from typing import Any

from loguru import logger
from tenacity import (
    AsyncRetrying,
    retry_if_exception,
    stop_after_attempt,
    wait_exponential,
)

from cigate.domain.errors import ToolchainError
from cigate.domain.ports.toolchain_port import ToolchainPort
from cigate.domain.value_objects.check_types import LAUNCH_FAILURE_EXIT_CODE
from cigate.domain.value_objects.toolchain_types import ToolchainStep


def _is_retryable_error(e: BaseException) -> bool:
    """Retry steps that ran and failed (network hiccups), not missing tools."""
    return isinstance(e, ToolchainError) and e.exit_code != LAUNCH_FAILURE_EXIT_CODE


def _log_retry(retry_state: Any) -> None:
    exc = retry_state.outcome.exception()
    logger.warning(f"[TOOLCHAIN] Retry {retry_state.attempt_number}: {str(exc)[:100]}")


class CommandToolchainProvisioner(ToolchainPort):
    """Provisions the toolchain by running each step as a subprocess."""

    def __init__(
        self,
        max_attempts: int = 3,
        wait_multiplier: float = 2.0,
        wait_max: float = 30.0,
    ) -> None:
        self.max_attempts = max_attempts
        self.wait_multiplier = wait_multiplier
        self.wait_max = wait_max

    async def provision(self, steps: Sequence[ToolchainStep], cwd: str) -> None:
        for step in steps:
            logger.info("Toolchain step '{}': {}", step.name, step.display_command)
            async for attempt in AsyncRetrying(
                retry=retry_if_exception(_is_retryable_error),
                stop=stop_after_attempt(self.max_attempts),
                wait=wait_exponential(multiplier=self.wait_multiplier, max=self.wait_max),
                before_sleep=_log_retry,
                reraise=True,
            ):
                with attempt:
                    await self._run_step(step, cwd)
        logger.info("Toolchain provisioned ({} steps)", len(steps))

    async def _run_step(self, step: ToolchainStep, cwd: str) -> None:
        try:
            proc = await asyncio.create_subprocess_exec(
                *step.argv,
                cwd=cwd,
                stdout=asyncio.subprocess.PIPE,
                stderr=asyncio.subprocess.STDOUT,
            )
        except OSError as e:
            logger.error("Toolchain step '{}' could not be launched: {}", step.name, e)
            raise ToolchainError(step.name, LAUNCH_FAILURE_EXIT_CODE, str(e)) from e

        stdout, _ = await proc.communicate()
        output = stdout.decode(errors="replace").strip()
        for line in output.splitlines():
            logger.debug("[{}] {}", step.name, line)

        if proc.returncode != 0:
            raise ToolchainError(step.name, proc.returncode or 1, output)

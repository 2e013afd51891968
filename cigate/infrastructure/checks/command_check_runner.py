import asyncio
import contextlib
import errno
import os
import signal
import time
from collections import deque
from datetime import UTC, datetime
from pathlib import Path

from loguru import logger

from cigate.domain.entities.check_result import CheckResult
from cigate.domain.errors import OrchestratorFault
from cigate.domain.ports.check_runner_port import CheckRunnerPort
from cigate.domain.value_objects.check_types import (
    LAUNCH_FAILURE_EXIT_CODE,
    TIMEOUT_EXIT_CODE,
    CheckOutcome,
    CheckSpec,
)

# Spawn errors that mean the host cannot start processes at all, as opposed
# to this particular check being unrunnable.
RESOURCE_EXHAUSTION_ERRNOS = frozenset({errno.ENOMEM, errno.EAGAIN, errno.EMFILE, errno.ENFILE})

DEFAULT_OUTPUT_TAIL_LINES = 2000


class CommandCheckRunner(CheckRunnerPort):
    """Runs a check as a subprocess (no shell) and records its exit code.

    When capture is on, stdout and stderr are drained line by line while the
    process runs and only the last ``output_tail_lines`` lines of each are
    kept, so a chatty tool can neither fill the pipe nor the heap.
    """

    def __init__(
        self,
        capture_output: bool = True,
        output_tail_lines: int = DEFAULT_OUTPUT_TAIL_LINES,
        default_timeout_s: int | None = None,
    ) -> None:
        self.capture_output = capture_output
        self.output_tail_lines = output_tail_lines
        self.default_timeout_s = default_timeout_s

    async def run_check(
        self,
        check: CheckSpec,
        cwd: str,
    ) -> CheckResult:
        started_at = datetime.now(UTC)
        start = time.monotonic()

        env = dict(os.environ)
        env.update(check.env)

        work_dir = Path(cwd) / check.cwd if check.cwd else Path(cwd)
        pipe = asyncio.subprocess.PIPE if self.capture_output else None

        try:
            proc = await asyncio.create_subprocess_exec(
                *check.argv,
                cwd=str(work_dir),
                env=env,
                stdout=pipe,
                stderr=pipe,
                start_new_session=True,  # own process group, so a timeout can kill children too
            )
        except MemoryError as e:
            raise OrchestratorFault(check.name, "out of memory while spawning") from e
        except OSError as e:
            if e.errno in RESOURCE_EXHAUSTION_ERRNOS:
                raise OrchestratorFault(check.name, os.strerror(e.errno)) from e
            return CheckResult(
                spec=check,
                exit_code=LAUNCH_FAILURE_EXIT_CODE,
                outcome=CheckOutcome.LAUNCH_FAILED,
                error=f"Could not launch '{check.command}' in {work_dir}: {e}",
                duration_ms=self._elapsed_ms(start),
                started_at=started_at,
            )

        stdout_tail: deque[str] = deque(maxlen=self.output_tail_lines)
        stderr_tail: deque[str] = deque(maxlen=self.output_tail_lines)
        pending = [proc.wait()]
        if proc.stdout is not None:
            pending.append(self._drain(proc.stdout, stdout_tail, check.name))
        if proc.stderr is not None:
            pending.append(self._drain(proc.stderr, stderr_tail, check.name))

        timeout_s = check.timeout_s or self.default_timeout_s
        try:
            await asyncio.wait_for(asyncio.gather(*pending), timeout=timeout_s)
        except TimeoutError:
            self._kill_group(proc)
            await proc.wait()
            return CheckResult(
                spec=check,
                exit_code=TIMEOUT_EXIT_CODE,
                outcome=CheckOutcome.TIMED_OUT,
                stdout=self._joined(stdout_tail),
                stderr=self._joined(stderr_tail),
                error=f"Timed out after {timeout_s}s",
                duration_ms=self._elapsed_ms(start),
                started_at=started_at,
            )
        except asyncio.CancelledError:
            # Never leave the tool (or its children) running behind us
            self._kill_group(proc)
            await proc.wait()
            logger.warning("Check '{}' cancelled, process group killed", check.name)
            raise

        exit_code = proc.returncode if proc.returncode is not None else 0
        return CheckResult(
            spec=check,
            exit_code=exit_code,
            outcome=CheckOutcome.PASSED if exit_code == 0 else CheckOutcome.FAILED,
            stdout=self._joined(stdout_tail),
            stderr=self._joined(stderr_tail),
            duration_ms=self._elapsed_ms(start),
            started_at=started_at,
        )

    async def _drain(
        self,
        stream: asyncio.StreamReader,
        sink: deque[str],
        check_name: str,
    ) -> None:
        while True:
            try:
                raw = await stream.readline()
            except ValueError:
                # Line longer than the reader limit; asyncio discards it.
                sink.append("[line truncated]")
                continue
            if not raw:
                return
            line = raw.decode(errors="replace").rstrip("\r\n")
            sink.append(line)
            logger.debug("[{}] {}", check_name, line)

    def _joined(self, tail: deque[str]) -> str | None:
        if not self.capture_output:
            return None
        return "\n".join(tail)

    @staticmethod
    def _kill_group(proc: asyncio.subprocess.Process) -> None:
        try:
            os.killpg(os.getpgid(proc.pid), signal.SIGKILL)
        except (ProcessLookupError, OSError):
            # Process already terminated
            with contextlib.suppress(ProcessLookupError):
                proc.kill()

    @staticmethod
    def _elapsed_ms(start: float) -> int:
        return int((time.monotonic() - start) * 1000)

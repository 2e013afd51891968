from enum import Enum

from pydantic import BaseModel, Field

# Reserved exit codes for checks that never produced one of their own.
# 127 mirrors the shell's "command not found", 124 mirrors timeout(1).
LAUNCH_FAILURE_EXIT_CODE = 127
TIMEOUT_EXIT_CODE = 124


class CheckKind(str, Enum):
    FORMAT = "format"
    LINT = "lint"
    CUSTOM = "custom"


class CheckOutcome(str, Enum):
    PASSED = "passed"
    FAILED = "failed"
    LAUNCH_FAILED = "launch_failed"
    TIMED_OUT = "timed_out"


class CheckSpec(BaseModel, frozen=True):
    name: str = Field(min_length=1)
    command: str = Field(min_length=1)
    args: tuple[str, ...] = ()
    cwd: str | None = None
    kind: CheckKind = CheckKind.CUSTOM
    env: dict[str, str] = {}
    timeout_s: int | None = Field(default=None, gt=0)

    @property
    def argv(self) -> list[str]:
        return [self.command, *self.args]

    @property
    def display_command(self) -> str:
        return " ".join(self.argv)

from enum import Enum


class RunStatus(str, Enum):
    SUCCESS = "success"
    FAILURE = "failure"

    @property
    def exit_code(self) -> int:
        """Process exit code a CI system should see for this verdict."""
        return 0 if self is RunStatus.SUCCESS else 1

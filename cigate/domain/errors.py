class CigateError(Exception):
    """Base class for fatal errors that abort a run before a report exists."""


class OrchestratorFault(CigateError):
    """Raised when the environment prevents checks from being run at all.

    This is never converted into a failed CheckResult: the run is aborted
    and no RunReport is produced.
    """

    def __init__(self, check_name: str, reason: str) -> None:
        self.check_name = check_name
        self.reason = reason
        super().__init__(f"Cannot run check '{check_name}': {reason}")


class ToolchainError(CigateError):
    """Raised when a toolchain provisioning step fails."""

    def __init__(self, step_name: str, exit_code: int, output: str = "") -> None:
        self.step_name = step_name
        self.exit_code = exit_code
        self.output = output
        super().__init__(f"Toolchain step '{step_name}' failed with exit code {exit_code}")


class ConfigError(CigateError):
    """Raised when a configuration file exists but cannot be used."""

from cigate.domain.value_objects.check_types import (
    LAUNCH_FAILURE_EXIT_CODE,
    TIMEOUT_EXIT_CODE,
    CheckKind,
    CheckOutcome,
    CheckSpec,
)
from cigate.domain.value_objects.run_status import RunStatus
from cigate.domain.value_objects.toolchain_types import ToolchainStep

__all__ = [
    "CheckKind",
    "CheckOutcome",
    "CheckSpec",
    "LAUNCH_FAILURE_EXIT_CODE",
    "RunStatus",
    "TIMEOUT_EXIT_CODE",
    "ToolchainStep",
]

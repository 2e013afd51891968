from cigate.domain.ports.check_runner_port import CheckRunnerPort
from cigate.domain.ports.report_store_port import ReportStorePort
from cigate.domain.ports.toolchain_port import ToolchainPort

__all__ = [
    "CheckRunnerPort",
    "ReportStorePort",
    "ToolchainPort",
]

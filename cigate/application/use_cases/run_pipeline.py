from collections.abc import Sequence

from loguru import logger

from cigate.application.check_orchestrator import (
    CheckCompleteCallback,
    CheckOrchestrator,
    CheckStartCallback,
)
from cigate.application.dto.pipeline_config import PipelineConfig
from cigate.domain.entities.run_report import RunReport
from cigate.domain.ports.check_runner_port import CheckRunnerPort
from cigate.domain.ports.report_store_port import ReportStorePort
from cigate.domain.ports.toolchain_port import ToolchainPort
from cigate.domain.value_objects.check_types import CheckSpec


class RunPipeline:
    def __init__(
        self,
        check_runner: CheckRunnerPort,
        toolchain: ToolchainPort,
        report_store: ReportStorePort | None = None,
    ) -> None:
        self.check_runner = check_runner
        self.toolchain = toolchain
        self.report_store = report_store

    async def execute(
        self,
        config: PipelineConfig,
        checks: Sequence[CheckSpec] | None = None,
        on_check_start: CheckStartCallback | None = None,
        on_check_complete: CheckCompleteCallback | None = None,
    ) -> RunReport:
        """Provision the toolchain, then run the checks.

        A toolchain failure raises ToolchainError before any check runs. A
        report that cannot be saved is logged and the report is still returned.
        """
        cwd = str(config.workdir)

        if config.skip_toolchain:
            logger.info("Skipping toolchain provisioning")
        else:
            await self.toolchain.provision(config.toolchain, cwd)

        orchestrator = CheckOrchestrator(
            check_runner=self.check_runner,
            cwd=cwd,
            parallel=config.parallel,
            on_check_start=on_check_start,
            on_check_complete=on_check_complete,
        )
        report = await orchestrator.run(checks if checks is not None else config.checks)

        if self.report_store is not None:
            # The checks have already run; a storage problem must not change the verdict
            try:
                path = await self.report_store.save(report)
            except OSError as e:
                logger.warning("Could not save report for run {}: {}", report.run_id, e)
            else:
                logger.info("Report for run {} saved to {}", report.run_id, path)

        return report

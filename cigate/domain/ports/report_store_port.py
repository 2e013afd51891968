from abc import ABC, abstractmethod
from pathlib import Path

from cigate.domain.entities.run_report import RunReport


class ReportStorePort(ABC):
    """Port for persisting run reports."""

    @abstractmethod
    async def save(self, report: RunReport) -> Path:
        """Persist the report and return where it was written."""

    @abstractmethod
    async def load(self, run_id: str) -> RunReport | None:
        """Load a previously saved report, or None if it does not exist."""

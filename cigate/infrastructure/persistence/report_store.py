from __future__ import annotations

import asyncio
import json
import tempfile
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from pathlib import Path
from typing import Any
from uuid import UUID

import aiofiles
from filelock import FileLock
from loguru import logger

from cigate.domain.entities.run_report import RunReport
from cigate.domain.ports.report_store_port import ReportStorePort


class ReportStore(ReportStorePort):
    """File-backed report storage.

    Layout::

        <report_dir>/runs/<run_id>.json   full report, written atomically
        <report_dir>/history.jsonl        one summary line per run
    """

    def __init__(self, report_dir: Path) -> None:
        self.report_dir = report_dir

    def _run_path(self, run_id: UUID) -> Path:
        return self.report_dir / "runs" / f"{run_id.hex}.json"

    @property
    def history_path(self) -> Path:
        return self.report_dir / "history.jsonl"

    @property
    def _lock_path(self) -> Path:
        return self.report_dir / ".lock"

    async def save(self, report: RunReport) -> Path:
        path = self._run_path(report.run_id)
        await self._atomic_write(path, report.model_dump_json(indent=2))

        summary = {
            "run_id": report.run_id.hex,
            "started_at": report.started_at.isoformat(),
            "status": report.status.value,
            "exit_code": report.exit_code,
            "duration_ms": report.duration_ms,
            "checks": {r.name: r.exit_code for r in report.results},
        }
        async with self._locked():
            await self._append_line(self.history_path, json.dumps(summary, separators=(",", ":")))

        logger.debug("Saved report {} to {}", report.run_id, path)
        return path

    async def load(self, run_id: str) -> RunReport | None:
        path = self._run_path(UUID(run_id))
        if not path.exists():
            return None
        async with aiofiles.open(path, encoding="utf-8") as f:
            content = await f.read()
        return RunReport.model_validate_json(content)

    async def read_history(self) -> list[dict[str, Any]]:
        """Return run summaries, oldest first."""
        if not self.history_path.exists():
            return []
        async with aiofiles.open(self.history_path, encoding="utf-8") as f:
            content = await f.read()
        return [json.loads(line) for line in content.splitlines() if line.strip()]

    async def _atomic_write(self, path: Path, content: str) -> None:
        """Atomic write: write to temp file, then rename."""
        path.parent.mkdir(parents=True, exist_ok=True)

        fd, temp_path_str = tempfile.mkstemp(
            dir=str(path.parent),
            prefix=".tmp_",
            suffix=path.suffix,
        )
        temp_path = Path(temp_path_str)

        try:
            async with aiofiles.open(fd, mode="w", encoding="utf-8", closefd=True) as f:
                await f.write(content)
            await asyncio.to_thread(temp_path.rename, path)
        except Exception:
            if temp_path.exists():
                temp_path.unlink()
            raise

    async def _append_line(self, path: Path, line: str) -> None:
        path.parent.mkdir(parents=True, exist_ok=True)
        async with aiofiles.open(path, mode="a", encoding="utf-8") as f:
            await f.write(line + "\n")

    @asynccontextmanager
    async def _locked(self) -> AsyncIterator[None]:
        # Concurrent CI jobs may share one report directory
        self.report_dir.mkdir(parents=True, exist_ok=True)
        lock = FileLock(self._lock_path)
        await asyncio.to_thread(lock.acquire)
        try:
            yield
        finally:
            await asyncio.to_thread(lock.release)

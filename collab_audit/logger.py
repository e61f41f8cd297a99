"""Execution logger facade: the single entry point callers use.

Paths are resolved once at construction. Every capture is independent and
never raises; failures come back as ``CaptureResult(success=False)``.

Usage:
    audit = ExecutionLogger()
    result = await audit.capture_execution_log({"userPrompt": "Deploy wave 3"})
"""

from __future__ import annotations

import logging
import os
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Callable

from .builder import audit_filename, build_audit_record
from .config import AuditSettings, load_audit_settings
from .errors import AuditError
from .models import CaptureResult, ExecutionContext
from .persister import AuditPersister
from .root_resolver import find_project_root

logger = logging.getLogger(__name__)


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class ExecutionLogger:
    """Captures execution contexts as JSON audit artifacts."""

    def __init__(
        self,
        root_path: Path | str | None = None,
        *,
        settings: AuditSettings | None = None,
        clock: Callable[[], datetime] | None = None,
    ) -> None:
        self.project_root = self._resolve_root(root_path, settings)
        self.settings = settings or load_audit_settings(self.project_root)
        self.logs_dir = self.project_root / self.settings.logs_subdir
        self._clock = clock or _utcnow
        self._persister = AuditPersister(self.logs_dir, indent=self.settings.json_indent)

    @staticmethod
    def _resolve_root(root_path: Path | str | None, settings: AuditSettings | None) -> Path:
        if root_path is not None:
            return Path(root_path)
        env_root = os.environ.get("CLAUDE_PROJECT_DIR")
        if env_root:
            return Path(env_root)
        marker = settings.marker if settings else AuditSettings().marker
        return find_project_root(marker=marker)

    async def capture_execution_log(self, context: ExecutionContext | dict[str, Any]) -> CaptureResult:
        """Build the audit record for ``context`` and write it to the logs directory."""
        try:
            record = build_audit_record(context, now=self._clock(), settings=self.settings)
            filename = audit_filename(record, self.settings.slug_max_tokens)
            filepath = await self._persister.write(record, filename)
        except AuditError as exc:
            logger.error("Execution log capture failed: %s", exc)
            return CaptureResult(success=False, error=str(exc))
        except Exception as exc:
            logger.exception("Unexpected error capturing execution log")
            return CaptureResult(success=False, error=f"{type(exc).__name__}: {exc}")

        logger.info("Captured execution log %s", filepath)
        return CaptureResult(
            success=True,
            filename=filename,
            filepath=str(filepath),
            audit_id=record.audit_id,
        )

    async def read_execution_log(self, filename: str) -> dict:
        """Return a written record. Raises PersistenceError if it cannot be read."""
        return await self._persister.read(filename)

    def list_execution_logs(self, limit: int | None = None) -> list[str]:
        return self._persister.list_logs(limit)

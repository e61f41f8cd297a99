"""JSON persistence for audit records."""

from __future__ import annotations

import asyncio
import json
import logging
import os
import tempfile
from pathlib import Path

from .errors import DirectoryCreationFailure, PersistenceError, WriteFailure
from .models import AuditRecord

logger = logging.getLogger(__name__)

# Process umask, read once at import
_UMASK = os.umask(0)
os.umask(_UMASK)


class AuditPersister:
    """Writes audit records as indented JSON files into a logs directory."""

    def __init__(self, logs_dir: Path | str, indent: int = 2) -> None:
        self.logs_dir = Path(logs_dir)
        self.indent = indent

    async def write(self, record: AuditRecord, filename: str) -> Path:
        """Write ``record`` to ``<logs_dir>/<filename>``, replacing any existing file."""
        loop = asyncio.get_running_loop()
        return await loop.run_in_executor(None, self._write_sync, record, filename)

    async def read(self, filename: str) -> dict:
        """Load a previously written record."""
        loop = asyncio.get_running_loop()
        return await loop.run_in_executor(None, self._read_sync, filename)

    def list_logs(self, limit: int | None = None) -> list[str]:
        """Artifact filenames, newest day first."""
        if not self.logs_dir.is_dir():
            return []
        names = sorted((p.name for p in self.logs_dir.glob("*.json") if p.is_file()), reverse=True)
        return names[:limit] if limit is not None else names

    def _write_sync(self, record: AuditRecord, filename: str) -> Path:
        try:
            text = json.dumps(record.model_dump(mode="json"), indent=self.indent, ensure_ascii=False)
            payload = (text + "\n").encode("utf-8")
        except (TypeError, ValueError) as exc:
            raise WriteFailure(f"Audit record is not JSON serializable: {exc}") from exc

        try:
            self.logs_dir.mkdir(parents=True, exist_ok=True)
        except OSError as exc:
            raise DirectoryCreationFailure(f"Cannot create logs directory {self.logs_dir}: {exc}") from exc

        target = self.logs_dir / filename
        temp_path: Path | None = None
        # Write to a temporary sibling first so readers never see a partial file
        try:
            fd, tmp_name = tempfile.mkstemp(prefix=f".{target.name}.", suffix=".tmp", dir=self.logs_dir)
            temp_path = Path(tmp_name)
            with open(fd, "wb") as f:
                f.write(payload)
            os.chmod(temp_path, 0o666 & ~_UMASK)
            temp_path.replace(target)
        except (OSError, ValueError) as exc:
            if temp_path is not None:
                temp_path.unlink(missing_ok=True)
            raise WriteFailure(f"Cannot write audit log {target}: {exc}") from exc

        logger.debug("Wrote %d bytes to %s", len(payload), target)
        return target

    def _read_sync(self, filename: str) -> dict:
        path = self.logs_dir / Path(filename).name
        try:
            return json.loads(path.read_text(encoding="utf-8"))
        except FileNotFoundError as exc:
            raise PersistenceError(f"Audit log '{filename}' not found") from exc
        except (OSError, json.JSONDecodeError) as exc:
            raise PersistenceError(f"Cannot read audit log '{filename}': {exc}") from exc

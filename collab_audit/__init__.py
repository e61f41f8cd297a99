"""Execution audit logger for ESMC orchestrated runs.

One call, one artifact: the caller hands over an execution context, the
logger shapes it into a fully-defaulted audit record and writes it under
.claude/memory/documents/logs/ in the project root.
"""

from .errors import AuditError, DirectoryCreationFailure, InvalidContext, PersistenceError, WriteFailure
from .logger import ExecutionLogger

__all__ = [
    "AuditError",
    "DirectoryCreationFailure",
    "ExecutionLogger",
    "InvalidContext",
    "PersistenceError",
    "WriteFailure",
]

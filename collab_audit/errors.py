"""Error taxonomy for audit capture."""


class AuditError(Exception):
    """Base class for every failure the audit logger reports."""


class InvalidContext(AuditError):
    """The execution context breaks the caller contract (e.g. no prompt)."""


class PersistenceError(AuditError):
    """The record could not be written to disk."""


class DirectoryCreationFailure(PersistenceError):
    """The logs directory could not be created."""


class WriteFailure(PersistenceError):
    """The record could not be serialized or written to its file."""

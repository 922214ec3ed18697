"""
Exception hierarchy for the seeding run.

Every failure the command line reports derives from SeedError. Storage
failures carry the operation that failed so the log line names it.
"""


class SeedError(Exception):
    """Base exception for seeding failures."""
    pass


class StorageError(SeedError):
    """Raised when the relational store rejects an operation."""

    operation = "storage operation"

    def __init__(self, detail: str):
        self.detail = detail
        super().__init__(f"Failed to {self.operation}: {detail}")


class ConnectionFailedError(StorageError):
    operation = "connect to database"


class LivenessCheckError(StorageError):
    operation = "ping database"


class ClearError(StorageError):
    operation = "clear tables"


class SchemaError(StorageError):
    operation = "create schema"


class InsertError(StorageError):
    """Raised on the first row the store refuses; earlier rows stay written."""
    operation = "insert row"


class IdentityQueryError(StorageError):
    operation = "query identities"


class RowCountError(StorageError):
    operation = "count rows"


class ConfigError(SeedError):
    """Raised when an environment value cannot be parsed."""
    pass


class ExportError(SeedError):
    """Raised when a dry-run batch cannot be written to disk."""
    pass

class NumerologyError(Exception):
    """Base class for errors raised by the numerology package."""


class SearchValidationError(NumerologyError, ValueError):
    """A search request is malformed (placeholder count, unknown codes)."""


class DatabaseConnectionError(NumerologyError):
    """The name table handle could not be parsed or reached."""


class EmptyTableError(NumerologyError):
    """The target name table does not exist or has no rows."""

    def __init__(self, table: str):
        super().__init__(f"database table {table} is empty")
        self.table = table

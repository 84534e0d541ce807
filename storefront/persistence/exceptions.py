"""Persistence layer exceptions.

All persistence exceptions inherit from PersistenceError so callers can catch
every database failure with a single except clause.
"""


class PersistenceError(Exception):
    """Base exception for all persistence layer errors."""

    pass


class DatabaseConnectionError(PersistenceError):
    """Raised when the database cannot be initialized or reached.

    Examples:
    - Invalid database URL
    - Database file not writable
    - Session requested before init_database()
    """

    pass


class RecordNotFoundError(PersistenceError):
    """Raised when an operation targets a product or message that does not exist.

    Lookups that may legitimately miss return None instead.
    """

    def __init__(self, message: str, record_id=None):
        super().__init__(message)
        self.record_id = record_id


class DataIntegrityError(PersistenceError):
    """Raised on constraint violations (duplicate ids, NOT NULL columns)."""

    pass

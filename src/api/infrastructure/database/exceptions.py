"""Database-specific exceptions."""


class DatabaseError(Exception):
    """Base exception for database operations."""

    pass


class InconsistentStateError(DatabaseError):
    """Raised when persisted rows violate an invariant the aggregate relies on.

    For example an access right whose subject identifier row is missing.
    """

    pass

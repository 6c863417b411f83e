"""Database infrastructure: declarative base, engines and session providers."""

from infrastructure.database.exceptions import DatabaseError, InconsistentStateError
from infrastructure.database.models import Base, TimestampMixin

__all__ = [
    "Base",
    "DatabaseError",
    "InconsistentStateError",
    "TimestampMixin",
]

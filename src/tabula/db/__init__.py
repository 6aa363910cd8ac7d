"""Database interaction components for tabula."""

from tabula.db.store import SqlStore

__all__ = ["SqlStore"]

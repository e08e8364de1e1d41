"""SQLAlchemy-backed repository implementations."""

from .ledger_store import SqlLedgerStore

__all__ = [
    "SqlLedgerStore",
]

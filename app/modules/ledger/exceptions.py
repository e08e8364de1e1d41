"""Ledger domain specific exceptions."""


class LedgerError(Exception):
    """Base class for ledger domain errors."""


class AccountNotFoundError(LedgerError):
    """Raised when the requested account cannot be found."""


class TransactionsNotFoundError(LedgerError):
    """Raised when an account has no logged transactions."""


class LedgerStoreError(LedgerError):
    """Raised when the backing store cannot be read or written."""


class SnapshotConflictError(LedgerStoreError):
    """Raised when a snapshot changed between load and write."""

"""Transaction ledger domain: parsing, validation, aggregation and reporting."""

from .aggregator import apply_transactions
from .exceptions import (
    AccountNotFoundError,
    LedgerError,
    LedgerStoreError,
    SnapshotConflictError,
    TransactionsNotFoundError,
)
from .models import (
    Account,
    IngestResult,
    LedgerReport,
    RejectedTransaction,
    Transaction,
    TransactionType,
    derive_account_id,
)
from .parser import COLUMNS, RowParser, parse_rows
from .reports import build_collections, in_collections
from .service import LedgerService
from .validator import validate_row

__all__ = [
    "COLUMNS",
    "Account",
    "AccountNotFoundError",
    "IngestResult",
    "LedgerError",
    "LedgerReport",
    "LedgerService",
    "LedgerStoreError",
    "RejectedTransaction",
    "RowParser",
    "SnapshotConflictError",
    "Transaction",
    "TransactionType",
    "TransactionsNotFoundError",
    "apply_transactions",
    "build_collections",
    "derive_account_id",
    "in_collections",
    "parse_rows",
    "validate_row",
]

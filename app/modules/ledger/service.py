"""Domain services for transaction ingestion and ledger read-back."""

from __future__ import annotations

import asyncio
import json
import logging
from contextlib import nullcontext
from typing import Any, Dict, Iterable, List, Optional

from .aggregator import apply_transactions
from .exceptions import AccountNotFoundError, LedgerStoreError, TransactionsNotFoundError
from .models import Account, IngestResult, LedgerReport, RejectedTransaction, Transaction
from .parser import RowParser
from .reports import build_collections
from .repository import ACCOUNTS_KEY, BAD_TRANSACTIONS_KEY, LedgerStore, transactions_key
from .validator import validate_row

logger = logging.getLogger(__name__)


def _decode_list(raw: Optional[str], key: str) -> List[Dict[str, Any]]:
    if not raw:
        return []
    try:
        payload = json.loads(raw)
    except json.JSONDecodeError as exc:
        raise LedgerStoreError(f"stored {key} is not valid JSON") from exc
    if not isinstance(payload, list):
        raise LedgerStoreError(f"stored {key} must be a JSON array")
    return payload


def _encode_list(items: Iterable[Any]) -> str:
    return json.dumps([item.to_mapping() for item in items], ensure_ascii=False)


class LedgerService:
    """Ingests CSV batches and serves the aggregated ledger.

    Each upload is one batch: both snapshots are loaded, every row is folded
    in file order, and the snapshots and log entries are written back in a
    single commit. Batches are additive, so uploading the same file twice
    counts its transactions twice.
    """

    def __init__(self, store: LedgerStore, lock: Optional[asyncio.Lock] = None) -> None:
        self._store = store
        self._lock = lock

    async def ingest(self, text: str) -> IngestResult:
        async with self._lock or nullcontext():
            return await self._ingest(text)

    async def _ingest(self, text: str) -> IngestResult:
        raw_accounts, accounts_version = await self._store.get_versioned(ACCOUNTS_KEY)
        raw_bad, bad_version = await self._store.get_versioned(BAD_TRANSACTIONS_KEY)
        snapshot = {
            account.account_id: account
            for account in (Account.from_mapping(item) for item in _decode_list(raw_accounts, ACCOUNTS_KEY))
        }
        bad_transactions = [
            RejectedTransaction.from_mapping(item) for item in _decode_list(raw_bad, BAD_TRANSACTIONS_KEY)
        ]

        accepted: List[Transaction] = []
        rejected = 0
        for index, fields in enumerate(RowParser(text), start=1):
            outcome = validate_row(fields, index)
            if isinstance(outcome, RejectedTransaction):
                logger.warning("Invalid transaction at row %d: %s", index, outcome.error)
                bad_transactions.append(outcome)
                rejected += 1
            else:
                accepted.append(outcome)

        updated = apply_transactions(snapshot, accepted)

        log_entries: Dict[str, List[str]] = {}
        for transaction in accepted:
            log_entries.setdefault(transaction.account_id, []).append(
                json.dumps(transaction.to_mapping(), ensure_ascii=False)
            )
        for account_id, entries in log_entries.items():
            await self._store.append(transactions_key(account_id), *entries)

        accounts = list(updated.values())
        await self._store.set(ACCOUNTS_KEY, _encode_list(accounts), expected_version=accounts_version)
        await self._store.set(BAD_TRANSACTIONS_KEY, _encode_list(bad_transactions), expected_version=bad_version)
        await self._store.commit()

        logger.info(
            "Processed batch: %d accepted, %d rejected, %d accounts",
            len(accepted),
            rejected,
            len(accounts),
        )
        return IngestResult(
            accounts=accounts,
            bad_transactions=bad_transactions,
            accepted=len(accepted),
            rejected=rejected,
        )

    async def list_accounts(self) -> List[Account]:
        raw = await self._store.get(ACCOUNTS_KEY)
        return [Account.from_mapping(item) for item in _decode_list(raw, ACCOUNTS_KEY)]

    async def list_bad_transactions(self) -> List[RejectedTransaction]:
        raw = await self._store.get(BAD_TRANSACTIONS_KEY)
        return [RejectedTransaction.from_mapping(item) for item in _decode_list(raw, BAD_TRANSACTIONS_KEY)]

    async def get_account(self, account_id: str) -> Account:
        for account in await self.list_accounts():
            if account.account_id == account_id:
                return account
        raise AccountNotFoundError(account_id)

    async def list_transactions(self, account_id: str) -> List[Transaction]:
        entries = await self._store.range(transactions_key(account_id), 0, -1)
        if not entries:
            raise TransactionsNotFoundError(account_id)
        try:
            return [Transaction.from_mapping(json.loads(entry)) for entry in entries]
        except (json.JSONDecodeError, KeyError, ArithmeticError) as exc:
            raise LedgerStoreError(f"stored transactions for {account_id} are corrupt") from exc

    async def build_report(self) -> LedgerReport:
        accounts = await self.list_accounts()
        return LedgerReport(
            accounts=accounts,
            bad_transactions=await self.list_bad_transactions(),
            collections=build_collections(accounts),
        )

    async def reset(self) -> None:
        async with self._lock or nullcontext():
            await self._store.clear_all()
            await self._store.commit()
        logger.info("Ledger store cleared")

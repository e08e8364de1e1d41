"""Repository protocol for the ledger key-value store."""

from __future__ import annotations

from typing import Optional, Protocol, Sequence

ACCOUNTS_KEY = "accounts"
BAD_TRANSACTIONS_KEY = "badTransactions"


def transactions_key(account_id: str) -> str:
    return f"transactions:{account_id}"


class LedgerStore(Protocol):
    """Key-value persistence for snapshots and per-account transaction logs."""

    async def get(self, key: str) -> Optional[str]:
        ...

    async def get_versioned(self, key: str) -> tuple[Optional[str], int]:
        ...

    async def set(self, key: str, value: str, *, expected_version: Optional[int] = None) -> int:
        ...

    async def append(self, key: str, *values: str) -> int:
        ...

    async def range(self, key: str, start: int = 0, stop: int = -1) -> Sequence[str]:
        ...

    async def clear_all(self) -> None:
        ...

    async def commit(self) -> None:
        ...

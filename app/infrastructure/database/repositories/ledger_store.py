"""SQLAlchemy implementation of the ledger key-value store."""

from __future__ import annotations

from contextlib import contextmanager
from typing import Iterator, Optional, Sequence

from sqlalchemy import delete, func, insert, select, update
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from app.db.models import LedgerEntry, LedgerListItem
from app.modules.ledger.exceptions import LedgerStoreError, SnapshotConflictError
from app.modules.ledger.repository import LedgerStore


@contextmanager
def _store_errors(action: str) -> Iterator[None]:
    try:
        yield
    except LedgerStoreError:
        raise
    except SQLAlchemyError as exc:
        raise LedgerStoreError(f"failed to {action}") from exc


def _redis_slice(items: Sequence[str], start: int, stop: int) -> list[str]:
    """Slice with inclusive ``stop``; negative indices count from the end."""
    size = len(items)
    if start < 0:
        start = max(size + start, 0)
    if stop < 0:
        stop = size + stop
    if start > stop:
        return []
    return list(items[start : stop + 1])


class SqlLedgerStore(LedgerStore):
    """Ledger store backed by the ``ledger_entries`` and ``ledger_list_items`` tables."""

    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def get(self, key: str) -> Optional[str]:
        value, _ = await self.get_versioned(key)
        return value

    async def get_versioned(self, key: str) -> tuple[Optional[str], int]:
        with _store_errors(f"read {key}"):
            stmt = select(LedgerEntry.value, LedgerEntry.version).where(LedgerEntry.key == key)
            row = (await self._session.execute(stmt)).first()
        if row is None:
            return None, 0
        return row.value, int(row.version)

    async def set(self, key: str, value: str, *, expected_version: Optional[int] = None) -> int:
        """Store ``value`` and return the new version.

        With ``expected_version`` the write only succeeds when the stored
        version still matches (``0`` means the key must not exist yet).
        """
        with _store_errors(f"write {key}"):
            if expected_version is None:
                return await self._upsert(key, value)
            if expected_version == 0:
                try:
                    await self._session.execute(insert(LedgerEntry).values(key=key, value=value, version=1))
                except IntegrityError as exc:
                    raise SnapshotConflictError(f"{key} was created concurrently") from exc
                return 1

            stmt = (
                update(LedgerEntry)
                .where(LedgerEntry.key == key, LedgerEntry.version == expected_version)
                .values(value=value, version=LedgerEntry.version + 1)
            )
            result = await self._session.execute(stmt)
            if result.rowcount == 0:
                raise SnapshotConflictError(f"{key} changed since version {expected_version}")
            return expected_version + 1

    async def _upsert(self, key: str, value: str) -> int:
        stmt = (
            update(LedgerEntry)
            .where(LedgerEntry.key == key)
            .values(value=value, version=LedgerEntry.version + 1)
        )
        result = await self._session.execute(stmt)
        if result.rowcount == 0:
            await self._session.execute(insert(LedgerEntry).values(key=key, value=value, version=1))
            return 1
        _, version = await self.get_versioned(key)
        return version

    async def append(self, key: str, *values: str) -> int:
        with _store_errors(f"append to {key}"):
            self._session.add_all([LedgerListItem(key=key, value=value) for value in values])
            await self._session.flush()
            stmt = select(func.count()).select_from(LedgerListItem).where(LedgerListItem.key == key)
            return int((await self._session.execute(stmt)).scalar_one())

    async def range(self, key: str, start: int = 0, stop: int = -1) -> list[str]:
        with _store_errors(f"read {key}"):
            stmt = select(LedgerListItem.value).where(LedgerListItem.key == key).order_by(LedgerListItem.id)
            items = (await self._session.execute(stmt)).scalars().all()
        return _redis_slice(items, start, stop)

    async def clear_all(self) -> None:
        with _store_errors("clear the store"):
            await self._session.execute(delete(LedgerListItem))
            await self._session.execute(delete(LedgerEntry))

    async def commit(self) -> None:
        with _store_errors("commit"):
            await self._session.commit()

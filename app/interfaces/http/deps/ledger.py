"""Ledger related dependency providers."""

from fastapi import Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.container import ApplicationContainer
from app.infrastructure.database.repositories.ledger_store import SqlLedgerStore
from app.modules.ledger import LedgerService
from app.services.uploads import UploadStorage

from .database import get_db_session


def get_container(request: Request) -> ApplicationContainer:
    return request.app.state.container


def get_ledger_store(db: AsyncSession = Depends(get_db_session)) -> SqlLedgerStore:
    return SqlLedgerStore(db)


def get_ledger_service(
    store: SqlLedgerStore = Depends(get_ledger_store),
    container: ApplicationContainer = Depends(get_container),
) -> LedgerService:
    return LedgerService(store, container.ingest_lock)


def get_upload_storage(container: ApplicationContainer = Depends(get_container)) -> UploadStorage:
    return container.upload_storage


__all__ = [
    "get_container",
    "get_ledger_store",
    "get_ledger_service",
    "get_upload_storage",
]

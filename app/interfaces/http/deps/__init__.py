"""Reusable FastAPI dependencies."""

from .database import get_db_session
from .ledger import get_container, get_ledger_service, get_ledger_store, get_upload_storage

__all__ = [
    "get_db_session",
    "get_container",
    "get_ledger_service",
    "get_ledger_store",
    "get_upload_storage",
]

"""SQLAlchemy ORM models backing the ledger key-value store."""
from sqlalchemy import Column, DateTime, Integer, String, Text
from sqlalchemy.sql import func

from app.infrastructure.database.base import Base


class LedgerEntry(Base):
    """A single value stored under a unique key (``accounts``, ``badTransactions``)."""

    __tablename__ = "ledger_entries"

    key = Column(String(255), primary_key=True)
    value = Column(Text, nullable=False)
    version = Column(Integer, nullable=False, default=1)
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())


class LedgerListItem(Base):
    """One element of an append-only list (``transactions:<accountId>``)."""

    __tablename__ = "ledger_list_items"

    id = Column(Integer, primary_key=True, autoincrement=True)
    key = Column(String(255), nullable=False, index=True)
    value = Column(Text, nullable=False)
    created_at = Column(DateTime(timezone=True), server_default=func.now())

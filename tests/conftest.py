"""Shared fixtures.

The application reads its settings from the environment the first time
``get_settings()`` runs, so the database and upload directory are pointed at
a per-session temporary directory before anything under ``app`` is imported.
"""

from __future__ import annotations

import os
import tempfile
from pathlib import Path

_TMP_ROOT = Path(tempfile.mkdtemp(prefix="ledger-tests-"))
os.environ.setdefault("DATABASE__URL", f"sqlite+aiosqlite:///{_TMP_ROOT / 'ledger.db'}")
os.environ.setdefault("STORAGE__UPLOAD_DIR", str(_TMP_ROOT / "uploads"))
os.environ.setdefault("ENVIRONMENT", "test")

import pytest  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine  # noqa: E402

from app.db import models  # noqa: E402,F401
from app.infrastructure.database.base import Base  # noqa: E402
from app.infrastructure.database.repositories.ledger_store import SqlLedgerStore  # noqa: E402


@pytest.fixture()
def client():
    from app.main import create_app

    with TestClient(create_app()) as test_client:
        response = test_client.post("/reset")
        assert response.status_code == 200
        yield test_client


@pytest.fixture()
async def session_factory(tmp_path: Path):
    engine = create_async_engine(f"sqlite+aiosqlite:///{tmp_path / 'store.db'}")
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield async_sessionmaker(bind=engine, class_=AsyncSession, expire_on_commit=False)
    await engine.dispose()


@pytest.fixture()
async def session(session_factory):
    async with session_factory() as db:
        yield db


@pytest.fixture()
def store(session) -> SqlLedgerStore:
    return SqlLedgerStore(session)


"""Simple dependency container for wiring core services."""

from __future__ import annotations

import asyncio
from dataclasses import dataclass, field
from pathlib import Path

from app.core.config import Settings, get_settings
from app.infrastructure.database.session import get_engine
from app.services.uploads import UploadStorage


@dataclass(slots=True)
class ApplicationContainer:
    settings: Settings
    upload_storage: UploadStorage
    # Single writer: every upload batch runs under this lock.
    ingest_lock: asyncio.Lock = field(default_factory=asyncio.Lock)

    def init_infrastructure(self) -> None:
        """Ensure infrastructure singletons (database engine, upload dir) are initialised."""
        get_engine(self.settings)
        self.upload_storage.ensure_storage()


def build_container(settings: Settings | None = None) -> ApplicationContainer:
    settings = settings or get_settings()
    return ApplicationContainer(
        settings=settings,
        upload_storage=UploadStorage(Path(settings.upload_storage_dir).resolve()),
    )


__all__ = ["ApplicationContainer", "build_container"]

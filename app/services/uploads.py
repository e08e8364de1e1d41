"""Staging area for uploaded CSV files."""

from __future__ import annotations

import hashlib
import logging
import uuid
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from fastapi import UploadFile

logger = logging.getLogger(__name__)

CHUNK_SIZE = 1024 * 1024


class UploadStorageError(RuntimeError):
    """Raised when an uploaded file cannot be staged or removed."""


@dataclass(frozen=True)
class StagedUpload:
    original_name: str
    path: Path
    size_bytes: int
    checksum_sha256: str

    def read_text(self) -> str:
        """Decode the staged file as UTF-8 (a leading BOM is dropped)."""
        try:
            return self.path.read_text(encoding="utf-8-sig")
        except OSError as exc:
            raise UploadStorageError(f"failed to read staged upload {self.path.name}") from exc


def _sanitize_file_name(raw_name: Optional[str]) -> str:
    base = Path(raw_name or "").name or "upload.csv"
    stem = "".join(ch if ch.isalnum() or ch in {"-", "_"} else "-" for ch in Path(base).stem) or "upload"
    return f"{uuid.uuid4().hex[:12]}-{stem}.csv"


class UploadStorage:
    """Writes uploads to ``storage_dir`` and clears them on reset."""

    def __init__(self, storage_dir: Path) -> None:
        self._storage_dir = storage_dir

    @property
    def storage_dir(self) -> Path:
        return self._storage_dir

    def ensure_storage(self) -> None:
        """Create the storage directory if it does not exist."""
        self._storage_dir.mkdir(parents=True, exist_ok=True)

    async def stage(self, upload: UploadFile) -> StagedUpload:
        self.ensure_storage()
        target_path = self._storage_dir / _sanitize_file_name(upload.filename)
        temp_path = target_path.with_suffix(target_path.suffix + ".upload")

        hasher = hashlib.sha256()
        total_size = 0
        try:
            with temp_path.open("wb") as buffer:
                while True:
                    chunk = await upload.read(CHUNK_SIZE)
                    if not chunk:
                        break
                    buffer.write(chunk)
                    hasher.update(chunk)
                    total_size += len(chunk)
            temp_path.replace(target_path)
        except OSError as exc:
            temp_path.unlink(missing_ok=True)
            raise UploadStorageError(f"failed to store {upload.filename}") from exc
        finally:
            await upload.close()

        staged = StagedUpload(
            original_name=upload.filename or target_path.name,
            path=target_path,
            size_bytes=total_size,
            checksum_sha256=hasher.hexdigest(),
        )
        logger.info(
            "Staged upload %s as %s (%d bytes, sha256 %s)",
            staged.original_name,
            target_path.name,
            staged.size_bytes,
            staged.checksum_sha256,
        )
        return staged

    def clear(self) -> int:
        """Delete every staged file; return how many were removed."""
        if not self._storage_dir.exists():
            return 0
        removed = 0
        try:
            for path in self._storage_dir.iterdir():
                if path.is_file():
                    path.unlink(missing_ok=True)
                    removed += 1
        except OSError as exc:
            raise UploadStorageError("failed to clear staged uploads") from exc
        return removed

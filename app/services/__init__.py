from .uploads import UploadStorage, UploadStorageError

__all__ = [
    "UploadStorage",
    "UploadStorageError",
]

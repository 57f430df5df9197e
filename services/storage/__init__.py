"""Key-value storage layer for preset persistence."""

from .errors import GistError, StorageError, StoreWriteFailure
from .gist_storage import GistStorage
from .local_storage import LocalStorage
from .storage_manager import StorageManager

__all__ = [
    "GistError",
    "StorageError",
    "StoreWriteFailure",
    "GistStorage",
    "LocalStorage",
    "StorageManager",
]

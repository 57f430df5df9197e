"""Storage exceptions."""

from __future__ import annotations


class StorageError(Exception):
    """Base class for key-value store failures."""
    pass


class StoreWriteFailure(StorageError):
    """Raised when the store rejects a write (disk full, permissions, remote refused)."""
    pass


class GistError(StorageError):
    """Raised when Gist operations fail."""
    pass

"""
Storage Manager - Orchestrates Gist and Local storage.
Implements fallback strategy: Gist (primary) → Local (cache).
"""

from __future__ import annotations
import logging
from pathlib import Path
from typing import Optional

from services.utils import get_data_dir, get_secret
from .errors import GistError, StorageError
from .gist_storage import GistStorage
from .local_storage import LocalStorage

logger = logging.getLogger(__name__)


class StorageManager:
    """Coordinates Gist and Local storage with fallback logic."""

    def __init__(
        self,
        local_path: Optional[Path] = None,
        gist: Optional[GistStorage] = None,
    ):
        """
        Initialize storage manager.

        Args:
            local_path: Path to local store file. If None, uses default.
            gist: Gist backend. If None, one is built from secrets.
        """
        self.local_path = local_path or self._get_default_path()
        self.gist = gist if gist is not None else GistStorage()
        self.local = LocalStorage(self.local_path)
        self._last_warning: Optional[str] = None

    @staticmethod
    def _get_default_path() -> Path:
        """Get default store path from environment or fallback."""
        env_path = get_secret("PRESETS_PATH")
        if env_path:
            return Path(env_path).expanduser().resolve()
        return (get_data_dir() / "presets.json").resolve()

    def get_last_warning(self) -> Optional[str]:
        """Get last warning message (for UI display)."""
        return self._last_warning

    def _set_warning(self, message: str) -> None:
        logger.warning(message)
        self._last_warning = message

    def get(self, key: str) -> Optional[str]:
        """
        Read key with Gist-first fallback strategy.

        Strategy:
        1. Try Gist (primary source)
        2. On hit: cache to local and return
        3. On failure or miss: fall back to local cache
        """
        self._last_warning = None

        if self.gist.is_available():
            try:
                value = self.gist.get(key)
            except GistError as e:
                self.gist.disable()
                self._set_warning(f"Cloud storage unavailable: {e}. Using local cache.")
            else:
                if value is not None:
                    try:
                        self.local.set(key, value)
                    except StorageError as e:
                        self._set_warning(f"Could not refresh local cache: {e}")
                    return value

        return self.local.get(key)

    def set(self, key: str, value: str) -> None:
        """
        Write key to both Gist and Local.

        A Gist failure is reported via get_last_warning(); a local
        failure raises StoreWriteFailure.
        """
        self._last_warning = None

        if self.gist.is_available():
            try:
                self.gist.set(key, value)
            except GistError as e:
                self.gist.disable()
                self._set_warning(f"Cloud storage sync failed: {e}. Data saved locally only.")

        self.local.set(key, value)

    def get_path(self) -> Path:
        """Get path to local store file."""
        return self.local_path

    def get_mtime(self) -> str:
        """Get last modification time of local store."""
        return self.local.get_mtime()

"""
Local file storage implementation.
Keeps a key -> string map in one JSON file.
"""

from __future__ import annotations
import json
import logging
import os
from pathlib import Path
from typing import Dict, Optional

from .errors import StorageError, StoreWriteFailure

logger = logging.getLogger(__name__)


class LocalStorage:
    """Key-value store backed by a local JSON file."""

    def __init__(self, file_path: Path):
        """
        Initialize local storage.

        Args:
            file_path: Path to the JSON file holding all keys
        """
        self.file_path = Path(file_path)

    def _read_all(self) -> Dict[str, str]:
        """
        Read the whole key map; a missing file is an empty map.

        Raises:
            StorageError: If the file cannot be read or holds no key map
        """
        if not self.file_path.exists():
            return {}

        try:
            with self.file_path.open("r", encoding="utf-8") as f:
                data = json.load(f)
        except ValueError as e:
            # JSONDecodeError or bad UTF-8
            logger.error(f"Store file {self.file_path} is not valid JSON: {e}")
            raise StorageError(f"Store file {self.file_path} is corrupt: {e}") from e
        except OSError as e:
            raise StorageError(f"Could not read {self.file_path}: {e}") from e

        if not isinstance(data, dict):
            logger.error(f"Store file {self.file_path} has no key map at top level")
            raise StorageError(f"Store file {self.file_path} holds no key map")

        return {str(k): v for k, v in data.items() if isinstance(v, str)}

    def get(self, key: str) -> Optional[str]:
        """
        Read the value stored under key.

        Returns:
            Stored string or None when the key is absent

        Raises:
            StorageError: If the store file is unreadable or corrupt
        """
        return self._read_all().get(key)

    def set(self, key: str, value: str) -> None:
        """
        Store value under key with atomic write.

        Raises:
            StoreWriteFailure: If the file cannot be read back or written.
                An unreadable file is left untouched.
        """
        try:
            data = self._read_all()
        except StorageError as e:
            raise StoreWriteFailure(f"Refusing to overwrite {self.file_path}: {e}") from e
        data[key] = value

        tmp_path = self.file_path.with_suffix(".json.tmp")
        try:
            self.file_path.parent.mkdir(parents=True, exist_ok=True)

            # Atomic write: write to temp file first
            with tmp_path.open("w", encoding="utf-8") as f:
                json.dump(data, f, ensure_ascii=False, indent=2)
                f.flush()
                os.fsync(f.fileno())

            os.replace(tmp_path, self.file_path)
        except OSError as e:
            logger.error(f"Failed to write key '{key}' to {self.file_path}: {e}")
            raise StoreWriteFailure(f"Failed to write to {self.file_path}: {e}") from e

        logger.info(f"Stored key '{key}' in {self.file_path}")

    def get_mtime(self) -> str:
        """
        Get last modification time as formatted string.

        Returns:
            Formatted timestamp or '(not created yet)'
        """
        if not self.file_path.exists():
            return "(not created yet)"

        from datetime import datetime
        timestamp = datetime.fromtimestamp(self.file_path.stat().st_mtime)
        return timestamp.strftime("%Y-%m-%d %H:%M:%S")

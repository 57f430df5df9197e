"""
GitHub Gist storage implementation.
Each key is kept as one '<key>.json' file inside a single Gist.
"""

from __future__ import annotations
import json
import logging
from typing import Dict, Optional

import requests

from services.utils import get_secret, is_truthy
from .errors import GistError

logger = logging.getLogger(__name__)

GIST_API_URL = "https://api.github.com/gists"


class GistStorage:
    """Key-value store on top of the GitHub Gist API."""

    def __init__(
        self,
        gist_id: Optional[str] = None,
        token: Optional[str] = None,
        timeout: float = 15,
    ):
        self.gist_id = gist_id or get_secret("GITHUB_GIST_ID")
        self.token = token or get_secret("GITHUB_TOKEN")
        self.timeout = timeout
        self._disabled = False

    def is_available(self) -> bool:
        """Check if Gist storage is configured and not disabled."""
        if is_truthy(get_secret("DISABLE_GIST")):
            return False
        return bool(self.gist_id and self.token) and not self._disabled

    def disable(self) -> None:
        """Disable Gist for this session (after auth error)."""
        self._disabled = True

    @staticmethod
    def filename_for(key: str) -> str:
        """Gist file name used for a key."""
        return f"{key}.json"

    def _url(self) -> str:
        if not self.gist_id:
            raise GistError("Missing GIST_ID")
        return f"{GIST_API_URL}/{self.gist_id}"

    def _headers(self) -> Dict[str, str]:
        """Build headers for Gist API requests."""
        headers = {
            "Accept": "application/vnd.github+json",
            "Content-Type": "application/json",
            "X-GitHub-Api-Version": "2022-11-28",
        }
        if self.token:
            headers["Authorization"] = f"token {self.token}"
        return headers

    def get(self, key: str) -> Optional[str]:
        """
        Read the file stored for key.

        Returns:
            File content or None when the Gist has no such file

        Raises:
            GistError: If fetch fails
        """
        url = self._url()
        try:
            response = requests.get(url, headers=self._headers(), timeout=self.timeout)
            if response.status_code in (401, 403, 404):
                raise GistError(
                    f"Gist fetch unauthorized/unavailable (HTTP {response.status_code})"
                )
            response.raise_for_status()
            payload = response.json()
        except requests.RequestException as e:
            raise GistError(f"Gist fetch error: {e}") from e
        except ValueError as e:
            raise GistError(f"Gist response is not JSON: {e}") from e

        if not isinstance(payload, dict):
            raise GistError(f"Gist response is a JSON {type(payload).__name__}, expected an object")

        files = payload.get("files") or {}
        if not isinstance(files, dict):
            raise GistError("Gist response has no file map")
        entry = files.get(self.filename_for(key))
        if not isinstance(entry, dict) or "content" not in entry:
            return None

        content = entry.get("content")
        if not isinstance(content, str) or not content.strip():
            return None
        return content

    def set(self, key: str, value: str) -> None:
        """
        Write value as the file for key.

        Raises:
            GistError: If save fails
        """
        url = self._url()
        body = {"files": {self.filename_for(key): {"content": value}}}

        try:
            response = requests.patch(
                url,
                headers=self._headers(),
                data=json.dumps(body),
                timeout=self.timeout,
            )
            if response.status_code in (401, 403):
                raise GistError(f"Gist save unauthorized (HTTP {response.status_code})")
            response.raise_for_status()
        except requests.RequestException as e:
            raise GistError(f"Gist save error: {e}") from e

        logger.info(f"Stored key '{key}' in gist {self.gist_id}")

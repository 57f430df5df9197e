"""ID generation utilities."""

from __future__ import annotations
import uuid
from typing import Iterable, Optional


def generate_unique_id(existing_ids: Optional[Iterable[str]] = None) -> str:
    """
    Generate a short random row ID.

    Args:
        existing_ids: IDs already used in the current list

    Returns:
        12-char hex ID not present in existing_ids
    """
    taken = set(existing_ids or ())
    while True:
        candidate = uuid.uuid4().hex[:12]
        if candidate not in taken:
            return candidate

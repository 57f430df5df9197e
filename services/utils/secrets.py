"""Configuration lookup: environment first, then Streamlit secrets."""

from __future__ import annotations
import os
from typing import Optional


def get_secret(name: str) -> Optional[str]:
    """Get secret from environment or Streamlit secrets."""
    value = os.environ.get(name)
    if value:
        return value
    try:
        import streamlit as st
        return st.secrets.get(name)
    except Exception:
        # No secrets.toml or running outside Streamlit
        return None


def is_truthy(value: Optional[str]) -> bool:
    """Interpret a config flag such as DISABLE_GIST."""
    return str(value or "").strip().lower() in ("1", "true", "yes", "on")

"""Utility functions."""

from .id_generator import generate_unique_id
from .numbers import clamp_non_negative, coerce, format_fixed2, parse_number
from .path_utils import get_data_dir, get_project_root
from .secrets import get_secret, is_truthy

__all__ = [
    "generate_unique_id",
    "clamp_non_negative",
    "coerce",
    "format_fixed2",
    "parse_number",
    "get_data_dir",
    "get_project_root",
    "get_secret",
    "is_truthy",
]

"""
Binary installation and PATH management.
"""

from .binary import BinaryInstaller, extract_archive, find_binary
from .path_env import (
    append_path_entries,
    contains_path_entry,
    normalize_path_entry,
    split_path_variable,
)

__all__ = [
    "BinaryInstaller",
    "extract_archive",
    "find_binary",
    "append_path_entries",
    "contains_path_entry",
    "normalize_path_entry",
    "split_path_variable",
]

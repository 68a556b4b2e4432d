"""
PATH variable helpers.

Windows PATH values are ';'-separated. Entries are compared after
normalization (environment variables expanded, separators and case folded,
trailing separators dropped) so that "C:\\Program Files\\AIOS\\" and
"c:/program files/aios" count as the same directory.
"""

import ntpath
import os
from typing import Iterable, List, Tuple

PATH_SEPARATOR = ";"


def split_path_variable(value: str) -> List[str]:
    """Split a PATH value into its non-empty entries."""
    return [part.strip() for part in (value or "").split(PATH_SEPARATOR) if part.strip()]


def normalize_path_entry(entry: str) -> str:
    expanded = os.path.expandvars(entry.strip().strip('"'))
    normalized = ntpath.normcase(ntpath.normpath(expanded))
    # normpath keeps the separator of a drive root ("c:\\")
    if len(normalized) > 3:
        normalized = normalized.rstrip("\\")
    return normalized


def contains_path_entry(value: str, entry: str) -> bool:
    """Whether ``value`` already holds a directory equivalent to ``entry``."""
    target = normalize_path_entry(entry)
    return any(normalize_path_entry(part) == target for part in split_path_variable(value))


def append_path_entries(value: str, entries: Iterable[str]) -> Tuple[str, List[str]]:
    """
    Append entries that are not yet part of a PATH value.

    Existing text is kept as-is (spacing and empty segments included); new
    entries are only added at the end.

    Args:
        value: Current PATH value
        entries: Directories to make sure are present

    Returns:
        (new_value, added): the updated PATH value and the entries actually
        appended. ``new_value`` equals ``value`` when nothing was added.
    """
    new_value = value or ""
    added = []
    for entry in entries:
        if contains_path_entry(new_value, entry):
            continue
        if not new_value.strip():
            new_value = entry
        elif new_value.endswith(PATH_SEPARATOR):
            new_value += entry
        else:
            new_value += PATH_SEPARATOR + entry
        added.append(entry)

    if not added:
        return value, []
    return new_value, added

"""Safe import utilities for platform-specific modules."""


def safe_import(module_name: str):
    """
    Safely import a module, returning None if unavailable.

    Use this for modules that only exist on some hosts (``winreg``, ``wmi``)
    or optional GPU libraries (``pynvml``).

    Args:
        module_name: The module to import (e.g., "wmi", "winreg")

    Returns:
        The imported module, or None if import fails

    Examples:
        >>> winreg = safe_import("winreg")
        >>> if not winreg:
        ...     return None  # Not on Windows
    """
    try:
        return __import__(module_name, fromlist=[''])
    except ImportError:
        return None

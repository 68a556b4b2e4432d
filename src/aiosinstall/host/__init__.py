"""
Host platform access.

Provides the injectable interface the installer uses for every OS interaction.
"""

from .base import HostPlatform, PathScope
from .windows import WindowsHost

__all__ = [
    "HostPlatform",
    "PathScope",
    "WindowsHost",
]

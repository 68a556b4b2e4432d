"""
Host platform interface.

All OS and environment access the installer needs goes through a
``HostPlatform``: reading the OS identity, enumerating display adapters,
probing directories, reading and writing PATH variables, running an external
installer and resolving a command. The decision pipeline only talks to this
interface, so it can run against a fake host in tests.
"""

import os
import shutil
import subprocess
from abc import ABC, abstractmethod
from enum import Enum
from typing import List, Optional, Sequence, Tuple


class PathScope(str, Enum):
    """Which persistent PATH variable to touch."""
    USER = "user"
    MACHINE = "machine"


class HostPlatform(ABC):
    """Capabilities of the machine the installer runs on."""

    # --- OS identity ---

    @abstractmethod
    def os_caption(self) -> Optional[str]:
        """Marketing name of the OS, e.g. 'Microsoft Windows Server 2022 Standard'."""

    @abstractmethod
    def os_version(self) -> Tuple[Optional[int], Optional[int]]:
        """(major, build) of the running OS, or (None, None) if unknown."""

    # --- Hardware ---

    @abstractmethod
    def display_adapters(self) -> List[str]:
        """Names of the installed display adapters."""

    # --- Persistent PATH variables ---

    @abstractmethod
    def get_path_variable(self, scope: PathScope) -> str:
        """Current persistent PATH value for the given scope ('' if unset)."""

    @abstractmethod
    def set_path_variable(self, scope: PathScope, value: str) -> None:
        """Replace the persistent PATH value for the given scope."""

    # --- Defaults shared by every host ---

    def path_exists(self, path: str) -> bool:
        return os.path.isdir(path)

    def run_process(self, args: Sequence[str]) -> int:
        """Run a program synchronously and return its exit code."""
        completed = subprocess.run(list(args), check=False)
        return completed.returncode

    def extend_process_path(self, entries: Sequence[str]) -> None:
        """Append entries to this process's PATH so later lookups see them."""
        current = os.environ.get("PATH", "")
        parts = [p for p in current.split(os.pathsep) if p]
        for entry in entries:
            if entry not in parts:
                parts.append(entry)
        os.environ["PATH"] = os.pathsep.join(parts)

    def which(self, command: str) -> Optional[str]:
        return shutil.which(command)

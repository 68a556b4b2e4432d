"""
Custom exceptions for the AIOS installer.

Every fatal condition of an installation run is an ``InstallerError``
subclass. The orchestrator logs the message and maps it to exit code 1.
``DependencyInstallError`` is the one recoverable failure: the CUDA step
catches it and falls back to the standard build.
"""

from typing import Optional


class InstallerError(Exception):
    """Base class for all installer failures."""


class UnsupportedPlatformError(InstallerError):
    """Raised when the host OS is not a supported Windows release."""

    def __init__(self, os_family: str):
        self.os_family = os_family
        super().__init__(f"Unsupported Windows version ({os_family}).")


class DependencyInstallError(InstallerError):
    """Raised when the CUDA toolkit could not be provisioned."""


class ReleaseFetchError(InstallerError):
    """Raised when the release index is unreachable or returns no tag."""

    def __init__(self, message: str, url: Optional[str] = None):
        self.url = url
        full_message = f"Failed to fetch release data: {message}"
        if url:
            full_message += f" (url: {url})"
        super().__init__(full_message)


class DownloadExhaustedError(InstallerError):
    """Raised when every download attempt failed."""

    def __init__(self, url: str, attempts: int):
        self.url = url
        self.attempts = attempts
        super().__init__(
            f"Download failed after {attempts} attempts: {url}. "
            "Please check your internet connection and try again."
        )


class ExtractionError(InstallerError):
    """Raised when the release archive cannot be extracted."""


class BinaryNotFoundError(InstallerError):
    """Raised when the extracted archive does not contain the CLI binary."""

    def __init__(self, binary_name: str):
        self.binary_name = binary_name
        super().__init__(f"Binary '{binary_name}' not found in the extracted files.")


class InstallValidationError(InstallerError):
    """Raised when the installed command cannot be resolved through PATH."""

    def __init__(self, command_name: str):
        self.command_name = command_name
        super().__init__(
            f"Installation validation failed. The '{command_name}' command is not available in PATH."
        )

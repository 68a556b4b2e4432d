"""
aiosinstall - Unattended installer for the AIOS CLI.

Submodules:
    - aiosinstall.host: Injectable OS access (WMI, registry, PATH)
    - aiosinstall.hardware: Platform detection and CUDA gating
    - aiosinstall.release: Release resolution and resilient download
    - aiosinstall.install: Binary placement and PATH update
"""

__version__ = "0.3.0"

# Import submodules for namespace access (aiosinstall.hardware.PlatformProbe)
from . import host
from . import hardware
from . import release
from . import install

# Top-level convenience exports (most common operations)
from .config import InstallerConfig
from .orchestrator import Orchestrator, run_installation
from .schema import (
    OSFamily,
    ArtifactVariant,
    PlatformProfile,
    DependencyDecision,
    ReleaseArtifact,
    DownloadOutcome,
    InstallationResult,
)
from .exceptions import (
    InstallerError,
    UnsupportedPlatformError,
    DependencyInstallError,
    ReleaseFetchError,
    DownloadExhaustedError,
    ExtractionError,
    BinaryNotFoundError,
    InstallValidationError,
)

__all__ = [
    # Submodules
    "host",
    "hardware",
    "release",
    "install",

    # Primary API
    "InstallerConfig",
    "Orchestrator",
    "run_installation",

    # Schemas
    "OSFamily",
    "ArtifactVariant",
    "PlatformProfile",
    "DependencyDecision",
    "ReleaseArtifact",
    "DownloadOutcome",
    "InstallationResult",

    # Exceptions
    "InstallerError",
    "UnsupportedPlatformError",
    "DependencyInstallError",
    "ReleaseFetchError",
    "DownloadExhaustedError",
    "ExtractionError",
    "BinaryNotFoundError",
    "InstallValidationError",
]

"""
Installer Configuration

A single immutable configuration value is built at startup and passed to
every component. Nothing reads repository identity, version strings or the
verbosity flag from module globals.
"""

import ntpath
import os
import tempfile
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field

from .schema import ArtifactVariant

# ============================================================================
# DEFAULTS
# ============================================================================

REPO_OWNER = "DaveHyperspace"
REPO_SLUG = "aios-cli"

CUDA_VERSION = "12.5.1"
CUDA_DRIVER_VERSION = "555.85"
CUDA_PATH_VERSION = "12.5"
CUDA_ROOT = r"C:\Program Files\NVIDIA GPU Computing Toolkit\CUDA"

LOG_FILE_NAME = "hyperspace_install.log"
INSTALL_DIR_NAME = "AIOS"


class InstallerConfig(BaseModel):
    """Immutable settings for one installation run."""
    model_config = ConfigDict(frozen=True)

    # Release distribution
    repo_owner: str = Field(REPO_OWNER, description="GitHub owner of the release repository")
    repo_slug: str = Field(REPO_SLUG, description="GitHub repository name, also the archive prefix")
    api_base: str = Field("https://api.github.com", description="Base URL of the release index API")
    download_base: str = Field("https://github.com", description="Base URL for release asset downloads")
    target_triple: str = Field("windows-msvc", description="Target suffix after 'x86_64-pc-'")

    # Installed binary
    binary_name: str = Field("aios-cli.exe", description="File searched for inside the archive")
    command_name: str = Field("aios-cli", description="Command resolved through PATH to validate the install")
    install_dir: str = Field(ntpath.join(r"C:\Program Files", INSTALL_DIR_NAME), description="Directory the binary is moved to")

    # CUDA toolkit
    cuda_version: str = Field(CUDA_VERSION, description="Full CUDA toolkit version")
    cuda_driver_version: str = Field(CUDA_DRIVER_VERSION, description="Driver version bundled with the local installer")
    cuda_path_version: str = Field(CUDA_PATH_VERSION, description="major.minor used in the toolkit directory name")
    cuda_root: str = Field(CUDA_ROOT, description="Parent directory of versioned CUDA toolkits")
    cuda_silent_flag: str = Field("/s", description="Argument that makes the CUDA installer run unattended")
    gpu_vendor_marker: str = Field("NVIDIA", description="Adapter name substring identifying a compatible GPU")

    # Network
    max_download_attempts: int = Field(3, ge=1, description="Transfer attempts before giving up")
    retry_backoff_seconds: float = Field(5.0, ge=0, description="Fixed delay between attempts")
    request_timeout: Optional[float] = Field(30.0, description="Per-request connect/read timeout in seconds")
    user_agent: str = Field("aios-installer", description="User-Agent header for HTTP requests")

    # Logging
    log_file: str = Field(os.path.join(tempfile.gettempdir(), LOG_FILE_NAME), description="Append-only log file")
    verbose: bool = Field(False, description="Echo every log line to the console")

    @classmethod
    def from_environment(cls, verbose: bool = False, **overrides) -> "InstallerConfig":
        """
        Build the configuration from the current process environment.

        ``%ProgramFiles%`` decides the install directory and ``%TEMP%`` the
        log file location. Keyword overrides win over both.
        """
        program_files = os.environ.get("ProgramFiles", r"C:\Program Files")
        temp_dir = os.environ.get("TEMP") or tempfile.gettempdir()
        values = {
            "install_dir": ntpath.join(program_files, INSTALL_DIR_NAME),
            "log_file": os.path.join(temp_dir, LOG_FILE_NAME),
            "verbose": verbose,
        }
        values.update(overrides)
        return cls(**values)

    # --- Derived values ---

    @property
    def cuda_home(self) -> str:
        return ntpath.join(self.cuda_root, f"v{self.cuda_path_version}")

    @property
    def cuda_path_entries(self) -> List[str]:
        """Toolkit directories appended to the machine PATH after install."""
        return [ntpath.join(self.cuda_home, "bin"), ntpath.join(self.cuda_home, "libnvvp")]

    @property
    def cuda_installer_url(self) -> str:
        return (
            f"https://developer.download.nvidia.com/compute/cuda/{self.cuda_version}/local_installers/"
            f"cuda_{self.cuda_version}_{self.cuda_driver_version}_windows.exe"
        )

    @property
    def release_api_url(self) -> str:
        return f"{self.api_base}/repos/{self.repo_owner}/{self.repo_slug}/releases/latest"

    def artifact_url(self, variant: ArtifactVariant) -> str:
        suffix = "-cuda" if variant == ArtifactVariant.ACCELERATED else ""
        return (
            f"{self.download_base}/{self.repo_owner}/{self.repo_slug}/releases/latest/download/"
            f"{self.repo_slug}-x86_64-pc-{self.target_triple}{suffix}.zip"
        )

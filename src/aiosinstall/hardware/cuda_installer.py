#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
CUDA Dependency Installer

Decides whether the CUDA toolkit is usable and, with the user's consent,
provisions it by running NVIDIA's silent local installer.

Decision table:
- no NVIDIA GPU                   -> not engaged     (attempt=False, succeeded=None)
- toolkit already present         -> satisfied       (attempt=False, succeeded=True)
- user declines                   -> skipped         (attempt=False, succeeded=False)
- install ran, toolkit found      -> installed       (attempt=True,  succeeded=True)
- install ran, toolkit missing    -> failed          (attempt=True,  succeeded=False)

A failed install never aborts the run. The caller falls back to the
standard build. The presence check after the installer exits is the source of
truth, not the installer's exit code.
"""

import functools
import logging
from pathlib import Path
from typing import Callable, Optional

from ..config import InstallerConfig
from ..exceptions import DependencyInstallError
from ..host import HostPlatform, PathScope
from ..install.path_env import append_path_entries
from ..release.fetcher import download_with_retry
from ..schema import DependencyDecision, DownloadOutcome, PlatformProfile

logger = logging.getLogger(__name__)

CONSENT_PROMPT = "Do you want to install CUDA drivers? (y/n) "
INSTALLER_FILE_NAME = "cuda_installer.exe"
AFFIRMATIVE_ANSWERS = {"y", "yes"}

Downloader = Callable[[str, Path], DownloadOutcome]


def ask_consent(prompt: str, input_fn: Callable[[str], str] = input) -> bool:
    """
    Ask a yes/no question on the console.

    Only "y" or "yes" (any case) counts as consent. A closed stdin, as in a
    fully unattended run, counts as "no".
    """
    try:
        answer = input_fn(prompt)
    except EOFError:
        return False
    return answer.strip().lower() in AFFIRMATIVE_ANSWERS


class CudaInstaller:
    """Optional just-in-time installation of the CUDA toolkit."""

    def __init__(
        self,
        config: InstallerConfig,
        host: HostPlatform,
        work_dir,
        consent: Callable[[str], bool] = ask_consent,
        downloader: Optional[Downloader] = None,
    ):
        self.config = config
        self.host = host
        self.work_dir = Path(work_dir)
        self.consent = consent
        self.downloader = downloader or functools.partial(
            download_with_retry,
            max_attempts=config.max_download_attempts,
            backoff_seconds=config.retry_backoff_seconds,
            timeout=config.request_timeout,
        )

    def maybe_install(self, profile: PlatformProfile) -> DependencyDecision:
        """Run the gating decision for one PlatformProfile."""
        if not profile.has_compatible_gpu:
            logger.info("No NVIDIA GPU detected. Proceeding without CUDA.")
            return DependencyDecision(attempt_install=False, install_succeeded=None)

        logger.info("NVIDIA GPU detected.")
        if profile.dependency_already_present:
            logger.info("CUDA is already installed.")
            return DependencyDecision(attempt_install=False, install_succeeded=True)

        logger.info("CUDA is not installed.")
        if not self.consent(CONSENT_PROMPT):
            logger.info("Proceeding without CUDA.")
            return DependencyDecision(attempt_install=False, install_succeeded=False)

        try:
            self.install()
        except DependencyInstallError as e:
            logger.error(f"CUDA installation failed: {e}")
            return DependencyDecision(attempt_install=True, install_succeeded=False)

        logger.info("CUDA installation completed successfully.")
        return DependencyDecision(attempt_install=True, install_succeeded=True)

    def install(self) -> None:
        """
        Download and run the CUDA installer, then verify the toolkit exists.

        Raises:
            DependencyInstallError: The installer could not be downloaded or
                launched, or the toolkit directory is missing afterwards
        """
        installer_path = self.work_dir / INSTALLER_FILE_NAME

        logger.info("Downloading CUDA installer...")
        outcome = self.downloader(self.config.cuda_installer_url, installer_path)
        if not outcome.succeeded:
            raise DependencyInstallError(
                f"could not download the CUDA installer after {outcome.attempts} attempts"
            )

        logger.info("Installing CUDA...")
        try:
            exit_code = self.host.run_process([str(installer_path), self.config.cuda_silent_flag])
        except OSError as e:
            raise DependencyInstallError(f"could not launch the CUDA installer: {e}") from e
        finally:
            installer_path.unlink(missing_ok=True)

        logger.info(f"CUDA installer exited with code {exit_code}.")

        if not self.host.path_exists(self.config.cuda_home):
            raise DependencyInstallError(
                "CUDA installation validation failed. Please check your installation."
            )

        self._register_path()
        logger.info(f"CUDA {self.config.cuda_version} installation complete.")

    def _register_path(self) -> None:
        """Expose the toolkit's bin and libnvvp directories on PATH."""
        entries = self.config.cuda_path_entries
        try:
            current = self.host.get_path_variable(PathScope.MACHINE)
            updated, added = append_path_entries(current, entries)
            if added:
                self.host.set_path_variable(PathScope.MACHINE, updated)
                logger.info(f"Added to system PATH: {'; '.join(added)}")
        except OSError as e:
            logger.warning(f"Could not update the system PATH for CUDA: {e}")
        self.host.extend_process_path(entries)

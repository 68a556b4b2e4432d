"""
Installation orchestrator.

Sequences one installation run:

    detect platform -> fetch latest tag -> CUDA gating -> resolve artifact
    -> download with retry -> install and validate

Every fatal condition is logged at ERROR and turned into exit code 1. A
failed CUDA installation is not fatal: the run continues with the standard
build.
"""

import logging
import shutil
import tempfile
import time
from pathlib import Path
from typing import Callable, Optional

import requests

from .config import InstallerConfig
from .exceptions import DownloadExhaustedError, InstallerError, UnsupportedPlatformError
from .hardware import CudaInstaller, PlatformProbe, ask_consent
from .host import HostPlatform, WindowsHost
from .install import BinaryInstaller
from .release import ReleaseResolver, download_with_retry
from .schema import InstallationResult

logger = logging.getLogger(__name__)

EXIT_SUCCESS = 0
EXIT_FAILURE = 1

WORK_DIR_PREFIX = "aios-install-"


class Orchestrator:
    """Runs the full installation pipeline once."""

    def __init__(
        self,
        config: InstallerConfig,
        host: Optional[HostPlatform] = None,
        consent: Callable[[str], bool] = ask_consent,
        session: Optional[requests.Session] = None,
        sleep: Callable[[float], None] = time.sleep,
    ):
        self.config = config
        self.host = host or WindowsHost()
        self.consent = consent
        self.sleep = sleep
        self._owns_session = session is None
        self.session = session or requests.Session()
        if self._owns_session:
            self.session.headers["User-Agent"] = config.user_agent

    def run(self) -> int:
        """Run the pipeline and return the process exit code."""
        # One scratch directory per run, never shared between processes
        work_dir = Path(tempfile.mkdtemp(prefix=WORK_DIR_PREFIX))
        try:
            self.install(work_dir)
            return EXIT_SUCCESS
        except InstallerError as e:
            logger.error(str(e))
        except OSError as e:
            logger.error(f"Installation failed: {e}")
        except Exception:
            logger.exception("Installation failed with an unexpected error")
        finally:
            shutil.rmtree(work_dir, ignore_errors=True)
            if self._owns_session:
                self.session.close()
        return EXIT_FAILURE

    def _download(self, url: str, destination: Path):
        return download_with_retry(
            url,
            destination,
            max_attempts=self.config.max_download_attempts,
            backoff_seconds=self.config.retry_backoff_seconds,
            session=self.session,
            sleep=self.sleep,
            timeout=self.config.request_timeout,
        )

    def install(self, work_dir: Path) -> InstallationResult:
        """
        Execute every stage inside ``work_dir``.

        Raises:
            InstallerError: On any fatal condition
        """
        logger.info("Starting AIOS CLI installation...")

        profile = PlatformProbe(self.config, self.host).detect()
        logger.info(f"Detected Windows version: {profile.os_family.value}")
        if not profile.supported:
            raise UnsupportedPlatformError(profile.os_family.value)

        resolver = ReleaseResolver(self.config, session=self.session)
        logger.info("Fetching latest release...")
        version_tag = resolver.latest_tag()
        logger.info(f"Latest version: {version_tag}")

        cuda = CudaInstaller(
            self.config,
            self.host,
            work_dir,
            consent=self.consent,
            downloader=self._download,
        )
        decision = cuda.maybe_install(profile)
        if decision.attempt_install and not decision.install_succeeded:
            logger.warning(
                "CUDA acceleration is not enabled for this installation. "
                "Proceeding with the non-CUDA version."
            )

        artifact = resolver.artifact_for(version_tag, decision)
        logger.info(f"Download URL: {artifact.download_url}")
        logger.info(f"Downloading {artifact.file_name}...")

        outcome = self._download(artifact.download_url, work_dir / artifact.file_name)
        if not outcome.succeeded:
            raise DownloadExhaustedError(artifact.download_url, outcome.attempts)
        logger.info(f"Download complete: {artifact.file_name}")

        result = BinaryInstaller(self.config, self.host).install(
            outcome.local_path, work_dir / "extracted"
        )
        logger.info(f"Installation completed successfully. {self.config.command_name} {version_tag} ({artifact.variant.value}) is ready.")
        return result


def run_installation(config: InstallerConfig, **kwargs) -> int:
    """Convenience wrapper: build an Orchestrator and run it."""
    return Orchestrator(config, **kwargs).run()

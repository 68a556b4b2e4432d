"""
Binary installation step.

Extracts the release archive, moves the aios-cli binary into the install
directory, puts that directory on the user's PATH and checks that the
command resolves.
"""

import logging
import shutil
import zipfile
from pathlib import Path

from ..config import InstallerConfig
from ..exceptions import BinaryNotFoundError, ExtractionError, InstallValidationError
from ..host import HostPlatform, PathScope
from ..schema import InstallationResult
from .path_env import append_path_entries

logger = logging.getLogger(__name__)


def extract_archive(archive_path: Path, scratch_dir: Path) -> None:
    try:
        with zipfile.ZipFile(archive_path) as archive:
            archive.extractall(scratch_dir)
    except (zipfile.BadZipFile, OSError) as e:
        raise ExtractionError(f"Failed to extract {archive_path.name}: {e}") from e


def find_binary(root: Path, binary_name: str):
    """First file named ``binary_name`` below ``root`` (sorted order), or None."""
    matches = sorted(p for p in root.rglob(binary_name) if p.is_file())
    return matches[0] if matches else None


class BinaryInstaller:
    """Places the downloaded CLI binary and makes it invocable."""

    def __init__(self, config: InstallerConfig, host: HostPlatform):
        self.config = config
        self.host = host

    def install(self, archive_path, scratch_dir) -> InstallationResult:
        """
        Install the binary contained in ``archive_path``.

        Args:
            archive_path: Downloaded zip archive
            scratch_dir: Empty directory to extract into (removed afterwards)

        Returns:
            InstallationResult: with ``validated=True``

        Raises:
            ExtractionError: The archive could not be read
            BinaryNotFoundError: The archive has no aios-cli binary; PATH is untouched
            InstallValidationError: The command does not resolve after install
        """
        archive_path = Path(archive_path)
        scratch_dir = Path(scratch_dir)

        try:
            logger.info(f"Extracting {archive_path.name}...")
            extract_archive(archive_path, scratch_dir)

            binary = find_binary(scratch_dir, self.config.binary_name)
            if binary is None:
                raise BinaryNotFoundError(self.config.binary_name)

            install_dir = Path(self.config.install_dir)
            logger.info(f"Moving binary to {install_dir}")
            install_dir.mkdir(parents=True, exist_ok=True)
            target = install_dir / binary.name
            shutil.move(str(binary), str(target))
        finally:
            archive_path.unlink(missing_ok=True)
            shutil.rmtree(scratch_dir, ignore_errors=True)

        path_updated = self._add_to_user_path(str(install_dir))

        resolved = self.host.which(self.config.command_name)
        if not resolved:
            raise InstallValidationError(self.config.command_name)
        logger.info(f"'{self.config.command_name}' resolves to {resolved}")

        return InstallationResult(installed_path=str(target), path_updated=path_updated, validated=True)

    def _add_to_user_path(self, directory: str) -> bool:
        """Append ``directory`` to the user PATH unless an equivalent entry exists."""
        current = self.host.get_path_variable(PathScope.USER)
        updated, added = append_path_entries(current, [directory])
        if added:
            self.host.set_path_variable(PathScope.USER, updated)
            logger.info(f"Added {directory} to the user PATH")
        else:
            logger.info(f"{directory} is already on the user PATH")
        self.host.extend_process_path([directory])
        return bool(added)

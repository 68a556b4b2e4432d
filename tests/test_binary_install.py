"""
Tests for archive extraction, binary placement, PATH update and validation.
"""

from pathlib import Path

import pytest

from aiosinstall.exceptions import BinaryNotFoundError, ExtractionError, InstallValidationError
from aiosinstall.host import PathScope
from aiosinstall.install.binary import BinaryInstaller, extract_archive, find_binary

from conftest import CLI_ARCHIVE_MEMBERS, FakeHost, write_zip


@pytest.fixture
def archive(tmp_path):
    return write_zip(tmp_path / "aios-cli-x86_64-pc-windows-msvc.zip", CLI_ARCHIVE_MEMBERS)


class TestHelpers:

    def test_extract_archive(self, tmp_path, archive):
        scratch = tmp_path / "scratch"
        extract_archive(archive, scratch)

        assert (scratch / "aios-cli-x86_64-pc-windows-msvc" / "README.md").read_bytes() == b"# aios-cli"

    def test_corrupt_archive(self, tmp_path):
        broken = tmp_path / "broken.zip"
        broken.write_bytes(b"<html>404 Not Found</html>")

        with pytest.raises(ExtractionError, match="broken.zip"):
            extract_archive(broken, tmp_path / "scratch")

    def test_find_binary_is_recursive(self, tmp_path):
        nested = tmp_path / "a" / "b"
        nested.mkdir(parents=True)
        (nested / "aios-cli.exe").write_bytes(b"MZ")

        assert find_binary(tmp_path, "aios-cli.exe") == nested / "aios-cli.exe"

    def test_find_binary_missing(self, tmp_path):
        assert find_binary(tmp_path, "aios-cli.exe") is None


class TestBinaryInstaller:

    def test_installs_and_validates(self, config, tmp_path, archive):
        host = FakeHost(user_path=r"C:\Users\dev\AppData\Local\Microsoft\WindowsApps")
        scratch = tmp_path / "extracted"

        result = BinaryInstaller(config, host).install(archive, scratch)

        target = Path(config.install_dir) / "aios-cli.exe"
        assert target.read_bytes() == b"MZ fake binary"
        assert result.installed_path == str(target)
        assert result.path_updated is True
        assert result.validated is True

        assert host.path_writes == [
            (PathScope.USER, r"C:\Users\dev\AppData\Local\Microsoft\WindowsApps;" + config.install_dir)
        ]
        assert host.process_path == [config.install_dir]

        # Archive and scratch directory are cleaned up
        assert not archive.exists()
        assert not scratch.exists()

    def test_second_run_does_not_duplicate_path_entry(self, config, tmp_path):
        host = FakeHost()
        installer = BinaryInstaller(config, host)

        first = installer.install(write_zip(tmp_path / "one.zip", CLI_ARCHIVE_MEMBERS), tmp_path / "x1")
        second = installer.install(write_zip(tmp_path / "two.zip", CLI_ARCHIVE_MEMBERS), tmp_path / "x2")

        assert first.path_updated is True
        assert second.path_updated is False
        assert len(host.path_writes) == 1
        assert host.path_vars[PathScope.USER] == config.install_dir

    def test_equivalent_spelling_counts_as_present(self, config, archive, tmp_path):
        original = config.install_dir.upper() + "\\"
        host = FakeHost(user_path=original)

        result = BinaryInstaller(config, host).install(archive, tmp_path / "extracted")

        assert result.path_updated is False
        assert host.path_writes == []
        assert host.path_vars[PathScope.USER] == original

    def test_replaces_older_binary(self, config, archive, tmp_path):
        install_dir = Path(config.install_dir)
        install_dir.mkdir(parents=True)
        (install_dir / "aios-cli.exe").write_bytes(b"old version")

        BinaryInstaller(config, FakeHost()).install(archive, tmp_path / "extracted")

        assert (install_dir / "aios-cli.exe").read_bytes() == b"MZ fake binary"

    def test_missing_binary_leaves_path_untouched(self, config, tmp_path):
        archive = write_zip(tmp_path / "empty.zip", {"docs/README.md": b"nothing here"})
        host = FakeHost()

        with pytest.raises(BinaryNotFoundError, match="aios-cli.exe"):
            BinaryInstaller(config, host).install(archive, tmp_path / "extracted")

        assert host.path_writes == []
        assert host.process_path == []
        assert not Path(config.install_dir).exists()

    def test_failed_install_still_cleans_up(self, config, tmp_path):
        archive = write_zip(tmp_path / "empty.zip", {"docs/README.md": b"nothing here"})
        scratch = tmp_path / "extracted"

        with pytest.raises(BinaryNotFoundError):
            BinaryInstaller(config, FakeHost()).install(archive, scratch)

        assert not archive.exists()
        assert not scratch.exists()

    def test_corrupt_archive_is_removed(self, config, tmp_path):
        broken = tmp_path / "broken.zip"
        broken.write_bytes(b"<html>404 Not Found</html>")

        with pytest.raises(ExtractionError):
            BinaryInstaller(config, FakeHost()).install(broken, tmp_path / "extracted")

        assert not broken.exists()

    def test_unresolvable_command_fails_validation(self, config, archive, tmp_path):
        class NoLookupHost(FakeHost):
            def which(self, command):
                return None

        host = NoLookupHost()

        with pytest.raises(InstallValidationError, match="'aios-cli' command is not available"):
            BinaryInstaller(config, host).install(archive, tmp_path / "extracted")

        assert (Path(config.install_dir) / "aios-cli.exe").is_file()

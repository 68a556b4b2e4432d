"""
Shared fixtures: a fake host, a fake HTTP session and archive helpers.
"""

import io
import logging
import zipfile
from pathlib import Path

import pytest
import requests

from aiosinstall.config import InstallerConfig
from aiosinstall.host import HostPlatform, PathScope


# ============================================================================
# Fake host
# ============================================================================


class FakeHost(HostPlatform):
    """In-memory HostPlatform. Only the install directory touches the real disk."""

    def __init__(
        self,
        caption="Microsoft Windows 11 Pro",
        version=(10, 22631),
        adapters=(),
        existing_dirs=(),
        user_path="",
        machine_path="",
        installer_creates=None,
        installer_exit_code=0,
    ):
        self.caption = caption
        self.version = version
        self.adapters = list(adapters)
        self.existing_dirs = set(existing_dirs)
        self.path_vars = {PathScope.USER: user_path, PathScope.MACHINE: machine_path}
        self.installer_creates = installer_creates
        self.installer_exit_code = installer_exit_code

        self.process_path = []
        self.run_calls = []
        self.path_writes = []

    def os_caption(self):
        return self.caption

    def os_version(self):
        return self.version

    def display_adapters(self):
        return list(self.adapters)

    def path_exists(self, path):
        return path in self.existing_dirs

    def get_path_variable(self, scope):
        return self.path_vars[scope]

    def set_path_variable(self, scope, value):
        self.path_vars[scope] = value
        self.path_writes.append((scope, value))

    def run_process(self, args):
        self.run_calls.append(list(args))
        if self.installer_creates:
            self.existing_dirs.add(self.installer_creates)
        return self.installer_exit_code

    def extend_process_path(self, entries):
        for entry in entries:
            if entry not in self.process_path:
                self.process_path.append(entry)

    def which(self, command):
        for directory in self.process_path:
            candidate = Path(directory) / f"{command}.exe"
            if candidate.is_file():
                return str(candidate)
        return None


# ============================================================================
# Fake HTTP
# ============================================================================


class FakeResponse:
    """Enough of requests.Response for the resolver and the fetcher."""

    def __init__(self, status_code=200, json_data=None, content=b"", json_error=False):
        self.status_code = status_code
        self._json_data = json_data
        self._content = content
        self._json_error = json_error

    @property
    def ok(self):
        return 200 <= self.status_code < 300

    def json(self):
        if self._json_error:
            raise ValueError("Expecting value: line 1 column 1 (char 0)")
        return self._json_data

    def raise_for_status(self):
        if not self.ok:
            raise requests.HTTPError(f"{self.status_code} Server Error")

    def iter_content(self, chunk_size=1):
        for i in range(0, len(self._content), max(chunk_size, 1)):
            yield self._content[i:i + chunk_size]

    def __enter__(self):
        return self

    def __exit__(self, *exc):
        return False


class FakeSession:
    """
    Routes GET requests by URL.

    Each route holds a list of responses or exceptions consumed in order; the
    last entry repeats. Unknown URLs raise ConnectionError.
    """

    def __init__(self, routes=None):
        self.routes = {}
        for url, items in (routes or {}).items():
            self.routes[url] = list(items) if isinstance(items, list) else [items]
        self.calls = []
        self.headers = {}
        self.closed = False

    def get(self, url, **kwargs):
        self.calls.append(url)
        queue = self.routes.get(url)
        if not queue:
            raise requests.ConnectionError(f"No route to {url}")
        item = queue.pop(0) if len(queue) > 1 else queue[0]
        if isinstance(item, Exception):
            raise item
        return item

    def close(self):
        self.closed = True

    def __enter__(self):
        return self

    def __exit__(self, *exc):
        self.close()
        return False


# ============================================================================
# Archives
# ============================================================================


def zip_bytes(members):
    """Build a zip archive in memory from {name: bytes}."""
    buffer = io.BytesIO()
    with zipfile.ZipFile(buffer, "w") as archive:
        for name, data in members.items():
            archive.writestr(name, data)
    return buffer.getvalue()


def write_zip(path, members):
    path = Path(path)
    path.write_bytes(zip_bytes(members))
    return path


CLI_ARCHIVE_MEMBERS = {
    "aios-cli-x86_64-pc-windows-msvc/aios-cli.exe": b"MZ fake binary",
    "aios-cli-x86_64-pc-windows-msvc/README.md": b"# aios-cli",
}


# ============================================================================
# Fixtures
# ============================================================================


@pytest.fixture
def config(tmp_path):
    return InstallerConfig(
        install_dir=str(tmp_path / "Program Files" / "AIOS"),
        log_file=str(tmp_path / "logs" / "hyperspace_install.log"),
    )


@pytest.fixture
def no_sleep():
    calls = []
    return calls.append, calls


@pytest.fixture(autouse=True)
def reset_package_logger():
    """Undo configure_logging() so caplog keeps seeing package records."""
    yield
    logger = logging.getLogger("aiosinstall")
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()
    logger.propagate = True
    logger.setLevel(logging.NOTSET)

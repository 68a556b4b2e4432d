"""
Logging setup for installation runs.

Every record is appended to the per-user log file as
``2024-06-01 12:00:00 [INFO] message``. The console only shows ERROR lines,
or every line when verbose mode is on.
"""

import logging
import os
import sys
from pathlib import Path

from .config import InstallerConfig

LOGGER_NAME = "aiosinstall"

FILE_FORMAT = "%(asctime)s [%(levelname)s] %(message)s"
CONSOLE_FORMAT = "[%(levelname)s] %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

# Short level names used in the log file and on the console
LEVEL_NAMES = {
    logging.WARNING: "WARN",
    logging.CRITICAL: "ERROR",
}


class InstallerFormatter(logging.Formatter):
    """Formatter that writes WARNING as WARN."""

    def format(self, record: logging.LogRecord) -> str:
        original = record.levelname
        record.levelname = LEVEL_NAMES.get(record.levelno, original)
        try:
            return super().format(record)
        finally:
            record.levelname = original


def configure_logging(config: InstallerConfig) -> logging.Logger:
    """
    Attach the file and console handlers to the package logger.

    Calling it again replaces the handlers installed by a previous call, so
    repeated runs in one process do not duplicate output.

    Args:
        config: Run configuration (log file path and verbosity)

    Returns:
        The configured package logger
    """
    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(logging.INFO)
    logger.propagate = False

    for handler in list(logger.handlers):
        if getattr(handler, "_aiosinstall_handler", False):
            logger.removeHandler(handler)
            handler.close()

    Path(os.path.dirname(config.log_file) or ".").mkdir(parents=True, exist_ok=True)
    file_handler = logging.FileHandler(config.log_file, mode="a", encoding="utf-8")
    file_handler.setLevel(logging.INFO)
    file_handler.setFormatter(InstallerFormatter(fmt=FILE_FORMAT, datefmt=DATE_FORMAT))

    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setLevel(logging.INFO if config.verbose else logging.ERROR)
    console_handler.setFormatter(InstallerFormatter(fmt=CONSOLE_FORMAT))

    for handler in (file_handler, console_handler):
        handler._aiosinstall_handler = True
        logger.addHandler(handler)

    return logger

"""
Download with bounded retry.

A fixed-delay retry loop around a streaming ``requests`` GET. This is the
installer's only resilience primitive: no exponential backoff, no jitter.
Re-downloading to the same destination overwrites the previous file.
"""

import logging
import time
from pathlib import Path
from typing import Callable, Optional

import requests

from ..schema import DownloadOutcome

logger = logging.getLogger(__name__)

DEFAULT_MAX_ATTEMPTS = 3
DEFAULT_BACKOFF_SECONDS = 5.0
CHUNK_SIZE = 1024 * 1024


def _transfer(session: requests.Session, url: str, destination: Path, timeout: Optional[float]) -> None:
    """One blocking transfer of ``url`` into ``destination``."""
    with session.get(url, stream=True, timeout=timeout) as response:
        response.raise_for_status()
        with open(destination, "wb") as f:
            for chunk in response.iter_content(chunk_size=CHUNK_SIZE):
                if chunk:
                    f.write(chunk)


def download_with_retry(
    url: str,
    destination,
    max_attempts: int = DEFAULT_MAX_ATTEMPTS,
    backoff_seconds: float = DEFAULT_BACKOFF_SECONDS,
    session: Optional[requests.Session] = None,
    sleep: Callable[[float], None] = time.sleep,
    timeout: Optional[float] = None,
) -> DownloadOutcome:
    """
    Download ``url`` to ``destination``, retrying transport failures.

    Every failed attempt logs a warning. The loop sleeps ``backoff_seconds``
    between attempts (not after the last one) and gives up after
    ``max_attempts`` failures.

    Args:
        url: File to download
        destination: Local file path (parent directories are created)
        max_attempts: Attempt budget, at least 1
        backoff_seconds: Fixed delay between attempts
        session: Optional requests.Session (a new one is created otherwise)
        sleep: Sleep function, injectable for tests
        timeout: Per-request connect/read timeout in seconds

    Returns:
        DownloadOutcome: attempts made, success flag and local path

    Example:
        >>> outcome = download_with_retry(url, "C:/Temp/aios-cli.zip")
        >>> if not outcome.succeeded:
        ...     print(f"gave up after {outcome.attempts} attempts")
    """
    if max_attempts < 1:
        raise ValueError(f"max_attempts must be at least 1, got {max_attempts}")

    destination = Path(destination)
    destination.parent.mkdir(parents=True, exist_ok=True)
    own_session = session is None
    session = session or requests.Session()

    try:
        for attempt in range(1, max_attempts + 1):
            try:
                _transfer(session, url, destination, timeout)
            except (requests.RequestException, OSError) as e:
                destination.unlink(missing_ok=True)
                if attempt == max_attempts:
                    logger.warning(f"Attempt {attempt} failed: {e}")
                    break
                logger.warning(f"Attempt {attempt} failed: {e}. Retrying in {backoff_seconds:g} seconds...")
                sleep(backoff_seconds)
                continue

            logger.info(f"Download successful: {destination}")
            return DownloadOutcome(
                attempts=attempt,
                max_attempts=max_attempts,
                succeeded=True,
                local_path=str(destination),
            )
    finally:
        if own_session:
            session.close()

    logger.error(f"Failed to download after {max_attempts} attempts.")
    return DownloadOutcome(attempts=max_attempts, max_attempts=max_attempts, succeeded=False)

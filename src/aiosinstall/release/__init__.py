"""
Release resolution and download.

Finds the latest aios-cli release and fetches its archive with bounded retry.
"""

from .fetcher import download_with_retry
from .resolver import ReleaseResolver, select_variant, variant_without_install

__all__ = [
    "ReleaseResolver",
    "select_variant",
    "variant_without_install",
    "download_with_retry",
]

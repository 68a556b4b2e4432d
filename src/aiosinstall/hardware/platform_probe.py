#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Platform Probe

Classifies the host OS, looks for an NVIDIA display adapter and checks
whether the expected CUDA toolkit is already installed. The result is a
validated PlatformProfile.

Classification rules:
- an OS caption naming "Server 2022" is Windows Server 2022
- major version 10 with build >= 22000 is Windows 11, lower builds are Windows 10
- anything else is unsupported

An unsupported OS is reported in the profile, not raised. Deciding what to do
with it is the orchestrator's job.
"""

import logging
from typing import Iterable, Optional

from ..config import InstallerConfig
from ..host import HostPlatform
from ..schema import OSFamily, PlatformProfile

logger = logging.getLogger(__name__)

# --- Constants ---
SERVER_2022_MARKER = "Server 2022"
MODERN_DESKTOP_MAJOR = 10
WINDOWS_11_MIN_BUILD = 22000


def classify_os(caption: Optional[str], major: Optional[int], build: Optional[int]) -> OSFamily:
    """
    Map raw OS identity values to an OSFamily.

    Args:
        caption: OS caption, e.g. "Microsoft Windows 11 Pro"
        major: Major version number reported by the OS
        build: Build number reported by the OS

    Returns:
        OSFamily: The classified release, or UNSUPPORTED
    """
    if caption and SERVER_2022_MARKER in caption:
        return OSFamily.SERVER_2022
    if major == MODERN_DESKTOP_MAJOR:
        if build is not None and build >= WINDOWS_11_MIN_BUILD:
            return OSFamily.WINDOWS_11
        return OSFamily.WINDOWS_10
    return OSFamily.UNSUPPORTED


def has_vendor_adapter(adapter_names: Iterable[str], marker: str) -> bool:
    """True if any adapter name contains the vendor marker (case-insensitive)."""
    needle = marker.lower()
    return any(needle in (name or "").lower() for name in adapter_names)


class PlatformProbe:
    """Reads live host state and builds the run's PlatformProfile."""

    def __init__(self, config: InstallerConfig, host: HostPlatform):
        self.config = config
        self.host = host

    def detect_os(self) -> OSFamily:
        major, build = self.host.os_version()
        return classify_os(self.host.os_caption(), major, build)

    def cuda_present(self) -> bool:
        return self.host.path_exists(self.config.cuda_home)

    def detect(self) -> PlatformProfile:
        """Run every probe once. Has no side effects."""
        os_family = self.detect_os()
        adapters = self.host.display_adapters()
        logger.debug(f"Display adapters: {adapters}")

        return PlatformProfile(
            os_family=os_family,
            has_compatible_gpu=has_vendor_adapter(adapters, self.config.gpu_vendor_marker),
            dependency_already_present=self.cuda_present(),
            gpu_names=adapters,
        )

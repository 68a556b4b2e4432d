"""
Hardware detection and CUDA dependency gating.

Provides the host's PlatformProfile and the optional CUDA installation step.
"""

from .platform_probe import PlatformProbe, classify_os, has_vendor_adapter
from .cuda_installer import CudaInstaller, ask_consent

__all__ = [
    "PlatformProbe",
    "classify_os",
    "has_vendor_adapter",
    "CudaInstaller",
    "ask_consent",
]

#!/usr/bin/env python3
"""
Dry-run script: show what the installer would do on this machine.

Probes the OS and display adapters, resolves the latest release and prints
the archive the installer would download. Nothing is installed and no
consent prompt is shown.
"""

import requests

from aiosinstall import InstallerConfig, ReleaseFetchError
from aiosinstall.hardware import PlatformProbe
from aiosinstall.host import WindowsHost
from aiosinstall.release import ReleaseResolver, variant_without_install


def main():
    config = InstallerConfig.from_environment()

    print("Probing platform...")
    profile = PlatformProbe(config, WindowsHost()).detect()

    print("\n=== Platform ===")
    print(f"Windows: {profile.os_family.value} ({'supported' if profile.supported else 'not supported'})")
    if profile.gpu_names:
        for name in profile.gpu_names:
            print(f"  Adapter: {name}")
    else:
        print("  Adapter: none reported")
    print(f"NVIDIA GPU: {'yes' if profile.has_compatible_gpu else 'no'}")
    print(f"CUDA {config.cuda_path_version}: {'present' if profile.dependency_already_present else 'missing'}")

    # Assumes the user declines a CUDA install
    variant = variant_without_install(profile)

    print("\n=== Release ===")
    with requests.Session() as session:
        try:
            tag = ReleaseResolver(config, session=session).latest_tag()
        except ReleaseFetchError as e:
            print(f"Could not reach the release index: {e}")
            return
    print(f"Latest: {tag}")
    print(f"Variant: {variant.value}")
    print(f"URL: {config.artifact_url(variant)}")
    print(f"Install dir: {config.install_dir}")


if __name__ == "__main__":
    main()

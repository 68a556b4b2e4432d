#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Windows host implementation.

OS identity and display adapters come from WMI (``wmi`` package), with the
registry and NVML (``pynvml``) as fallbacks when WMI is not available.
Persistent PATH values are read and written through ``winreg``; after a
write, a WM_SETTINGCHANGE broadcast tells running shells to reload their
environment.

On non-Windows hosts every probe degrades to "unknown" instead of raising,
which makes the platform classify as unsupported.
"""

import ctypes
import logging
import sys
from typing import List, Optional, Tuple

from ..utils import safe_import
from .base import HostPlatform, PathScope

logger = logging.getLogger(__name__)

# Registry locations of the persistent PATH variables
USER_ENVIRONMENT_KEY = r"Environment"
MACHINE_ENVIRONMENT_KEY = r"SYSTEM\CurrentControlSet\Control\Session Manager\Environment"
CURRENT_VERSION_KEY = r"SOFTWARE\Microsoft\Windows NT\CurrentVersion"

HWND_BROADCAST = 0xFFFF
WM_SETTINGCHANGE = 0x001A
SMTO_ABORTIFHUNG = 0x0002


class WindowsHost(HostPlatform):
    """HostPlatform backed by WMI, the registry and the Win32 API."""

    def __init__(self):
        self._winreg = safe_import("winreg")
        self._wmi_client = None

    def _wmi(self):
        """Lazily connect to WMI. Returns None when WMI is unavailable."""
        if self._wmi_client is None:
            wmi = safe_import("wmi")
            if not wmi:
                return None
            try:
                self._wmi_client = wmi.WMI()
            except Exception as e:
                logger.debug(f"WMI connection failed: {e}")
                return None
        return self._wmi_client

    # --- OS identity ---

    def os_caption(self) -> Optional[str]:
        client = self._wmi()
        if client is not None:
            try:
                systems = client.Win32_OperatingSystem()
                if systems:
                    return systems[0].Caption
            except Exception as e:
                logger.debug(f"Win32_OperatingSystem query failed: {e}")

        # Fallback: ProductName from the registry
        winreg = self._winreg
        if not winreg:
            return None
        try:
            with winreg.OpenKey(winreg.HKEY_LOCAL_MACHINE, CURRENT_VERSION_KEY) as key:
                value, _ = winreg.QueryValueEx(key, "ProductName")
                return value
        except OSError:
            return None

    def os_version(self) -> Tuple[Optional[int], Optional[int]]:
        getwindowsversion = getattr(sys, "getwindowsversion", None)
        if getwindowsversion is None:
            return None, None
        version = getwindowsversion()
        return version.major, version.build

    # --- Hardware ---

    def display_adapters(self) -> List[str]:
        client = self._wmi()
        if client is not None:
            try:
                return [c.Name for c in client.Win32_VideoController() if c.Name]
            except Exception as e:
                logger.debug(f"Win32_VideoController query failed: {e}")
        return self._nvml_adapters()

    def _nvml_adapters(self) -> List[str]:
        """Adapter names from NVML. Only finds NVIDIA devices with a driver loaded."""
        pynvml = safe_import("pynvml")
        if not pynvml:
            return []
        names = []
        try:
            pynvml.nvmlInit()
            try:
                for i in range(pynvml.nvmlDeviceGetCount()):
                    name = pynvml.nvmlDeviceGetName(pynvml.nvmlDeviceGetHandleByIndex(i))
                    names.append(name.decode("utf-8") if isinstance(name, bytes) else name)
            finally:
                pynvml.nvmlShutdown()
        except pynvml.NVMLError as e:
            logger.debug(f"NVML query failed: {e}")
        return names

    # --- Persistent PATH variables ---

    def _environment_key(self, scope: PathScope):
        winreg = self._winreg
        if not winreg:
            raise OSError("The Windows registry is not available on this host")
        if scope == PathScope.USER:
            return winreg.HKEY_CURRENT_USER, USER_ENVIRONMENT_KEY
        return winreg.HKEY_LOCAL_MACHINE, MACHINE_ENVIRONMENT_KEY

    def get_path_variable(self, scope: PathScope) -> str:
        winreg = self._winreg
        root, subkey = self._environment_key(scope)
        with winreg.OpenKey(root, subkey, 0, winreg.KEY_READ) as key:
            try:
                value, _ = winreg.QueryValueEx(key, "Path")
            except FileNotFoundError:
                return ""
        return value or ""

    def set_path_variable(self, scope: PathScope, value: str) -> None:
        winreg = self._winreg
        root, subkey = self._environment_key(scope)
        with winreg.OpenKey(root, subkey, 0, winreg.KEY_READ | winreg.KEY_WRITE) as key:
            try:
                _, reg_type = winreg.QueryValueEx(key, "Path")
            except FileNotFoundError:
                reg_type = winreg.REG_EXPAND_SZ
            if reg_type not in (winreg.REG_EXPAND_SZ, winreg.REG_SZ):
                reg_type = winreg.REG_EXPAND_SZ
            winreg.SetValueEx(key, "Path", 0, reg_type, value)
        logger.debug(f"Updated {scope.value} PATH")
        self._broadcast_environment_change()

    def _broadcast_environment_change(self) -> None:
        windll = getattr(ctypes, "windll", None)
        if windll is None:
            return
        result = ctypes.c_ulong()
        sent = windll.user32.SendMessageTimeoutW(
            HWND_BROADCAST,
            WM_SETTINGCHANGE,
            0,
            "Environment",
            SMTO_ABORTIFHUNG,
            5000,
            ctypes.byref(result),
        )
        if not sent:
            logger.debug("WM_SETTINGCHANGE broadcast timed out")

"""
Platform machine identifiers, used as the stable local source for client ids.
"""

from __future__ import annotations

import os
import platform
import stat
import subprocess
from typing import TYPE_CHECKING, Callable, Dict, Optional

if TYPE_CHECKING:
    import winreg
elif platform.system().lower() == "windows":
    import winreg


LINUX_MACHINE_ID_PATHS = (
    "/etc/machine-id",
    "/var/lib/dbus/machine-id",
)
# 32 hex chars + newline
LINUX_MACHINE_ID_MAX_SIZE = 64


def read_linux_machine_id() -> Optional[str]:
    for path in LINUX_MACHINE_ID_PATHS:
        try:
            st = os.stat(path)
            if st.st_size > LINUX_MACHINE_ID_MAX_SIZE or not stat.S_ISREG(st.st_mode):
                continue

            with open(path, "r", encoding="utf-8") as f:
                value = f.read(LINUX_MACHINE_ID_MAX_SIZE).strip()

            if value:
                return value
        except (OSError, ValueError):
            continue

    return None


def read_macos_machine_id() -> Optional[str]:
    """
    Read the IOPlatformUUID reported by ``ioreg``.
    """
    try:
        result = subprocess.run(
            ["ioreg", "-d2", "-c", "IOPlatformExpertDevice"],
            capture_output=True,
            text=True,
            timeout=5,
            encoding="utf-8",
        )
    except (FileNotFoundError, subprocess.TimeoutExpired, OSError):
        return None

    if result.returncode != 0:
        return None

    for line in result.stdout.splitlines():
        if "IOPlatformUUID" not in line:
            continue
        _, _, value = line.partition("=")
        value = value.strip().strip('"').strip()
        if value:
            return value

    return None


def read_windows_machine_id() -> Optional[str]:
    """
    Read ``MachineGuid`` from the Cryptography registry key.
    """
    try:
        with winreg.OpenKey(
            winreg.HKEY_LOCAL_MACHINE,
            r"SOFTWARE\Microsoft\Cryptography",
        ) as key:
            value, reg_type = winreg.QueryValueEx(key, "MachineGuid")
    except (OSError, ValueError, TypeError):
        return None

    if reg_type != winreg.REG_SZ or not isinstance(value, str) or not value:
        return None

    return value


READERS: Dict[str, Callable[[], Optional[str]]] = {
    "linux": read_linux_machine_id,
    "darwin": read_macos_machine_id,
    "windows": read_windows_machine_id,
}


def get_machine_id() -> Optional[str]:
    """
    Get the machine identifier of the current platform, if it exposes one.

    Returns:
        The raw machine identifier or None.
    """
    reader = READERS.get(platform.system().lower())
    if reader is None:
        return None

    return reader()

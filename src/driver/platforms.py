"""Platform tag detection for driver package selection."""

from __future__ import annotations

import logging
import platform
from typing import Optional

from errors import DriverEnvironmentError
from versioning.models import PlatformTag

logger = logging.getLogger(__name__)

LINUX64 = PlatformTag("linux64")
MAC64 = PlatformTag("mac64")
MAC_ARM64 = PlatformTag("mac_arm64")
WIN32 = PlatformTag("win32", ".exe")

_ARM_MACHINES = ("arm64", "aarch64")


def detect_platform(system: Optional[str] = None, machine: Optional[str] = None) -> PlatformTag:
    """Return the PlatformTag for the running (or given) system.

    Raises:
        DriverEnvironmentError: If no driver package exists for the system.
    """
    system = system or platform.system()
    machine = (machine or platform.machine() or "").lower()

    if system == "Linux":
        tag = LINUX64
    elif system == "Darwin":
        tag = MAC_ARM64 if machine in _ARM_MACHINES else MAC64
    elif system == "Windows":
        tag = WIN32
    else:
        raise DriverEnvironmentError(f"Unsupported platform: {system} ({machine})")

    logger.debug("Detected platform %s for %s/%s", tag.name, system, machine)
    return tag

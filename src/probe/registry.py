"""Browser version discovery from the Windows registry."""

from __future__ import annotations

import importlib
import logging
from dataclasses import dataclass
from types import ModuleType
from typing import List, Optional

from constants import Constants
from .base import Probe, ProbeChain

logger = logging.getLogger(__name__)

_HIVES = {
    "HKCU": "HKEY_CURRENT_USER",
    "HKLM": "HKEY_LOCAL_MACHINE",
}


@dataclass(frozen=True)
class RegistryCandidate:
    """A registry value that may hold the installed version."""
    label: str
    hive: str  # "HKCU" | "HKLM"
    path: str
    value: str


DEFAULT_CANDIDATES = [
    RegistryCandidate("local user beacon", "HKCU",
                      Constants.REG_BEACON_KEY, Constants.REG_BEACON_ATTR),
    RegistryCandidate("local user updater", "HKCU",
                      Constants.REG_UPDATER_STABLE_KEY, Constants.REG_UPDATER_ATTR),
    RegistryCandidate("machine-wide updater", "HKLM",
                      Constants.REG_UPDATER_STABLE_KEY, Constants.REG_UPDATER_ATTR),
]


def _load_winreg() -> Optional[ModuleType]:
    try:
        return importlib.import_module("winreg")
    except ImportError:
        logger.warning("Windows registry is not available on this platform")
        return None


def alternate_path(path: str) -> Optional[str]:
    """Return the Wow6432Node variant of a Software\\ key path, if any."""
    prefix = Constants.REG_WORKAROUND_PREFIX
    if not path.startswith(prefix):
        return None
    return Constants.REG_WORKAROUND_ALT_PREFIX + path[len(prefix):]


class RegistryValueProbe(Probe):
    """Read one string value, retrying the 32-bit-on-64-bit alternate key."""

    def __init__(self, candidate: RegistryCandidate, registry: Optional[ModuleType] = None):
        self.candidate = candidate
        self.name = candidate.label
        self._registry = registry

    def _open(self, reg: ModuleType, root, path: str):
        return reg.OpenKey(root, path, 0, reg.KEY_QUERY_VALUE)

    def probe(self) -> Optional[str]:
        reg = self._registry or _load_winreg()
        if reg is None:
            return None

        hive, path = self.candidate.hive, self.candidate.path
        root = getattr(reg, _HIVES[hive])
        try:
            key = self._open(reg, root, path)
        except OSError:
            logger.info("Could not find registry key: %s\\%s", hive, path)
            alt = alternate_path(path)
            if alt is None:
                return None
            path = alt
            logger.info("Attempting to use 64-bit subkey: %s\\%s", hive, path)
            try:
                key = self._open(reg, root, path)
            except OSError:
                logger.info("Could not find registry key: %s\\%s", hive, path)
                return None

        with key:
            try:
                value, _ = reg.QueryValueEx(key, self.candidate.value)
            except OSError:
                logger.info(
                    "Could not find registry value: %s\\%s -> %s",
                    hive, path, self.candidate.value,
                )
                return None

        if not isinstance(value, str) or not value.strip():
            return None
        return value.strip()


class RegistryProbe(ProbeChain):
    """Ordered registry lookups, most user-specific first."""

    name = "registry"

    def __init__(
        self,
        candidates: Optional[List[RegistryCandidate]] = None,
        registry: Optional[ModuleType] = None,
    ):
        super().__init__([
            RegistryValueProbe(c, registry) for c in (candidates or DEFAULT_CANDIDATES)
        ])

    def probe(self) -> Optional[str]:
        logger.info("Searching for version information in registry")
        return super().probe()

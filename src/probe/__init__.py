"""Installed browser version probes."""

from __future__ import annotations

import platform
from typing import Optional

from constants import Constants
from .base import Probe, ProbeChain
from .binary import BinaryProbe
from .registry import RegistryCandidate, RegistryProbe, RegistryValueProbe


def default_probe(system: Optional[str] = None) -> Probe:
    """Return the probe suited to the running (or given) operating system."""
    system = system or platform.system()
    if system == "Windows":
        return RegistryProbe()
    binaries = list(Constants.BROWSER_BINARIES)
    if system == "Darwin":
        binaries.extend(Constants.MACOS_BROWSER_BUNDLES)
    return BinaryProbe(binaries)


__all__ = [
    "Probe",
    "ProbeChain",
    "BinaryProbe",
    "RegistryCandidate",
    "RegistryProbe",
    "RegistryValueProbe",
    "default_probe",
]

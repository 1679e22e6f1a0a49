"""Common interface for installed-browser version probes."""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from typing import Optional, Sequence

logger = logging.getLogger(__name__)


class Probe(ABC):
    """A source that may know the installed browser version.

    ``probe`` never raises for an expected failure (missing browser, missing
    registry key, unreadable output); it returns None instead.
    """

    name = "probe"

    @abstractmethod
    def probe(self) -> Optional[str]:
        """Return the raw version string, or None when it cannot be determined."""


class ProbeChain(Probe):
    """Evaluate probes in order and return the first non-empty result."""

    name = "chain"

    def __init__(self, probes: Sequence[Probe]):
        self._probes = list(probes)

    def probe(self) -> Optional[str]:
        for candidate in self._probes:
            version = candidate.probe()
            if version:
                logger.info("Found version from %s: %s", candidate.name, version)
                return version
        return None

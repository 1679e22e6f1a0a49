"""Browser version discovery by running the browser binary."""

from __future__ import annotations

import logging
import os
import shutil
import subprocess
from typing import Callable, Optional, Sequence

from versioning.parser import extract_version
from .base import Probe

logger = logging.getLogger(__name__)


class BinaryProbe(Probe):
    """Locate a browser executable and parse ``<binary> --version``.

    Candidates are searched in order and the last one found wins, so more
    specific or branded binaries belong at the end of the list. Entries
    containing a path separator are checked on disk instead of on PATH.
    """

    name = "browser binary"

    def __init__(
        self,
        binaries: Sequence[str],
        which: Callable[[str], Optional[str]] = shutil.which,
        run: Callable[..., subprocess.CompletedProcess] = subprocess.run,
    ):
        self._binaries = list(binaries)
        self._which = which
        self._run = run

    def locate(self) -> Optional[str]:
        """Return the absolute path of the winning candidate, or None."""
        path = None
        for binary in self._binaries:
            if os.sep in binary or "/" in binary:
                found = binary if os.path.isfile(binary) else None
            else:
                found = self._which(binary)
            if not found:
                logger.info("Could not find browser in path: %s", binary)
                continue
            path = os.path.abspath(found)
        return path

    def probe(self) -> Optional[str]:
        logger.info("Searching for browser binaries")
        path = self.locate()
        if path is None:
            logger.info("No browsers were found in path")
            return None

        try:
            result = self._run(
                [path, "--version"],
                capture_output=True,
                text=True,
                errors="replace",
                check=True,
            )
        except (OSError, subprocess.SubprocessError, UnicodeDecodeError) as exc:
            logger.warning("Could not run browser (%s): %s", path, exc)
            return None

        version = extract_version(result.stdout)
        if version:
            logger.info("Found version from %s: %s", os.path.basename(path), version)
        else:
            logger.warning("No version found in output of %s", os.path.basename(path))
        return version

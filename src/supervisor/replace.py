"""Replace the current process image with the driver (POSIX exec)."""

from __future__ import annotations

import logging
import os
from typing import Callable, Mapping, Optional, Sequence

from errors import LaunchError
from .base import LaunchStrategy

logger = logging.getLogger(__name__)


class ReplaceInPlace(LaunchStrategy):
    """exec the driver so signals and exit status reach it directly."""

    name = "exec"

    def __init__(
        self,
        execve: Callable[[str, Sequence[str], Mapping[str, str]], None] = os.execve,
        environ: Optional[Mapping[str, str]] = None,
    ):
        self._execve = execve
        self._environ = environ

    def launch(self, path: str, args: Sequence[str]) -> int:
        argv = [os.path.basename(path), *args]
        env = dict(os.environ if self._environ is None else self._environ)
        logger.info("Execing driver process")
        try:
            self._execve(path, argv, env)
        except OSError as exc:
            raise LaunchError(f"Error while running driver: {exc}") from exc
        # Only reachable when execve is substituted.
        raise LaunchError("exec returned without replacing the process")

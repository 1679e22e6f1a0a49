"""Launch strategy interface for running the cached driver."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Sequence


class LaunchStrategy(ABC):
    """Run a driver binary as a faithful substitute for invoking it directly."""

    name = "launch"

    @abstractmethod
    def launch(self, path: str, args: Sequence[str]) -> int:
        """Start path with args and return the exit code to report.

        Strategies that replace the current process never return.
        """

"""Driver process supervision strategies."""

from __future__ import annotations

import os
from typing import Optional

from constants import LaunchModes
from .base import LaunchStrategy
from .replace import ReplaceInPlace
from .wrap import ForkWaitForward, termination_signals


def select_launch_strategy(mode: str = LaunchModes.AUTO.value, os_name: Optional[str] = None) -> LaunchStrategy:
    """Pick how to run the driver.

    ``auto`` execs on POSIX and wraps elsewhere; ``exec`` and ``wrap`` force
    one strategy.
    """
    mode = (mode or LaunchModes.AUTO.value).lower()
    if mode == LaunchModes.EXEC.value:
        return ReplaceInPlace()
    if mode == LaunchModes.WRAP.value:
        return ForkWaitForward()
    if mode != LaunchModes.AUTO.value:
        raise ValueError(f"Unknown launch mode: {mode}")
    if (os_name or os.name) == "posix":
        return ReplaceInPlace()
    return ForkWaitForward()


__all__ = [
    "LaunchStrategy",
    "ReplaceInPlace",
    "ForkWaitForward",
    "select_launch_strategy",
    "termination_signals",
]

"""Run the driver as a child process and mirror its lifetime.

Used where the process image cannot be replaced (Windows). Signals cannot be
forwarded there, so any termination signal received by the wrapper kills the
child outright.
"""

from __future__ import annotations

import logging
import signal
import subprocess
import threading
from typing import Any, Callable, Dict, List, Optional, Sequence

from errors import DriverKilledError, LaunchError
from .base import LaunchStrategy

logger = logging.getLogger(__name__)

_TERMINATION_SIGNALS = ("SIGINT", "SIGTERM", "SIGBREAK", "SIGHUP", "SIGQUIT")
_POLL_INTERVAL = 0.1  # seconds; keeps the main thread responsive to signals


def termination_signals() -> List[int]:
    """Termination-style signals available on this platform."""
    return [getattr(signal, name) for name in _TERMINATION_SIGNALS if hasattr(signal, name)]


def _normalize_returncode(returncode: int) -> int:
    # Popen reports death-by-signal as -N; shells report 128 + N.
    if returncode < 0:
        return 128 - returncode
    return returncode


class ForkWaitForward(LaunchStrategy):
    """Spawn the driver with shared stdio and race a signal listener against wait.

    Whichever finishes first decides the outcome: a natural exit returns the
    child's exit code, a termination signal kills the child and raises
    DriverKilledError.
    """

    name = "wrap"

    def __init__(
        self,
        popen: Callable[..., Any] = subprocess.Popen,
        signals: Optional[Sequence[int]] = None,
        install_handlers: bool = True,
    ):
        self._popen = popen
        self._signals = list(termination_signals() if signals is None else signals)
        self._install = install_handlers
        self._lock = threading.RLock()  # notify may run as a signal handler on the main thread
        self._exited = threading.Event()
        self._proc: Any = None
        self._returncode: Optional[int] = None
        self._received: Optional[int] = None

    def notify(self, signum: int, frame: Any = None) -> None:  # pylint: disable=unused-argument
        """Handle a termination notification by killing the child."""
        with self._lock:
            if self._exited.is_set() or self._received is not None:
                return
            proc = self._proc
            if proc is not None and proc.poll() is not None:
                # Exited naturally; the waiter has not recorded it yet.
                return
            self._received = signum
        logger.warning("Signal received (%s) stopping wrapped process", signum)
        if proc is not None:
            self._kill(proc)

    def _kill(self, proc: Any) -> None:
        try:
            proc.kill()
        except OSError as exc:
            raise LaunchError(f"Could not stop wrapped process: {exc}") from exc

    def _install_handlers(self) -> Dict[int, Any]:
        previous: Dict[int, Any] = {}
        if not self._install:
            return previous
        if threading.current_thread() is not threading.main_thread():
            logger.debug("Not on the main thread; signal handlers not installed")
            return previous
        for signum in self._signals:
            try:
                previous[signum] = signal.signal(signum, self.notify)
            except (OSError, ValueError) as exc:
                logger.debug("Cannot handle signal %s: %s", signum, exc)
        return previous

    @staticmethod
    def _restore_handlers(previous: Dict[int, Any]) -> None:
        for signum, handler in previous.items():
            signal.signal(signum, handler if handler is not None else signal.SIG_DFL)

    def _wait(self, proc: Any) -> None:
        returncode = proc.wait()
        with self._lock:
            self._returncode = returncode
            self._exited.set()

    def launch(self, path: str, args: Sequence[str]) -> int:
        previous = self._install_handlers()
        try:
            logger.info("Wrapping driver process")
            try:
                # stdin/stdout/stderr and the environment are inherited.
                proc = self._popen([path, *args])
            except OSError as exc:
                raise LaunchError(f"Could not start wrapped process: {exc}") from exc

            with self._lock:
                self._proc = proc
                pending = self._received
            if pending is not None:
                self._kill(proc)

            waiter = threading.Thread(
                target=self._wait, args=(proc,), name="driver-wait", daemon=True
            )
            waiter.start()
            while not self._exited.wait(_POLL_INTERVAL):
                pass
        finally:
            self._restore_handlers(previous)

        if self._received is not None:
            raise DriverKilledError(self._received)

        returncode = _normalize_returncode(self._returncode or 0)
        if returncode:
            logger.warning("Driver exited with status %s", returncode)
        return returncode

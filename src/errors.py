"""Error taxonomy for driver resolution, retrieval and launch."""

from __future__ import annotations


class ChromedriverAutoError(Exception):
    """Base class for all fatal errors raised by this package."""


class InvalidVersionError(ChromedriverAutoError, ValueError):
    """Raised when a version string has fewer than three numeric components."""


class TransportError(ChromedriverAutoError):
    """Network, connection or protocol failure talking to a remote host."""


class RetrievalError(ChromedriverAutoError):
    """The driver package could not be downloaded or unpacked."""


class DriverEnvironmentError(ChromedriverAutoError):
    """Local environment failure (cache directory or cache file)."""


class LaunchError(ChromedriverAutoError):
    """The driver process could not be started."""


class DriverKilledError(ChromedriverAutoError):
    """The driver was killed after a termination signal reached the wrapper."""

    def __init__(self, signum: int):
        super().__init__(f"driver process killed after signal {signum}")
        self.signum = signum

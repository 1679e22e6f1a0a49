"""On-disk cache of downloaded driver binaries."""

from __future__ import annotations

import logging
import os
import tempfile
from dataclasses import dataclass, field
from typing import Callable, Optional, Protocol

from constants import Constants
from errors import DriverEnvironmentError
from versioning.models import PlatformTag, ResolvedRelease

logger = logging.getLogger(__name__)


class Fetcher(Protocol):
    def fetch(self, release: ResolvedRelease, platform: PlatformTag) -> bytes: ...


def default_cache_key(release: ResolvedRelease, platform: PlatformTag) -> str:
    """File name for a cached driver, e.g. chromedriver_v114.0.5735.90_linux64."""
    return Constants.CACHE_FILE_FMT.format(
        release=release, platform=platform.name, ext=platform.exe_ext
    )


@dataclass
class CacheConfig:
    """Where and how driver binaries are cached.

    The cache root is shared by every invocation on the machine. Entries are
    never validated beyond existence and never removed.
    """

    root: str
    key_fn: Callable[[ResolvedRelease, PlatformTag], str] = field(default=default_cache_key)
    atomic_writes: bool = True

    @classmethod
    def default(cls, root: Optional[str] = None, atomic_writes: bool = True) -> "CacheConfig":
        """Build a config rooted at root or the system temp directory."""
        if not root:
            root = os.path.join(tempfile.gettempdir(), Constants.CACHE_DIR_NAME)
        return cls(root=os.path.abspath(os.path.expanduser(root)), atomic_writes=atomic_writes)

    def path_for(self, release: ResolvedRelease, platform: PlatformTag) -> str:
        return os.path.join(self.root, self.key_fn(release, platform))


class ArtifactCache:
    """Get-or-fetch access to cached driver binaries.

    With ``atomic_writes`` a download is written to a temporary file and
    renamed into place, so a failed fetch leaves no entry behind. Without it
    the target is created before fetching and a failure leaves a truncated
    file that later runs accept as a valid entry.
    """

    def __init__(self, config: CacheConfig, fetcher: Fetcher):
        """Initialize the cache.

        Args:
            config: Cache location and key encoding.
            fetcher: Object providing ``fetch(release, platform) -> bytes``.
        """
        self._config = config
        self._fetcher = fetcher

    @property
    def config(self) -> CacheConfig:
        return self._config

    def get(self, release: ResolvedRelease, platform: PlatformTag) -> str:
        """Return the path of the cached driver, downloading it on a miss.

        Args:
            release: Resolved driver release.
            platform: Platform the driver is for.

        Returns:
            Absolute path to an executable driver file.

        Raises:
            DriverEnvironmentError: Cache directory or file cannot be written.
            RetrievalError, TransportError: Propagated from the fetcher.
        """
        path = self._config.path_for(release, platform)
        if os.path.exists(path):
            logger.info("Found existing driver file: %s", path)
            return path

        try:
            os.makedirs(self._config.root, mode=0o755, exist_ok=True)
        except OSError as exc:
            raise DriverEnvironmentError(f"could not create cache directory: {exc}") from exc

        logger.info("Downloading driver file")
        if self._config.atomic_writes:
            self._fill_atomic(path, release, platform)
        else:
            self._fill_in_place(path, release, platform)

        logger.info("Driver file downloaded to: %s", path)
        return path

    def _fill_atomic(self, path: str, release: ResolvedRelease, platform: PlatformTag) -> None:
        try:
            fd, tmp_path = tempfile.mkstemp(
                dir=self._config.root, prefix=".chromedriver-", suffix=".part"
            )
        except OSError as exc:
            raise DriverEnvironmentError(f"could not create driver file: {exc}") from exc

        try:
            with os.fdopen(fd, "wb") as f:
                f.write(self._fetcher.fetch(release, platform))
            os.chmod(tmp_path, Constants.CACHE_FILE_MODE)
            os.replace(tmp_path, path)
        except BaseException as exc:
            try:
                os.unlink(tmp_path)
            except OSError:
                logger.debug("Failed to remove temp file: %s", tmp_path)
            if isinstance(exc, OSError):
                raise DriverEnvironmentError(f"could not write driver file: {exc}") from exc
            raise

    def _fill_in_place(self, path: str, release: ResolvedRelease, platform: PlatformTag) -> None:
        try:
            f = open(path, "wb")  # pylint: disable=consider-using-with
        except OSError as exc:
            raise DriverEnvironmentError(f"could not create driver file: {exc}") from exc

        with f:
            data = self._fetcher.fetch(release, platform)
            try:
                f.write(data)
            except OSError as exc:
                raise DriverEnvironmentError(f"could not write driver file: {exc}") from exc
        try:
            os.chmod(path, Constants.CACHE_FILE_MODE)
        except OSError as exc:
            raise DriverEnvironmentError(f"could not mark driver executable: {exc}") from exc

"""Driver package download and extraction."""

from __future__ import annotations

import io
import logging
import posixpath
import zipfile
from typing import Callable, Optional

import requests

from common.http_client import safe_get
from constants import Constants
from errors import RetrievalError
from versioning.models import PlatformTag, ResolvedRelease

logger = logging.getLogger(__name__)

HttpGet = Callable[..., requests.Response]


def extract_entry(archive: bytes, entry_name: str) -> bytes:
    """Return the bytes of a single named member of a zip archive.

    An exact name match wins; otherwise the first member whose basename equals
    entry_name is used. Every other member is ignored.

    Raises:
        RetrievalError: If the archive is unreadable or lacks the entry.
    """
    try:
        with zipfile.ZipFile(io.BytesIO(archive)) as zf:
            names = [n for n in zf.namelist() if not n.endswith("/")]
            if entry_name in names:
                member = entry_name
            else:
                member = next((n for n in names if posixpath.basename(n) == entry_name), None)
            if member is None:
                raise RetrievalError(f"could not open driver package: {entry_name} not in archive")
            return zf.read(member)
    except zipfile.BadZipFile as exc:
        raise RetrievalError(f"could not read driver package: {exc}") from exc


class DriverFetcher:
    """Download the driver package for a release and unpack the binary."""

    def __init__(self, base_url: str = Constants.DOWNLOAD_URL, http_get: Optional[HttpGet] = None):
        self._base_url = base_url.rstrip("/")
        self._http_get = http_get or safe_get

    def url_for(self, release: ResolvedRelease, platform: PlatformTag) -> str:
        return Constants.DOWNLOAD_FMT.format(
            base=self._base_url, release=release, archive=platform.archive_name
        )

    def fetch(self, release: ResolvedRelease, platform: PlatformTag) -> bytes:
        """Return the raw driver binary for release on platform.

        Raises:
            TransportError: On connection failure (from the HTTP helper).
            RetrievalError: On a non-200 status or a bad archive.
        """
        url = self.url_for(release, platform)
        logger.info("Requesting URL: %s", url)
        res = self._http_get(url, context="download")
        if res.status_code != 200:
            raise RetrievalError(
                f"could not get driver package {release}: not found (status {res.status_code})"
            )
        return extract_entry(res.content, platform.entry_name)

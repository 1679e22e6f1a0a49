"""Driver release resolver using tiered "latest release" lookups."""

from __future__ import annotations

import logging
from typing import Callable, List, Optional, Tuple

import requests

from common.http_client import safe_get
from constants import Constants
from errors import TransportError
from .models import InstalledVersion, ResolvedRelease
from .parser import is_release_identifier

logger = logging.getLogger(__name__)

HttpGet = Callable[..., requests.Response]


class DriverVersionResolver:
    """Map an installed browser version to the best matching driver release.

    Tiers are tried most specific first (patch, then major). A 404 from the
    lookup service means "nothing for this tier" and moves on; anything else
    that is not a usable release aborts resolution with TransportError.
    """

    def __init__(self, base_url: str = Constants.LOOKUP_URL, http_get: Optional[HttpGet] = None):
        self._base_url = base_url.rstrip("/")
        self._http_get = http_get or safe_get

    def tiers(self, version: InstalledVersion) -> List[Tuple[str, str]]:
        """Ordered (label, lookup key) pairs for a version."""
        return [
            ("patch version", version.patch_key),
            ("major version", version.major_key),
        ]

    def latest_for(self, key: str) -> Optional[ResolvedRelease]:
        """Query the lookup service for the latest release matching key.

        Returns:
            The release identifier, or None when the service answers 404.

        Raises:
            TransportError: Connection failure, unexpected status or a body
                that is not a release identifier.
        """
        url = Constants.LATEST_RELEASE_FMT.format(base=self._base_url, version=key)
        logger.info("Requesting URL: %s", url)
        res = self._http_get(url, context="lookup")

        if res.status_code == 404:
            logger.info("Latest driver version for %s: Not found", key)
            return None
        if res.status_code != 200:
            raise TransportError(
                f"Lookup for {key} returned unexpected status {res.status_code}"
            )

        latest = (res.text or "").strip()
        if not is_release_identifier(latest):
            raise TransportError(f"Lookup for {key} returned a malformed release: {latest!r}")
        logger.info("Latest driver version for %s: %s", key, latest)
        return latest

    def resolve(self, version: InstalledVersion) -> Optional[ResolvedRelease]:
        """Return the first release found walking the tiers, or None."""
        for label, key in self.tiers(version):
            release = self.latest_for(key)
            if release:
                logger.info("Found latest driver by %s: %s", label, release)
                return release
        return None

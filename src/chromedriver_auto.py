"""chromedriver-auto: run the chromedriver matching the installed browser.

Drop-in replacement for the chromedriver executable. Detects the installed
Chrome/Chromium version, resolves the matching driver release, caches the
binary and runs it with this program's arguments, stdio and environment.
"""

from __future__ import annotations

import logging
import sys
from typing import List, NoReturn, Optional

from common.logging_utils import configure_logging, extra_context, is_debug_enabled
from config import Settings, load_settings
from constants import ExitCodes
from driver import ArtifactCache, CacheConfig, DriverFetcher, detect_platform
from errors import (
    ChromedriverAutoError,
    DriverKilledError,
    InvalidVersionError,
    TransportError,
)
from probe import Probe, default_probe
from supervisor import LaunchStrategy, select_launch_strategy
from versioning.parser import parse_version
from versioning.resolver import DriverVersionResolver

logger = logging.getLogger(__name__)


def _fatal(message: str, *args, code: ExitCodes = ExitCodes.FATAL) -> NoReturn:
    logger.critical(message, *args)
    sys.exit(code.value)


def resolve_driver(
    settings: Settings,
    probe: Optional[Probe] = None,
    resolver: Optional[DriverVersionResolver] = None,
    cache: Optional[ArtifactCache] = None,
) -> str:
    """Probe, resolve and fetch-or-reuse; return the cached driver path.

    Exits the process on an absence outcome or any fatal error.
    """
    platform = detect_platform()
    probe = probe or default_probe()
    resolver = resolver or DriverVersionResolver(settings.lookup_url)
    cache = cache or ArtifactCache(
        CacheConfig.default(settings.cache_dir, settings.atomic_cache_writes),
        DriverFetcher(settings.download_url),
    )

    logger.info("Looking for installed version")
    raw_version = probe.probe()
    if not raw_version:
        _fatal("Could not find installed version")

    try:
        version = parse_version(raw_version)
    except InvalidVersionError as e:
        _fatal("Could not parse installed version: %s", e)

    logger.info("Looking for matching driver")
    try:
        release = resolver.resolve(version)
    except TransportError as e:
        _fatal("Could not find driver version: %s", e, code=ExitCodes.CONNECTION_ERROR)
    if not release:
        _fatal("Could not find latest driver")

    try:
        return cache.get(release, platform)
    except TransportError as e:
        _fatal("Could not get driver: %s", e, code=ExitCodes.CONNECTION_ERROR)
    except ChromedriverAutoError as e:
        _fatal("Could not get driver: %s", e)


def run_driver(path: str, args: List[str], strategy: LaunchStrategy) -> int:
    """Launch the driver; return its exit code for the wrapping strategy."""
    logger.info("Starting driver file: %s", path)
    try:
        return strategy.launch(path, args)
    except DriverKilledError as e:
        _fatal("Driver stopped: %s", e)
    except ChromedriverAutoError as e:
        _fatal("Error while running driver: %s", e)


def main(argv: Optional[List[str]] = None) -> None:
    """Main function of the program."""
    args = list(sys.argv[1:] if argv is None else argv)

    settings = load_settings()
    configure_logging(settings.log_level, settings.log_file)

    if is_debug_enabled(logger):
        logger.debug(
            "CLI start",
            extra=extra_context(event="function_entry", component="cli", action="main"),
        )

    try:
        strategy = select_launch_strategy(settings.launch_mode)
        path = resolve_driver(settings)
    except ChromedriverAutoError as e:
        _fatal("%s", e)

    sys.exit(run_driver(path, args, strategy))


if __name__ == "__main__":
    main()

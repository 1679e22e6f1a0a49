"""Data models for browser versions, driver releases and platforms."""

from dataclasses import dataclass
from typing import Tuple

from constants import Constants


@dataclass(frozen=True)
class InstalledVersion:
    """Installed browser version split into its numeric components."""
    raw: str
    components: Tuple[str, ...]

    @property
    def major_key(self) -> str:
        """First component, e.g. "114"."""
        return self.components[0]

    @property
    def patch_key(self) -> str:
        """First three components joined, e.g. "114.0.5735"."""
        return ".".join(self.components[:3])


@dataclass(frozen=True)
class PlatformTag:
    """Operating system / architecture tag used to pick driver packages."""
    name: str  # e.g. "linux64", "mac_arm64", "win32"
    exe_ext: str = ""

    @property
    def archive_name(self) -> str:
        return Constants.ARCHIVE_NAME_FMT.format(platform=self.name)

    @property
    def entry_name(self) -> str:
        return Constants.ENTRY_NAME_FMT.format(ext=self.exe_ext)


# Opaque release identifier returned by the lookup service.
ResolvedRelease = str

"""Version string parsing utilities."""

import re
from typing import Optional

from errors import InvalidVersionError
from .models import InstalledVersion

# First run of three or more dot-separated numeric groups, e.g. "114.0.5735.90".
VERSION_PATTERN = re.compile(r"\d+(?:\.\d+){2,}")

# Release identifiers served by the lookup service share the same shape.
RELEASE_PATTERN = re.compile(r"^\d+(?:\.\d+)+$")


def extract_version(text: str) -> Optional[str]:
    """Return the first dotted numeric version found in free text, or None.

    Used on ``chrome --version`` output such as
    "Google Chrome 114.0.5735.90 unknown".
    """
    match = VERSION_PATTERN.search(text or "")
    return match.group(0) if match else None


def parse_version(raw: str) -> InstalledVersion:
    """Split a version string into its numeric components.

    Raises:
        InvalidVersionError: If fewer than three numeric components are present.
    """
    value = (raw or "").strip()
    parts = tuple(value.split(".")) if value else ()
    if len(parts) < 3 or not all(p.isdigit() for p in parts):
        raise InvalidVersionError(f"Invalid version string: {raw!r}")
    return InstalledVersion(raw=value, components=parts)


def is_release_identifier(text: str) -> bool:
    """Return True when text looks like a driver release identifier."""
    return bool(RELEASE_PATTERN.match(text or ""))

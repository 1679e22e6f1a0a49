"""Runtime configuration for chromedriver-auto.

Every command-line argument belongs to the driver, so settings come from an
optional YAML file and CHROMEDRIVER_AUTO_* environment variables, in that
order of increasing precedence.
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass, fields
from typing import Any, Dict, Mapping, Optional

import yaml

from constants import Constants, LaunchModes

logger = logging.getLogger(__name__)

_TRUE = ("1", "true", "yes", "on")
_FALSE = ("0", "false", "no", "off")


@dataclass
class Settings:
    """Resolved settings for one invocation."""

    lookup_url: str = Constants.LOOKUP_URL
    download_url: str = Constants.DOWNLOAD_URL
    cache_dir: Optional[str] = None  # None -> <temp dir>/chromedriver-auto.tmp
    atomic_cache_writes: bool = True
    launch_mode: str = LaunchModes.AUTO.value
    log_level: Optional[str] = None
    log_file: Optional[str] = None


_ENV_FIELDS = {
    Constants.ENV_LOOKUP_URL: "lookup_url",
    Constants.ENV_DOWNLOAD_URL: "download_url",
    Constants.ENV_CACHE_DIR: "cache_dir",
    Constants.ENV_ATOMIC_WRITES: "atomic_cache_writes",
    Constants.ENV_LAUNCH: "launch_mode",
    Constants.ENV_LOG_LEVEL: "log_level",
    Constants.ENV_LOG_FILE: "log_file",
}


def _parse_bool(value: Any) -> Optional[bool]:
    if isinstance(value, bool):
        return value
    text = str(value).strip().lower()
    if text in _TRUE:
        return True
    if text in _FALSE:
        return False
    return None


def load_config_file(config_path: Optional[str]) -> Dict[str, Any]:
    """Load the YAML config file.

    Args:
        config_path: Path to a YAML file; ``~`` is expanded.

    Returns:
        Mapping of settings; empty when the file is absent or unusable.
    """
    if not config_path:
        return {}
    path = os.path.expanduser(config_path)
    if not os.path.isfile(path):
        return {}

    try:
        with open(path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except (OSError, yaml.YAMLError) as e:
        logger.warning("Failed to load config %s: %s", path, e)
        return {}

    if not isinstance(data, dict):
        logger.warning("Ignoring config %s: expected a mapping", path)
        return {}
    return data


def _apply(settings: Settings, name: str, value: Any, source: str) -> None:
    if value is None or value == "":
        return
    if name == "atomic_cache_writes":
        parsed = _parse_bool(value)
        if parsed is None:
            logger.warning("Ignoring invalid %s from %s: %r", name, source, value)
            return
        value = parsed
    elif name == "launch_mode":
        value = str(value).strip().lower()
        if value not in {m.value for m in LaunchModes}:
            logger.warning("Ignoring invalid %s from %s: %r", name, source, value)
            return
    else:
        value = str(value).strip()
    setattr(settings, name, value)


def load_settings(
    environ: Optional[Mapping[str, str]] = None,
    config_path: Optional[str] = None,
) -> Settings:
    """Build Settings from defaults, the YAML file and the environment."""
    env = os.environ if environ is None else environ
    settings = Settings()

    path = config_path or env.get(Constants.ENV_CONFIG) or Constants.CONFIG_PATH
    known = {f.name for f in fields(Settings)}
    for key, value in load_config_file(path).items():
        if key in known:
            _apply(settings, key, value, path)
        else:
            logger.warning("Unknown config key in %s: %s", path, key)

    for env_name, field_name in _ENV_FIELDS.items():
        _apply(settings, field_name, env.get(env_name), env_name)

    return settings

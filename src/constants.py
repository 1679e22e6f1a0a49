"""Constants used in the project."""

from enum import Enum


class ExitCodes(Enum):
    """Exit codes for the program.

    Args:
        Enum (int): Exit codes for the program.
    """

    SUCCESS = 0
    FATAL = 1
    CONNECTION_ERROR = 2


class LaunchModes(Enum):
    """How the driver process is started.

    Args:
        Enum (string): Launch modes accepted in configuration.
    """

    AUTO = "auto"
    EXEC = "exec"
    WRAP = "wrap"


class Constants:  # pylint: disable=too-few-public-methods
    """General constants used in the project.
    Data holder for configuration constants; not intended to provide behavior.
    """

    LOOKUP_URL = "https://chromedriver.storage.googleapis.com"
    DOWNLOAD_URL = "https://chromedriver.storage.googleapis.com"
    LATEST_RELEASE_FMT = "{base}/LATEST_RELEASE_{version}"
    DOWNLOAD_FMT = "{base}/{release}/{archive}"
    ARCHIVE_NAME_FMT = "chromedriver_{platform}.zip"
    ENTRY_NAME_FMT = "chromedriver{ext}"

    CACHE_DIR_NAME = "chromedriver-auto.tmp"
    CACHE_FILE_FMT = "chromedriver_v{release}_{platform}{ext}"
    CACHE_FILE_MODE = 0o755

    REQUEST_TIMEOUT = 30  # Timeout in seconds for all HTTP requests
    USER_AGENT = "chromedriver-auto/1.0"

    LOG_FORMAT = "[%(levelname)s] %(message)s"
    LOG_FILE_FORMAT = "%(asctime)s %(levelname)s %(name)s %(message)s"
    DEFAULT_LOG_LEVEL = "WARNING"

    CONFIG_PATH = "~/.config/chromedriver-auto/config.yml"
    ENV_CONFIG = "CHROMEDRIVER_AUTO_CONFIG"
    ENV_LOOKUP_URL = "CHROMEDRIVER_AUTO_LOOKUP_URL"
    ENV_DOWNLOAD_URL = "CHROMEDRIVER_AUTO_DOWNLOAD_URL"
    ENV_CACHE_DIR = "CHROMEDRIVER_AUTO_CACHE_DIR"
    ENV_ATOMIC_WRITES = "CHROMEDRIVER_AUTO_ATOMIC_WRITES"
    ENV_LAUNCH = "CHROMEDRIVER_AUTO_LAUNCH"
    ENV_LOG_LEVEL = "CHROMEDRIVER_AUTO_LOG_LEVEL"
    ENV_LOG_FILE = "CHROMEDRIVER_AUTO_LOG_FILE"

    BROWSER_BINARIES = [
        "google-chrome",
        "chrome",
        "chromium",
        "chromium-browser",
    ]
    MACOS_BROWSER_BUNDLES = [
        "/Applications/Chromium.app/Contents/MacOS/Chromium",
        "/Applications/Google Chrome.app/Contents/MacOS/Google Chrome",
    ]

    # https://bugs.chromium.org/p/chromium/issues/detail?id=158372
    REG_WORKAROUND_PREFIX = "Software\\"
    REG_WORKAROUND_ALT_PREFIX = "Software\\Wow6432Node\\"
    REG_UPDATER_STABLE_KEY = (
        "Software\\Google\\Update\\Clients\\{8A69D345-D564-463c-AFF1-A69D9E530F96}"
    )
    REG_UPDATER_ATTR = "pv"  # REG_SZ
    REG_BEACON_KEY = "Software\\Google\\Chrome\\BLBeacon"
    REG_BEACON_ATTR = "version"  # REG_SZ

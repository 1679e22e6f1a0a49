"""Driver package retrieval and on-disk caching."""

from .cache import ArtifactCache, CacheConfig
from .fetcher import DriverFetcher, extract_entry
from .platforms import detect_platform

__all__ = [
    "ArtifactCache",
    "CacheConfig",
    "DriverFetcher",
    "extract_entry",
    "detect_platform",
]

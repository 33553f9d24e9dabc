"""
Core functionality for godelw.

This package contains the building blocks the installer and launcher are
composed of: platform detection, cache layout, downloading, checksums and
archive handling.
"""

from .exceptions import (
    GodelwError,
    UnsupportedPlatformError,
    MissingToolError,
    ConfigError,
    ConfigMissingError,
    ConfigPropertyEmptyError,
    DownloadError,
    ChecksumError,
    ChecksumMismatchError,
    ArchiveError,
    ArchiveMissingEntriesError,
    InsecureArchiveError,
    VersionMismatchError,
    InstallLockTimeout,
    LaunchError,
)

from .platform import (
    PlatformInfo,
    detect_platform,
    get_supported_platforms,
)

from .directory import (
    CacheLayout,
    get_cache_root,
)

__all__ = [
    "GodelwError",
    "UnsupportedPlatformError",
    "MissingToolError",
    "ConfigError",
    "ConfigMissingError",
    "ConfigPropertyEmptyError",
    "DownloadError",
    "ChecksumError",
    "ChecksumMismatchError",
    "ArchiveError",
    "ArchiveMissingEntriesError",
    "InsecureArchiveError",
    "VersionMismatchError",
    "InstallLockTimeout",
    "LaunchError",
    "PlatformInfo",
    "detect_platform",
    "get_supported_platforms",
    "CacheLayout",
    "get_cache_root",
]

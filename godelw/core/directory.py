"""
Cache directory layout for godelw.

Directory Structure:
    Cache root (~/.godel/ or $GODEL_HOME):
        - downloads/           : Raw distribution archives (<name>-<version>.tgz)
        - dists/               : Unpacked, verified distributions
          - <name>-<version>/  : One immutable tree per installed version
        - tmp_XXXXXX/          : Transient extraction directories
        - lock/                : Install lock files (only when locking is enabled)
"""

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Mapping, Optional

CACHE_ENV_VAR = "GODEL_HOME"


def get_cache_root(environ: Optional[Mapping[str, str]] = None) -> Path:
    """
    Get the cache root directory.

    Args:
        environ: Environment to read (default: os.environ)

    Returns:
        $GODEL_HOME if set and non-empty, otherwise ~/.godel

    Example:
        >>> get_cache_root({"GODEL_HOME": "/opt/godel"})
        PosixPath('/opt/godel')
    """
    if environ is None:
        environ = os.environ

    override = environ.get(CACHE_ENV_VAR)
    if override:
        return Path(override)
    return Path.home() / ".godel"


@dataclass(frozen=True)
class CacheLayout:
    """Paths inside the cache root."""

    root: Path

    @property
    def downloads_dir(self) -> Path:
        return self.root / "downloads"

    @property
    def dists_dir(self) -> Path:
        return self.root / "dists"

    @property
    def lock_dir(self) -> Path:
        return self.root / "lock"

    def archive_path(self, name: str, version: str) -> Path:
        """Path the distribution archive is downloaded to."""
        return self.downloads_dir / f"{name}-{version}.tgz"

    def dist_dir(self, name: str, version: str) -> Path:
        """Permanent location of an unpacked distribution."""
        return self.dists_dir / f"{name}-{version}"

    def binary_path(self, name: str, version: str, platform_string: str) -> Path:
        """
        Path of the distribution binary for a platform.

        Example:
            >>> CacheLayout(Path('/c')).binary_path('godel', '2.17.0', 'linux-amd64')
            PosixPath('/c/dists/godel-2.17.0/bin/linux-amd64/godel')
        """
        return distribution_binary(
            self.dist_dir(name, version), name, platform_string
        )

    def ensure(self) -> None:
        """Create the cache root and its download/dist directories."""
        for directory in (self.root, self.downloads_dir, self.dists_dir):
            directory.mkdir(parents=True, exist_ok=True)


def distribution_binary(dist_root: Path, name: str, platform_string: str) -> Path:
    """Path of the binary inside an unpacked distribution tree."""
    return dist_root / "bin" / platform_string / name

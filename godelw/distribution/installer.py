"""
Distribution download and installation.

This module orchestrates getting a distribution into the cache, coordinating
the downloader, checksum verification, archive validation and extraction.
Every step is fail-fast: the first error aborts the install.
"""

import logging
from contextlib import nullcontext
from pathlib import Path
from typing import Optional, Sequence

from godelw.config.properties import DistributionProperties, load_properties
from godelw.config.settings import WrapperSettings
from godelw.core.archive import extract_archive, verify_archive_contents
from godelw.core.directory import CacheLayout, distribution_binary
from godelw.core.download import DownloadProvider, download_file
from godelw.core.filesystem import FilesystemError, safe_rmtree, scratch_directory
from godelw.core.locking import install_lock
from godelw.core.platform import PlatformInfo
from godelw.core.verification import DigestProvider, verify_checksum
from godelw.distribution.version import verify_version

logger = logging.getLogger(__name__)


class DistributionInstaller:
    """
    Installs a pinned distribution into the cache.

    Workflow:
    1. Check whether the binary is already cached
    2. Read the properties file
    3. Download the archive into downloads/
    4. Verify the archive checksum, when one is configured
    5. Verify the archive contains the required entries
    6. Unpack into a scratch directory, check the binary's version, and
       move the tree into dists/

    Example:
        >>> installer = DistributionInstaller(settings, platform_info, layout, properties_file)
        >>> binary = installer.ensure_installed()
    """

    def __init__(
        self,
        settings: WrapperSettings,
        platform_info: PlatformInfo,
        layout: CacheLayout,
        properties_file: Path,
        download_providers: Optional[Sequence[DownloadProvider]] = None,
        digest_providers: Optional[Sequence[DigestProvider]] = None,
    ):
        """
        Args:
            settings: Pinned version and checksums
            platform_info: Detected platform
            layout: Cache directory layout
            properties_file: Path to godel.properties
            download_providers: Ordered download providers (default chain if None)
            digest_providers: Ordered digest providers (default chain if None)
        """
        self.settings = settings
        self.platform_info = platform_info
        self.layout = layout
        self.properties_file = properties_file
        self.download_providers = download_providers
        self.digest_providers = digest_providers

    @property
    def binary_path(self) -> Path:
        """Path of the binary once installed."""
        return self.layout.binary_path(
            self.settings.name,
            self.settings.version,
            self.platform_info.platform_string(),
        )

    def is_installed(self) -> bool:
        return self.binary_path.exists()

    def ensure_installed(self) -> Path:
        """
        Make sure the distribution binary is in the cache.

        Returns:
            Path to the binary

        Raises:
            GodelwError: If any install step fails
        """
        if self.is_installed():
            logger.debug(f"Using cached distribution: {self.binary_path}")
            return self.binary_path

        properties = load_properties(self.properties_file)

        if self.settings.install_lock:
            lock = install_lock(
                self.layout.lock_dir,
                self.settings.dist_id,
                timeout=self.settings.lock_timeout,
            )
        else:
            lock = nullcontext()

        with lock:
            if self.settings.install_lock and self.is_installed():
                logger.info(f"{self.settings.dist_id} was installed by another process")
                return self.binary_path
            self.install(properties)

        return self.binary_path

    def install(self, properties: DistributionProperties) -> Path:
        """
        Download, verify and unpack the distribution.

        Any existing installation of this version is replaced wholesale.

        Returns:
            Path to the installed distribution directory
        """
        name = self.settings.name
        version = self.settings.version
        self.layout.ensure()

        archive = self.layout.archive_path(name, version)
        download_file(properties.url, archive, providers=self.download_providers)

        if properties.sha256:
            logger.info(f"Verifying checksum of {archive}...")
            verify_checksum(archive, properties.sha256, providers=self.digest_providers)

        verify_archive_contents(archive, name, version)

        dist_dir = self.layout.dist_dir(name, version)
        with scratch_directory(self.layout.root) as temp_dir:
            logger.info(f"Unpacking {archive}...")
            extract_archive(archive, temp_dir)

            unpacked = temp_dir / self.settings.dist_id
            verify_version(
                distribution_binary(unpacked, name, self.platform_info.platform_string()),
                name,
                version,
            )

            if dist_dir.exists():
                logger.debug(f"Removing existing installation: {dist_dir}")
                safe_rmtree(dist_dir, require_prefix=self.layout.dists_dir)
            try:
                unpacked.rename(dist_dir)
            except OSError as e:
                raise FilesystemError(f"Failed to move {unpacked} to {dist_dir}: {e}") from e

        logger.info(f"Installed {self.settings.dist_id} to {dist_dir}")
        return dist_dir

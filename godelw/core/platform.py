"""
Platform detection for godelw.

Maps the kernel name reported by the running OS to one of the platforms a
distribution ships a binary for, and pairs it with the expected checksum
of that binary.

Usage:
    from godelw.core.platform import detect_platform

    platform_info = detect_platform(settings.checksums)
    print(platform_info.platform_string())  # e.g. 'linux-amd64'
"""

import platform
from dataclasses import dataclass
from typing import Mapping, Optional

from godelw.core.exceptions import UnsupportedPlatformError

# Kernel name (as printed by `uname -s`) -> platform identifier
_KERNEL_NAMES = {
    "Darwin": "darwin",
    "Linux": "linux",
}

DEFAULT_ARCH = "amd64"


@dataclass(frozen=True)
class PlatformInfo:
    """
    Platform the wrapper is running on.

    Attributes:
        os: Platform identifier ('darwin' or 'linux')
        arch: Binary architecture (always 'amd64' for godel distributions)
        checksum: Expected SHA-256 of the distribution binary for this platform
    """

    os: str
    arch: str
    checksum: str

    def platform_string(self) -> str:
        """
        Get the directory name used for this platform inside a distribution.

        Example:
            >>> PlatformInfo('linux', 'amd64', 'abc').platform_string()
            'linux-amd64'
        """
        return f"{self.os}-{self.arch}"

    def __str__(self) -> str:
        return self.platform_string()


def get_supported_platforms() -> list[str]:
    """Get the list of supported platform identifiers."""
    return sorted(_KERNEL_NAMES.values())


def normalize_os(kernel_name: str) -> str:
    """
    Convert a kernel name to a platform identifier.

    Raises:
        UnsupportedPlatformError: If the kernel name is not recognized
    """
    os_name = _KERNEL_NAMES.get(kernel_name)
    if os_name is None:
        raise UnsupportedPlatformError(kernel_name)
    return os_name


def detect_platform(
    checksums: Mapping[str, str], kernel_name: Optional[str] = None
) -> PlatformInfo:
    """
    Detect the current platform and look up its expected binary checksum.

    Args:
        checksums: Mapping of platform identifier -> expected SHA-256
        kernel_name: Kernel name to map (default: platform.system())

    Returns:
        PlatformInfo for the running OS

    Raises:
        UnsupportedPlatformError: If the OS is not supported or has no checksum
    """
    if kernel_name is None:
        kernel_name = platform.system()

    os_name = normalize_os(kernel_name)

    checksum = checksums.get(os_name)
    if not checksum:
        raise UnsupportedPlatformError(
            kernel_name, f"no checksum configured for {os_name}"
        )

    return PlatformInfo(os=os_name, arch=DEFAULT_ARCH, checksum=checksum)

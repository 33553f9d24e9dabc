"""
Pytest configuration and shared fixtures for godelw tests.
"""

import logging
from pathlib import Path

import pytest

from godelw.config.settings import WrapperSettings
from godelw.core.directory import CacheLayout
from godelw.core.platform import PlatformInfo
from tests.fixtures.distributions import (
    DistributionArchive,
    build_distribution,
)

DIST_URL = "https://example.com/godel/godel-2.17.0.tgz"


@pytest.fixture
def dist_url() -> str:
    return DIST_URL


@pytest.fixture
def distribution(tmp_path: Path) -> DistributionArchive:
    """A well-formed godel 2.17.0 distribution."""
    return build_distribution(tmp_path / "build")


@pytest.fixture
def layout(tmp_path: Path) -> CacheLayout:
    return CacheLayout(tmp_path / "cache")


@pytest.fixture
def settings(distribution: DistributionArchive) -> WrapperSettings:
    return WrapperSettings(
        version=distribution.version,
        checksums={
            "darwin": distribution.binary_sha256,
            "linux": distribution.binary_sha256,
        },
    )


@pytest.fixture
def platform_info(distribution: DistributionArchive) -> PlatformInfo:
    return PlatformInfo(os="linux", arch="amd64", checksum=distribution.binary_sha256)


@pytest.fixture(autouse=True)
def restore_logging():
    """CLI.run() reconfigures the root logger; put it back afterwards."""
    root = logging.getLogger()
    handlers, level = root.handlers[:], root.level
    yield
    root.handlers[:] = handlers
    root.setLevel(level)

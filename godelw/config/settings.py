"""YAML settings parser for godelw.

godelw.yml pins what a shell wrapper would bake into its script: the
distribution version and the checksum of its binary on each platform.

Example godelw.yml:
    version: 2.17.0
    checksums:
      darwin: 5b0f8c...
      linux: 9a1e2d...
    install_lock: false
"""

import logging
from dataclasses import dataclass, field
from pathlib import Path
from types import MappingProxyType
from typing import Mapping

import yaml

from godelw.core.exceptions import (
    ConfigError,
    ConfigMissingError,
    ConfigPropertyEmptyError,
)
from godelw.core.platform import get_supported_platforms

logger = logging.getLogger(__name__)

DEFAULT_NAME = "godel"


@dataclass(frozen=True)
class WrapperSettings:
    """Immutable wrapper configuration, built once per invocation."""

    version: str
    checksums: Mapping[str, str] = field(default_factory=dict)
    name: str = DEFAULT_NAME
    install_lock: bool = False
    lock_timeout: float = 300

    @property
    def dist_id(self) -> str:
        """Distribution identifier, e.g. 'godel-2.17.0'."""
        return f"{self.name}-{self.version}"


def load_settings(path: Path) -> WrapperSettings:
    """
    Load wrapper settings from godelw.yml.

    Raises:
        ConfigMissingError: If the file does not exist
        ConfigPropertyEmptyError: If version is missing or empty
        ConfigError: If the file is not valid YAML or has wrong types
    """
    if not path.is_file():
        raise ConfigMissingError(path)

    try:
        with open(path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except UnicodeDecodeError as e:
        raise ConfigError(f"{path} is not valid UTF-8: {e}") from e
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML syntax in {path}: {e}") from e

    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise ConfigError(f"{path} must contain a mapping")

    return _parse_settings(data, path)


def _parse_settings(data: dict, path: Path) -> WrapperSettings:
    """Parse and validate settings data."""
    version = data.get("version")
    if version is None or version == "":
        raise ConfigPropertyEmptyError("version", path)
    if not isinstance(version, str):
        # 2.10 would load as the float 2.1
        raise ConfigError(
            f"version in {path} must be a string; quote it: version: \"{version}\""
        )

    name = data.get("name", DEFAULT_NAME)
    if not isinstance(name, str) or not name:
        raise ConfigError(f"name in {path} must be a non-empty string")

    checksums = data.get("checksums") or {}
    if not isinstance(checksums, dict):
        raise ConfigError(f"checksums in {path} must be a mapping of platform to SHA-256")

    supported = get_supported_platforms()
    for platform_name, checksum in checksums.items():
        if platform_name not in supported:
            raise ConfigError(
                f"Unknown platform in checksums: {platform_name} "
                f"(expected one of {supported})"
            )
        if not isinstance(checksum, str):
            raise ConfigError(f"checksums.{platform_name} in {path} must be a string")

    install_lock = data.get("install_lock", False)
    if not isinstance(install_lock, bool):
        raise ConfigError(f"install_lock in {path} must be true or false")

    lock_timeout = data.get("lock_timeout", 300)
    if isinstance(lock_timeout, bool) or not isinstance(lock_timeout, (int, float)):
        raise ConfigError(f"lock_timeout in {path} must be a number of seconds")

    logger.debug(f"Loaded settings from {path}: {name} {version}")

    return WrapperSettings(
        version=version,
        checksums=MappingProxyType(dict(checksums)),
        name=name,
        install_lock=install_lock,
        lock_timeout=lock_timeout,
    )

"""Parser for the godel.properties distribution file.

The file is line oriented `key=value` text. Only two keys are read:

    distributionURL=https://example.com/godel-2.17.0.tgz
    distributionSHA256=<hex digest of the archive>
"""

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, Optional

from godelw.core.exceptions import (
    ConfigError,
    ConfigMissingError,
    ConfigPropertyEmptyError,
)

logger = logging.getLogger(__name__)

URL_KEY = "distributionURL"
SHA256_KEY = "distributionSHA256"


@dataclass(frozen=True)
class DistributionProperties:
    """Where to download the distribution and how to check it."""

    url: str
    sha256: Optional[str] = None


def parse_properties(text: str) -> Dict[str, str]:
    """
    Parse `key=value` lines.

    The value is everything after the first '='. The first occurrence of a
    key wins; lines without '=' are ignored.

    Example:
        >>> parse_properties("a=b=c\\nnoise\\na=d")
        {'a': 'b=c'}
    """
    values: Dict[str, str] = {}
    for line in text.splitlines():
        key, sep, value = line.partition("=")
        if not sep:
            continue
        values.setdefault(key, value)
    return values


def load_properties(path: Path) -> DistributionProperties:
    """
    Load the distribution properties file.

    Args:
        path: Path to godel.properties

    Returns:
        Parsed properties

    Raises:
        ConfigMissingError: If the file does not exist
        ConfigError: If the file is not valid UTF-8
        ConfigPropertyEmptyError: If distributionURL is absent or empty
    """
    if not path.is_file():
        raise ConfigMissingError(path)

    logger.debug(f"Loading properties from {path}")
    try:
        text = path.read_text(encoding="utf-8")
    except UnicodeDecodeError as e:
        raise ConfigError(f"{path} is not valid UTF-8: {e}") from e
    values = parse_properties(text)

    url = values.get(URL_KEY, "")
    if not url:
        raise ConfigPropertyEmptyError(URL_KEY, path)

    return DistributionProperties(url=url, sha256=values.get(SHA256_KEY) or None)

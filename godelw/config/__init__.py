"""Configuration module for godelw.

Reads the two files a wrapper checkout carries: the godel.properties file
naming the distribution to download, and the godelw.yml settings pinning the
version and binary checksums.
"""

from godelw.config.properties import (
    DistributionProperties,
    parse_properties,
    load_properties,
)
from godelw.config.settings import (
    WrapperSettings,
    load_settings,
)

__all__ = [
    "DistributionProperties",
    "parse_properties",
    "load_properties",
    "WrapperSettings",
    "load_settings",
]

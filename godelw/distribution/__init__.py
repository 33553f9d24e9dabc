"""
Distribution installation and launching.
"""

from godelw.distribution.installer import DistributionInstaller
from godelw.distribution.launcher import build_command, launch
from godelw.distribution.version import verify_version

__all__ = [
    "DistributionInstaller",
    "build_command",
    "launch",
    "verify_version",
]

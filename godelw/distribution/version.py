"""
Version check for an unpacked distribution binary.
"""

import logging
import subprocess
from pathlib import Path

from godelw.core.exceptions import VersionMismatchError

logger = logging.getLogger(__name__)


def verify_version(binary: Path, name: str, version: str) -> None:
    """
    Run `<binary> version` and compare its output to "<name> version <version>".

    Trailing newlines are stripped from stdout, as shell command substitution
    does; any other difference is a mismatch.

    Raises:
        VersionMismatchError: If output differs, the command fails, or
            the binary cannot be executed
    """
    expected = f"{name} version {version}"

    try:
        result = subprocess.run([str(binary), "version"], capture_output=True)
    except OSError as e:
        raise VersionMismatchError(binary, expected, f"<failed to execute: {e}>") from e

    # Undecodable bytes are kept visible in the mismatch message
    actual = result.stdout.decode("utf-8", errors="replace").rstrip("\n")
    if result.returncode != 0:
        detail = result.stderr.decode("utf-8", errors="replace").strip() or actual
        raise VersionMismatchError(
            binary, expected, f"<exit status {result.returncode}> {detail}".rstrip()
        )

    if actual != expected:
        raise VersionMismatchError(binary, expected, actual)

    logger.debug(f"Verified version of {binary}: {actual}")

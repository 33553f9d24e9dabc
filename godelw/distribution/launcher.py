"""
Launches the installed distribution binary in place of the wrapper.
"""

import logging
import os
import subprocess
from pathlib import Path
from typing import Callable, Optional, Sequence

from godelw.core.exceptions import LaunchError
from godelw.core.platform import PlatformInfo
from godelw.core.verification import DigestProvider, verify_checksum

logger = logging.getLogger(__name__)

WRAPPER_FLAG = "--wrapper"


def build_command(binary: Path, args: Sequence[str], wrapper_path: Path) -> list[str]:
    """
    Build the argument vector for the distribution binary.

    Example:
        >>> build_command(Path('/c/godel'), ['verify'], Path('/p/godelw'))
        ['/c/godel', 'verify', '--wrapper', '/p/godelw']
    """
    return [str(binary), *args, WRAPPER_FLAG, str(wrapper_path)]


def _spawn(path: str, argv: list[str]) -> int:
    return subprocess.run(argv, executable=path).returncode


def launch(
    binary: Path,
    platform_info: PlatformInfo,
    args: Sequence[str],
    wrapper_path: Path,
    digest_providers: Optional[Sequence[DigestProvider]] = None,
    exec_fn: Optional[Callable[[str, list[str]], Optional[int]]] = None,
) -> int:
    """
    Verify the binary's checksum and run it with the forwarded arguments.

    With os.execv the wrapper process is replaced and this never returns.
    Without it, the binary runs as a child and its exit status is returned.

    Args:
        binary: Installed distribution binary
        platform_info: Platform whose checksum the binary must match
        args: Caller-supplied arguments, forwarded in order
        wrapper_path: Path of the wrapper, passed as --wrapper
        digest_providers: Ordered digest providers
        exec_fn: Replacement for os.execv (callable(path, argv))

    Returns:
        Exit status of the binary when it ran as a child

    Raises:
        ChecksumMismatchError: If the binary does not match the platform checksum
        LaunchError: If the binary cannot be executed
    """
    verify_checksum(binary, platform_info.checksum, providers=digest_providers)

    argv = build_command(binary, args, wrapper_path)

    if exec_fn is None:
        exec_fn = getattr(os, "execv", None) or _spawn

    logger.debug(f"Executing: {' '.join(argv)}")
    try:
        result = exec_fn(argv[0], argv)
    except OSError as e:
        raise LaunchError(binary, str(e)) from e
    return result or 0

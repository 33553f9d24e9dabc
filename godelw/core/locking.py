"""
Install locking for godelw.

Two wrappers installing the same version into one cache root are not
coordinated unless `install_lock: true` is set in godelw.yml. With it, the
download/unpack/move sequence for a version runs under a file lock.

Usage:
    from godelw.core.locking import install_lock

    with install_lock(layout.lock_dir, "godel-2.17.0", timeout=300):
        ...
"""

import logging
from contextlib import contextmanager
from pathlib import Path

from filelock import FileLock, Timeout

from godelw.core.exceptions import InstallLockTimeout

logger = logging.getLogger(__name__)


@contextmanager
def install_lock(lock_dir: Path, dist_id: str, timeout: float = 300):
    """
    Acquire the install lock for a distribution.

    Args:
        lock_dir: Directory holding lock files
        dist_id: Distribution identifier (e.g., 'godel-2.17.0')
        timeout: Maximum wait time in seconds

    Raises:
        InstallLockTimeout: If the lock can't be acquired within timeout
    """
    lock_dir.mkdir(parents=True, exist_ok=True)
    safe_id = dist_id.replace("/", "-").replace("\\", "-").replace(":", "-")
    lock_path = lock_dir / f"{safe_id}.lock"
    lock = FileLock(lock_path, timeout=timeout)

    try:
        lock.acquire()
    except Timeout as e:
        raise InstallLockTimeout(
            f"Could not acquire install lock for {dist_id} after {timeout}s. "
            "Another godelw process may be installing this distribution."
        ) from e

    logger.debug(f"Acquired install lock: {lock_path}")
    try:
        yield
    finally:
        lock.release()
        logger.debug(f"Released install lock: {lock_path}")

"""
File system utilities for godelw.

Safe deletion of cache directories and scratch directories that are
removed when their scope exits, whatever the outcome.
"""

import logging
import shutil
import tempfile
from contextlib import contextmanager
from pathlib import Path
from typing import Iterator, Optional, Union

from godelw.core.exceptions import GodelwError

logger = logging.getLogger(__name__)


class FilesystemError(GodelwError):
    """Base exception for filesystem operations."""

    pass


def is_relative_to(path: Path, parent: Path) -> bool:
    """Check whether path is located under parent."""
    try:
        path.relative_to(parent)
        return True
    except ValueError:
        return False


def safe_rmtree(
    path: Union[str, Path], require_prefix: Optional[Union[str, Path]] = None
) -> None:
    """
    Safely remove a directory tree with safeguards.

    Args:
        path: Directory to remove
        require_prefix: If specified, path must be under this directory

    Raises:
        ValueError: If path is not under require_prefix
        FilesystemError: If deletion fails

    Example:
        >>> safe_rmtree('~/.godel/dists/godel-2.17.0', require_prefix='~/.godel/dists')
    """
    path = Path(path).resolve()

    if require_prefix is not None:
        require_prefix = Path(require_prefix).resolve()
        if not is_relative_to(path, require_prefix):
            raise ValueError(
                f"Refusing to delete '{path}': not under required prefix '{require_prefix}'"
            )

    if not path.exists():
        return

    if not path.is_dir():
        raise FilesystemError(f"Path is not a directory: {path}")

    try:
        shutil.rmtree(path)
    except OSError as e:
        raise FilesystemError(f"Failed to remove directory '{path}': {e}") from e


@contextmanager
def scratch_directory(parent: Path, prefix: str = "tmp_") -> Iterator[Path]:
    """
    Context manager for a temporary directory under parent.

    Keeping the directory next to its final destination makes the final
    move a same-filesystem rename.

    Yields:
        Path to the new directory, removed on exit

    Example:
        >>> with scratch_directory(Path('~/.godel').expanduser()) as tmp:
        ...     (tmp / 'file.txt').write_text('test')
    """
    parent.mkdir(parents=True, exist_ok=True)
    temp_dir = Path(tempfile.mkdtemp(prefix=prefix, dir=parent))
    logger.debug(f"Created scratch directory: {temp_dir}")

    try:
        yield temp_dir
    finally:
        if temp_dir.exists():
            shutil.rmtree(temp_dir, ignore_errors=True)
            logger.debug(f"Removed scratch directory: {temp_dir}")

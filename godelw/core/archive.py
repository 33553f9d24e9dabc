"""
Distribution archive inspection and extraction.

A distribution is a gzip-compressed tar whose listing must contain a fixed
set of entries before it is unpacked. Entries are compared as `tar tf`
prints them: directories carry a trailing slash.
"""

import logging
import sys
import tarfile
from pathlib import Path
from typing import Iterator, Union

from godelw.core.exceptions import (
    ArchiveError,
    ArchiveMissingEntriesError,
    InsecureArchiveError,
)
from godelw.core.filesystem import is_relative_to

logger = logging.getLogger(__name__)


def required_entries(name: str, version: str) -> list[str]:
    """
    Get the entries every distribution archive must contain.

    Example:
        >>> required_entries('godel', '2.17.0')[0]
        'godel-2.17.0/'
    """
    root = f"{name}-{version}"
    return [
        f"{root}/",
        f"{root}/bin/darwin-amd64/{name}",
        f"{root}/bin/linux-amd64/{name}",
        f"{root}/wrapper/{name}w",
        f"{root}/wrapper/{name}/config/",
    ]


def list_archive_entries(archive_path: Union[str, Path]) -> Iterator[str]:
    """
    Yield the file listing of a tar archive.

    tarfile strips the trailing slash from directory members; it is restored
    so names match the archive's listing byte for byte.

    Raises:
        ArchiveError: If the archive cannot be read
    """
    try:
        with tarfile.open(archive_path, "r:*") as tar:
            for member in tar:
                yield member.name + "/" if member.isdir() else member.name
    except (tarfile.TarError, OSError, EOFError) as e:
        raise ArchiveError(f"Failed to read archive {archive_path}: {e}") from e


def verify_archive_contents(
    archive_path: Union[str, Path], name: str, version: str
) -> None:
    """
    Verify that an archive contains every required distribution entry.

    The listing is scanned once; each exact match removes an entry from the
    pending set. Extra entries are allowed.

    Raises:
        ArchiveMissingEntriesError: Listing the required entries not found
        ArchiveError: If the archive cannot be read
    """
    pending = dict.fromkeys(required_entries(name, version))

    for entry in list_archive_entries(archive_path):
        pending.pop(entry, None)
        if not pending:
            break

    if pending:
        raise ArchiveMissingEntriesError(archive_path, list(pending))

    logger.debug(f"Archive contains all required entries: {archive_path}")


def _validate_archive_path(path: str, destination: Path) -> None:
    """
    Validate that an archive member path is safe to extract.

    Raises:
        InsecureArchiveError: If path attempts directory traversal
    """
    member_path = (destination / path).resolve()

    if not is_relative_to(member_path, destination.resolve()):
        raise InsecureArchiveError(
            f"Archive member '{path}' attempts directory traversal. "
            "This is a security risk and extraction has been blocked."
        )


def extract_archive(archive_path: Union[str, Path], destination: Union[str, Path]) -> None:
    """
    Extract a gzip tar archive into destination.

    All member paths are validated before anything is written.

    Raises:
        InsecureArchiveError: If archive contains malicious paths
        ArchiveError: If extraction fails
    """
    archive_path = Path(archive_path)
    destination = Path(destination)

    if not archive_path.exists():
        raise ArchiveError(f"Archive not found: {archive_path}")

    destination.mkdir(parents=True, exist_ok=True)

    try:
        with tarfile.open(archive_path, "r:gz") as tar:
            members = tar.getmembers()

            # Validate all paths first
            for member in members:
                _validate_archive_path(member.name, destination)

            # Extract with filter for security (Python 3.12+)
            # For older Python, we've already validated paths above
            if sys.version_info >= (3, 12):
                tar.extractall(destination, filter="data")
            else:
                tar.extractall(destination)
    except InsecureArchiveError:
        raise
    except (tarfile.TarError, OSError, EOFError) as e:
        raise ArchiveError(f"Failed to extract {archive_path}: {e}") from e

    logger.debug(f"Extracted {len(members)} entries to {destination}")

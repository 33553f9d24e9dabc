"""
SHA-256 computation and verification with ordered provider fallback.

Digests are computed in process with hashlib when possible; sha256sum,
shasum and openssl are kept as interchangeable providers. Every provider
yields the same lowercase hex digest for the same file.
"""

import hashlib
import logging
import secrets
import shutil
import subprocess
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Optional, Sequence

from godelw.core.exceptions import (
    ChecksumError,
    ChecksumMismatchError,
    MissingToolError,
)

logger = logging.getLogger(__name__)


class DigestProvider(ABC):
    """A way of computing the SHA-256 of a file."""

    name: str = ""

    @abstractmethod
    def is_available(self) -> bool:
        """Whether this provider can be used on this machine."""

    @abstractmethod
    def attempt(self, file_path: Path) -> str:
        """
        Compute the lowercase hex SHA-256 of file_path.

        Raises:
            ChecksumError: If the digest cannot be computed
        """


class HashlibDigest(DigestProvider):
    """In-process digest using hashlib."""

    name = "hashlib"

    def __init__(self, chunk_size: int = 8192):
        self.chunk_size = chunk_size

    def is_available(self) -> bool:
        return True

    def attempt(self, file_path: Path) -> str:
        hasher = hashlib.sha256()
        try:
            with open(file_path, "rb") as f:
                while chunk := f.read(self.chunk_size):
                    hasher.update(chunk)
        except OSError as e:
            raise ChecksumError(f"Failed to read {file_path}: {e}") from e
        return hasher.hexdigest()


class CommandDigest(DigestProvider):
    """
    Digest computed by an external tool.

    The tool must print the hex digest as the first whitespace-separated
    token of its output, as sha256sum, `shasum -a 256` and `openssl dgst -r` do.
    """

    def __init__(self, name: str, *arguments: str):
        self.name = name
        self.arguments = list(arguments)

    def is_available(self) -> bool:
        return shutil.which(self.name) is not None

    def attempt(self, file_path: Path) -> str:
        cmd = [self.name, *self.arguments, str(file_path)]
        try:
            result = subprocess.run(cmd, capture_output=True, text=True)
        except OSError as e:
            raise ChecksumError(f"could not run {self.name}: {e}") from e

        if result.returncode != 0:
            raise ChecksumError(
                f"{self.name} failed for {file_path}: {result.stderr.strip()}"
            )

        parts = result.stdout.split()
        if not parts:
            raise ChecksumError(f"{self.name} produced no output for {file_path}")
        return parts[0].lower()


def default_digest_providers() -> list[DigestProvider]:
    """Providers in the order they are tried."""
    return [
        HashlibDigest(),
        CommandDigest("sha256sum"),
        CommandDigest("shasum", "-a", "256"),
        CommandDigest("openssl", "dgst", "-sha256", "-r"),
    ]


def compute_sha256(
    file_path: Path, providers: Optional[Sequence[DigestProvider]] = None
) -> str:
    """
    Compute the SHA-256 of a file with the first working provider.

    Args:
        file_path: Path to file
        providers: Ordered providers (default: default_digest_providers())

    Returns:
        Lowercase hex digest

    Raises:
        ChecksumError: If file doesn't exist or every provider failed
        MissingToolError: If no provider is available

    Example:
        >>> compute_sha256(Path('godel-2.17.0.tgz'))
        'e3b0c442...'
    """
    file_path = Path(file_path)
    if not file_path.is_file():
        raise ChecksumError(f"File not found: {file_path}")

    if providers is None:
        providers = default_digest_providers()

    available = [p for p in providers if p.is_available()]
    if not available:
        raise MissingToolError("SHA-256", [p.name for p in providers])

    errors = []
    for provider in available:
        try:
            digest = provider.attempt(file_path)
        except ChecksumError as e:
            logger.warning(f"Computing checksum using {provider.name} failed: {e}")
            errors.append(str(e))
            continue

        logger.debug(f"SHA-256 of {file_path} ({provider.name}): {digest}")
        return digest

    raise ChecksumError(
        f"Failed to compute checksum for {file_path}\n" + "\n".join(errors)
    )


def verify_checksum(
    file_path: Path,
    expected_sha256: str,
    providers: Optional[Sequence[DigestProvider]] = None,
) -> str:
    """
    Verify a file against an expected SHA-256.

    Comparison is case-sensitive and constant-time.

    Args:
        file_path: Path to file
        expected_sha256: Expected hex digest
        providers: Ordered digest providers

    Returns:
        The computed digest

    Raises:
        ChecksumMismatchError: If the digest differs from expected_sha256
    """
    actual = compute_sha256(file_path, providers)

    if not _constant_time_compare(actual, expected_sha256):
        raise ChecksumMismatchError(file_path, expected_sha256, actual)

    logger.debug(f"Checksum verified: {file_path}")
    return actual


def _constant_time_compare(a: str, b: str) -> bool:
    """Compare two strings in constant time."""
    return secrets.compare_digest(a.encode("utf-8"), b.encode("utf-8"))

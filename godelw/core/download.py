"""
Network download with ordered provider fallback.

A download is attempted with each available provider in turn:
- RequestsDownloader: streaming HTTP GET in process (always available)
- CommandDownloader: an external client (curl, wget) found on PATH

The first provider that succeeds wins. Providers that are not installed are
skipped; a provider that fails is reported and the next one is tried.
"""

import logging
import shutil
import subprocess
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Optional, Sequence

import requests
from requests.exceptions import RequestException

from godelw.core.exceptions import DownloadError, MissingToolError

logger = logging.getLogger(__name__)

CHUNK_SIZE = 8192


class DownloadProvider(ABC):
    """A way of fetching a URL to a local file."""

    name: str = ""

    @abstractmethod
    def is_available(self) -> bool:
        """Whether this provider can be used on this machine."""

    @abstractmethod
    def attempt(self, url: str, destination: Path) -> None:
        """
        Fetch url into destination, overwriting it.

        Raises:
            DownloadError: If the fetch fails
        """


class RequestsDownloader(DownloadProvider):
    """Streaming download through requests."""

    name = "requests"

    def __init__(self, timeout: Optional[float] = None):
        """
        Args:
            timeout: Socket timeout in seconds (default: none, block until done)
        """
        self.timeout = timeout

    def is_available(self) -> bool:
        return True

    def attempt(self, url: str, destination: Path) -> None:
        try:
            with requests.get(
                url, stream=True, timeout=self.timeout, allow_redirects=True
            ) as response:
                response.raise_for_status()

                downloaded = 0
                with open(destination, "wb") as f:
                    for chunk in response.iter_content(chunk_size=CHUNK_SIZE):
                        if chunk:
                            f.write(chunk)
                            downloaded += len(chunk)

        except (RequestException, OSError) as e:
            raise DownloadError(str(e)) from e

        logger.debug(f"Fetched {downloaded} bytes with {self.name}")


class CommandDownloader(DownloadProvider):
    """Download through an external command-line client."""

    def __init__(self, name: str, arguments: Sequence[str]):
        """
        Args:
            name: Executable name looked up on PATH
            arguments: Argument template; '{url}' and '{destination}' are substituted
        """
        self.name = name
        self.arguments = list(arguments)

    @classmethod
    def curl(cls) -> "CommandDownloader":
        return cls(
            "curl",
            ["--fail", "--location", "--silent", "--show-error",
             "-o", "{destination}", "{url}"],
        )

    @classmethod
    def wget(cls) -> "CommandDownloader":
        return cls("wget", ["--quiet", "-O", "{destination}", "{url}"])

    def is_available(self) -> bool:
        return shutil.which(self.name) is not None

    def attempt(self, url: str, destination: Path) -> None:
        cmd = [self.name] + [
            arg.format(url=url, destination=destination) for arg in self.arguments
        ]
        logger.debug(f"Running: {' '.join(cmd)}")

        try:
            result = subprocess.run(cmd, capture_output=True, text=True)
        except OSError as e:
            raise DownloadError(f"could not run {self.name}: {e}") from e

        if result.returncode != 0:
            detail = result.stderr.strip() or f"exit status {result.returncode}"
            raise DownloadError(detail)


def default_download_providers() -> list[DownloadProvider]:
    """Providers in the order they are tried."""
    return [
        RequestsDownloader(),
        CommandDownloader.curl(),
        CommandDownloader.wget(),
    ]


def download_file(
    url: str,
    destination: Path,
    providers: Optional[Sequence[DownloadProvider]] = None,
) -> Path:
    """
    Download a URL to destination using the first provider that succeeds.

    Args:
        url: URL to download from
        destination: Local path to save file (parent directories are created)
        providers: Ordered providers (default: default_download_providers())

    Returns:
        Path to downloaded file

    Raises:
        ValueError: If URL is empty
        MissingToolError: If no provider is available
        DownloadError: If every available provider failed

    Example:
        >>> download_file(
        ...     "https://example.com/godel-2.17.0.tgz",
        ...     Path("~/.godel/downloads/godel-2.17.0.tgz").expanduser(),
        ... )
    """
    if not url:
        raise ValueError("URL cannot be empty")

    if providers is None:
        providers = default_download_providers()

    destination = Path(destination)
    destination.parent.mkdir(parents=True, exist_ok=True)

    available = [p for p in providers if p.is_available()]
    if not available:
        raise MissingToolError("download", [p.name for p in providers])

    logger.info(f"Downloading {url} to {destination}...")

    failures = []
    for provider in available:
        logger.debug(f"Attempting download with {provider.name}")
        try:
            provider.attempt(url, destination)
        except DownloadError as e:
            logger.warning(f"Download using {provider.name} failed: {e}")
            failures.append(f"{provider.name}: {e}")
            continue

        logger.debug(f"Download complete: {destination}")
        return destination

    tried = ", ".join(p.name for p in available)
    raise DownloadError(
        f"Failed to download {url} using {tried}\n" + "\n".join(failures)
    )

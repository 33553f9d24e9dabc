"""
Centralized exception hierarchy for godelw.

Every failure the wrapper can hit is terminal: the CLI reports the message
and exits with status 1. Nothing here is retried or downgraded to a warning.
"""


# ============================================================================
# Base Exceptions
# ============================================================================


class GodelwError(Exception):
    """Base exception for all godelw errors."""

    pass


# ============================================================================
# Platform and Tooling Exceptions
# ============================================================================


class UnsupportedPlatformError(GodelwError):
    """Raised when the running OS has no distribution binary."""

    def __init__(self, kernel_name: str, reason: str = ""):
        self.kernel_name = kernel_name
        msg = f"Unsupported operating system: {kernel_name}"
        if reason:
            msg += f" ({reason})"
        super().__init__(msg)


class MissingToolError(GodelwError):
    """Raised when no provider for a capability is installed."""

    def __init__(self, capability: str, candidates: list[str]):
        self.capability = capability
        self.candidates = list(candidates)
        super().__init__(
            f"No {capability} tool is available. "
            f"Install one of: {', '.join(self.candidates)}"
        )


# ============================================================================
# Configuration Exceptions
# ============================================================================


class ConfigError(GodelwError):
    """Base exception for configuration errors."""

    pass


class ConfigMissingError(ConfigError):
    """Raised when a required configuration file does not exist."""

    def __init__(self, path):
        self.path = path
        super().__init__(f"Configuration file does not exist: {path}")


class ConfigPropertyEmptyError(ConfigError):
    """Raised when a required property is absent or empty."""

    def __init__(self, key: str, path):
        self.key = key
        self.path = path
        super().__init__(f"Value for property \"{key}\" is empty in {path}")


# ============================================================================
# Download and Verification Exceptions
# ============================================================================


class DownloadError(GodelwError):
    """Raised when a download fails."""

    pass


class ChecksumError(GodelwError):
    """Raised when a digest cannot be computed."""

    pass


class ChecksumMismatchError(ChecksumError):
    """Raised when a file's SHA-256 does not match the expected value."""

    def __init__(self, path, expected: str, actual: str):
        self.path = path
        self.expected = expected
        self.actual = actual
        super().__init__(
            f"SHA-256 checksum for {path} did not match expected value.\n"
            f"Expected: {expected}\n"
            f"Actual:   {actual}"
        )


# ============================================================================
# Archive Exceptions
# ============================================================================


class ArchiveError(GodelwError):
    """Raised when an archive cannot be read or extracted."""

    pass


class ArchiveMissingEntriesError(ArchiveError):
    """Raised when an archive lacks required paths."""

    def __init__(self, archive, missing: list[str]):
        self.archive = archive
        self.missing = list(missing)
        listing = "\n".join(f"  {entry}" for entry in self.missing)
        super().__init__(
            f"Archive {archive} is missing required entries:\n{listing}"
        )


class InsecureArchiveError(ArchiveError):
    """Archive contains insecure paths (directory traversal attempt)."""

    pass


# ============================================================================
# Installation Exceptions
# ============================================================================


class VersionMismatchError(GodelwError):
    """Raised when the unpacked binary reports an unexpected version."""

    def __init__(self, binary, expected: str, actual: str):
        self.binary = binary
        self.expected = expected
        self.actual = actual
        super().__init__(
            f"Version reported by {binary} did not match expected version.\n"
            f"Expected: {expected}\n"
            f"Actual:   {actual}"
        )


class InstallLockTimeout(GodelwError):
    """Raised when the install lock cannot be acquired within timeout."""

    pass


class LaunchError(GodelwError):
    """Raised when the installed binary cannot be executed."""

    def __init__(self, binary, reason: str):
        self.binary = binary
        super().__init__(f"Failed to execute {binary}: {reason}")

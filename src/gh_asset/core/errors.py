"""Exception hierarchy for gh-asset.

Every failure of a download invocation is terminal. The categories below let
the CLI (and tests) react to the broad class of a failure (credentials,
source, destination, transfer) while still exposing the specific kind.
"""

from __future__ import annotations

__all__ = [
    "GhAssetError",
    "AuthError",
    "AuthUnavailableError",
    "AuthDeniedError",
    "AuthEmptyError",
    "SourceError",
    "InvalidAssetIdError",
    "InvalidSourceUrlError",
    "DestinationError",
    "PathTraversalError",
    "SystemDirectoryDeniedError",
    "OutsideWorkingDirectoryError",
    "InvalidFilenameError",
    "DownloadError",
    "HttpStatusError",
    "NetworkError",
    "FilesystemError",
]


class GhAssetError(RuntimeError):
    """Base exception for every gh-asset failure."""


class AuthError(GhAssetError):
    """Raised when a bearer token cannot be obtained."""


class AuthUnavailableError(AuthError):
    """Raised when the GitHub CLI cannot be executed at all."""


class AuthDeniedError(AuthError):
    """Raised when the GitHub CLI exits with a non-zero status."""

    def __init__(self, message: str, *, diagnostic: str = "") -> None:
        super().__init__(message)
        self.diagnostic = diagnostic


class AuthEmptyError(AuthError):
    """Raised when the GitHub CLI succeeds but prints no usable token."""


class SourceError(GhAssetError):
    """Raised when the download source fails validation."""


class InvalidAssetIdError(SourceError):
    """Raised for asset identifiers outside the accepted shapes."""


class InvalidSourceUrlError(SourceError):
    """Raised for asset URLs that are malformed or not hosted on GitHub."""


class DestinationError(GhAssetError):
    """Raised when the destination path fails safety validation."""


class PathTraversalError(DestinationError):
    """Raised when the destination contains a `..` sequence."""


class SystemDirectoryDeniedError(DestinationError):
    """Raised when an absolute destination points into a system directory."""


class OutsideWorkingDirectoryError(DestinationError):
    """Raised when a relative destination resolves outside the working directory."""


class InvalidFilenameError(DestinationError):
    """Raised when the final path component is empty, blank or contains NUL."""


class DownloadError(GhAssetError):
    """Raised when fetching or persisting the asset fails."""


class HttpStatusError(DownloadError):
    """Raised when the download request returns a non-success status."""

    def __init__(self, status: int, reason: str = "") -> None:
        reason = reason or "Unknown error"
        super().__init__(f"HTTP request failed with status: {status} - {reason}")
        self.status = status
        self.reason = reason


class NetworkError(DownloadError):
    """Raised when the download request cannot be completed at the transport level."""


class FilesystemError(DownloadError):
    """Raised when creating directories or writing the destination file fails."""

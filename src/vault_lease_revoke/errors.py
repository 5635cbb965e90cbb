"""Error taxonomy for vault-lease-revoke.

Only the entry calls (listing mounts, fetching revocation candidates) raise
these to the caller. Failures further down the traversal or inside the
revocation workers are captured and reported rather than raised.
"""
from __future__ import annotations


class LeaseToolError(Exception):
    """Base exception for all vault-lease-revoke errors."""


class ConfigurationError(LeaseToolError):
    """Raised when required settings (such as the Vault token) are missing."""


class DirectoryError(LeaseToolError):
    """Raised when a call against the remote directory fails outright.

    Parameters
    ----------
    message:
        Human-readable description of the failure.
    path:
        The directory path that was being accessed, if known.
    """

    def __init__(self, message: str, path: str | None = None) -> None:
        super().__init__(message)
        self.path = path


class MalformedResponseError(DirectoryError):
    """Raised when the directory answers with data of an unexpected shape."""

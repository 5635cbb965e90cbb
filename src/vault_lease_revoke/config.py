"""Connection settings for the Vault server.

Settings come from the standard Vault environment variables, the same ones
the ``vault`` CLI reads, so the tool runs unchanged inside an existing
Vault shell session.
"""
from __future__ import annotations

import logging
import os
from collections.abc import Mapping
from dataclasses import dataclass

import hvac

from vault_lease_revoke.directory.client import HvacDirectoryClient
from vault_lease_revoke.errors import ConfigurationError

logger = logging.getLogger(__name__)

DEFAULT_ADDRESS = "http://127.0.0.1:8200"
_TRUTHY = frozenset({"1", "true", "yes", "on"})


@dataclass(frozen=True)
class VaultSettings:
    """How to reach and authenticate against Vault.

    Parameters
    ----------
    address:
        Base URL of the Vault server.
    token:
        Vault token. Required before any mode runs.
    namespace:
        Enterprise namespace to operate in, if any.
    ca_cert:
        Path to a CA bundle used to verify the server certificate.
    skip_verify:
        Disable TLS verification entirely.
    """

    address: str = DEFAULT_ADDRESS
    token: str | None = None
    namespace: str | None = None
    ca_cert: str | None = None
    skip_verify: bool = False

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> "VaultSettings":
        """Build settings from ``VAULT_*`` environment variables."""
        env = os.environ if environ is None else environ
        return cls(
            address=env.get("VAULT_ADDR") or DEFAULT_ADDRESS,
            token=env.get("VAULT_TOKEN") or None,
            namespace=env.get("VAULT_NAMESPACE") or None,
            ca_cert=env.get("VAULT_CACERT") or None,
            skip_verify=parse_bool(env.get("VAULT_SKIP_VERIFY")),
        )

    @property
    def verify(self) -> bool | str:
        """The ``verify`` argument handed to hvac/requests."""
        if self.skip_verify:
            return False
        return self.ca_cert or True


def parse_bool(value: str | None) -> bool:
    """Interpret an environment flag such as ``VAULT_SKIP_VERIFY``."""
    if value is None:
        return False
    return value.strip().lower() in _TRUTHY


def build_client(settings: VaultSettings) -> HvacDirectoryClient:
    """Create the directory client for *settings*.

    Raises
    ------
    ConfigurationError
        If no token is configured.
    """
    if not settings.token:
        raise ConfigurationError("VAULT_TOKEN environment variable is not set")

    logger.debug("Connecting to Vault at %s (namespace=%s)", settings.address, settings.namespace)
    client = hvac.Client(
        url=settings.address,
        token=settings.token,
        namespace=settings.namespace,
        verify=settings.verify,
    )
    return HvacDirectoryClient(client)

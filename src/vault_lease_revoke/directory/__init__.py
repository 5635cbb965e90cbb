"""Remote directory access — abstract client, hvac adapter, response models."""
from __future__ import annotations

from vault_lease_revoke.directory.client import DirectoryClient, HvacDirectoryClient
from vault_lease_revoke.directory.models import (
    KeyListing,
    LeaseEntry,
    LeaseListing,
    decode_keys,
    decode_leases,
)

__all__ = [
    "DirectoryClient",
    "HvacDirectoryClient",
    "KeyListing",
    "LeaseEntry",
    "LeaseListing",
    "decode_keys",
    "decode_leases",
]

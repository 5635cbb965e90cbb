"""vault-lease-revoke — Vault lease reporting and irrevocable lease cleanup.

Public API
----------
The stable public surface is everything exported from this module.
Anything inside submodules not re-exported here is considered private
and may change without notice.

Quick start
-----------
::

    from vault_lease_revoke import (
        VaultSettings, build_client,
        LeaseAggregator, render_report,
        BatchRevoker, fetch_candidates, select_batch,
    )

    client = build_client(VaultSettings.from_env())
    leases = select_batch(fetch_candidates(client), limit=100)
    result = BatchRevoker(client, concurrency=10).revoke_batch(leases)
"""
from __future__ import annotations

__version__: str = "0.1.0"

# ------------------------------------------------------------------
# Errors and configuration
# ------------------------------------------------------------------
from vault_lease_revoke.errors import (
    ConfigurationError,
    DirectoryError,
    LeaseToolError,
    MalformedResponseError,
)
from vault_lease_revoke.config import VaultSettings, build_client

# ------------------------------------------------------------------
# Directory access
# ------------------------------------------------------------------
from vault_lease_revoke.directory import DirectoryClient, HvacDirectoryClient

# ------------------------------------------------------------------
# Reporting
# ------------------------------------------------------------------
from vault_lease_revoke.report import (
    LeaseAggregator,
    LeaseReport,
    MountSummary,
    RoleCount,
    render_report,
)

# ------------------------------------------------------------------
# Cleanup
# ------------------------------------------------------------------
from vault_lease_revoke.cleanup import (
    BatchResult,
    BatchRevoker,
    ConsoleSink,
    Lease,
    OutcomeSink,
    RecordingSink,
    RevocationOutcome,
    fetch_candidates,
    select_batch,
)

__all__ = [
    # version
    "__version__",
    # errors
    "ConfigurationError",
    "DirectoryError",
    "LeaseToolError",
    "MalformedResponseError",
    # configuration
    "VaultSettings",
    "build_client",
    # directory
    "DirectoryClient",
    "HvacDirectoryClient",
    # reporting
    "LeaseAggregator",
    "LeaseReport",
    "MountSummary",
    "RoleCount",
    "render_report",
    # cleanup
    "BatchResult",
    "BatchRevoker",
    "ConsoleSink",
    "Lease",
    "OutcomeSink",
    "RecordingSink",
    "RevocationOutcome",
    "fetch_candidates",
    "select_batch",
]

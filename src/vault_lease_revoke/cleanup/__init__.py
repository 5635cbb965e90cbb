"""Irrevocable lease cleanup — candidate selection and batch revocation."""
from __future__ import annotations

from vault_lease_revoke.cleanup.models import BatchResult, Lease, RevocationOutcome
from vault_lease_revoke.cleanup.revoker import (
    DEFAULT_CONCURRENCY,
    BatchRevoker,
    fetch_candidates,
    select_batch,
    unique_leases,
)
from vault_lease_revoke.cleanup.sink import ConsoleSink, OutcomeSink, RecordingSink

__all__ = [
    "DEFAULT_CONCURRENCY",
    "BatchResult",
    "BatchRevoker",
    "ConsoleSink",
    "Lease",
    "OutcomeSink",
    "RecordingSink",
    "RevocationOutcome",
    "fetch_candidates",
    "select_batch",
    "unique_leases",
]

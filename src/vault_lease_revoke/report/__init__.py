"""Lease count reporting grouped by mount and role."""
from __future__ import annotations

from vault_lease_revoke.report.aggregator import (
    LeaseAggregator,
    LeaseReport,
    MountSummary,
    RoleCount,
)
from vault_lease_revoke.report.render import render_report

__all__ = [
    "LeaseAggregator",
    "LeaseReport",
    "MountSummary",
    "RoleCount",
    "render_report",
]

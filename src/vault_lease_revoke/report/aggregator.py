"""LeaseAggregator — lease counts per role, per mount and overall.

Walks the two-level lease lookup tree exposed by Vault::

    sys/leases/lookup/                      -> mounts ("database/", "aws/")
    sys/leases/lookup/<mount>creds/         -> roles ("readonly", "admin")
    sys/leases/lookup/<mount>creds/<role>/  -> lease identifiers

Only the mount listing is fatal. Missing, failing or malformed listings
below it count as zero and the traversal moves on to the next sibling.
"""
from __future__ import annotations

import datetime
import logging
from dataclasses import dataclass, field

from vault_lease_revoke.directory.client import DirectoryClient
from vault_lease_revoke.directory.models import decode_keys
from vault_lease_revoke.errors import DirectoryError

logger = logging.getLogger(__name__)

LOOKUP_ROOT = "sys/leases/lookup"


@dataclass(frozen=True)
class RoleCount:
    """Number of leases held under one role of a mount."""

    mount: str
    role: str
    count: int


@dataclass(frozen=True)
class MountSummary:
    """Per-mount slice of a lease report.

    Parameters
    ----------
    mount:
        Mount name as listed by the directory, including the trailing slash.
    roles:
        One entry per role in listing order. Empty when the mount has no roles.
    total:
        Sum of the role counts, accumulated during the traversal.
    """

    mount: str
    roles: tuple[RoleCount, ...] = ()
    total: int = 0

    @property
    def display_name(self) -> str:
        return self.mount.rstrip("/")

    @property
    def has_roles(self) -> bool:
        return bool(self.roles)


@dataclass(frozen=True)
class LeaseReport:
    """Outcome of a full traversal."""

    mounts: tuple[MountSummary, ...] = ()
    grand_total: int = 0
    generated_at: datetime.datetime = field(
        default_factory=lambda: datetime.datetime.now(datetime.timezone.utc)
    )


class LeaseAggregator:
    """Counts leases across every mount of a Vault lease tree.

    Read-only against the directory. Each call to :meth:`aggregate` is a
    fresh traversal; no counters outlive the call.

    Parameters
    ----------
    client:
        The directory to walk.
    role_segment:
        Path segment between a mount and its roles. Dynamic secrets engines
        issue leases under ``<mount>creds/<role>``.
    """

    def __init__(self, client: DirectoryClient, role_segment: str = "creds") -> None:
        self._client = client
        self._role_segment = role_segment.strip("/")

    # ------------------------------------------------------------------
    # Listings
    # ------------------------------------------------------------------

    def list_mounts(self) -> list[str]:
        """Return the mounts holding leases, in directory order.

        Raises
        ------
        DirectoryError
            If the listing fails or is malformed. Nothing is reported then.
        """
        data = self._client.list(LOOKUP_ROOT)
        return decode_keys(data, LOOKUP_ROOT)

    def list_roles(self, mount: str) -> list[str]:
        """Return the roles of *mount*; empty if it has none or listing fails."""
        return self._list_quietly(self._roles_path(mount))

    def list_lease_identifiers(self, mount: str, role: str) -> list[str]:
        """Return the lease identifiers issued for *role* of *mount*."""
        return self._list_quietly(f"{self._roles_path(mount)}/{role.rstrip('/')}")

    # ------------------------------------------------------------------
    # Aggregation
    # ------------------------------------------------------------------

    def aggregate(self) -> LeaseReport:
        """Traverse every mount and role and build a :class:`LeaseReport`.

        Raises
        ------
        DirectoryError
            Only when the top-level mount listing fails.
        """
        generated_at = datetime.datetime.now(datetime.timezone.utc)
        summaries: list[MountSummary] = []
        grand_total = 0

        for mount in self.list_mounts():
            summary = self.summarize_mount(mount)
            summaries.append(summary)
            grand_total += summary.total

        logger.info("Counted %d leases across %d mounts", grand_total, len(summaries))
        return LeaseReport(
            mounts=tuple(summaries),
            grand_total=grand_total,
            generated_at=generated_at,
        )

    def summarize_mount(self, mount: str) -> MountSummary:
        """Count the leases of every role under *mount*."""
        roles: list[RoleCount] = []
        mount_total = 0

        for role in self.list_roles(mount):
            count = len(self.list_lease_identifiers(mount, role))
            roles.append(RoleCount(mount=mount, role=role.rstrip("/"), count=count))
            mount_total += count

        return MountSummary(mount=mount, roles=tuple(roles), total=mount_total)

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _roles_path(self, mount: str) -> str:
        mount = mount if mount.endswith("/") else f"{mount}/"
        return f"{LOOKUP_ROOT}/{mount}{self._role_segment}"

    def _list_quietly(self, path: str) -> list[str]:
        """List *path*, treating any failure as an empty listing."""
        try:
            return decode_keys(self._client.list(path), path)
        except DirectoryError as exc:
            logger.warning("Treating %s as empty: %s", path, exc)
            return []

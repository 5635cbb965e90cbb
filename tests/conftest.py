"""Shared fixtures: an in-memory directory standing in for Vault."""
from __future__ import annotations

import threading
import time
from typing import Any

import pytest

from vault_lease_revoke.directory.client import DirectoryClient
from vault_lease_revoke.errors import DirectoryError


class FakeDirectory(DirectoryClient):
    """In-memory DirectoryClient that records calls.

    Parameters
    ----------
    listings:
        Mapping of path -> payload returned by :meth:`list`.
    leases:
        Payload returned by :meth:`read_with_data`.
    failing_paths:
        Paths whose list/read calls raise DirectoryError.
    write_errors:
        Mapping of write path -> exception raised by :meth:`write`.
    write_delay:
        Seconds each write call sleeps while counted as in flight.
    write_delays:
        Per-path override of *write_delay*.
    """

    def __init__(
        self,
        listings: dict[str, Any] | None = None,
        leases: Any = None,
        failing_paths: set[str] | None = None,
        write_errors: dict[str, Exception] | None = None,
        write_delay: float = 0.0,
        write_delays: dict[str, float] | None = None,
    ) -> None:
        self.listings = listings or {}
        self.leases = leases
        self.failing_paths = failing_paths or set()
        self.write_errors = write_errors or {}
        self.write_delay = write_delay
        self.write_delays = write_delays or {}

        self.listed: list[str] = []
        self.reads: list[tuple[str, dict[str, list[str]]]] = []
        self.writes: list[str] = []
        self.in_flight = 0
        self.max_in_flight = 0
        self._lock = threading.Lock()

    def list(self, path: str) -> dict[str, Any] | None:
        self.listed.append(path)
        if path in self.failing_paths:
            raise DirectoryError(f"LIST {path} failed: permission denied", path=path)
        return self.listings.get(path)

    def read_with_data(
        self, path: str, query: dict[str, list[str]]
    ) -> dict[str, Any] | None:
        self.reads.append((path, query))
        if path in self.failing_paths:
            raise DirectoryError(f"GET {path} failed: connection refused", path=path)
        return self.leases

    def write(self, path: str, payload: dict[str, Any] | None = None) -> dict[str, Any] | None:
        with self._lock:
            self.writes.append(path)
            self.in_flight += 1
            self.max_in_flight = max(self.max_in_flight, self.in_flight)
        try:
            time.sleep(self.write_delays.get(path, self.write_delay))
            if path in self.write_errors:
                raise self.write_errors[path]
            return None
        finally:
            with self._lock:
                self.in_flight -= 1


def _lease_payload(*lease_ids: str) -> dict[str, Any]:
    return {"leases": [{"lease_id": lease_id, "name": lease_id} for lease_id in lease_ids]}


@pytest.fixture()
def make_directory() -> type[FakeDirectory]:
    return FakeDirectory


@pytest.fixture()
def scenario_a_listings() -> dict[str, Any]:
    """Two mounts: db/ with two roles (5 + 2 leases) and aws/ with no roles."""
    return {
        "sys/leases/lookup": {"keys": ["db/", "aws/"]},
        "sys/leases/lookup/db/creds": {"keys": ["readonly/", "admin/"]},
        "sys/leases/lookup/db/creds/readonly": {"keys": ["l1", "l2", "l3", "l4", "l5"]},
        "sys/leases/lookup/db/creds/admin": {"keys": ["a1", "a2"]},
    }


@pytest.fixture()
def lease_payload():  # type: ignore[no-untyped-def]
    """Build a lease enumeration payload for the given identifiers."""
    return _lease_payload

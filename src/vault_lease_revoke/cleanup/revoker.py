"""Batch force-revocation of leases with bounded concurrency.

The flow mirrors ``vault lease revoke -force`` run once per lease, fanned
out over a worker pool:

1. :func:`fetch_candidates` enumerates leases of a given type (irrevocable
   by default). This is the only fatal step.
2. :func:`select_batch` truncates the candidates to an optional limit.
3. :meth:`BatchRevoker.revoke_batch` issues one revoke-force call per lease.
   A semaphore admits at most ``concurrency`` calls at a time; each failure
   is recorded on its own outcome and never affects sibling leases.
"""
from __future__ import annotations

import logging
import threading
import time
from collections.abc import Iterable, Sequence
from concurrent.futures import ThreadPoolExecutor, wait

from vault_lease_revoke.cleanup.models import BatchResult, Lease, RevocationOutcome
from vault_lease_revoke.cleanup.sink import ConsoleSink, OutcomeSink
from vault_lease_revoke.directory.client import DirectoryClient
from vault_lease_revoke.directory.models import decode_leases

logger = logging.getLogger(__name__)

LEASES_PATH = "sys/leases"
REVOKE_FORCE_PATH = "sys/leases/revoke-force"
DEFAULT_CONCURRENCY = 10


def fetch_candidates(client: DirectoryClient, lease_type: str = "irrevocable") -> list[Lease]:
    """Return the leases of *lease_type*, in the order the server lists them.

    Duplicate identifiers are dropped (first occurrence wins) so that each
    lease is revoked at most once.

    Raises
    ------
    DirectoryError
        If the enumeration fails or answers with a malformed payload.
    """
    data = client.read_with_data(LEASES_PATH, {"type": [lease_type]})
    entries = decode_leases(data, LEASES_PATH)

    leases = unique_leases(
        Lease(lease_id=entry.lease_id, metadata=entry.metadata) for entry in entries
    )

    logger.info("Fetched %d %s lease(s)", len(leases), lease_type)
    return leases


def unique_leases(leases: Iterable[Lease]) -> list[Lease]:
    """Return *leases* in order with repeated identifiers dropped (first wins)."""
    unique: list[Lease] = []
    seen: set[str] = set()
    for lease in leases:
        if lease.lease_id in seen:
            logger.warning("Dropping duplicate lease %s", lease.lease_id)
            continue
        seen.add(lease.lease_id)
        unique.append(lease)
    return unique


def select_batch(candidates: Sequence[Lease], limit: int | None = None) -> list[Lease]:
    """Return the first *limit* candidates, or all of them.

    A *limit* of None or 0 selects everything. A negative limit is also
    treated as "no limit"; it is never clamped to zero.
    """
    if limit is None or limit == 0:
        return list(candidates)
    if limit < 0:
        logger.warning("Negative limit %d treated as no limit", limit)
        return list(candidates)
    return list(candidates[:limit])


class BatchRevoker:
    """Force-revokes a batch of leases on a fixed-size worker pool.

    Parameters
    ----------
    client:
        Directory the revoke-force calls are written to.
    concurrency:
        Maximum number of revoke calls in flight at any instant. Values
        below 1 are treated as 1.
    sink:
        Receives each outcome as its worker completes, then the summary.
        Defaults to a :class:`ConsoleSink` on stdout.
    """

    def __init__(
        self,
        client: DirectoryClient,
        concurrency: int = DEFAULT_CONCURRENCY,
        sink: OutcomeSink | None = None,
    ) -> None:
        if concurrency < 1:
            logger.warning("Concurrency %d raised to 1", concurrency)
        self._client = client
        self._concurrency = max(1, concurrency)
        self._sink = sink if sink is not None else ConsoleSink()

    @property
    def concurrency(self) -> int:
        return self._concurrency

    def revoke_batch(self, selected: Sequence[Lease]) -> BatchResult:
        """Revoke every lease in *selected* and wait for all of them.

        Repeated identifiers in *selected* are revoked once, at the position
        of their first occurrence. Blocks until each lease has an outcome.
        There is no timeout and no cancellation once a lease is dispatched.

        Returns
        -------
        BatchResult
            Outcomes sorted by batch position, plus elapsed wall-clock time.
        """
        batch = unique_leases(selected)
        total = len(batch)
        gate = threading.BoundedSemaphore(self._concurrency)

        start = time.monotonic()
        with ThreadPoolExecutor(
            max_workers=self._concurrency, thread_name_prefix="revoke"
        ) as executor:
            futures = [
                executor.submit(self._revoke_one, gate, index, lease.lease_id, total)
                for index, lease in enumerate(batch, start=1)
            ]
            wait(futures)
        elapsed = time.monotonic() - start

        outcomes = sorted((future.result() for future in futures), key=lambda o: o.index)
        result = BatchResult(outcomes=tuple(outcomes), elapsed_seconds=elapsed)
        logger.info(
            "Batch of %d finished in %.3fs: %d revoked, %d failed",
            total,
            elapsed,
            result.succeeded,
            result.failed,
        )
        self._sink.finish(result)
        return result

    def _revoke_one(
        self, gate: threading.BoundedSemaphore, index: int, lease_id: str, total: int
    ) -> RevocationOutcome:
        with gate:
            try:
                self._client.write(f"{REVOKE_FORCE_PATH}/{lease_id}", None)
            except Exception as exc:  # isolate the failure to this lease
                logger.debug("Revoke of %s failed", lease_id, exc_info=True)
                outcome = RevocationOutcome(
                    lease_id=lease_id,
                    index=index,
                    success=False,
                    error=str(exc) or type(exc).__name__,
                )
            else:
                outcome = RevocationOutcome(lease_id=lease_id, index=index, success=True)
        try:
            self._sink.emit(outcome, total)
        except Exception:  # reporting errors stay local to this lease
            logger.warning("Could not report outcome of %s", lease_id, exc_info=True)
        return outcome

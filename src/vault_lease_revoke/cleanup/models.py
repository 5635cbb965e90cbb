"""Value objects of the cleanup path."""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any


@dataclass(frozen=True)
class Lease:
    """A lease returned by the candidate enumeration.

    Parameters
    ----------
    lease_id:
        Opaque, globally unique identifier. The only field the revoker uses.
    metadata:
        Any other fields the server returned for the lease.
    """

    lease_id: str
    metadata: dict[str, Any] = field(default_factory=dict, compare=False)


@dataclass(frozen=True)
class RevocationOutcome:
    """Result of one force-revoke call.

    Parameters
    ----------
    lease_id:
        The lease that was revoked (or not).
    index:
        1-based position of the lease in the submitted batch.
    success:
        True if the server accepted the revocation.
    error:
        Error text, set if and only if *success* is False.
    """

    lease_id: str
    index: int
    success: bool
    error: str | None = None

    def __post_init__(self) -> None:
        if self.success and self.error is not None:
            raise ValueError("A successful outcome cannot carry an error.")
        if not self.success and not self.error:
            raise ValueError("A failed outcome must carry an error.")


@dataclass(frozen=True)
class BatchResult:
    """All outcomes of one batch plus its wall-clock duration."""

    outcomes: tuple[RevocationOutcome, ...]
    elapsed_seconds: float

    @property
    def total(self) -> int:
        return len(self.outcomes)

    @property
    def succeeded(self) -> int:
        return sum(1 for outcome in self.outcomes if outcome.success)

    @property
    def failed(self) -> int:
        return self.total - self.succeeded

    def failures(self) -> list[RevocationOutcome]:
        """Return the failed outcomes in batch order."""
        return [outcome for outcome in self.outcomes if not outcome.success]

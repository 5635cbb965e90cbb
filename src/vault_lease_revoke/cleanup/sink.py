"""Output sinks receiving revocation outcomes as workers complete.

Workers call :meth:`OutcomeSink.emit` concurrently; implementations must
serialise their writes.
"""
from __future__ import annotations

import threading
from abc import ABC, abstractmethod

from rich.console import Console
from rich.markup import escape

from vault_lease_revoke.cleanup.models import BatchResult, RevocationOutcome


class OutcomeSink(ABC):
    """Abstract receiver of per-item outcomes and the batch summary."""

    @abstractmethod
    def emit(self, outcome: RevocationOutcome, total: int) -> None:
        """Record one outcome. Called from worker threads."""

    @abstractmethod
    def finish(self, result: BatchResult) -> None:
        """Record the batch summary. Called once, after all outcomes."""


class ConsoleSink(OutcomeSink):
    """Prints one coloured line per outcome to a rich console.

    Parameters
    ----------
    console:
        Destination console. Defaults to a new stdout console.
    """

    def __init__(self, console: Console | None = None) -> None:
        self._console = console or Console()
        self._lock = threading.Lock()

    def emit(self, outcome: RevocationOutcome, total: int) -> None:
        prefix = f"\\[{outcome.index}/{total}]"
        lease_id = escape(outcome.lease_id)
        if outcome.success:
            line = f"{prefix} [green]✓[/green] Revoked: {lease_id}"
        else:
            line = f"{prefix} [red]✗[/red] Failed: {lease_id} | Error: {escape(outcome.error or '')}"
        with self._lock:
            self._console.print(line, highlight=False, soft_wrap=True)

    def finish(self, result: BatchResult) -> None:
        with self._lock:
            self._console.print(
                f"\n[green]\\[SUCCESS][/green] Process completed in "
                f"{result.elapsed_seconds:.3f}s "
                f"({result.succeeded} revoked, {result.failed} failed)",
                highlight=False,
            )


class RecordingSink(OutcomeSink):
    """Keeps every outcome in memory, in completion order."""

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._outcomes: list[RevocationOutcome] = []
        self.result: BatchResult | None = None

    def emit(self, outcome: RevocationOutcome, total: int) -> None:
        with self._lock:
            self._outcomes.append(outcome)

    def finish(self, result: BatchResult) -> None:
        with self._lock:
            self.result = result

    @property
    def outcomes(self) -> list[RevocationOutcome]:
        with self._lock:
            return list(self._outcomes)

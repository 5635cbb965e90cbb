"""Terminal rendering of a :class:`LeaseReport`."""
from __future__ import annotations

from email.utils import format_datetime

from rich.console import Console
from rich.markup import escape

from vault_lease_revoke.report.aggregator import LeaseReport


def render_report(report: LeaseReport, console: Console) -> None:
    """Print *report* as an indented tree, one block per mount."""
    console.print("\n[bold]=== Vault Lease Report ===[/bold]")
    console.print(f"Time: {format_datetime(report.generated_at)}\n")

    if not report.mounts:
        console.print("[yellow]No active lease mounts found.[/yellow]")
        return

    for summary in report.mounts:
        name = escape(summary.display_name)
        console.print(f"Mount: [cyan]{name}[/cyan]")
        if not summary.has_roles:
            console.print("  └─ No creds found\n")
            continue
        for role in summary.roles:
            console.print(f"  ├─ {escape(role.role)}: {role.count} leases")
        console.print(f"  └─ Total for {name}: [bold]{summary.total}[/bold] leases\n")

    console.print("[bold]=== Grand Total ===[/bold]")
    console.print(f"Total: [bold]{report.grand_total}[/bold] leases")

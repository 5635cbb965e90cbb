"""CLI entry point for vault-lease-revoke.

Invoked as::

    vault-lease-revoke [OPTIONS] COMMAND [ARGS]...

or, during development::

    python -m vault_lease_revoke.cli.main

Commands
--------
report    Count leases per mount and role
clean     Force-revoke irrevocable leases
version   Show version information

Connection settings default to the usual ``VAULT_ADDR``, ``VAULT_TOKEN``,
``VAULT_NAMESPACE``, ``VAULT_CACERT`` and ``VAULT_SKIP_VERIFY`` variables.
"""
from __future__ import annotations

import logging
import sys
from typing import NoReturn

import click
from rich.console import Console
from rich.markup import escape

from vault_lease_revoke import __version__
from vault_lease_revoke.cleanup import (
    DEFAULT_CONCURRENCY,
    BatchRevoker,
    ConsoleSink,
    fetch_candidates,
    select_batch,
)
from vault_lease_revoke.config import DEFAULT_ADDRESS, VaultSettings, build_client
from vault_lease_revoke.directory.client import DirectoryClient
from vault_lease_revoke.errors import ConfigurationError, DirectoryError
from vault_lease_revoke.report import LeaseAggregator, render_report

console = Console()

_LOG_LEVELS = ["DEBUG", "INFO", "WARNING", "ERROR"]


# ------------------------------------------------------------------
# Root group
# ------------------------------------------------------------------


@click.group(invoke_without_command=True)
@click.version_option(version=__version__, prog_name="vault-lease-revoke")
@click.option(
    "--address",
    envvar="VAULT_ADDR",
    default=DEFAULT_ADDRESS,
    show_default=True,
    help="Vault server URL.",
)
@click.option("--token", envvar="VAULT_TOKEN", default=None, help="Vault token.")
@click.option("--namespace", envvar="VAULT_NAMESPACE", default=None, help="Vault namespace.")
@click.option(
    "--ca-cert",
    envvar="VAULT_CACERT",
    type=click.Path(),
    default=None,
    help="CA bundle used to verify the server certificate.",
)
@click.option(
    "--skip-verify",
    envvar="VAULT_SKIP_VERIFY",
    is_flag=True,
    default=False,
    help="Disable TLS certificate verification.",
)
@click.option(
    "--log-level",
    type=click.Choice(_LOG_LEVELS, case_sensitive=False),
    default="WARNING",
    show_default=True,
    help="Diagnostic log level (logs go to stderr).",
)
@click.pass_context
def cli(
    ctx: click.Context,
    address: str,
    token: str | None,
    namespace: str | None,
    ca_cert: str | None,
    skip_verify: bool,
    log_level: str,
) -> None:
    """Report on and clean up Vault leases."""
    logging.basicConfig(
        level=getattr(logging, log_level.upper()),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    ctx.obj = VaultSettings(
        address=address,
        token=token or None,
        namespace=namespace or None,
        ca_cert=ca_cert,
        skip_verify=skip_verify,
    )
    if ctx.invoked_subcommand is None:
        console.print(f"Vault Lease Revoke Tool v{__version__}")
        click.echo(ctx.get_help())


@cli.command(name="version")
def version_command() -> None:
    """Show detailed version information."""
    console.print(f"[bold]vault-lease-revoke[/bold] v{__version__}")


# ------------------------------------------------------------------
# report
# ------------------------------------------------------------------


@cli.command(name="report")
@click.option(
    "--role-segment",
    default="creds",
    show_default=True,
    help="Path segment between a mount and its roles.",
)
@click.pass_obj
def report_command(settings: VaultSettings, role_segment: str) -> None:
    """Count leases per mount and role."""
    client = _connect(settings)
    aggregator = LeaseAggregator(client, role_segment=role_segment)

    try:
        report = aggregator.aggregate()
    except DirectoryError as exc:
        _fail(f"Error listing mounts: {exc}")

    render_report(report, console)


# ------------------------------------------------------------------
# clean
# ------------------------------------------------------------------


@cli.command(name="clean")
@click.option(
    "--limit",
    "-n",
    type=int,
    default=0,
    show_default=True,
    help="Number of leases to clean (0 = all).",
)
@click.option(
    "--parallel",
    "-p",
    type=int,
    default=DEFAULT_CONCURRENCY,
    show_default=True,
    help="Parallelism level (1-50).",
)
@click.option(
    "--force",
    "-f",
    "auto_approve",
    is_flag=True,
    default=False,
    help="Auto-approve (skip the y/n prompt).",
)
@click.option(
    "--lease-type",
    default="irrevocable",
    show_default=True,
    help="Lease type to enumerate.",
)
@click.pass_obj
def clean_command(
    settings: VaultSettings,
    limit: int,
    parallel: int,
    auto_approve: bool,
    lease_type: str,
) -> None:
    """Force-revoke irrevocable leases."""
    client = _connect(settings)

    try:
        candidates = fetch_candidates(client, lease_type=lease_type)
    except DirectoryError as exc:
        _fail(f"Failed to fetch leases: {exc}")

    if not candidates:
        console.print(f"[green]No {escape(lease_type)} leases found.[/green]")
        return

    selected = select_batch(candidates, limit)
    console.print(f"[green]\\[INFO][/green] Found {len(candidates)} {escape(lease_type)} leases.")
    console.print(f"[green]\\[INFO][/green] Preparing to process {len(selected)} leases.")

    if not auto_approve:
        try:
            response = click.prompt(
                f"\n{click.style('[WARNING]', fg='yellow')} "
                f"Proceed with force-revocation of {len(selected)} leases? (y/n)",
                default="",
                show_default=False,
            )
        except click.Abort:
            response = ""
        if not response.strip().lower().startswith("y"):
            console.print("Operation cancelled.")
            return

    revoker = BatchRevoker(client, concurrency=parallel, sink=ConsoleSink(console))
    revoker.revoke_batch(selected)


# ------------------------------------------------------------------
# Helpers
# ------------------------------------------------------------------


def _connect(settings: VaultSettings) -> DirectoryClient:
    """Return a directory client, exiting if the settings are incomplete."""
    try:
        return build_client(settings)
    except ConfigurationError as exc:
        _fail(str(exc))


def _fail(message: str) -> NoReturn:
    console.print(f"[red]\\[ERROR][/red] {escape(message)}", highlight=False)
    sys.exit(1)


if __name__ == "__main__":
    cli()

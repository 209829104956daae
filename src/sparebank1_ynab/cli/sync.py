#!/usr/bin/env python3
"""
Sync CLI - import SpareBank1 transactions into YNAB
"""

import click

from ..core.currency import format_milliunits
from ..core.errors import SyncError
from ..sync import run_sync


@click.command()
@click.option("--dry-run", is_flag=True, help="Fetch and derive transactions without sending them to YNAB")
@click.pass_context
def sync(ctx: click.Context, dry_run: bool) -> None:
    """
    Import new SpareBank1 transactions into YNAB.

    Examples:
      sparebank1-ynab sync
      sparebank1-ynab --env-file budget.env sync --dry-run
    """
    from .main import get_config_or_fail

    config = get_config_or_fail(ctx)
    dry_run = dry_run or config.dry_run

    if ctx.obj.get("verbose"):
        click.echo("SpareBank1 → YNAB sync")
        click.echo(f"Accounts file: {config.account_config_path}")
        click.echo(f"Budget: {config.ynab.budget_id}")
        click.echo(f"Mode: {'Dry run' if dry_run else 'Import'}")
        click.echo()

    try:
        result = run_sync(config, dry_run=dry_run)
    except SyncError as e:
        click.echo(f"❌ Sync failed: {e}", err=True)
        raise click.ClickException(str(e)) from e

    click.echo(f"--- {result.completed_at:%Y-%m-%d %H:%M:%S} ---")

    if result.dry_run:
        click.echo(f"Would import {len(result.payloads)} transactions")
        for index, payload in enumerate(result.payloads, start=1):
            click.echo(
                f"  [{index}] {payload.date} | {payload.payee_name} | "
                f"{format_milliunits(payload.amount)} | {payload.memo} | {payload.import_id}"
            )
        click.echo("\n💡 This was a dry run. No transactions were sent to YNAB.")
        return

    click.echo(f"✅ Added {result.created} new transactions")
    click.echo(f"   Skipped {result.duplicates} duplicate transactions")

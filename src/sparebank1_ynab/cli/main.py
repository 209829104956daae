#!/usr/bin/env python3
"""
Main CLI Entry Point for the SpareBank1 → YNAB sync
"""

import logging

import click

from ..core.config import load_config
from ..core.errors import SyncError


@click.group()
@click.option(
    "--env-file",
    type=click.Path(dir_okay=False),
    help="Env file to load (default: .env or budget.env in the working directory)",
)
@click.option("--verbose", "-v", is_flag=True, help="Enable verbose output")
@click.option("--debug", is_flag=True, help="Enable debug logging")
@click.pass_context
def main(ctx: click.Context, env_file: str | None, verbose: bool, debug: bool) -> None:
    """
    SpareBank1 → YNAB

    Imports SpareBank1 transactions into a YNAB budget without creating
    duplicates across runs.
    """
    ctx.ensure_object(dict)

    if debug:
        logging.getLogger().setLevel(logging.DEBUG)
        logging.getLogger("sparebank1_ynab").setLevel(logging.DEBUG)

    ctx.obj["env_file"] = env_file
    ctx.obj["verbose"] = verbose
    ctx.obj["debug"] = debug


def get_config_or_fail(ctx: click.Context):
    """Load configuration for a command, converting errors for click."""
    try:
        config = load_config(ctx.obj.get("env_file"))
    except SyncError as e:
        raise click.ClickException(str(e)) from e

    if ctx.obj.get("debug"):
        config.debug = True
        logging.getLogger("sparebank1_ynab").setLevel(logging.DEBUG)
    return config


@main.command()
def version() -> None:
    """Show version information."""
    from sparebank1_ynab import __version__

    click.echo(f"sparebank1-ynab v{__version__}")


@main.command()
@click.pass_context
def config(ctx: click.Context) -> None:
    """Show current configuration (secrets redacted)."""
    config_obj = get_config_or_fail(ctx)
    values = config_obj.to_dict()

    click.echo("Current Configuration:")
    click.echo(f"  Environment: {values['environment']}")
    click.echo(f"  Account Mapping: {values['account_config_path']}")
    click.echo(f"  Refresh Token File: {values['sparebank1']['refresh_token_file']}")
    click.echo(f"  SpareBank1 Client ID: {values['sparebank1']['client_id']}")
    click.echo(f"  SpareBank1 Client Secret: {values['sparebank1']['client_secret']}")
    click.echo(f"  YNAB Budget ID: {values['ynab']['budget_id']}")
    click.echo(f"  YNAB Access Token: {values['ynab']['access_token']}")
    click.echo(f"  Dry Run: {values['dry_run']}")
    click.echo(f"  Log Level: {values['log_level']}")


from .setup import setup  # noqa: E402
from .sync import sync  # noqa: E402

main.add_command(sync)
main.add_command(setup)


if __name__ == "__main__":
    main()

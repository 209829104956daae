#!/usr/bin/env python3
"""
Setup Wizard

Interactive first-time setup:
1. SpareBank1 login in the browser (authorization-code flow, local callback)
2. YNAB budget selection
3. Mapping each SpareBank1 account to a YNAB account (0 skips an account)
4. Writing accounts.json, the env file and the initial refresh token
"""

import logging
import secrets
import webbrowser
from pathlib import Path

import click

from ..core.config import DEFAULT_REFRESH_TOKEN_FILE
from ..core.errors import SyncError
from ..sparebank1.auth import (
    DEFAULT_REDIRECT_PORT,
    build_authorize_url,
    build_redirect_uri,
    exchange_authorization_code,
    save_refresh_token,
    wait_for_authorization_code,
)
from ..sparebank1.client import SpareBank1Client
from ..sparebank1.models import BankAccount
from ..ynab.account_mapping import save_account_mapping
from ..ynab.client import YnabClient
from ..ynab.models import YnabAccount, YnabBudget

logger = logging.getLogger(__name__)


def select_budget(budgets: list[YnabBudget]) -> YnabBudget:
    """Pick the only budget, or prompt when there are several."""
    if not budgets:
        raise click.ClickException("No YNAB budgets found for this access token")
    if len(budgets) == 1:
        return budgets[0]

    click.echo("YNAB Budgets:")
    for index, budget in enumerate(budgets, start=1):
        click.echo(f"{index}: {budget.name}")
    choice = click.prompt("Select budget to use", type=click.IntRange(1, len(budgets)))
    return budgets[choice - 1]


def prompt_account_mapping(
    bank_accounts: list[BankAccount],
    ynab_accounts: list[YnabAccount],
    budget_name: str,
) -> dict[str, str]:
    """Ask which YNAB account each bank account should import into."""
    mapping: dict[str, str] = {}

    for bank_account in bank_accounts:
        click.echo()
        click.echo(f"Account setup for budget: {click.style(budget_name, fg='red')}")
        click.echo("YNAB accounts:")
        click.echo("0: (skip this account)")
        for index, ynab_account in enumerate(ynab_accounts, start=1):
            click.echo(f"{index}: {ynab_account.name}")

        label = f"{bank_account.name} ({bank_account.account_number})" if bank_account.account_number else bank_account.name
        choice = click.prompt(
            f"{click.style(label, fg='red')} -- link to",
            type=click.IntRange(0, len(ynab_accounts)),
        )
        if choice > 0:
            mapping[bank_account.key] = ynab_accounts[choice - 1].id

    return mapping


def write_env_file(
    path: Path,
    client_id: str,
    client_secret: str,
    fin_inst: str,
    ynab_access_token: str,
    ynab_budget_id: str,
    refresh_token: str,
    accounts_file: Path,
    refresh_token_file: Path,
) -> None:
    """Write the env file read by ``sparebank1-ynab sync``."""
    lines = [
        f"SPAREBANK1_CLIENT_ID={client_id}",
        f"SPAREBANK1_CLIENT_SECRET={client_secret}",
        f"SPAREBANK1_FIN_INST={fin_inst}",
        f"YNAB_BUDGET_ID={ynab_budget_id}",
        f"YNAB_ACCESS_TOKEN={ynab_access_token}",
        f"INITIAL_REFRESH_TOKEN={refresh_token}",
        f"ACCOUNT_CONFIG_PATH={accounts_file.resolve()}",
        f"REFRESH_TOKEN_FILE_PATH={refresh_token_file}",
    ]
    path.write_text("\n".join(lines) + "\n", encoding="utf-8")


@click.command()
@click.argument("sparebank1_client_id")
@click.argument("sparebank1_client_secret")
@click.argument("sparebank1_fin_inst")
@click.argument("ynab_access_token")
@click.option("--accounts-file", default="accounts.json", show_default=True, help="Account mapping output")
@click.option("--env-output", default="budget.env", show_default=True, help="Env file output")
@click.option(
    "--refresh-token-file",
    default=DEFAULT_REFRESH_TOKEN_FILE,
    show_default=True,
    help="Where the rotating refresh token is stored",
)
@click.option("--port", default=DEFAULT_REDIRECT_PORT, show_default=True, help="Local OAuth callback port")
@click.option("--no-browser", is_flag=True, help="Print the login URL instead of opening a browser")
def setup(
    sparebank1_client_id: str,
    sparebank1_client_secret: str,
    sparebank1_fin_inst: str,
    ynab_access_token: str,
    accounts_file: str,
    env_output: str,
    refresh_token_file: str,
    port: int,
    no_browser: bool,
) -> None:
    """
    Log in to SpareBank1, map accounts to YNAB and write configuration.

    Example:
      sparebank1-ynab setup CLIENT_ID CLIENT_SECRET fid-ostlandet YNAB_TOKEN
    """
    accounts_path = Path(accounts_file)
    env_path = Path(env_output)
    refresh_token_path = Path(refresh_token_file)

    state = str(secrets.randbelow(900_000) + 100_000)
    redirect_uri = build_redirect_uri(port)
    authorize_url = build_authorize_url(sparebank1_client_id, sparebank1_fin_inst, state, redirect_uri)

    try:
        if no_browser or not webbrowser.open(authorize_url):
            click.echo(f"Open this URL to log in to SpareBank1:\n{authorize_url}")
        click.echo(f"Waiting for SpareBank1 login callback on {redirect_uri} ...")
        code = wait_for_authorization_code(state, port=port)

        tokens = exchange_authorization_code(
            sparebank1_client_id,
            sparebank1_client_secret,
            code,
            state,
            redirect_uri,
        )
        click.echo("✅ Authenticated with SpareBank1")

        bank_accounts = SpareBank1Client(tokens.access_token).get_accounts()
        click.echo(f"Found {len(bank_accounts)} SpareBank1 accounts")

        budgets = YnabClient(ynab_access_token, budget_id="").get_budgets()
        budget = select_budget(budgets)

        ynab_accounts = YnabClient(ynab_access_token, budget.id).get_accounts()
        click.echo(f"Found {len(ynab_accounts)} open YNAB accounts in {budget.name}")

        if accounts_path.exists():
            click.echo(f"Account mapping {accounts_path} already exists, skipping")
        else:
            mapping = prompt_account_mapping(bank_accounts, ynab_accounts, budget.name)
            save_account_mapping(accounts_path, mapping)
            click.echo(f"✅ Mapped {len(mapping)} accounts, saved to {accounts_path}")

        write_env_file(
            env_path,
            client_id=sparebank1_client_id,
            client_secret=sparebank1_client_secret,
            fin_inst=sparebank1_fin_inst,
            ynab_access_token=ynab_access_token,
            ynab_budget_id=budget.id,
            refresh_token=tokens.refresh_token,
            accounts_file=accounts_path,
            refresh_token_file=refresh_token_path,
        )
        save_refresh_token(refresh_token_path, tokens.refresh_token)
    except SyncError as e:
        click.echo(f"❌ Setup failed: {e}", err=True)
        raise click.ClickException(str(e)) from e

    click.echo(f"✅ Config file created: {env_path}")
    click.echo(f"   Initial refresh token saved to: {refresh_token_path}")
    click.echo(f"\nRun `sparebank1-ynab --env-file {env_path} sync` to import transactions.")

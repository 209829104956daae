#!/usr/bin/env python3
"""
Sync Pipeline

One sequential run: load the account mapping, get a bank access token,
fetch transactions for every mapped account, derive YNAB payloads and submit
them in one batch. Any failure aborts the run; nothing is submitted unless
every transaction mapped cleanly.
"""

import logging
from collections.abc import Callable
from dataclasses import dataclass, field
from datetime import datetime

import requests

from .core.config import Config, SpareBank1Config
from .core.errors import ConfigError
from .sparebank1.auth import refresh_access_token
from .sparebank1.client import SpareBank1Client
from .ynab.account_mapping import load_account_mapping
from .ynab.client import YnabClient
from .ynab.import_ids import derive_transactions
from .ynab.models import YnabTransactionPayload

logger = logging.getLogger(__name__)

TokenProvider = Callable[[SpareBank1Config], str]


@dataclass
class SyncResult:
    """Counts reported at the end of a run."""

    fetched: int
    created: int = 0
    duplicates: int = 0
    dry_run: bool = False
    payloads: list[YnabTransactionPayload] = field(default_factory=list)
    completed_at: datetime = field(default_factory=datetime.now)


def run_sync(
    config: Config,
    *,
    dry_run: bool | None = None,
    session: requests.Session | None = None,
    token_provider: TokenProvider | None = None,
) -> SyncResult:
    """
    Run one SpareBank1 → YNAB sync.

    Args:
        config: Validated configuration
        dry_run: Override ``config.dry_run``; when true nothing is sent to YNAB
        session: Shared HTTP session (a new one is created if omitted)
        token_provider: Returns a bank access token (default: refresh flow)

    Returns:
        SyncResult with fetched/created/duplicate counts

    Raises:
        ConfigError: Account mapping missing, invalid or empty
        AuthError: Bank token could not be obtained
        RemoteError: Either API failed
        UnmappedAccountError: A fetched transaction's account is not mapped
    """
    dry_run = config.dry_run if dry_run is None else dry_run
    session = session or requests.Session()
    token_provider = token_provider or (lambda sb1_config: refresh_access_token(sb1_config, session=session))

    if dry_run:
        logger.warning("DRY-RUN MODE: No transactions will be sent to YNAB")

    logger.info(f"Loading account configuration from {config.account_config_path}")
    account_mapping = load_account_mapping(config.account_config_path)
    if not account_mapping:
        raise ConfigError(f"Account mapping is empty: {config.account_config_path}")
    logger.info(f"Configured accounts: {len(account_mapping)}")

    logger.info("Fetching access token")
    access_token = token_provider(config.sparebank1)

    bank = SpareBank1Client(
        access_token,
        base_url=config.sparebank1.base_url,
        timeout=config.sparebank1.timeout,
        session=session,
    )
    transactions = bank.get_transactions(account_mapping.source_keys)

    payloads = derive_transactions(transactions, account_mapping)
    result = SyncResult(fetched=len(transactions), dry_run=dry_run, payloads=payloads)

    if dry_run:
        logger.info(f"DRY-RUN: Would import {len(payloads)} transactions to YNAB")
        return result

    ynab = YnabClient(
        config.ynab.access_token,
        config.ynab.budget_id,
        base_url=config.ynab.base_url,
        timeout=config.ynab.timeout,
        session=session,
    )
    response = ynab.create_transactions(payloads)
    result.created = response.created_count
    result.duplicates = response.duplicate_count

    logger.info(f"Added {result.created} new transactions")
    logger.info(f"Skipped {result.duplicates} duplicate transactions")
    return result

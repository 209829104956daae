#!/usr/bin/env python3
"""
SpareBank1 Transaction Fetcher

Thin client for the SpareBank1 personal banking API. All mapped account keys
are fetched in one request using repeated ``accountKey`` query parameters.
"""

import logging
from collections.abc import Sequence

import requests

from ..core.errors import RemoteError
from ..core.http import request_json
from .models import BankAccount, BankTransaction

logger = logging.getLogger(__name__)

DEFAULT_BASE_URL = "https://api.sparebank1.no/personal/banking"
TRANSACTIONS_MEDIA_TYPE = "application/vnd.sparebank1.v1+json"


class SpareBank1Client:
    """Read-only access to SpareBank1 accounts and transactions."""

    def __init__(
        self,
        access_token: str,
        base_url: str = DEFAULT_BASE_URL,
        timeout: int = 30,
        session: requests.Session | None = None,
    ):
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.session = session or requests.Session()
        self._access_token = access_token

    def _headers(self, accept: str | None = None) -> dict[str, str]:
        headers = {"Authorization": f"Bearer {self._access_token}"}
        if accept:
            headers["Accept"] = accept
        return headers

    def get_transactions(self, account_keys: Sequence[str]) -> list[BankTransaction]:
        """
        Fetch transactions for the given account keys.

        Transactions are returned in the order the API sends them.

        Args:
            account_keys: Non-empty list of SpareBank1 account keys

        Returns:
            List of BankTransaction

        Raises:
            ValueError: If no account keys are given
            RemoteError: On HTTP failure or malformed payload
        """
        if not account_keys:
            raise ValueError("At least one account key is required to fetch transactions")

        url = f"{self.base_url}/transactions"
        params = [("accountKey", key) for key in account_keys]

        logger.info(f"Fetching SpareBank1 transactions for {len(account_keys)} accounts")
        payload = request_json(
            self.session,
            "GET",
            url,
            timeout=self.timeout,
            headers=self._headers(TRANSACTIONS_MEDIA_TYPE),
            params=params,
        )

        raw_transactions = payload.get("transactions") if isinstance(payload, dict) else None
        if not isinstance(raw_transactions, list):
            raise RemoteError("Transactions response has no 'transactions' list", body=str(payload), url=url)

        transactions = []
        for index, raw in enumerate(raw_transactions):
            try:
                transactions.append(BankTransaction.from_dict(raw))
            except (KeyError, TypeError, ValueError, AttributeError) as e:
                raise RemoteError(f"Malformed transaction at index {index}: {e!r}", body=str(raw), url=url) from e

        logger.info(f"Retrieved {len(transactions)} transactions")
        return transactions

    def get_accounts(self) -> list[BankAccount]:
        """
        Fetch all accounts visible to the access token.

        Raises:
            RemoteError: On HTTP failure or malformed payload
        """
        url = f"{self.base_url}/accounts"
        payload = request_json(self.session, "GET", url, timeout=self.timeout, headers=self._headers())

        # The endpoint has been seen returning both a bare list and a wrapped object
        raw_accounts = payload.get("accounts") if isinstance(payload, dict) else payload
        if not isinstance(raw_accounts, list):
            raise RemoteError("Accounts response has no account list", body=str(payload), url=url)

        try:
            return [BankAccount.from_dict(raw) for raw in raw_accounts]
        except (KeyError, TypeError, ValueError, AttributeError) as e:
            raise RemoteError(f"Malformed account entry: {e!r}", body=str(payload), url=url) from e

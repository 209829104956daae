#!/usr/bin/env python3
"""
YNAB API Client

Submits derived transactions in a single batch call and reads the budget and
account lists used by the setup wizard. Never retries: YNAB's import id
dedup makes a re-run of the whole sync the recovery path.
"""

import logging
from collections.abc import Sequence

import requests

from ..core.errors import RemoteError
from ..core.http import request_json
from .models import CreateTransactionsResult, YnabAccount, YnabBudget, YnabTransactionPayload

logger = logging.getLogger(__name__)

DEFAULT_BASE_URL = "https://api.ynab.com/v1"


class YnabClient:
    """Client bound to one YNAB budget."""

    def __init__(
        self,
        access_token: str,
        budget_id: str,
        base_url: str = DEFAULT_BASE_URL,
        timeout: int = 30,
        session: requests.Session | None = None,
    ):
        self.budget_id = budget_id
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.session = session or requests.Session()
        self._access_token = access_token

    def _headers(self) -> dict[str, str]:
        return {"Authorization": f"Bearer {self._access_token}"}

    def create_transactions(self, payloads: Sequence[YnabTransactionPayload]) -> CreateTransactionsResult:
        """
        Create all payloads in one request.

        Transactions YNAB already knows (same import id) come back in
        ``duplicate_import_ids``; that is not an error.

        Raises:
            RemoteError: On HTTP failure or malformed response
        """
        if not payloads:
            logger.info("No transactions to submit to YNAB")
            return CreateTransactionsResult()

        url = f"{self.base_url}/budgets/{self.budget_id}/transactions"
        logger.info(f"Submitting {len(payloads)} transactions to YNAB")

        response = request_json(
            self.session,
            "POST",
            url,
            timeout=self.timeout,
            headers=self._headers(),
            json={"transactions": [payload.to_dict() for payload in payloads]},
        )

        try:
            result = CreateTransactionsResult.from_dict(response)
        except (KeyError, TypeError) as e:
            raise RemoteError(f"Unexpected create-transactions response: {e!r}", body=str(response), url=url) from e

        logger.info(f"YNAB created {result.created_count}, skipped {result.duplicate_count} duplicates")
        return result

    def get_budgets(self) -> list[YnabBudget]:
        """List budgets available to the access token."""
        url = f"{self.base_url}/budgets"
        response = request_json(self.session, "GET", url, timeout=self.timeout, headers=self._headers())
        try:
            return [YnabBudget.from_dict(budget) for budget in response["data"]["budgets"]]
        except (KeyError, TypeError) as e:
            raise RemoteError(f"Unexpected budgets response: {e!r}", body=str(response), url=url) from e

    def get_accounts(self) -> list[YnabAccount]:
        """List open, non-deleted accounts in the budget."""
        url = f"{self.base_url}/budgets/{self.budget_id}/accounts"
        response = request_json(self.session, "GET", url, timeout=self.timeout, headers=self._headers())
        try:
            accounts = [YnabAccount.from_dict(account) for account in response["data"]["accounts"]]
        except (KeyError, TypeError) as e:
            raise RemoteError(f"Unexpected accounts response: {e!r}", body=str(response), url=url) from e
        return [account for account in accounts if not account.closed and not account.deleted]

#!/usr/bin/env python3
"""
SpareBank1 Domain Models

Canonical representations of what the SpareBank1 personal banking API
returns. Field mapping from the API:

- cleanedDescription -> payee
- description        -> memo
- accountKey         -> account_key
- date (epoch ms)    -> date (UTC instant)
"""

from dataclasses import dataclass
from datetime import datetime
from typing import Any

from ..core.dates import FinancialDate, instant_from_epoch_millis


@dataclass(frozen=True)
class BankTransaction:
    """
    A transaction fetched from SpareBank1.

    ``id`` is informational only; duplicate detection relies on amount and
    local date (see ynab.import_ids).
    """

    id: str
    amount: float  # NOK, negative for outflows
    date: datetime  # UTC instant
    payee: str
    memo: str
    account_key: str

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "BankTransaction":
        """
        Create BankTransaction from API dict.

        Args:
            data: One entry of the ``transactions`` list

        Raises:
            KeyError: If a required field is missing
            ValueError: If amount or date cannot be parsed
        """
        return cls(
            id=str(data["id"]),
            amount=float(data["amount"]),
            date=instant_from_epoch_millis(data["date"]),
            payee=data.get("cleanedDescription") or "",
            memo=data.get("description") or "",
            account_key=data["accountKey"],
        )

    @property
    def local_date(self) -> FinancialDate:
        """Civil date in the bank's timezone (Europe/Oslo)."""
        return FinancialDate.from_instant(self.date)


@dataclass(frozen=True)
class BankAccount:
    """A SpareBank1 account, as listed during setup."""

    key: str
    name: str
    account_number: str
    balance: float

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "BankAccount":
        """Create BankAccount from API dict (balance may arrive as a string)."""
        metadata = data.get("metadata") or {}
        return cls(
            key=metadata.get("accountKey") or data["accountKey"],
            name=data.get("accountName") or data.get("name", ""),
            account_number=data.get("accountNumber", ""),
            balance=float(data.get("balance") or 0),
        )

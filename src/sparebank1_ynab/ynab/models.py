#!/usr/bin/env python3
"""
YNAB Domain Models

Request and response shapes for the parts of the YNAB API the sync uses.
"""

from dataclasses import dataclass, field
from typing import Any


@dataclass(frozen=True)
class YnabTransactionPayload:
    """
    One transaction to create in YNAB.

    ``amount`` is in milliunits; ``date`` is the Europe/Oslo civil date.
    """

    date: str
    account_id: str
    amount: int
    payee_name: str
    memo: str
    import_id: str
    cleared: str = "cleared"

    def to_dict(self) -> dict[str, Any]:
        """Serialize for the YNAB create-transactions endpoint."""
        return {
            "date": self.date,
            "account_id": self.account_id,
            "amount": self.amount,
            "payee_name": self.payee_name,
            "cleared": self.cleared,
            "memo": self.memo,
            "import_id": self.import_id,
        }


@dataclass
class CreateTransactionsResult:
    """Outcome of a batch create: created ids and import ids YNAB skipped."""

    transaction_ids: list[str] = field(default_factory=list)
    duplicate_import_ids: list[str] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "CreateTransactionsResult":
        """
        Create from the YNAB response body.

        Raises:
            KeyError: If ``data.transaction_ids`` or ``data.duplicate_import_ids`` is missing
            TypeError: If either is not a list
        """
        body = data["data"]
        transaction_ids = body["transaction_ids"]
        duplicate_import_ids = body["duplicate_import_ids"]
        if not isinstance(transaction_ids, list) or not isinstance(duplicate_import_ids, list):
            raise TypeError("transaction_ids and duplicate_import_ids must be lists")
        return cls(
            transaction_ids=[str(tx_id) for tx_id in transaction_ids],
            duplicate_import_ids=[str(import_id) for import_id in duplicate_import_ids],
        )

    @property
    def created_count(self) -> int:
        return len(self.transaction_ids)

    @property
    def duplicate_count(self) -> int:
        return len(self.duplicate_import_ids)


@dataclass
class YnabBudget:
    """YNAB budget from API."""

    id: str
    name: str

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "YnabBudget":
        return cls(id=data["id"], name=data["name"])


@dataclass
class YnabAccount:
    """YNAB account from API (only the fields setup needs)."""

    id: str
    name: str
    closed: bool = False
    deleted: bool = False

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "YnabAccount":
        return cls(
            id=data["id"],
            name=data["name"],
            closed=data.get("closed", False),
            deleted=data.get("deleted", False),
        )

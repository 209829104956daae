#!/usr/bin/env python3
"""
Import Id Derivation

Turns a batch of SpareBank1 transactions into YNAB payloads, each carrying a
deterministic ``import_id``. YNAB skips any transaction whose import id it
has already seen, which is what keeps repeated runs from importing the same
bank transaction twice.

Import id format::

    SB1:<amount>:<YYYY-MM-DD>:<occurrence>

- ``amount`` is rendered by ``format_amount`` (``-127.5``, ``-50.0``)
- the date is the Europe/Oslo civil date of the transaction
- ``occurrence`` is the 1-based position of the transaction among those in
  the same batch whose key starts with the same ``SB1:<amount>:<date>`` text,
  counted in input order

Example: three -50.0 NOK purchases on 2024-01-01 become
``SB1:-50.0:2024-01-01:1``, ``...:2`` and ``...:3``.

Changing any part of this format changes the ids of transactions already in
YNAB and causes them to be imported again.
"""

import logging
from collections.abc import Iterable

from ..core.currency import amount_to_milliunits, format_amount
from ..sparebank1.models import BankTransaction
from .account_mapping import AccountMapping
from .models import YnabTransactionPayload

logger = logging.getLogger(__name__)

IMPORT_ID_NAMESPACE = "SB1"


def import_id_prefix(transaction: BankTransaction) -> str:
    """Amount-and-date key shared by all same-day transactions of one amount."""
    return f"{IMPORT_ID_NAMESPACE}:{format_amount(transaction.amount)}:{transaction.local_date.to_ynab_format()}"


class ImportIdSequence:
    """
    Batch-scoped occurrence counter.

    Every prefix seen so far is kept in order. The occurrence number for a new
    prefix counts all recorded prefixes (including itself) that *start with*
    it, not only exact matches; ids already stored in YNAB were produced this
    way.
    """

    def __init__(self) -> None:
        self._seen: list[str] = []

    def next_id(self, prefix: str) -> str:
        self._seen.append(prefix)
        occurrence = sum(1 for seen in self._seen if seen.startswith(prefix))
        return f"{prefix}:{occurrence}"


def derive_transactions(
    transactions: Iterable[BankTransaction],
    account_mapping: AccountMapping,
) -> list[YnabTransactionPayload]:
    """
    Build YNAB payloads for a batch of bank transactions.

    Transactions are processed in the given order, which determines the
    occurrence numbers. Either every transaction maps or nothing is returned.

    Args:
        transactions: Bank transactions in the order they were fetched
        account_mapping: SpareBank1 account key → YNAB account id

    Returns:
        One payload per transaction, in input order

    Raises:
        UnmappedAccountError: If any transaction's account is not mapped
    """
    sequence = ImportIdSequence()
    payloads: list[YnabTransactionPayload] = []

    for transaction in transactions:
        local_date = transaction.local_date.to_ynab_format()
        import_id = sequence.next_id(import_id_prefix(transaction))
        account_id = account_mapping.target_for(transaction.account_key)

        payloads.append(
            YnabTransactionPayload(
                date=local_date,
                account_id=account_id,
                amount=amount_to_milliunits(transaction.amount),
                payee_name=transaction.payee,
                memo=transaction.memo,
                import_id=import_id,
            )
        )
        logger.debug(f"Derived {import_id} for bank transaction {transaction.id}")

    return payloads

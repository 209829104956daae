#!/usr/bin/env python3
"""Tests for SpareBank1 API models."""

from datetime import UTC, datetime

import pytest

from sparebank1_ynab.sparebank1.models import BankAccount, BankTransaction
from tests.fixtures.synthetic_data import bank_transaction_dict, utc_millis


@pytest.mark.sparebank1
class TestBankTransactionFromDict:
    def test_field_mapping(self):
        transaction = BankTransaction.from_dict(bank_transaction_dict())

        assert transaction.id == "sb1-tx-1"
        assert transaction.amount == -127.5
        assert transaction.date == datetime(2024, 1, 1, tzinfo=UTC)
        assert transaction.payee == "Generic Grocery Store"
        assert transaction.memo == "VISA VARE 1234"
        assert transaction.account_key == "sb1-key-checking-0001"

    def test_missing_descriptions_become_empty_strings(self):
        transaction = BankTransaction.from_dict(bank_transaction_dict(description=None, cleaned_description=None))

        assert transaction.payee == ""
        assert transaction.memo == ""

    def test_null_descriptions_become_empty_strings(self):
        data = bank_transaction_dict()
        data["description"] = None
        data["cleanedDescription"] = None

        transaction = BankTransaction.from_dict(data)

        assert transaction.payee == ""
        assert transaction.memo == ""

    def test_integer_amount_is_float(self):
        transaction = BankTransaction.from_dict(bank_transaction_dict(amount=-50))
        assert isinstance(transaction.amount, float)

    def test_missing_required_field(self):
        data = bank_transaction_dict()
        del data["accountKey"]

        with pytest.raises(KeyError):
            BankTransaction.from_dict(data)

    def test_local_date_uses_oslo(self):
        # 23:30 UTC on 2024-06-30 is 01:30 on 2024-07-01 in Oslo
        transaction = BankTransaction.from_dict(bank_transaction_dict(date_millis=utc_millis(2024, 6, 30, 23, 30)))
        assert transaction.local_date.to_ynab_format() == "2024-07-01"


@pytest.mark.sparebank1
class TestBankAccountFromDict:
    def test_nested_metadata_key_and_string_balance(self):
        account = BankAccount.from_dict(
            {
                "accountName": "Brukskonto",
                "accountNumber": "12345678901",
                "balance": "1520.75",
                "metadata": {"accountKey": "sb1-key-checking-0001"},
            }
        )

        assert account.key == "sb1-key-checking-0001"
        assert account.name == "Brukskonto"
        assert account.account_number == "12345678901"
        assert account.balance == 1520.75

    def test_top_level_account_key(self):
        account = BankAccount.from_dict({"accountKey": "k1", "name": "Sparekonto", "balance": 10})

        assert account.key == "k1"
        assert account.name == "Sparekonto"
        assert account.account_number == ""

#!/usr/bin/env python3
"""Tests for the SpareBank1 transaction fetcher."""

import pytest

from sparebank1_ynab.core.errors import RemoteError
from sparebank1_ynab.sparebank1.client import TRANSACTIONS_MEDIA_TYPE, SpareBank1Client
from tests.fixtures.http import make_response, make_session
from tests.fixtures.synthetic_data import bank_transaction_dict


@pytest.mark.sparebank1
class TestGetTransactions:
    def test_single_request_with_repeated_account_keys(self):
        session = make_session(make_response(200, {"transactions": []}))
        client = SpareBank1Client("bank-token", base_url="https://bank.test/banking", timeout=7, session=session)

        client.get_transactions(["key-a", "key-b"])

        session.request.assert_called_once()
        args, kwargs = session.request.call_args
        assert args == ("GET", "https://bank.test/banking/transactions")
        assert kwargs["params"] == [("accountKey", "key-a"), ("accountKey", "key-b")]
        assert kwargs["headers"]["Authorization"] == "Bearer bank-token"
        assert kwargs["headers"]["Accept"] == TRANSACTIONS_MEDIA_TYPE
        assert kwargs["timeout"] == 7

    def test_preserves_order_as_received(self):
        body = {
            "transactions": [
                bank_transaction_dict(tx_id="t3", amount=-3.0),
                bank_transaction_dict(tx_id="t1", amount=-1.0),
                bank_transaction_dict(tx_id="t2", amount=-2.0),
            ]
        }
        client = SpareBank1Client("bank-token", session=make_session(make_response(200, body)))

        transactions = client.get_transactions(["sb1-key-checking-0001"])

        assert [t.id for t in transactions] == ["t3", "t1", "t2"]

    def test_empty_account_list_is_rejected(self):
        session = make_session()
        client = SpareBank1Client("bank-token", session=session)

        with pytest.raises(ValueError):
            client.get_transactions([])

        session.request.assert_not_called()

    def test_http_error_surfaces_status_and_body(self):
        session = make_session(make_response(403, text='{"errors": [{"code": "forbidden"}]}'))
        client = SpareBank1Client("bank-token", session=session)

        with pytest.raises(RemoteError) as exc_info:
            client.get_transactions(["k"])

        assert exc_info.value.status_code == 403
        assert "forbidden" in exc_info.value.body

    def test_missing_transactions_list(self):
        client = SpareBank1Client("bank-token", session=make_session(make_response(200, {"items": []})))

        with pytest.raises(RemoteError, match="transactions"):
            client.get_transactions(["k"])

    def test_malformed_entry(self):
        broken = bank_transaction_dict()
        del broken["date"]
        body = {"transactions": [bank_transaction_dict(), broken]}
        client = SpareBank1Client("bank-token", session=make_session(make_response(200, body)))

        with pytest.raises(RemoteError, match="index 1"):
            client.get_transactions(["k"])


@pytest.mark.sparebank1
class TestGetAccounts:
    ACCOUNT = {
        "accountName": "Brukskonto",
        "accountNumber": "12345678901",
        "balance": "100.00",
        "metadata": {"accountKey": "key-a"},
    }

    def test_wrapped_list(self):
        client = SpareBank1Client("t", session=make_session(make_response(200, {"accounts": [self.ACCOUNT]})))
        assert [a.key for a in client.get_accounts()] == ["key-a"]

    def test_bare_list(self):
        client = SpareBank1Client("t", session=make_session(make_response(200, [self.ACCOUNT])))
        assert [a.name for a in client.get_accounts()] == ["Brukskonto"]

    def test_unexpected_shape(self):
        client = SpareBank1Client("t", session=make_session(make_response(200, {"accounts": "none"})))
        with pytest.raises(RemoteError):
            client.get_accounts()

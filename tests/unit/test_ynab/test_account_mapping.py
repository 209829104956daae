#!/usr/bin/env python3
"""Tests for the account mapping file."""

import json

import pytest

from sparebank1_ynab.core.errors import ConfigError, UnmappedAccountError
from sparebank1_ynab.ynab.account_mapping import AccountMapping, load_account_mapping, save_account_mapping


@pytest.mark.ynab
class TestAccountMapping:
    def test_lookup(self):
        mapping = AccountMapping({"key-a": "ynab-a"})

        assert mapping.target_for("key-a") == "ynab-a"
        assert mapping["key-a"] == "ynab-a"
        assert len(mapping) == 1

    def test_unmapped_key(self):
        with pytest.raises(UnmappedAccountError, match="key-b"):
            AccountMapping({"key-a": "ynab-a"}).target_for("key-b")

    def test_source_keys_keep_file_order(self):
        mapping = AccountMapping({"z": "1", "a": "2", "m": "3"})
        assert mapping.source_keys == ["z", "a", "m"]

    def test_not_affected_by_source_dict_changes(self):
        entries = {"key-a": "ynab-a"}
        mapping = AccountMapping(entries)

        entries["key-b"] = "ynab-b"

        assert "key-b" not in mapping

    def test_empty(self):
        assert not AccountMapping()


@pytest.mark.ynab
class TestLoadAccountMapping:
    def test_round_trip(self, temp_dir):
        path = temp_dir / "accounts.json"
        save_account_mapping(path, {"key-a": "ynab-a", "key-b": "ynab-b"})

        mapping = load_account_mapping(path)

        assert dict(mapping) == {"key-a": "ynab-a", "key-b": "ynab-b"}

    def test_missing_file(self, temp_dir):
        with pytest.raises(ConfigError, match="not found"):
            load_account_mapping(temp_dir / "nope.json")

    def test_invalid_json(self, temp_dir):
        path = temp_dir / "accounts.json"
        path.write_text("{not json")

        with pytest.raises(ConfigError, match="not valid JSON"):
            load_account_mapping(path)

    def test_list_instead_of_object(self, temp_dir):
        path = temp_dir / "accounts.json"
        path.write_text(json.dumps(["key-a"]))

        with pytest.raises(ConfigError, match="JSON object"):
            load_account_mapping(path)

    def test_non_string_value(self, temp_dir):
        path = temp_dir / "accounts.json"
        path.write_text(json.dumps({"key-a": 12}))

        with pytest.raises(ConfigError, match="key-a"):
            load_account_mapping(path)

    def test_null_value(self, temp_dir):
        path = temp_dir / "accounts.json"
        path.write_text('{"key-a": null}')

        with pytest.raises(ConfigError, match="must be a string"):
            load_account_mapping(path)

    def test_unicode_keys(self, temp_dir):
        path = temp_dir / "accounts.json"
        path.write_text('{"sparekonto-bjørn": "ynab-æøå"}', encoding="utf-8")

        assert load_account_mapping(path).target_for("sparekonto-bjørn") == "ynab-æøå"

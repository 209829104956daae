#!/usr/bin/env python3
"""
Account Mapping

Read-only lookup from SpareBank1 account key to YNAB account id, loaded once
per run from a JSON object (``accounts.json``) such as::

    {
      "<sparebank1 account key>": "<ynab account id>"
    }
"""

import logging
from collections.abc import Iterator, Mapping
from pathlib import Path
from types import MappingProxyType

from ..core.errors import ConfigError, UnmappedAccountError
from ..core.json_utils import read_json, write_json

logger = logging.getLogger(__name__)

MAPPING_FILE_DESCRIPTION = "Account mapping file"


class AccountMapping(Mapping[str, str]):
    """Immutable SpareBank1 → YNAB account mapping."""

    def __init__(self, entries: Mapping[str, str] | None = None):
        self._entries = MappingProxyType(dict(entries or {}))

    def __getitem__(self, source_account_key: str) -> str:
        return self._entries[source_account_key]

    def __iter__(self) -> Iterator[str]:
        return iter(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    def __repr__(self) -> str:
        return f"AccountMapping({dict(self._entries)!r})"

    @property
    def source_keys(self) -> list[str]:
        """SpareBank1 account keys, in file order."""
        return list(self._entries)

    def target_for(self, source_account_key: str) -> str:
        """
        YNAB account id for a bank account.

        Raises:
            UnmappedAccountError: If the key has no mapping
        """
        target = self.get(source_account_key)
        if target is None:
            raise UnmappedAccountError(source_account_key)
        return target


def load_account_mapping(path: str | Path) -> AccountMapping:
    """
    Load and validate the account mapping file.

    Raises:
        ConfigError: If the file is missing, not valid JSON, not an object,
            or contains non-string keys/values
    """
    path = Path(path)
    data = read_json(path, description=MAPPING_FILE_DESCRIPTION)

    if not isinstance(data, dict):
        raise ConfigError(f"Account mapping must be a JSON object of string to string: {path}")

    for key, value in data.items():
        if not isinstance(value, str):
            raise ConfigError(f"Account mapping value for {key!r} must be a string, got {type(value).__name__}")

    logger.info(f"Loaded account mapping with {len(data)} accounts from {path}")
    return AccountMapping(data)


def save_account_mapping(path: str | Path, mapping: Mapping[str, str]) -> None:
    """Write the account mapping as pretty-printed JSON."""
    write_json(path, dict(mapping), description=MAPPING_FILE_DESCRIPTION)
    logger.info(f"Saved account mapping with {len(mapping)} accounts to {path}")

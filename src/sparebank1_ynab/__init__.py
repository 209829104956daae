"""
SpareBank1 → YNAB

Imports SpareBank1 bank transactions into a YNAB budget. Repeated runs are
safe: every transaction carries a deterministic import id that YNAB uses to
skip transactions it has already imported.

Domain Packages:
- core: Configuration, errors, dates, currency
- sparebank1: Bank API client, models and OAuth token handling
- ynab: Account mapping, import id derivation, YNAB API client
- cli: Command-line interface (sync, setup)

Example Usage:
    from sparebank1_ynab.core import load_config
    from sparebank1_ynab.sync import run_sync

    result = run_sync(load_config("budget.env"))
"""

__version__ = "0.3.0"

from .core.config import Config, load_config
from .core.errors import AuthError, ConfigError, RemoteError, SyncError, UnmappedAccountError
from .ynab.account_mapping import AccountMapping
from .ynab.import_ids import derive_transactions

__all__ = [
    "AccountMapping",
    "AuthError",
    "Config",
    "ConfigError",
    "RemoteError",
    "SyncError",
    "UnmappedAccountError",
    "derive_transactions",
    "load_config",
]

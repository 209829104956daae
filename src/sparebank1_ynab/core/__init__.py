"""
Core Utilities Package

Shared primitives used by the bank fetcher, the YNAB client and the sync
pipeline:
- Configuration loading and validation
- Error taxonomy
- Civil-date derivation in the bank's timezone
- Amount rendering and milliunit conversion
"""

from .config import Config, Environment, SpareBank1Config, YnabConfig, load_config
from .currency import amount_to_milliunits, format_amount, format_milliunits
from .dates import BANK_TIMEZONE, FinancialDate, instant_from_epoch_millis
from .errors import AuthError, ConfigError, RemoteError, SyncError, UnmappedAccountError

__all__ = [
    "BANK_TIMEZONE",
    "AuthError",
    # Configuration
    "Config",
    "ConfigError",
    "Environment",
    "FinancialDate",
    "RemoteError",
    "SpareBank1Config",
    # Errors
    "SyncError",
    "UnmappedAccountError",
    "YnabConfig",
    # Currency utilities
    "amount_to_milliunits",
    "format_amount",
    "format_milliunits",
    "instant_from_epoch_millis",
    "load_config",
]

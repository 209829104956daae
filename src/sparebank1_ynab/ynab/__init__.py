"""
YNAB Integration Package

- account_mapping: SpareBank1 account key → YNAB account id lookup
- import_ids: Deterministic import id derivation for duplicate-safe imports
- models: Transaction payloads and API response types
- client: Batch transaction creation, budget and account listing
"""

from .account_mapping import AccountMapping, load_account_mapping, save_account_mapping
from .client import YnabClient
from .import_ids import ImportIdSequence, derive_transactions, import_id_prefix
from .models import CreateTransactionsResult, YnabAccount, YnabBudget, YnabTransactionPayload

__all__ = [
    "AccountMapping",
    "CreateTransactionsResult",
    "ImportIdSequence",
    "YnabAccount",
    "YnabBudget",
    "YnabClient",
    "YnabTransactionPayload",
    "derive_transactions",
    "import_id_prefix",
    "load_account_mapping",
    "save_account_mapping",
]

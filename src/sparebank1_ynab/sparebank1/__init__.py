"""
SpareBank1 Integration Package

- models: BankTransaction / BankAccount parsed from the personal banking API
- client: Transaction and account fetcher
- auth: Refresh-token rotation and the authorization-code flow used by setup
"""

from .auth import TokenPair, refresh_access_token
from .client import SpareBank1Client
from .models import BankAccount, BankTransaction

__all__ = [
    "BankAccount",
    "BankTransaction",
    "SpareBank1Client",
    "TokenPair",
    "refresh_access_token",
]

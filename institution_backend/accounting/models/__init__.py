# accounting/models/__init__.py

"""
ACCOUNTING MODELS PACKAGE EXPORTS

Note:
- Keep this file *imports-only* (no business logic).
- Do NOT import services from models anywhere (models must stay pure).
"""

from accounting.models.account import Account
from accounting.models.choices import AccountType, NormalBalance
from accounting.models.group import AccountGroup, AccountSubGroup
from accounting.models.journal import JournalEntry
from accounting.models.ledger import LedgerEntry

__all__ = [
    "AccountType",
    "NormalBalance",
    "AccountGroup",
    "AccountSubGroup",
    "Account",
    "JournalEntry",
    "LedgerEntry",
]

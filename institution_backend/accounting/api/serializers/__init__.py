# accounting/api/serializers/__init__.py

from accounting.api.serializers.accounts import (
    AccountGroupSerializer,
    AccountSerializer,
    AccountSubGroupSerializer,
    AccountWriteSerializer,
    SetActiveSerializer,
)
from accounting.api.serializers.journal_entries import JournalEntrySerializer
from accounting.api.serializers.ledger_entries import LedgerEntrySerializer

__all__ = [
    "AccountSerializer",
    "AccountWriteSerializer",
    "SetActiveSerializer",
    "AccountGroupSerializer",
    "AccountSubGroupSerializer",
    "JournalEntrySerializer",
    "LedgerEntrySerializer",
]

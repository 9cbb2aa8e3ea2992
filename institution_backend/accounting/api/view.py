# PATH: accounting/api/view.py

"""
PATH: accounting/api/view.py

ACCOUNTING API VIEWSETS (READ-ONLY / AUDIT SAFE)

- Keep audit endpoints strictly read-only
- Permission-gate access via Django permissions (no role hardcoding)
- Filtering through django-filter:
    /api/accounting/journal-entries/?date_from=2026-01-01&date_to=2026-01-31
    /api/accounting/ledger-entries/?journal_entry=30
    /api/accounting/ledger-entries/?account=28&date_to=2026-03-31

Security rules:
- JournalEntry list requires accounting.view_journalentry
- LedgerEntry list requires accounting.view_ledgerentry
"""

from drf_spectacular.utils import extend_schema
from rest_framework.exceptions import PermissionDenied
from rest_framework.permissions import IsAuthenticated
from rest_framework.viewsets import ReadOnlyModelViewSet

from accounting.api.filters import JournalEntryFilter, LedgerEntryFilter
from accounting.api.serializers import JournalEntrySerializer, LedgerEntrySerializer
from accounting.models.journal import JournalEntry
from accounting.models.ledger import LedgerEntry


@extend_schema(tags=["accounting"])
class JournalEntryViewSet(ReadOnlyModelViewSet):
    """
    Read-only access to journal entries with their lines.
    """

    permission_classes = [IsAuthenticated]
    serializer_class = JournalEntrySerializer
    filterset_class = JournalEntryFilter
    http_method_names = ["get", "head", "options"]

    queryset = JournalEntry.objects.prefetch_related(
        "ledger_entries__account"
    ).order_by("-transaction_date", "-id")

    def get_queryset(self):
        if not self.request.user.has_perm("accounting.view_journalentry"):
            raise PermissionDenied("You do not have permission to view journal entries.")
        return super().get_queryset()


@extend_schema(tags=["accounting"])
class LedgerEntryViewSet(ReadOnlyModelViewSet):
    """
    Read-only access to ledger entries (append-only, audit-safe).
    Ordered by transaction date, oldest first.
    """

    permission_classes = [IsAuthenticated]
    serializer_class = LedgerEntrySerializer
    filterset_class = LedgerEntryFilter
    http_method_names = ["get", "head", "options"]

    queryset = LedgerEntry.objects.select_related("journal_entry", "account").order_by(
        "transaction_date", "id"
    )

    def get_queryset(self):
        if not self.request.user.has_perm("accounting.view_ledgerentry"):
            raise PermissionDenied("You do not have permission to view ledger entries.")
        return super().get_queryset()

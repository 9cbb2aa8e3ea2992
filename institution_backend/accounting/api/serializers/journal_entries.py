# accounting/api/serializers/journal_entries.py

from rest_framework import serializers

from accounting.api.serializers.ledger_entries import LedgerEntrySerializer
from accounting.models.journal import JournalEntry


class JournalEntrySerializer(serializers.ModelSerializer):
    lines = LedgerEntrySerializer(source="ledger_entries", many=True, read_only=True)

    class Meta:
        model = JournalEntry
        fields = (
            "id",
            "entry_number",
            "transaction_date",
            "description",
            "reference",
            "created_at",
            "lines",
        )
        read_only_fields = fields

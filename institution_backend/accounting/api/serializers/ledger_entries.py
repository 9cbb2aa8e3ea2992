# accounting/api/serializers/ledger_entries.py

from rest_framework import serializers

from accounting.models.ledger import LedgerEntry


class LedgerEntrySerializer(serializers.ModelSerializer):
    account_code = serializers.CharField(source="account.code", read_only=True)
    account_name = serializers.CharField(source="account.name", read_only=True)
    entry_number = serializers.CharField(source="journal_entry.entry_number", read_only=True)

    class Meta:
        model = LedgerEntry
        fields = (
            "id",
            "journal_entry",
            "entry_number",
            "account",
            "account_code",
            "account_name",
            "transaction_date",
            "description",
            "reference_number",
            "debit",
            "credit",
            "created_at",
        )
        read_only_fields = fields

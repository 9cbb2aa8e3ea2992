# accounting/models/journal.py

"""
======================================================
PATH: accounting/models/journal.py
======================================================
JOURNAL ENTRY MODEL

Header of one balanced accounting transaction. Its lines live in LedgerEntry.

Guarantees:
- Immutable once created (no updates, no deletes)
- entry_number is a unique human reference (e.g. "JE-000042")
- transaction_date is the accounting effective date used by every report
"""

from __future__ import annotations

from django.core.exceptions import ValidationError
from django.db import models
from django.db.models import Q


class JournalEntry(models.Model):
    entry_number = models.CharField(max_length=30, unique=True)

    transaction_date = models.DateField(help_text="Accounting effective date")

    description = models.TextField(help_text="Narrative description of the journal entry")

    reference = models.CharField(
        max_length=100,
        blank=True,
        null=True,
        help_text="External reference (invoice number, receipt number, voucher, ...)",
    )

    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ["-transaction_date", "-id"]
        indexes = [
            models.Index(fields=["transaction_date"], name="acct_journal_date_idx"),
            models.Index(fields=["reference"], name="acct_journal_ref_idx"),
        ]
        constraints = [
            models.UniqueConstraint(
                fields=["reference"],
                condition=Q(reference__isnull=False) & ~Q(reference=""),
                name="uniq_journal_reference_not_blank",
            )
        ]
        verbose_name = "Journal Entry"
        verbose_name_plural = "Journal Entries"

    def __str__(self):
        return f"{self.entry_number} – {self.transaction_date}"

    def clean(self):
        if self.reference is not None:
            ref = str(self.reference).strip()
            self.reference = ref or None

        self.entry_number = (self.entry_number or "").strip()
        if not self.entry_number:
            raise ValidationError({"entry_number": "Entry number is required"})

        self.description = (self.description or "").strip()
        if not self.description:
            raise ValidationError({"description": "Journal entry description is required"})

    def save(self, *args, **kwargs):
        if self.pk:
            raise ValidationError("JournalEntry records are immutable once created")

        self.full_clean()
        return super().save(*args, **kwargs)

    def delete(self, *args, **kwargs):
        raise ValidationError("JournalEntry records are immutable and cannot be deleted")

# accounting/models/ledger.py

"""
======================================================
PATH: accounting/models/ledger.py
======================================================
LEDGER ENTRY MODEL (General Ledger posting line)

One debit-or-credit line against a single account.

Guarantees:
- Immutable once created (no updates, no deletes)
- debit and credit are non-negative; exactly one of them is non-zero
- transaction_date mirrors the journal header and drives every cutoff query
"""

from __future__ import annotations

from decimal import Decimal

from django.core.exceptions import ValidationError
from django.core.validators import MinValueValidator
from django.db import models
from django.db.models import Q

from accounting.models.account import Account
from accounting.models.journal import JournalEntry


class LedgerEntry(models.Model):
    journal_entry = models.ForeignKey(
        JournalEntry,
        on_delete=models.PROTECT,
        related_name="ledger_entries",
    )

    account = models.ForeignKey(
        Account,
        on_delete=models.PROTECT,
        related_name="ledger_entries",
    )

    transaction_date = models.DateField()
    description = models.CharField(max_length=255, blank=True, default="")
    reference_number = models.CharField(max_length=100, blank=True, default="")

    debit = models.DecimalField(
        max_digits=14,
        decimal_places=2,
        default=Decimal("0.00"),
        validators=[MinValueValidator(Decimal("0.00"))],
    )
    credit = models.DecimalField(
        max_digits=14,
        decimal_places=2,
        default=Decimal("0.00"),
        validators=[MinValueValidator(Decimal("0.00"))],
    )

    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        verbose_name = "Ledger Entry"
        verbose_name_plural = "Ledger Entries"
        ordering = ["transaction_date", "id"]
        indexes = [
            models.Index(fields=["transaction_date"], name="acct_ledger_date_idx"),
            models.Index(fields=["account", "transaction_date"], name="acct_ledger_acct_date_idx"),
            models.Index(fields=["journal_entry"], name="acct_ledger_journal_idx"),
        ]
        constraints = [
            models.CheckConstraint(
                condition=Q(debit__gte=0) & Q(credit__gte=0),
                name="chk_ledger_amounts_non_negative",
            ),
        ]

    def __str__(self):
        side = "DR" if self.debit else "CR"
        return f"{side} {self.debit or self.credit} → {self.account}"

    def clean(self):
        debit = self.debit or Decimal("0.00")
        credit = self.credit or Decimal("0.00")

        if debit < 0 or credit < 0:
            raise ValidationError("Ledger amounts cannot be negative")
        if debit > 0 and credit > 0:
            raise ValidationError("A ledger line cannot carry both debit and credit")
        if debit == 0 and credit == 0:
            raise ValidationError("A ledger line must carry a debit or a credit")

    def save(self, *args, **kwargs):
        if self.pk:
            raise ValidationError("LedgerEntry records are immutable and cannot be modified")

        self.full_clean()
        return super().save(*args, **kwargs)

    def delete(self, *args, **kwargs):
        raise ValidationError("LedgerEntry records are immutable and cannot be deleted")

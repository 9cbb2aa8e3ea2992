# fees/models/invoice.py

from __future__ import annotations

from decimal import Decimal

from django.core.exceptions import ValidationError
from django.core.validators import MinValueValidator
from django.db import models


class Invoice(models.Model):
    """
    Student fee invoice.

    balance_due is what the student still owes (total_amount - amount_paid);
    it is kept in sync on save so report queries can filter on it directly.
    """

    STATUS_UNPAID = "UNPAID"
    STATUS_PARTIAL = "PARTIAL"
    STATUS_PAID = "PAID"
    STATUS_CANCELLED = "CANCELLED"

    STATUS_CHOICES = [
        (STATUS_UNPAID, "Unpaid"),
        (STATUS_PARTIAL, "Partially Paid"),
        (STATUS_PAID, "Paid"),
        (STATUS_CANCELLED, "Cancelled"),
    ]

    invoice_number = models.CharField(max_length=50, unique=True)
    student_id = models.CharField(max_length=64, db_index=True)

    invoice_date = models.DateField()
    due_date = models.DateField(null=True, blank=True)

    total_amount = models.DecimalField(
        max_digits=14,
        decimal_places=2,
        validators=[MinValueValidator(Decimal("0.00"))],
    )
    amount_paid = models.DecimalField(
        max_digits=14,
        decimal_places=2,
        default=Decimal("0.00"),
        validators=[MinValueValidator(Decimal("0.00"))],
    )
    balance_due = models.DecimalField(
        max_digits=14,
        decimal_places=2,
        default=Decimal("0.00"),
    )

    status = models.CharField(
        max_length=12,
        choices=STATUS_CHOICES,
        default=STATUS_UNPAID,
    )
    notes = models.TextField(blank=True, default="")

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["-invoice_date", "-id"]
        indexes = [
            models.Index(fields=["invoice_date"], name="fees_invoice_date_idx"),
            models.Index(fields=["invoice_date", "balance_due"], name="fees_invoice_date_due_idx"),
        ]

    def __str__(self):
        return f"{self.invoice_number} ({self.student_id})"

    def clean(self):
        self.invoice_number = (self.invoice_number or "").strip()
        if not self.invoice_number:
            raise ValidationError({"invoice_number": "Invoice number is required"})
        if (
            self.total_amount is not None
            and self.amount_paid is not None
            and self.amount_paid > self.total_amount
        ):
            raise ValidationError({"amount_paid": "Amount paid exceeds invoice total"})

    def save(self, *args, **kwargs):
        self.full_clean()
        if self.status != self.STATUS_CANCELLED:
            self.balance_due = self.total_amount - self.amount_paid
            if self.balance_due <= 0:
                self.status = self.STATUS_PAID
            elif self.amount_paid > 0:
                self.status = self.STATUS_PARTIAL
            else:
                self.status = self.STATUS_UNPAID
        else:
            self.balance_due = Decimal("0.00")
        return super().save(*args, **kwargs)

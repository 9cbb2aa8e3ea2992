# fees/models/payment.py

from __future__ import annotations

from decimal import Decimal

from django.core.exceptions import ValidationError
from django.core.validators import MinValueValidator
from django.db import models

from fees.models.invoice import Invoice


class Payment(models.Model):
    """
    Student fee payment (receipt). Only COMPLETED payments count as cash.
    """

    STATUS_PENDING = "PENDING"
    STATUS_COMPLETED = "COMPLETED"
    STATUS_FAILED = "FAILED"
    STATUS_CANCELLED = "CANCELLED"

    STATUS_CHOICES = [
        (STATUS_PENDING, "Pending"),
        (STATUS_COMPLETED, "Completed"),
        (STATUS_FAILED, "Failed"),
        (STATUS_CANCELLED, "Cancelled"),
    ]

    receipt_number = models.CharField(max_length=50, unique=True)
    reference_number = models.CharField(max_length=100, blank=True, default="")
    student_id = models.CharField(max_length=64, db_index=True)

    invoice = models.ForeignKey(
        Invoice,
        on_delete=models.PROTECT,
        null=True,
        blank=True,
        related_name="payments",
    )

    payment_date = models.DateField()
    amount = models.DecimalField(
        max_digits=14,
        decimal_places=2,
        validators=[MinValueValidator(Decimal("0.01"))],
    )
    status = models.CharField(
        max_length=12,
        choices=STATUS_CHOICES,
        default=STATUS_PENDING,
    )
    notes = models.TextField(blank=True, default="")

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["-payment_date", "-id"]
        indexes = [
            models.Index(fields=["payment_date", "status"], name="fees_payment_date_status_idx"),
        ]

    def __str__(self):
        return f"{self.receipt_number} – {self.amount} ({self.status})"

    def clean(self):
        self.receipt_number = (self.receipt_number or "").strip()
        if not self.receipt_number:
            raise ValidationError({"receipt_number": "Receipt number is required"})

    def save(self, *args, **kwargs):
        self.full_clean()
        return super().save(*args, **kwargs)

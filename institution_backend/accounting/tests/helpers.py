# accounting/tests/helpers.py

from __future__ import annotations

from datetime import date
from decimal import Decimal

from django.contrib.auth import get_user_model
from django.contrib.auth.models import Permission
from django.db import OperationalError

from accounting.models.choices import AccountType
from accounting.services.account_registry import create_account
from accounting.services.journal_entry_service import create_journal_entry
from fees.models import Invoice, Payment

User = get_user_model()


def make_account(code: str, name: str, account_type=AccountType.ASSET, **kwargs):
    return create_account(code=code, name=name, account_type=account_type, **kwargs)


def post(on: date, debit_account, credit_account, amount, description="Test posting", **kwargs):
    """Two-line balanced journal entry."""
    return create_journal_entry(
        description=description,
        transaction_date=on,
        lines=[
            {"account": debit_account, "debit": str(amount)},
            {"account": credit_account, "credit": str(amount)},
        ],
        **kwargs,
    )


def make_invoice(number: str, on: date, total, paid="0.00", student_id="STU-001"):
    return Invoice.objects.create(
        invoice_number=number,
        student_id=student_id,
        invoice_date=on,
        total_amount=Decimal(str(total)),
        amount_paid=Decimal(str(paid)),
    )


def make_payment(
    number: str,
    on: date,
    amount,
    status=Payment.STATUS_COMPLETED,
    student_id="STU-001",
    invoice=None,
):
    return Payment.objects.create(
        receipt_number=number,
        student_id=student_id,
        payment_date=on,
        amount=Decimal(str(amount)),
        status=status,
        invoice=invoice,
    )


def make_user(username: str, *codenames: str):
    user = User.objects.create_user(username=username, password="pass")
    if codenames:
        perms = Permission.objects.filter(
            content_type__app_label="accounting", codename__in=codenames
        )
        user.user_permissions.add(*perms)
    return user


class _UnreachableManager:
    """Every query attempt fails like a dropped database connection."""

    def __getattr__(self, name):
        raise OperationalError("could not connect to server")


class UnreachableModel:
    objects = _UnreachableManager()
    STATUS_COMPLETED = Payment.STATUS_COMPLETED

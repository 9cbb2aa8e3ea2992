# accounting/models/choices.py

"""
Closed enumerations shared by accounts, groups and reports.
"""

from __future__ import annotations

from django.db import models


class AccountType(models.TextChoices):
    ASSET = "ASSET", "Asset"
    LIABILITY = "LIABILITY", "Liability"
    EQUITY = "EQUITY", "Equity"
    INCOME = "INCOME", "Income"
    EXPENSE = "EXPENSE", "Expense"


class NormalBalance(models.TextChoices):
    DEBIT = "DEBIT", "Debit"
    CREDIT = "CREDIT", "Credit"


DEBIT_NORMAL_TYPES = frozenset({AccountType.ASSET, AccountType.EXPENSE})


def default_normal_balance(account_type: str) -> str:
    """
    Conventional side for an account type:
    Asset/Expense -> Debit, Liability/Equity/Income -> Credit.
    """
    if account_type not in AccountType.values:
        raise ValueError(f"Unknown account type: {account_type!r}")
    if account_type in DEBIT_NORMAL_TYPES:
        return NormalBalance.DEBIT
    return NormalBalance.CREDIT

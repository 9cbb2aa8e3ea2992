"""
======================================================
PATH: accounting/migrations/0001_initial.py
======================================================
MIGRATION: INITIAL ACCOUNTING SCHEMA

Creates:
- AccountGroup / AccountSubGroup (classification)
- Account (chart of accounts)
- JournalEntry / LedgerEntry (General Ledger)
"""

from __future__ import annotations

from decimal import Decimal

import django.core.validators
import django.db.models.deletion
from django.db import migrations, models


ACCOUNT_TYPE_CHOICES = [
    ("ASSET", "Asset"),
    ("LIABILITY", "Liability"),
    ("EQUITY", "Equity"),
    ("INCOME", "Income"),
    ("EXPENSE", "Expense"),
]


class Migration(migrations.Migration):
    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name="AccountGroup",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("name", models.CharField(max_length=150)),
                ("description", models.TextField(blank=True, default="")),
                ("account_type", models.CharField(choices=ACCOUNT_TYPE_CHOICES, max_length=20)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
            ],
            options={
                "ordering": ["account_type", "name"],
                "verbose_name": "Account Group",
                "verbose_name_plural": "Account Groups",
                "constraints": [
                    models.UniqueConstraint(
                        fields=("account_type", "name"),
                        name="uniq_account_group_type_name",
                    ),
                ],
            },
        ),
        migrations.CreateModel(
            name="AccountSubGroup",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("name", models.CharField(max_length=150)),
                ("description", models.TextField(blank=True, default="")),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                (
                    "group",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.PROTECT,
                        related_name="sub_groups",
                        to="accounting.accountgroup",
                    ),
                ),
            ],
            options={
                "ordering": ["group__name", "name"],
                "verbose_name": "Account Sub-Group",
                "verbose_name_plural": "Account Sub-Groups",
                "constraints": [
                    models.UniqueConstraint(
                        fields=("group", "name"),
                        name="uniq_account_subgroup_group_name",
                    ),
                ],
            },
        ),
        migrations.CreateModel(
            name="Account",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("code", models.CharField(max_length=20, unique=True)),
                ("name", models.CharField(max_length=150)),
                ("account_type", models.CharField(choices=ACCOUNT_TYPE_CHOICES, max_length=20)),
                (
                    "normal_balance",
                    models.CharField(
                        blank=True,
                        choices=[("DEBIT", "Debit"), ("CREDIT", "Credit")],
                        help_text="Defaults from account type when left blank",
                        max_length=6,
                    ),
                ),
                ("description", models.TextField(blank=True, default="")),
                ("is_active", models.BooleanField(default=True)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                (
                    "group",
                    models.ForeignKey(
                        blank=True,
                        null=True,
                        on_delete=django.db.models.deletion.PROTECT,
                        related_name="accounts",
                        to="accounting.accountgroup",
                    ),
                ),
                (
                    "sub_group",
                    models.ForeignKey(
                        blank=True,
                        null=True,
                        on_delete=django.db.models.deletion.PROTECT,
                        related_name="accounts",
                        to="accounting.accountsubgroup",
                    ),
                ),
                (
                    "parent",
                    models.ForeignKey(
                        blank=True,
                        null=True,
                        on_delete=django.db.models.deletion.PROTECT,
                        related_name="children",
                        to="accounting.account",
                    ),
                ),
            ],
            options={
                "ordering": ["code"],
                "verbose_name": "Account",
                "verbose_name_plural": "Accounts",
                "indexes": [
                    models.Index(fields=["account_type"], name="acct_account_type_idx"),
                    models.Index(fields=["is_active"], name="acct_account_active_idx"),
                ],
                "constraints": [
                    models.CheckConstraint(
                        condition=models.Q(("code", ""), _negated=True),
                        name="chk_account_code_not_blank",
                    ),
                    models.CheckConstraint(
                        condition=models.Q(("name", ""), _negated=True),
                        name="chk_account_name_not_blank",
                    ),
                ],
            },
        ),
        migrations.CreateModel(
            name="JournalEntry",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("entry_number", models.CharField(max_length=30, unique=True)),
                ("transaction_date", models.DateField(help_text="Accounting effective date")),
                ("description", models.TextField(help_text="Narrative description of the journal entry")),
                (
                    "reference",
                    models.CharField(
                        blank=True,
                        help_text="External reference (invoice number, receipt number, voucher, ...)",
                        max_length=100,
                        null=True,
                    ),
                ),
                ("created_at", models.DateTimeField(auto_now_add=True)),
            ],
            options={
                "ordering": ["-transaction_date", "-id"],
                "verbose_name": "Journal Entry",
                "verbose_name_plural": "Journal Entries",
                "indexes": [
                    models.Index(fields=["transaction_date"], name="acct_journal_date_idx"),
                    models.Index(fields=["reference"], name="acct_journal_ref_idx"),
                ],
                "constraints": [
                    models.UniqueConstraint(
                        condition=models.Q(("reference__isnull", False), models.Q(("reference", ""), _negated=True)),
                        fields=("reference",),
                        name="uniq_journal_reference_not_blank",
                    ),
                ],
            },
        ),
        migrations.CreateModel(
            name="LedgerEntry",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("transaction_date", models.DateField()),
                ("description", models.CharField(blank=True, default="", max_length=255)),
                ("reference_number", models.CharField(blank=True, default="", max_length=100)),
                (
                    "debit",
                    models.DecimalField(
                        decimal_places=2,
                        default=Decimal("0.00"),
                        max_digits=14,
                        validators=[django.core.validators.MinValueValidator(Decimal("0.00"))],
                    ),
                ),
                (
                    "credit",
                    models.DecimalField(
                        decimal_places=2,
                        default=Decimal("0.00"),
                        max_digits=14,
                        validators=[django.core.validators.MinValueValidator(Decimal("0.00"))],
                    ),
                ),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                (
                    "journal_entry",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.PROTECT,
                        related_name="ledger_entries",
                        to="accounting.journalentry",
                    ),
                ),
                (
                    "account",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.PROTECT,
                        related_name="ledger_entries",
                        to="accounting.account",
                    ),
                ),
            ],
            options={
                "ordering": ["transaction_date", "id"],
                "verbose_name": "Ledger Entry",
                "verbose_name_plural": "Ledger Entries",
                "indexes": [
                    models.Index(fields=["transaction_date"], name="acct_ledger_date_idx"),
                    models.Index(fields=["account", "transaction_date"], name="acct_ledger_acct_date_idx"),
                    models.Index(fields=["journal_entry"], name="acct_ledger_journal_idx"),
                ],
                "constraints": [
                    models.CheckConstraint(
                        condition=models.Q(("debit__gte", 0), ("credit__gte", 0)),
                        name="chk_ledger_amounts_non_negative",
                    ),
                ],
            },
        ),
    ]

# accounting/models/account.py

from __future__ import annotations

from django.core.exceptions import ValidationError
from django.db import models
from django.db.models import Q

from accounting.models.choices import AccountType, NormalBalance, default_normal_balance
from accounting.models.group import AccountGroup, AccountSubGroup


class Account(models.Model):
    """
    A single ledger account in the Chart of Accounts.

    Guarantees:
    - Account codes are unique; code + name are normalized (trimmed)
    - normal_balance is an explicit, stored field. It is pre-filled from the
      account type when left blank and never re-derived over a stored value.
    - parent, group and sub-group all share the account's type
    - parent chains are acyclic
    - Accounts are deactivated, never deleted, once postings reference them
      (LedgerEntry.account is PROTECT)
    """

    code = models.CharField(max_length=20, unique=True)
    name = models.CharField(max_length=150)

    account_type = models.CharField(
        max_length=20,
        choices=AccountType.choices,
    )

    normal_balance = models.CharField(
        max_length=6,
        choices=NormalBalance.choices,
        blank=True,
        help_text="Defaults from account type when left blank",
    )

    group = models.ForeignKey(
        AccountGroup,
        on_delete=models.PROTECT,
        null=True,
        blank=True,
        related_name="accounts",
    )
    sub_group = models.ForeignKey(
        AccountSubGroup,
        on_delete=models.PROTECT,
        null=True,
        blank=True,
        related_name="accounts",
    )
    parent = models.ForeignKey(
        "self",
        on_delete=models.PROTECT,
        null=True,
        blank=True,
        related_name="children",
    )

    description = models.TextField(blank=True, default="")

    is_active = models.BooleanField(default=True)

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["code"]
        verbose_name = "Account"
        verbose_name_plural = "Accounts"
        indexes = [
            models.Index(fields=["account_type"], name="acct_account_type_idx"),
            models.Index(fields=["is_active"], name="acct_account_active_idx"),
        ]
        constraints = [
            models.CheckConstraint(
                condition=~Q(code=""),
                name="chk_account_code_not_blank",
            ),
            models.CheckConstraint(
                condition=~Q(name=""),
                name="chk_account_name_not_blank",
            ),
        ]

    def __str__(self):
        return f"{self.code} – {self.name}"

    @property
    def is_debit_normal(self) -> bool:
        return self.normal_balance == NormalBalance.DEBIT

    def _validate_parent(self) -> None:
        if self.parent_id is None:
            return

        if self.pk and self.parent_id == self.pk:
            raise ValidationError({"parent": "An account cannot be its own parent"})

        if self.parent.account_type != self.account_type:
            raise ValidationError(
                {
                    "parent": (
                        f"Parent account {self.parent.code} is "
                        f"{self.parent.get_account_type_display()}; "
                        f"expected {self.get_account_type_display()}"
                    )
                }
            )

        if self.pk is None:
            return

        seen = {self.pk}
        node = self.parent
        while node is not None:
            if node.pk in seen:
                raise ValidationError(
                    {"parent": "Parent assignment would create a cycle"}
                )
            seen.add(node.pk)
            node = node.parent

    def _validate_classification(self) -> None:
        if self.group_id is not None and self.group.account_type != self.account_type:
            raise ValidationError(
                {"group": "Group must have the same account type as the account"}
            )

        if self.sub_group_id is None:
            return

        sub_group_group = self.sub_group.group
        if sub_group_group.account_type != self.account_type:
            raise ValidationError(
                {"sub_group": "Sub-group must have the same account type as the account"}
            )

        if self.group_id is None:
            self.group = sub_group_group
        elif self.group_id != sub_group_group.id:
            raise ValidationError(
                {"sub_group": "Sub-group does not belong to the selected group"}
            )

    def _validate_children(self) -> None:
        if self.pk is None:
            return
        mismatched = (
            Account.objects.filter(parent_id=self.pk)
            .exclude(account_type=self.account_type)
            .values_list("code", flat=True)
        )
        codes = list(mismatched[:5])
        if codes:
            raise ValidationError(
                {
                    "account_type": (
                        "Child accounts have a different type: " + ", ".join(codes)
                    )
                }
            )

    def clean(self):
        self.code = (self.code or "").strip()
        self.name = (self.name or "").strip()

        if not self.code:
            raise ValidationError({"code": "Account code is required"})
        if not self.name:
            raise ValidationError({"name": "Account name is required"})

        if self.account_type not in AccountType.values:
            raise ValidationError({"account_type": "Invalid account type"})

        if not self.normal_balance:
            self.normal_balance = default_normal_balance(self.account_type)

        self._validate_parent()
        self._validate_classification()
        self._validate_children()

    def save(self, *args, **kwargs):
        self.full_clean()
        return super().save(*args, **kwargs)

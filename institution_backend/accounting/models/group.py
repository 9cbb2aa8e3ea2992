# accounting/models/group.py

"""
ACCOUNT CLASSIFICATION (groups / sub-groups)

A group carries an account type; a sub-group inherits the type of its group.
Accounts may only be classified under a group of their own type.
"""

from __future__ import annotations

from django.core.exceptions import ValidationError
from django.db import models

from accounting.models.choices import AccountType


class AccountGroup(models.Model):
    name = models.CharField(max_length=150)
    description = models.TextField(blank=True, default="")
    account_type = models.CharField(max_length=20, choices=AccountType.choices)

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["account_type", "name"]
        verbose_name = "Account Group"
        verbose_name_plural = "Account Groups"
        constraints = [
            models.UniqueConstraint(
                fields=["account_type", "name"],
                name="uniq_account_group_type_name",
            ),
        ]

    def __str__(self):
        return f"{self.name} ({self.get_account_type_display()})"

    def clean(self):
        self.name = (self.name or "").strip()
        if not self.name:
            raise ValidationError({"name": "Group name is required"})

    def save(self, *args, **kwargs):
        self.full_clean()
        return super().save(*args, **kwargs)


class AccountSubGroup(models.Model):
    group = models.ForeignKey(
        AccountGroup,
        on_delete=models.PROTECT,
        related_name="sub_groups",
    )
    name = models.CharField(max_length=150)
    description = models.TextField(blank=True, default="")

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["group__name", "name"]
        verbose_name = "Account Sub-Group"
        verbose_name_plural = "Account Sub-Groups"
        constraints = [
            models.UniqueConstraint(
                fields=["group", "name"],
                name="uniq_account_subgroup_group_name",
            ),
        ]

    def __str__(self):
        return f"{self.group.name} / {self.name}"

    @property
    def account_type(self) -> str:
        return self.group.account_type

    def clean(self):
        self.name = (self.name or "").strip()
        if not self.name:
            raise ValidationError({"name": "Sub-group name is required"})

    def save(self, *args, **kwargs):
        self.full_clean()
        return super().save(*args, **kwargs)

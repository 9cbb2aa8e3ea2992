# accounting/services/account_registry.py

"""
ACCOUNT REGISTRY (Chart of Accounts maintenance)

The one place that creates and edits accounts, groups and sub-groups.

Rules:
- normal_balance defaults from account type only at creation, or when the
  type changes and the caller gives no explicit normal balance. A stored
  value is never silently replaced.
- parent / group / sub-group must share the account's type (enforced by
  Account.clean()).
- Accounts are deactivated, never deleted: historical reports keep them.

Errors:
- django.core.exceptions.ValidationError for bad input (field message dicts)
- AccountNotFoundError for unknown ids on edit/toggle
"""

from __future__ import annotations

import logging

from django.core.exceptions import ValidationError
from django.db import transaction

from accounting.models.account import Account
from accounting.models.choices import AccountType, default_normal_balance
from accounting.models.group import AccountGroup, AccountSubGroup
from accounting.services.exceptions import AccountNotFoundError

logger = logging.getLogger(__name__)

__all__ = [
    "default_normal_balance",
    "create_account",
    "update_account",
    "set_active",
    "get_account",
    "list_by_type",
    "list_children",
    "create_group",
    "create_sub_group",
    "groups_for_type",
    "sub_groups_for_type",
]

_EDITABLE_FIELDS = (
    "code",
    "name",
    "account_type",
    "normal_balance",
    "group_id",
    "sub_group_id",
    "parent_id",
    "description",
)


def _require_type(account_type) -> str:
    if account_type not in AccountType.values:
        raise ValidationError(
            {"account_type": f"Account type must be one of {', '.join(AccountType.values)}"}
        )
    return account_type


def _resolve(model, pk, field: str):
    if pk in (None, ""):
        return None
    try:
        return model.objects.get(pk=pk)
    except (model.DoesNotExist, ValueError, TypeError) as exc:
        raise ValidationError({field: f"{model._meta.verbose_name} {pk} not found"}) from exc


def get_account(account_id) -> Account:
    try:
        return Account.objects.select_related("parent", "group", "sub_group").get(
            pk=account_id
        )
    except (Account.DoesNotExist, ValueError, TypeError) as exc:
        raise AccountNotFoundError(f"Account {account_id} not found") from exc


@transaction.atomic
def create_account(
    *,
    code: str,
    name: str,
    account_type: str,
    normal_balance: str | None = None,
    group_id=None,
    sub_group_id=None,
    parent_id=None,
    description: str = "",
) -> Account:
    account_type = _require_type(account_type)
    derived = default_normal_balance(account_type)

    account = Account(
        code=code,
        name=name,
        account_type=account_type,
        normal_balance=normal_balance or derived,
        group=_resolve(AccountGroup, group_id, "group"),
        sub_group=_resolve(AccountSubGroup, sub_group_id, "sub_group"),
        parent=_resolve(Account, parent_id, "parent"),
        description=description or "",
    )
    account.save()

    if account.normal_balance != derived:
        logger.info(
            "Account created with overridden normal balance",
            extra={
                "account_code": account.code,
                "account_type": account.account_type,
                "normal_balance": account.normal_balance,
            },
        )

    logger.info(
        "Account created",
        extra={"account_id": account.id, "account_code": account.code},
    )
    return account


@transaction.atomic
def update_account(account_id, **changes) -> Account:
    """
    Partial update. Accepts any of: code, name, account_type, normal_balance,
    group_id, sub_group_id, parent_id, description.
    """
    unknown = set(changes) - set(_EDITABLE_FIELDS)
    if unknown:
        raise ValidationError(
            {field: "Field cannot be edited" for field in sorted(unknown)}
        )

    account = get_account(account_id)

    new_type = changes.get("account_type", account.account_type)
    _require_type(new_type)
    type_changed = new_type != account.account_type

    if "code" in changes:
        account.code = changes["code"]
    if "name" in changes:
        account.name = changes["name"]
    if "description" in changes:
        account.description = changes["description"] or ""

    account.account_type = new_type

    if changes.get("normal_balance"):
        account.normal_balance = changes["normal_balance"]
    elif type_changed:
        account.normal_balance = default_normal_balance(new_type)

    if "group_id" in changes:
        account.group = _resolve(AccountGroup, changes["group_id"], "group")
    if "sub_group_id" in changes:
        account.sub_group = _resolve(AccountSubGroup, changes["sub_group_id"], "sub_group")
    if "parent_id" in changes:
        account.parent = _resolve(Account, changes["parent_id"], "parent")

    account.save()

    logger.info(
        "Account updated",
        extra={
            "account_id": account.id,
            "fields": sorted(changes),
            "type_changed": type_changed,
        },
    )
    return account


@transaction.atomic
def set_active(account_id, active: bool) -> Account:
    account = get_account(account_id)
    active = bool(active)

    if account.is_active != active:
        account.is_active = active
        account.save(update_fields=["is_active", "updated_at"])
        logger.info(
            "Account activated" if active else "Account deactivated",
            extra={"account_id": account.id, "account_code": account.code},
        )

    return account


def list_by_type(account_type: str, *, include_inactive: bool = True):
    _require_type(account_type)
    qs = Account.objects.filter(account_type=account_type)
    if not include_inactive:
        qs = qs.filter(is_active=True)
    return qs.order_by("code")


def list_children(parent_id):
    return Account.objects.filter(parent_id=parent_id).order_by("code")


@transaction.atomic
def create_group(*, name: str, account_type: str, description: str = "") -> AccountGroup:
    _require_type(account_type)
    group = AccountGroup(name=name, account_type=account_type, description=description or "")
    group.save()
    logger.info("Account group created", extra={"group_id": group.id})
    return group


@transaction.atomic
def create_sub_group(*, name: str, group_id, description: str = "") -> AccountSubGroup:
    group = _resolve(AccountGroup, group_id, "group")
    if group is None:
        raise ValidationError({"group": "Group is required"})
    sub_group = AccountSubGroup(name=name, group=group, description=description or "")
    sub_group.save()
    logger.info("Account sub-group created", extra={"sub_group_id": sub_group.id})
    return sub_group


def groups_for_type(account_type: str):
    _require_type(account_type)
    return AccountGroup.objects.filter(account_type=account_type).order_by("name")


def sub_groups_for_type(account_type: str, *, group_id=None):
    _require_type(account_type)
    qs = AccountSubGroup.objects.select_related("group").filter(
        group__account_type=account_type
    )
    if group_id is not None:
        qs = qs.filter(group_id=group_id)
    return qs.order_by("name")

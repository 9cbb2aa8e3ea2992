# accounting/tests/test_account_registry.py

from django.core.exceptions import ValidationError
from django.test import TestCase

from accounting.models.account import Account
from accounting.models.choices import AccountType, NormalBalance
from accounting.services import account_registry
from accounting.services.exceptions import AccountNotFoundError
from accounting.tests.helpers import make_account


class DefaultNormalBalanceTests(TestCase):
    def test_debit_normal_types(self):
        for account_type in (AccountType.ASSET, AccountType.EXPENSE):
            self.assertEqual(
                account_registry.default_normal_balance(account_type),
                NormalBalance.DEBIT,
            )

    def test_credit_normal_types(self):
        for account_type in (AccountType.LIABILITY, AccountType.EQUITY, AccountType.INCOME):
            self.assertEqual(
                account_registry.default_normal_balance(account_type),
                NormalBalance.CREDIT,
            )

    def test_unknown_type_rejected(self):
        with self.assertRaises(ValueError):
            account_registry.default_normal_balance("REVENUE")


class CreateAccountTests(TestCase):
    def test_normal_balance_defaults_from_type(self):
        acc = make_account("4000", "Tuition Fees", AccountType.INCOME)
        self.assertEqual(acc.normal_balance, NormalBalance.CREDIT)

    def test_explicit_normal_balance_kept(self):
        acc = make_account(
            "1050",
            "Allowance for Doubtful Fees",
            AccountType.ASSET,
            normal_balance=NormalBalance.CREDIT,
        )
        acc.refresh_from_db()
        self.assertEqual(acc.normal_balance, NormalBalance.CREDIT)

    def test_code_and_name_are_trimmed(self):
        acc = make_account("  1000 ", "  Cash on Hand  ")
        self.assertEqual(acc.code, "1000")
        self.assertEqual(acc.name, "Cash on Hand")

    def test_empty_code_rejected(self):
        with self.assertRaises(ValidationError) as ctx:
            make_account("   ", "Cash")
        self.assertIn("code", ctx.exception.message_dict)
        self.assertFalse(Account.objects.exists())

    def test_empty_name_rejected(self):
        with self.assertRaises(ValidationError) as ctx:
            make_account("1000", "")
        self.assertIn("name", ctx.exception.message_dict)

    def test_duplicate_code_rejected(self):
        make_account("1000", "Cash")
        with self.assertRaises(ValidationError):
            make_account("1000", "Petty Cash")

    def test_unknown_type_rejected(self):
        with self.assertRaises(ValidationError) as ctx:
            make_account("1000", "Cash", "REVENUE")
        self.assertIn("account_type", ctx.exception.message_dict)

    def test_cross_type_parent_rejected(self):
        parent = make_account("2000", "Payables", AccountType.LIABILITY)
        with self.assertRaises(ValidationError) as ctx:
            make_account("1010", "Bank", AccountType.ASSET, parent_id=parent.id)
        self.assertIn("parent", ctx.exception.message_dict)
        self.assertFalse(Account.objects.filter(code="1010").exists())

    def test_same_type_parent_accepted(self):
        parent = make_account("1000", "Cash and Bank")
        child = make_account("1010", "Bank", parent_id=parent.id)
        self.assertEqual(child.parent_id, parent.id)
        self.assertEqual(list(account_registry.list_children(parent.id)), [child])

    def test_unknown_parent_rejected(self):
        with self.assertRaises(ValidationError) as ctx:
            make_account("1010", "Bank", parent_id=999999)
        self.assertIn("parent", ctx.exception.message_dict)

    def test_group_must_match_type(self):
        group = account_registry.create_group(name="Fee Income", account_type=AccountType.INCOME)
        with self.assertRaises(ValidationError) as ctx:
            make_account("1000", "Cash", AccountType.ASSET, group_id=group.id)
        self.assertIn("group", ctx.exception.message_dict)

    def test_sub_group_fills_group(self):
        group = account_registry.create_group(name="Current Assets", account_type=AccountType.ASSET)
        sub = account_registry.create_sub_group(name="Cash and Bank", group_id=group.id)
        acc = make_account("1000", "Cash", sub_group_id=sub.id)
        self.assertEqual(acc.group_id, group.id)

    def test_sub_group_from_another_group_rejected(self):
        g1 = account_registry.create_group(name="Current Assets", account_type=AccountType.ASSET)
        g2 = account_registry.create_group(name="Fixed Assets", account_type=AccountType.ASSET)
        sub = account_registry.create_sub_group(name="Equipment", group_id=g2.id)
        with self.assertRaises(ValidationError) as ctx:
            make_account("1500", "Laptops", group_id=g1.id, sub_group_id=sub.id)
        self.assertIn("sub_group", ctx.exception.message_dict)


class UpdateAccountTests(TestCase):
    def test_type_change_rederives_normal_balance(self):
        acc = make_account("2500", "Deferred Fees", AccountType.LIABILITY)
        acc = account_registry.update_account(acc.id, account_type=AccountType.ASSET)
        self.assertEqual(acc.normal_balance, NormalBalance.DEBIT)

    def test_type_change_keeps_explicit_normal_balance(self):
        acc = make_account("2500", "Deferred Fees", AccountType.LIABILITY)
        acc = account_registry.update_account(
            acc.id,
            account_type=AccountType.ASSET,
            normal_balance=NormalBalance.CREDIT,
        )
        self.assertEqual(acc.normal_balance, NormalBalance.CREDIT)

    def test_name_edit_never_touches_overridden_normal_balance(self):
        acc = make_account(
            "1050", "Allowance", AccountType.ASSET, normal_balance=NormalBalance.CREDIT
        )
        acc = account_registry.update_account(acc.id, name="Allowance for Bad Debts")
        self.assertEqual(acc.normal_balance, NormalBalance.CREDIT)

    def test_type_change_blocked_by_children_of_other_type(self):
        parent = make_account("1000", "Cash and Bank")
        make_account("1010", "Bank", parent_id=parent.id)
        with self.assertRaises(ValidationError):
            account_registry.update_account(parent.id, account_type=AccountType.EQUITY)

    def test_cycle_rejected(self):
        a = make_account("1000", "Cash and Bank")
        b = make_account("1010", "Bank", parent_id=a.id)
        with self.assertRaises(ValidationError):
            account_registry.update_account(a.id, parent_id=b.id)

    def test_unknown_field_rejected(self):
        acc = make_account("1000", "Cash")
        with self.assertRaises(ValidationError):
            account_registry.update_account(acc.id, is_active=False)

    def test_unknown_account(self):
        with self.assertRaises(AccountNotFoundError):
            account_registry.update_account(424242, name="Nope")


class ActivationAndListingTests(TestCase):
    def setUp(self):
        self.cash = make_account("1000", "Cash")
        self.bank = make_account("1010", "Bank")
        self.fees = make_account("4000", "Tuition Fees", AccountType.INCOME)

    def test_set_active_toggles(self):
        account_registry.set_active(self.bank.id, False)
        self.bank.refresh_from_db()
        self.assertFalse(self.bank.is_active)

        account_registry.set_active(self.bank.id, True)
        self.bank.refresh_from_db()
        self.assertTrue(self.bank.is_active)

    def test_list_by_type(self):
        account_registry.set_active(self.bank.id, False)

        self.assertEqual(
            list(account_registry.list_by_type(AccountType.ASSET)),
            [self.cash, self.bank],
        )
        self.assertEqual(
            list(account_registry.list_by_type(AccountType.ASSET, include_inactive=False)),
            [self.cash],
        )
        self.assertEqual(list(account_registry.list_by_type(AccountType.INCOME)), [self.fees])

    def test_group_pickers_filtered_by_type(self):
        assets = account_registry.create_group(name="Current Assets", account_type=AccountType.ASSET)
        income = account_registry.create_group(name="Fee Income", account_type=AccountType.INCOME)
        cash_sub = account_registry.create_sub_group(name="Cash", group_id=assets.id)
        account_registry.create_sub_group(name="Tuition", group_id=income.id)

        self.assertEqual(list(account_registry.groups_for_type(AccountType.ASSET)), [assets])
        self.assertEqual(
            list(account_registry.sub_groups_for_type(AccountType.ASSET)), [cash_sub]
        )
        self.assertEqual(
            list(account_registry.sub_groups_for_type(AccountType.ASSET, group_id=income.id)),
            [],
        )

    def test_get_account_unknown(self):
        with self.assertRaises(AccountNotFoundError):
            account_registry.get_account(999999)

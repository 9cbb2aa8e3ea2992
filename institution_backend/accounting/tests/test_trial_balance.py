# accounting/tests/test_trial_balance.py

from __future__ import annotations

from datetime import date
from decimal import Decimal

from django.test import TestCase, override_settings

from accounting.models.choices import AccountType, NormalBalance
from accounting.models.journal import JournalEntry
from accounting.models.ledger import LedgerEntry
from accounting.services.account_registry import set_active
from accounting.services.exceptions import ReportParameterError, UnbalancedReportWarning
from accounting.services.trial_balance_service import (
    SOURCE_POSTED,
    SOURCE_SYNTHETIC,
    TrialBalanceService,
    get_trial_balance,
    split_balance,
)
from accounting.tests.helpers import make_account, make_invoice, make_payment, post

D = Decimal


class SplitBalanceTests(TestCase):
    def test_debit_normal(self):
        self.assertEqual(split_balance(D("150.00"), NormalBalance.DEBIT), (D("150.00"), D("0.00")))
        self.assertEqual(split_balance(D("0.00"), NormalBalance.DEBIT), (D("0.00"), D("0.00")))
        self.assertEqual(split_balance(D("-40.00"), NormalBalance.DEBIT), (D("0.00"), D("40.00")))

    def test_credit_normal(self):
        self.assertEqual(split_balance(D("-150.00"), NormalBalance.CREDIT), (D("0.00"), D("150.00")))
        self.assertEqual(split_balance(D("0.00"), NormalBalance.CREDIT), (D("0.00"), D("0.00")))
        self.assertEqual(split_balance(D("40.00"), NormalBalance.CREDIT), (D("40.00"), D("0.00")))


class SignConventionTests(TestCase):
    """
    For every account type, a balance on the normal side lands on that side
    and a balance netting against convention is kept on the other side.
    """

    def setUp(self):
        self.day = date(2024, 3, 1)
        self.accounts = {
            account_type: make_account(f"{i}000", f"{account_type.label} account", account_type)
            for i, account_type in enumerate(AccountType, start=1)
        }
        self.suspense = make_account("9999", "Suspense", AccountType.ASSET)

    def _row(self, account):
        return get_trial_balance(self.day).find(str(account.id))

    def test_normal_side_for_every_type(self):
        for account_type, account in self.accounts.items():
            if account.normal_balance == NormalBalance.DEBIT:
                post(self.day, account, self.suspense, "300.00")
                post(self.day, self.suspense, account, "120.00")
            else:
                post(self.day, self.suspense, account, "300.00")
                post(self.day, account, self.suspense, "120.00")

        for account_type, account in self.accounts.items():
            with self.subTest(account_type=account_type):
                row = self._row(account)
                if account.normal_balance == NormalBalance.DEBIT:
                    self.assertEqual(row.debit_balance, D("180.00"))
                    self.assertEqual(row.credit_balance, D("0.00"))
                else:
                    self.assertEqual(row.credit_balance, D("180.00"))
                    self.assertEqual(row.debit_balance, D("0.00"))

    def test_wrong_side_balance_is_preserved(self):
        for account in self.accounts.values():
            if account.normal_balance == NormalBalance.DEBIT:
                post(self.day, self.suspense, account, "75.00")
            else:
                post(self.day, account, self.suspense, "75.00")

        for account_type, account in self.accounts.items():
            with self.subTest(account_type=account_type):
                row = self._row(account)
                if account.normal_balance == NormalBalance.DEBIT:
                    self.assertEqual(row.credit_balance, D("75.00"))
                    self.assertEqual(row.debit_balance, D("0.00"))
                else:
                    self.assertEqual(row.debit_balance, D("75.00"))
                    self.assertEqual(row.credit_balance, D("0.00"))

    def test_overridden_normal_balance_drives_the_side(self):
        contra = make_account(
            "1050", "Allowance for Doubtful Fees", AccountType.ASSET,
            normal_balance=NormalBalance.CREDIT,
        )
        expense = self.accounts[AccountType.EXPENSE]
        post(self.day, expense, contra, "60.00")

        row = self._row(contra)
        self.assertEqual(row.credit_balance, D("60.00"))
        self.assertEqual(row.normal_balance, NormalBalance.CREDIT)


class BalanceInvariantTests(TestCase):
    def test_balanced_postings_give_exactly_equal_totals(self):
        cash = make_account("1000", "Cash")
        bank = make_account("1010", "Bank")
        payables = make_account("2000", "Accounts Payable", AccountType.LIABILITY)
        capital = make_account("3000", "Capital Fund", AccountType.EQUITY)
        fees = make_account("4000", "Tuition Fees", AccountType.INCOME)
        salaries = make_account("5000", "Salaries", AccountType.EXPENSE)

        post(date(2024, 1, 1), bank, capital, "50000.00")
        post(date(2024, 1, 5), cash, fees, "12345.67")
        post(date(2024, 1, 9), salaries, bank, "8000.10")
        post(date(2024, 1, 12), salaries, payables, "999.99")
        post(date(2024, 1, 15), payables, cash, "0.01")

        tb = get_trial_balance(date(2024, 1, 31))

        self.assertEqual(tb.total_debit, tb.total_credit)
        self.assertEqual(tb.difference, D("0.00"))
        self.assertTrue(tb.is_balanced)
        self.assertIsNone(tb.warning)
        self.assertTrue(all(row.source == SOURCE_POSTED for row in tb.rows))

    def test_totals_are_sums_of_rows(self):
        cash = make_account("1000", "Cash")
        fees = make_account("4000", "Tuition Fees", AccountType.INCOME)
        post(date(2024, 1, 5), cash, fees, "10.10")
        post(date(2024, 1, 6), cash, fees, "20.20")

        tb = get_trial_balance(date(2024, 1, 31))
        self.assertEqual(tb.total_debit, sum((r.debit_balance for r in tb.rows), D("0")))
        self.assertEqual(tb.total_credit, sum((r.credit_balance for r in tb.rows), D("0")))
        self.assertEqual(tb.total_debit, D("30.30"))


class DateBoundaryTests(TestCase):
    def setUp(self):
        self.cash = make_account("1000", "Cash")
        self.fees = make_account("4000", "Fees", AccountType.INCOME)

    def test_posting_on_cutoff_included_day_after_excluded(self):
        post(date(2024, 1, 31), self.cash, self.fees, "100.00")
        post(date(2024, 2, 1), self.cash, self.fees, "40.00")

        tb = get_trial_balance(date(2024, 1, 31))
        self.assertEqual(tb.find(str(self.cash.id)).debit_balance, D("100.00"))

        tb = get_trial_balance(date(2024, 2, 1))
        self.assertEqual(tb.find(str(self.cash.id)).debit_balance, D("140.00"))

    def test_invoices_and_payments_respect_cutoff(self):
        self.cash.delete()
        self.fees.delete()

        make_invoice("INV-1", date(2024, 1, 31), "500.00")
        make_invoice("INV-2", date(2024, 2, 1), "700.00")
        make_payment("RCPT-1", date(2024, 1, 31), "300.00")
        make_payment("RCPT-2", date(2024, 2, 1), "50.00")

        tb = get_trial_balance(date(2024, 1, 31))
        self.assertEqual(tb.find("synthetic-receivable").debit_balance, D("500.00"))
        self.assertEqual(tb.find("synthetic-cash").debit_balance, D("300.00"))
        self.assertEqual(tb.find("synthetic-fee-income").credit_balance, D("300.00"))

    def test_period_start_limits_activity(self):
        post(date(2024, 1, 10), self.cash, self.fees, "100.00")
        post(date(2024, 2, 10), self.cash, self.fees, "40.00")

        tb = TrialBalanceService().generate(as_of=date(2024, 2, 29), start_date=date(2024, 2, 1))
        self.assertEqual(tb.find(str(self.cash.id)).debit_balance, D("40.00"))
        self.assertEqual(tb.start_date, date(2024, 2, 1))

    def test_inverted_period_rejected(self):
        with self.assertRaises(ReportParameterError):
            TrialBalanceService().generate(as_of=date(2024, 1, 1), start_date=date(2024, 2, 1))


class InactiveAccountTests(TestCase):
    def test_inactive_account_with_balance_still_reported(self):
        cash = make_account("1000", "Cash")
        old_bank = make_account("1020", "Old Bank")
        post(date(2024, 1, 5), old_bank, cash, "25.00")
        set_active(old_bank.id, False)

        row = get_trial_balance(date(2024, 1, 31)).find(str(old_bank.id))
        self.assertEqual(row.debit_balance, D("25.00"))
        self.assertFalse(row.is_active)


class ZeroRowTests(TestCase):
    def test_zero_rows_dropped_when_there_is_activity(self):
        cash = make_account("1000", "Cash")
        fees = make_account("4000", "Fees", AccountType.INCOME)
        idle = make_account("5000", "Idle Expense", AccountType.EXPENSE)
        post(date(2024, 1, 5), cash, fees, "10.00")

        keys = [r.account_key for r in get_trial_balance(date(2024, 1, 31)).rows]
        self.assertIn(str(cash.id), keys)
        self.assertNotIn(str(idle.id), keys)

    def test_account_netting_to_zero_is_dropped(self):
        cash = make_account("1000", "Cash")
        bank = make_account("1010", "Bank")
        fees = make_account("4000", "Fees", AccountType.INCOME)
        post(date(2024, 1, 5), bank, fees, "10.00")
        post(date(2024, 1, 6), cash, bank, "10.00")

        keys = [r.account_key for r in get_trial_balance(date(2024, 1, 31)).rows]
        self.assertNotIn(str(bank.id), keys)

    def test_no_activity_keeps_full_zero_list(self):
        accounts = [
            make_account("1000", "Cash"),
            make_account("2000", "Payables", AccountType.LIABILITY),
            make_account("4000", "Fees", AccountType.INCOME),
        ]

        tb = get_trial_balance(date(2024, 1, 31))

        self.assertEqual([r.account_id for r in tb.rows], [a.id for a in accounts])
        self.assertTrue(all(r.is_zero for r in tb.rows))
        self.assertEqual(tb.total_debit, D("0.00"))
        self.assertTrue(tb.is_balanced)

    def test_empty_chart_gives_empty_balanced_report(self):
        tb = get_trial_balance(date(2024, 1, 31))
        self.assertEqual(tb.rows, [])
        self.assertTrue(tb.is_balanced)


class SyntheticRowTests(TestCase):
    def setUp(self):
        self.day = date(2024, 1, 31)
        make_invoice("INV-1", date(2024, 1, 15), "500.00")
        make_payment("RCPT-1", date(2024, 1, 20), "300.00")

    def test_rows_added_and_tagged(self):
        tb = get_trial_balance(self.day)

        receivable = tb.find("synthetic-receivable")
        self.assertEqual(receivable.source, SOURCE_SYNTHETIC)
        self.assertIsNone(receivable.account_id)
        self.assertEqual(receivable.code, "1100")
        self.assertEqual(receivable.account_type, AccountType.ASSET)

        fee_income = tb.find("synthetic-fee-income")
        self.assertEqual(fee_income.account_type, AccountType.INCOME)
        self.assertEqual(fee_income.credit_balance, D("300.00"))
        self.assertTrue(fee_income.is_synthetic)

    def test_settled_invoices_and_incomplete_payments_ignored(self):
        make_invoice("INV-2", date(2024, 1, 16), "200.00", paid="200.00")
        make_payment("RCPT-2", date(2024, 1, 21), "90.00", status="PENDING")
        make_payment("RCPT-3", date(2024, 1, 21), "80.00", status="FAILED")

        tb = get_trial_balance(self.day)
        self.assertEqual(tb.find("synthetic-receivable").debit_balance, D("500.00"))
        self.assertEqual(tb.find("synthetic-cash").debit_balance, D("300.00"))

    def test_partial_payment_uses_remaining_balance(self):
        make_invoice("INV-3", date(2024, 1, 16), "1000.00", paid="250.00")
        tb = get_trial_balance(self.day)
        self.assertEqual(tb.find("synthetic-receivable").debit_balance, D("1250.00"))

    def test_receivable_suppressed_by_existing_account(self):
        make_account("1200", "Accounts RECEIVABLE")
        keys = [r.account_key for r in get_trial_balance(self.day).rows]
        self.assertNotIn("synthetic-receivable", keys)
        self.assertIn("synthetic-cash", keys)

    def test_cash_and_income_suppressed_by_existing_cash_account(self):
        make_account("1000", "Petty Cash")
        keys = [r.account_key for r in get_trial_balance(self.day).rows]
        self.assertNotIn("synthetic-cash", keys)
        self.assertNotIn("synthetic-fee-income", keys)
        self.assertIn("synthetic-receivable", keys)

    def test_inactive_account_still_suppresses(self):
        acc = make_account("1200", "Fees Receivable")
        set_active(acc.id, False)
        keys = [r.account_key for r in get_trial_balance(self.day).rows]
        self.assertNotIn("synthetic-receivable", keys)

    @override_settings(ACCOUNTING_SYNTHETIC_FEE_ROWS=False)
    def test_switched_off(self):
        tb = get_trial_balance(self.day)
        self.assertFalse(any(r.is_synthetic for r in tb.rows))


class UnbalancedWarningTests(TestCase):
    def test_unbalanced_ledger_is_reported_not_raised(self):
        cash = make_account("1000", "Cash")
        je = JournalEntry.objects.create(
            entry_number="IMPORT-1",
            transaction_date=date(2024, 1, 5),
            description="Half-imported entry",
        )
        LedgerEntry.objects.create(
            journal_entry=je,
            account=cash,
            transaction_date=date(2024, 1, 5),
            debit=D("75.50"),
        )

        tb = get_trial_balance(date(2024, 1, 31))

        self.assertFalse(tb.is_balanced)
        self.assertEqual(tb.difference, D("75.50"))
        self.assertIsInstance(tb.warning, UnbalancedReportWarning)
        self.assertEqual(tb.as_dict()["warning"]["difference"], 75.5)

    @override_settings(ACCOUNTING_BALANCE_TOLERANCE="1.00")
    def test_difference_within_tolerance_is_balanced(self):
        cash = make_account("1000", "Cash")
        je = JournalEntry.objects.create(
            entry_number="IMPORT-2",
            transaction_date=date(2024, 1, 5),
            description="Rounding residue",
        )
        LedgerEntry.objects.create(
            journal_entry=je, account=cash, transaction_date=date(2024, 1, 5), debit=D("0.50")
        )

        tb = get_trial_balance(date(2024, 1, 31))
        self.assertTrue(tb.is_balanced)
        self.assertIsNone(tb.warning)


class PayloadTests(TestCase):
    def test_as_dict_carries_major_and_minor_units(self):
        cash = make_account("1000", "Cash")
        fees = make_account("4000", "Fees", AccountType.INCOME)
        post(date(2024, 1, 5), cash, fees, "1234.56")

        data = get_trial_balance(date(2024, 1, 31)).as_dict()

        self.assertEqual(data["as_of_date"], "2024-01-31")
        self.assertEqual(data["currency"], "KES")
        self.assertEqual(data["totals"]["debit"], 1234.56)
        self.assertEqual(data["totals"]["debit_minor"], 123456)
        self.assertEqual(data["totals"]["difference_minor"], 0)
        self.assertTrue(data["is_balanced"])
        cash_row = next(r for r in data["rows"] if r["account_id"] == cash.id)
        self.assertEqual(cash_row["source"], "posted")
        self.assertEqual(cash_row["net_balance"], 1234.56)

# accounting/tests/test_financial_statements.py

from __future__ import annotations

from datetime import date
from decimal import Decimal

from django.test import TestCase

from accounting.models.choices import AccountType
from accounting.services.exceptions import ReportParameterError
from accounting.services.financial_statement_service import (
    CURRENT_EARNINGS_KEY,
    get_balance_sheet,
    get_income_statement,
)
from accounting.tests.helpers import make_account, make_invoice, make_payment, post

D = Decimal


class IncomeStatementTests(TestCase):
    def setUp(self):
        self.bank = make_account("1010", "Bank")
        self.tuition = make_account("4000", "Tuition Fees", AccountType.INCOME)
        self.grants = make_account("4200", "Grants", AccountType.INCOME)
        self.salaries = make_account("5000", "Salaries", AccountType.EXPENSE)
        self.utilities = make_account("5100", "Utilities", AccountType.EXPENSE)

    def test_totals_and_net_income(self):
        post(date(2024, 1, 10), self.bank, self.tuition, "8000.00")
        post(date(2024, 1, 11), self.bank, self.grants, "2000.00")
        post(date(2024, 1, 25), self.salaries, self.bank, "6000.00")
        post(date(2024, 1, 26), self.utilities, self.bank, "1500.00")

        statement = get_income_statement(date(2024, 1, 1), date(2024, 1, 31))

        self.assertEqual(statement.total_income, D("10000.00"))
        self.assertEqual(statement.total_expenses, D("7500.00"))
        self.assertEqual(statement.net_income, D("2500.00"))
        self.assertEqual(
            [line.code for line in statement.income_rows], ["4000", "4200"]
        )
        self.assertEqual(
            [line.code for line in statement.expense_rows], ["5000", "5100"]
        )

    def test_balance_sheet_accounts_are_ignored(self):
        capital = make_account("3000", "Capital Fund", AccountType.EQUITY)
        post(date(2024, 1, 2), self.bank, capital, "50000.00")
        post(date(2024, 1, 10), self.bank, self.tuition, "100.00")

        statement = get_income_statement(date(2024, 1, 1), date(2024, 1, 31))
        codes = [line.code for line in statement.income_rows + statement.expense_rows]
        self.assertEqual(codes, ["4000"])

    def test_period_excludes_earlier_and_later_activity(self):
        post(date(2023, 12, 31), self.bank, self.tuition, "900.00")
        post(date(2024, 1, 15), self.bank, self.tuition, "100.00")
        post(date(2024, 2, 1), self.bank, self.tuition, "50.00")

        statement = get_income_statement(date(2024, 1, 1), date(2024, 1, 31))
        self.assertEqual(statement.total_income, D("100.00"))

    def test_loss_is_negative_net_income(self):
        post(date(2024, 1, 10), self.bank, self.tuition, "100.00")
        post(date(2024, 1, 11), self.salaries, self.bank, "400.00")

        statement = get_income_statement(date(2024, 1, 1), date(2024, 1, 31))
        self.assertEqual(statement.net_income, D("-300.00"))

    def test_expense_refund_reduces_expense_total(self):
        post(date(2024, 1, 11), self.salaries, self.bank, "400.00")
        post(date(2024, 1, 12), self.bank, self.salaries, "50.00")

        statement = get_income_statement(date(2024, 1, 1), date(2024, 1, 31))
        self.assertEqual(statement.total_expenses, D("350.00"))

    def test_inverted_period_rejected(self):
        with self.assertRaises(ReportParameterError):
            get_income_statement(date(2024, 2, 1), date(2024, 1, 1))

    def test_payload_reports_period(self):
        data = get_income_statement(date(2024, 1, 1), date(2024, 1, 31)).as_dict()
        self.assertEqual(data["period"], {"start_date": "2024-01-01", "end_date": "2024-01-31"})
        self.assertEqual(data["net_income_minor"], 0)


class BalanceSheetTests(TestCase):
    def setUp(self):
        self.cash = make_account("1000", "Cash on Hand")
        self.bank = make_account("1010", "Bank")
        self.payables = make_account("2000", "Accounts Payable", AccountType.LIABILITY)
        self.capital = make_account("3000", "Capital Fund", AccountType.EQUITY)
        self.tuition = make_account("4000", "Tuition Fees", AccountType.INCOME)
        self.salaries = make_account("5000", "Salaries", AccountType.EXPENSE)

    def test_accounting_equation_holds_for_balanced_ledger(self):
        post(date(2024, 1, 1), self.bank, self.capital, "20000.00")
        post(date(2024, 1, 5), self.cash, self.tuition, "3000.00")
        post(date(2024, 1, 20), self.salaries, self.payables, "1200.00")

        sheet = get_balance_sheet(date(2024, 1, 31))

        self.assertEqual(sheet.total_assets, D("23000.00"))
        self.assertEqual(sheet.total_liabilities, D("1200.00"))
        self.assertEqual(sheet.total_equity, D("21800.00"))
        self.assertEqual(sheet.total_assets, sheet.liabilities_plus_equity)
        self.assertEqual(sheet.difference, D("0.00"))
        self.assertTrue(sheet.is_balanced)
        self.assertIsNone(sheet.warning)

    def test_current_period_earnings_line(self):
        post(date(2024, 1, 5), self.cash, self.tuition, "3000.00")
        post(date(2024, 1, 20), self.salaries, self.cash, "1000.00")

        sheet = get_balance_sheet(date(2024, 1, 31))

        earnings = next(l for l in sheet.equity_rows if l.account_key == CURRENT_EARNINGS_KEY)
        self.assertEqual(earnings.amount, D("2000.00"))
        self.assertEqual(earnings.source, "derived")
        self.assertIsNone(earnings.account_id)

    def test_no_earnings_line_without_income_or_expense(self):
        post(date(2024, 1, 1), self.bank, self.capital, "100.00")
        sheet = get_balance_sheet(date(2024, 1, 31))
        self.assertFalse(any(l.account_key == CURRENT_EARNINGS_KEY for l in sheet.equity_rows))

    def test_unbalanced_synthetic_data_is_flagged(self):
        self.cash.delete()
        make_invoice("INV-1", date(2024, 1, 15), "500.00")

        sheet = get_balance_sheet(date(2024, 1, 31))

        self.assertEqual(sheet.total_assets, D("500.00"))
        self.assertFalse(sheet.is_balanced)
        self.assertEqual(sheet.difference, D("500.00"))
        data = sheet.as_dict()
        self.assertEqual(data["warning"]["code"], "unbalanced")
        self.assertEqual(data["totals"]["difference_minor"], 50000)

    def test_synthetic_cash_and_income_keep_equation(self):
        self.cash.delete()
        make_payment("RCPT-1", date(2024, 1, 20), "300.00")

        sheet = get_balance_sheet(date(2024, 1, 31))

        self.assertEqual(sheet.total_assets, D("300.00"))
        self.assertEqual(sheet.total_equity, D("300.00"))
        self.assertTrue(sheet.is_balanced)

    def test_as_of_excludes_later_postings(self):
        post(date(2024, 1, 1), self.bank, self.capital, "100.00")
        post(date(2024, 2, 1), self.bank, self.capital, "900.00")
        self.assertEqual(get_balance_sheet(date(2024, 1, 31)).total_assets, D("100.00"))

# accounting/services/financial_statement_service.py

"""
FINANCIAL STATEMENT SERVICE (AUTHORITATIVE)

Rolls the Trial Balance up into formal statements:
- Statement of Financial Performance (Income Statement)
- Statement of Financial Position (Balance Sheet)

RULES:
- READ-ONLY (never writes)
- Every call recomputes from the Trial Balance Engine (no caching)
- Section amounts follow the type's conventional sign:
    Asset / Expense                -> debit_balance - credit_balance
    Liability / Equity / Income    -> credit_balance - debit_balance
- Balance Sheet carries unclosed Income - Expense as a derived
  "Current Period Earnings" equity line so Assets = Liabilities + Equity
  holds whenever the trial balance does.
- An unbalanced Balance Sheet is reported (is_balanced=False + difference),
  not raised.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import date
from decimal import Decimal

from django.utils import timezone

from accounting.models.choices import DEBIT_NORMAL_TYPES, AccountType
from accounting.services.exceptions import ReportParameterError, UnbalancedReportWarning
from accounting.services.ledger_reader import LedgerReader
from accounting.services.money import (
    ZERO,
    currency,
    q2,
    to_major_number,
    to_minor_int,
    within_tolerance,
)
from accounting.services.trial_balance_service import TrialBalanceRow, TrialBalanceService

logger = logging.getLogger(__name__)

SOURCE_DERIVED = "derived"
CURRENT_EARNINGS_KEY = "current-period-earnings"
CURRENT_EARNINGS_CODE = "E-CURR"
CURRENT_EARNINGS_NAME = "Current Period Earnings"


@dataclass
class StatementLine:
    account_key: str
    account_id: int | None
    code: str
    name: str
    account_type: str
    amount: Decimal
    source: str

    def as_dict(self) -> dict:
        return {
            "account_key": self.account_key,
            "account_id": self.account_id,
            "account_code": self.code,
            "account_name": self.name,
            "account_type": self.account_type,
            "source": self.source,
            "amount": to_major_number(self.amount),
            "amount_minor": to_minor_int(self.amount),
        }


def statement_amount(row: TrialBalanceRow) -> Decimal:
    if row.account_type in DEBIT_NORMAL_TYPES:
        return q2(row.debit_balance - row.credit_balance)
    return q2(row.credit_balance - row.debit_balance)


def _lines(rows: list[TrialBalanceRow]) -> list[StatementLine]:
    return [
        StatementLine(
            account_key=row.account_key,
            account_id=row.account_id,
            code=row.code,
            name=row.name,
            account_type=row.account_type,
            amount=statement_amount(row),
            source=row.source,
        )
        for row in rows
    ]


def _total(lines: list[StatementLine]) -> Decimal:
    return q2(sum((line.amount for line in lines), ZERO))


def _money_pair(amount: Decimal) -> tuple[float, int]:
    return to_major_number(amount), to_minor_int(amount)


# ============================================================
# INCOME STATEMENT
# ============================================================


@dataclass
class IncomeStatement:
    start_date: date | None
    end_date: date
    income_rows: list[StatementLine] = field(default_factory=list)
    expense_rows: list[StatementLine] = field(default_factory=list)
    total_income: Decimal = ZERO
    total_expenses: Decimal = ZERO

    @property
    def net_income(self) -> Decimal:
        return q2(self.total_income - self.total_expenses)

    def as_dict(self) -> dict:
        income, income_minor = _money_pair(self.total_income)
        expenses, expenses_minor = _money_pair(self.total_expenses)
        net, net_minor = _money_pair(self.net_income)
        return {
            "period": {
                "start_date": self.start_date.isoformat() if self.start_date else None,
                "end_date": self.end_date.isoformat(),
            },
            "currency": currency(),
            "income_rows": [line.as_dict() for line in self.income_rows],
            "expense_rows": [line.as_dict() for line in self.expense_rows],
            "total_income": income,
            "total_expenses": expenses,
            "net_income": net,
            "total_income_minor": income_minor,
            "total_expenses_minor": expenses_minor,
            "net_income_minor": net_minor,
        }


def get_income_statement(
    start_date: date | None = None,
    end_date: date | None = None,
    *,
    reader: LedgerReader | None = None,
) -> IncomeStatement:
    """
    Income and expense activity dated within [start_date, end_date].
    start_date=None means "from the first posting".
    """
    end_date = end_date or timezone.localdate()
    if start_date is not None and start_date > end_date:
        raise ReportParameterError("start_date cannot be after end_date")

    tb = TrialBalanceService(reader).generate(as_of=end_date, start_date=start_date)

    income_rows = _lines(tb.rows_of_type(AccountType.INCOME))
    expense_rows = _lines(tb.rows_of_type(AccountType.EXPENSE))

    return IncomeStatement(
        start_date=start_date,
        end_date=end_date,
        income_rows=income_rows,
        expense_rows=expense_rows,
        total_income=_total(income_rows),
        total_expenses=_total(expense_rows),
    )


# ============================================================
# BALANCE SHEET
# ============================================================


@dataclass
class BalanceSheet:
    as_of: date
    asset_rows: list[StatementLine] = field(default_factory=list)
    liability_rows: list[StatementLine] = field(default_factory=list)
    equity_rows: list[StatementLine] = field(default_factory=list)
    total_assets: Decimal = ZERO
    total_liabilities: Decimal = ZERO
    total_equity: Decimal = ZERO
    is_balanced: bool = True
    warning: UnbalancedReportWarning | None = None

    @property
    def liabilities_plus_equity(self) -> Decimal:
        return q2(self.total_liabilities + self.total_equity)

    @property
    def difference(self) -> Decimal:
        return q2(self.total_assets - self.liabilities_plus_equity)

    def as_dict(self) -> dict:
        totals = {}
        for name, amount in (
            ("assets", self.total_assets),
            ("liabilities", self.total_liabilities),
            ("equity", self.total_equity),
            ("liabilities_plus_equity", self.liabilities_plus_equity),
            ("difference", self.difference),
        ):
            totals[name], totals[f"{name}_minor"] = _money_pair(amount)

        return {
            "as_of_date": self.as_of.isoformat(),
            "currency": currency(),
            "asset_rows": [line.as_dict() for line in self.asset_rows],
            "liability_rows": [line.as_dict() for line in self.liability_rows],
            "equity_rows": [line.as_dict() for line in self.equity_rows],
            "totals": totals,
            "is_balanced": self.is_balanced,
            "warning": self.warning.as_dict() if self.warning else None,
        }


def get_balance_sheet(
    as_of: date | None = None, *, reader: LedgerReader | None = None
) -> BalanceSheet:
    """
    Accounting Equation (checked, reported):
        Assets = Liabilities + Equity
    """
    as_of = as_of or timezone.localdate()
    tb = TrialBalanceService(reader).generate(as_of=as_of)

    assets = _lines(tb.rows_of_type(AccountType.ASSET))
    liabilities = _lines(tb.rows_of_type(AccountType.LIABILITY))
    equity = _lines(tb.rows_of_type(AccountType.EQUITY))

    income = _total(_lines(tb.rows_of_type(AccountType.INCOME)))
    expenses = _total(_lines(tb.rows_of_type(AccountType.EXPENSE)))
    current_earnings = q2(income - expenses)

    if current_earnings != ZERO:
        equity.append(
            StatementLine(
                account_key=CURRENT_EARNINGS_KEY,
                account_id=None,
                code=CURRENT_EARNINGS_CODE,
                name=CURRENT_EARNINGS_NAME,
                account_type=AccountType.EQUITY,
                amount=current_earnings,
                source=SOURCE_DERIVED,
            )
        )

    sheet = BalanceSheet(
        as_of=as_of,
        asset_rows=assets,
        liability_rows=liabilities,
        equity_rows=equity,
        total_assets=_total(assets),
        total_liabilities=_total(liabilities),
        total_equity=_total(equity),
    )

    sheet.is_balanced = within_tolerance(sheet.total_assets, sheet.liabilities_plus_equity)
    if not sheet.is_balanced:
        sheet.warning = UnbalancedReportWarning(
            "Balance Sheet is unbalanced "
            f"(Assets={sheet.total_assets} "
            f"Liabilities+Equity={sheet.liabilities_plus_equity})",
            left=sheet.total_assets,
            right=sheet.liabilities_plus_equity,
            difference=sheet.difference,
        )
        logger.warning(
            "Balance sheet is unbalanced",
            extra={
                "as_of": as_of.isoformat(),
                "total_assets": str(sheet.total_assets),
                "liabilities_plus_equity": str(sheet.liabilities_plus_equity),
            },
        )

    return sheet

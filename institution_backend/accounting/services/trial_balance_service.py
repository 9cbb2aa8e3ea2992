# accounting/services/trial_balance_service.py

"""
TRIAL BALANCE ENGINE

Turns raw per-account debit/credit sums into one signed row per account,
reconciles unposted fee activity into tagged synthetic rows, and reports
whether total debits equal total credits.

Algorithm (per cutoff date, optionally from a period start):
1. Load every account (active AND inactive) and the posting sums.
2. net = debit_sum - credit_sum
3. Place net on a side using the account's stored normal_balance:
   - Debit-normal:  net >= 0 -> debit_balance,  else credit_balance = |net|
   - Credit-normal: net <= 0 -> credit_balance = |net|, else debit_balance
   A balance on the "wrong" side is kept as-is; it is diagnostic.
4. Synthetic reconciliation (ACCOUNTING_SYNTHETIC_FEE_ROWS):
   - outstanding invoices > 0 and no account name contains "receivable"
     -> "Student Fees Receivable" debit row
   - completed payments > 0 and no account name contains "cash"
     -> "Cash/Bank" debit row + "Fee Income" credit row
5. Drop all-zero rows, unless every row is zero (then keep the full list so
   "no activity" is distinguishable from "everything filtered").
6. balanced iff |sum(debit) - sum(credit)| < ACCOUNTING_BALANCE_TOLERANCE.
   An unbalanced result is still returned, flagged with the difference.

Each row is tagged source="posted" or source="synthetic"; synthetic rows
never come from the Chart of Accounts.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import date
from decimal import Decimal

from django.conf import settings
from django.utils import timezone

from accounting.models.choices import AccountType, NormalBalance
from accounting.services.exceptions import (
    AccountNotFoundError,
    ReportParameterError,
    UnbalancedReportWarning,
)
from accounting.services.ledger_reader import LedgerReader, PostingTotals
from accounting.services.money import (
    ZERO,
    currency,
    q2,
    to_major_number,
    to_minor_int,
    within_tolerance,
)

logger = logging.getLogger(__name__)

SOURCE_POSTED = "posted"
SOURCE_SYNTHETIC = "synthetic"


@dataclass(frozen=True)
class SyntheticAccount:
    """
    Report-only account standing in for fee activity that was never posted
    through the General Ledger. Not persisted, never in the registry.
    """

    key: str
    code: str
    name: str
    account_type: str
    normal_balance: str
    suppressed_by: str


SYNTHETIC_RECEIVABLE = SyntheticAccount(
    key="synthetic-receivable",
    code="1100",
    name="Student Fees Receivable",
    account_type=AccountType.ASSET,
    normal_balance=NormalBalance.DEBIT,
    suppressed_by="receivable",
)
SYNTHETIC_CASH = SyntheticAccount(
    key="synthetic-cash",
    code="1000",
    name="Cash/Bank",
    account_type=AccountType.ASSET,
    normal_balance=NormalBalance.DEBIT,
    suppressed_by="cash",
)
SYNTHETIC_FEE_INCOME = SyntheticAccount(
    key="synthetic-fee-income",
    code="4000",
    name="Fee Income",
    account_type=AccountType.INCOME,
    normal_balance=NormalBalance.CREDIT,
    suppressed_by="cash",
)

SYNTHETIC_ACCOUNTS = {
    a.key: a for a in (SYNTHETIC_RECEIVABLE, SYNTHETIC_CASH, SYNTHETIC_FEE_INCOME)
}


def split_balance(net: Decimal, normal_balance: str) -> tuple[Decimal, Decimal]:
    """
    Place a signed net (debits - credits) on the debit or credit column.
    Returns (debit_balance, credit_balance); at most one is non-zero.
    """
    net = q2(net)
    if normal_balance == NormalBalance.DEBIT:
        if net >= 0:
            return net, ZERO
        return ZERO, abs(net)

    if net <= 0:
        return ZERO, abs(net)
    return net, ZERO


@dataclass
class TrialBalanceRow:
    account_key: str
    account_id: int | None
    code: str
    name: str
    account_type: str
    normal_balance: str
    debit_balance: Decimal
    credit_balance: Decimal
    source: str = SOURCE_POSTED
    is_active: bool = True

    @property
    def net_balance(self) -> Decimal:
        return q2(self.debit_balance - self.credit_balance)

    @property
    def is_zero(self) -> bool:
        return self.debit_balance == ZERO and self.credit_balance == ZERO

    @property
    def is_synthetic(self) -> bool:
        return self.source == SOURCE_SYNTHETIC

    def as_dict(self) -> dict:
        return {
            "account_key": self.account_key,
            "account_id": self.account_id,
            "account_code": self.code,
            "account_name": self.name,
            "account_type": self.account_type,
            "normal_balance": self.normal_balance,
            "source": self.source,
            "is_active": self.is_active,
            "debit_balance": to_major_number(self.debit_balance),
            "credit_balance": to_major_number(self.credit_balance),
            "net_balance": to_major_number(self.net_balance),
            "debit_balance_minor": to_minor_int(self.debit_balance),
            "credit_balance_minor": to_minor_int(self.credit_balance),
        }


@dataclass
class TrialBalance:
    as_of: date
    start_date: date | None
    rows: list[TrialBalanceRow] = field(default_factory=list)
    total_debit: Decimal = ZERO
    total_credit: Decimal = ZERO
    is_balanced: bool = True
    warning: UnbalancedReportWarning | None = None

    @property
    def difference(self) -> Decimal:
        return q2(self.total_debit - self.total_credit)

    def rows_of_type(self, *account_types: str) -> list[TrialBalanceRow]:
        return [r for r in self.rows if r.account_type in account_types]

    def find(self, account_key: str) -> TrialBalanceRow:
        for row in self.rows:
            if row.account_key == str(account_key):
                return row
        raise AccountNotFoundError(f"No trial balance row for {account_key}")

    def as_dict(self) -> dict:
        return {
            "as_of_date": self.as_of.isoformat(),
            "start_date": self.start_date.isoformat() if self.start_date else None,
            "currency": currency(),
            "rows": [r.as_dict() for r in self.rows],
            "totals": {
                "debit": to_major_number(self.total_debit),
                "credit": to_major_number(self.total_credit),
                "difference": to_major_number(self.difference),
                "debit_minor": to_minor_int(self.total_debit),
                "credit_minor": to_minor_int(self.total_credit),
                "difference_minor": to_minor_int(self.difference),
            },
            "is_balanced": self.is_balanced,
            "warning": self.warning.as_dict() if self.warning else None,
        }


class TrialBalanceService:
    """
    Trial Balance computation service.

    Guarantees:
    - Includes inactive accounts (historical balances survive deactivation)
    - One bulk aggregate per feed (no N+1)
    - Pure function of (as_of, start_date, data snapshot): nothing is cached
    """

    def __init__(self, reader: LedgerReader | None = None, *, synthetic_fee_rows=None):
        self.reader = reader or LedgerReader()
        if synthetic_fee_rows is None:
            synthetic_fee_rows = getattr(settings, "ACCOUNTING_SYNTHETIC_FEE_ROWS", True)
        self.synthetic_fee_rows = bool(synthetic_fee_rows)

    def generate(self, *, as_of: date | None = None, start_date: date | None = None) -> TrialBalance:
        as_of = as_of or timezone.localdate()
        if start_date is not None and start_date > as_of:
            raise ReportParameterError("start_date cannot be after the as-of date")

        accounts = self.reader.accounts()
        totals = self.reader.postings_as_of(as_of, start_date=start_date)

        rows = [self._posted_row(acc, totals.get(acc.id)) for acc in accounts]

        if self.synthetic_fee_rows:
            rows.extend(self._synthetic_rows(accounts, as_of, start_date))

        visible = [r for r in rows if not r.is_zero]
        if not visible:
            visible = rows

        return self._summarize(visible, as_of=as_of, start_date=start_date)

    @staticmethod
    def _posted_row(acc, posting: PostingTotals | None) -> TrialBalanceRow:
        net = posting.net if posting else ZERO
        debit_balance, credit_balance = split_balance(net, acc.normal_balance)
        return TrialBalanceRow(
            account_key=str(acc.id),
            account_id=acc.id,
            code=acc.code,
            name=acc.name,
            account_type=acc.account_type,
            normal_balance=acc.normal_balance,
            debit_balance=debit_balance,
            credit_balance=credit_balance,
            source=SOURCE_POSTED,
            is_active=acc.is_active,
        )

    @staticmethod
    def _synthetic_row(synthetic: SyntheticAccount, net: Decimal) -> TrialBalanceRow:
        debit_balance, credit_balance = split_balance(net, synthetic.normal_balance)
        return TrialBalanceRow(
            account_key=synthetic.key,
            account_id=None,
            code=synthetic.code,
            name=synthetic.name,
            account_type=synthetic.account_type,
            normal_balance=synthetic.normal_balance,
            debit_balance=debit_balance,
            credit_balance=credit_balance,
            source=SOURCE_SYNTHETIC,
        )

    def _synthetic_rows(self, accounts, as_of: date, start_date: date | None):
        names = [(acc.name or "").lower() for acc in accounts]

        def has_real_account(term: str) -> bool:
            return any(term in name for name in names)

        out: list[TrialBalanceRow] = []

        receivables = self.reader.receivables_as_of(as_of, start_date=start_date)
        if receivables > 0:
            if has_real_account(SYNTHETIC_RECEIVABLE.suppressed_by):
                logger.info(
                    "Synthetic receivable row suppressed: a receivable account exists",
                    extra={"as_of": as_of.isoformat(), "amount": str(receivables)},
                )
            else:
                out.append(self._synthetic_row(SYNTHETIC_RECEIVABLE, receivables))
                logger.info(
                    "Synthetic receivable row added from outstanding invoices",
                    extra={"as_of": as_of.isoformat(), "amount": str(receivables)},
                )

        payments = self.reader.completed_payments_as_of(as_of, start_date=start_date)
        if payments > 0:
            if has_real_account(SYNTHETIC_CASH.suppressed_by):
                logger.info(
                    "Synthetic cash/fee income rows suppressed: a cash account exists",
                    extra={"as_of": as_of.isoformat(), "amount": str(payments)},
                )
            else:
                out.append(self._synthetic_row(SYNTHETIC_CASH, payments))
                out.append(self._synthetic_row(SYNTHETIC_FEE_INCOME, -payments))
                logger.info(
                    "Synthetic cash and fee income rows added from completed payments",
                    extra={"as_of": as_of.isoformat(), "amount": str(payments)},
                )

        return out

    @staticmethod
    def _summarize(rows, *, as_of: date, start_date: date | None) -> TrialBalance:
        total_debit = q2(sum((r.debit_balance for r in rows), ZERO))
        total_credit = q2(sum((r.credit_balance for r in rows), ZERO))
        balanced = within_tolerance(total_debit, total_credit)

        warning = None
        if not balanced:
            difference = q2(total_debit - total_credit)
            warning = UnbalancedReportWarning(
                f"Trial balance is out of balance by {difference} "
                f"(debits={total_debit} credits={total_credit})",
                left=total_debit,
                right=total_credit,
                difference=difference,
            )
            logger.warning(
                "Trial balance is unbalanced",
                extra={
                    "as_of": as_of.isoformat(),
                    "total_debit": str(total_debit),
                    "total_credit": str(total_credit),
                    "difference": str(difference),
                },
            )

        return TrialBalance(
            as_of=as_of,
            start_date=start_date,
            rows=rows,
            total_debit=total_debit,
            total_credit=total_credit,
            is_balanced=balanced,
            warning=warning,
        )


def get_trial_balance(as_of: date | None = None, *, reader: LedgerReader | None = None) -> TrialBalance:
    return TrialBalanceService(reader).generate(as_of=as_of)

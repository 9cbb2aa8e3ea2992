# accounting/services/drilldown_service.py

"""
DRILL-DOWN RESOLVER

Replays, line by line, the source transactions behind one trial balance row.

- Posted account (numeric id): its General Ledger postings up to the cutoff.
- "synthetic-receivable": each outstanding invoice (debit = balance_due).
- "synthetic-cash":        each completed payment (debit = amount).
- "synthetic-fee-income":  each completed payment (credit = amount).

Consistency contract: sum(debit - credit) over the returned lines equals the
net_balance the Trial Balance Engine attributes to that account for the
same cutoff.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from decimal import Decimal

from django.utils import timezone

from accounting.services.exceptions import AccountNotFoundError
from accounting.services.ledger_reader import LedgerReader
from accounting.services.money import ZERO, q2, to_major_number, to_minor_int
from accounting.services.trial_balance_service import (
    SOURCE_POSTED,
    SOURCE_SYNTHETIC,
    SYNTHETIC_ACCOUNTS,
    SYNTHETIC_CASH,
    SYNTHETIC_FEE_INCOME,
    SYNTHETIC_RECEIVABLE,
)


@dataclass(frozen=True)
class DrilldownLine:
    date: date
    reference: str
    description: str
    debit: Decimal
    credit: Decimal

    @property
    def net(self) -> Decimal:
        return q2(self.debit - self.credit)

    def as_dict(self) -> dict:
        return {
            "date": self.date.isoformat(),
            "reference": self.reference,
            "description": self.description,
            "debit": to_major_number(self.debit),
            "credit": to_major_number(self.credit),
            "debit_minor": to_minor_int(self.debit),
            "credit_minor": to_minor_int(self.credit),
        }


@dataclass
class AccountExplanation:
    account_key: str
    code: str
    name: str
    source: str
    as_of: date
    lines: list[DrilldownLine]

    @property
    def net_balance(self) -> Decimal:
        return q2(sum((line.net for line in self.lines), ZERO))

    def as_dict(self) -> dict:
        return {
            "account_key": self.account_key,
            "account_code": self.code,
            "account_name": self.name,
            "source": self.source,
            "as_of_date": self.as_of.isoformat(),
            "transactions": [line.as_dict() for line in self.lines],
            "net_balance": to_major_number(self.net_balance),
            "net_balance_minor": to_minor_int(self.net_balance),
        }


def _ledger_lines(reader: LedgerReader, account_id, as_of: date) -> list[DrilldownLine]:
    return [
        DrilldownLine(
            date=entry.transaction_date,
            reference=entry.reference_number or entry.journal_entry.entry_number,
            description=entry.description or entry.journal_entry.description,
            debit=q2(entry.debit),
            credit=q2(entry.credit),
        )
        for entry in reader.transactions_for_account(account_id, as_of)
    ]


def _invoice_lines(reader: LedgerReader, as_of: date) -> list[DrilldownLine]:
    return [
        DrilldownLine(
            date=inv.invoice_date,
            reference=inv.invoice_number,
            description=f"Outstanding fee invoice: student {inv.student_id}",
            debit=q2(inv.balance_due),
            credit=ZERO,
        )
        for inv in reader.invoices_as_of(as_of)
    ]


def _payment_lines(reader: LedgerReader, as_of: date, *, debit_side: bool) -> list[DrilldownLine]:
    lines = []
    for pay in reader.completed_payments(as_of):
        amount = q2(pay.amount)
        lines.append(
            DrilldownLine(
                date=pay.payment_date,
                reference=pay.receipt_number or pay.reference_number,
                description=f"Fee payment: student {pay.student_id}",
                debit=amount if debit_side else ZERO,
                credit=ZERO if debit_side else amount,
            )
        )
    return lines


_SYNTHETIC_REPLAY = {
    SYNTHETIC_RECEIVABLE.key: _invoice_lines,
    SYNTHETIC_CASH.key: lambda reader, as_of: _payment_lines(reader, as_of, debit_side=True),
    SYNTHETIC_FEE_INCOME.key: lambda reader, as_of: _payment_lines(reader, as_of, debit_side=False),
}


def explain_account(
    account_key, as_of: date | None = None, *, reader: LedgerReader | None = None
) -> AccountExplanation:
    reader = reader or LedgerReader()
    as_of = as_of or timezone.localdate()
    key = str(account_key).strip()

    synthetic = SYNTHETIC_ACCOUNTS.get(key)
    if synthetic is not None:
        replay = _SYNTHETIC_REPLAY[synthetic.key]
        return AccountExplanation(
            account_key=synthetic.key,
            code=synthetic.code,
            name=synthetic.name,
            source=SOURCE_SYNTHETIC,
            as_of=as_of,
            lines=replay(reader, as_of),
        )

    try:
        account_id = int(key)
    except ValueError as exc:
        raise AccountNotFoundError(f"Account {key} not found") from exc

    account = reader.account(account_id)
    if account is None:
        raise AccountNotFoundError(f"Account {key} not found")

    return AccountExplanation(
        account_key=str(account.id),
        code=account.code,
        name=account.name,
        source=SOURCE_POSTED,
        as_of=as_of,
        lines=_ledger_lines(reader, account.id, as_of),
    )

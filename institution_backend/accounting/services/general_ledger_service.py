# accounting/services/general_ledger_service.py

"""
GENERAL LEDGER REPORT

Posted lines for a period (optionally one account), oldest first, each with
a running balance per account. The running balance is signed debit - credit
and starts from the account's balance on the day before the period.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, timedelta
from decimal import Decimal

from django.utils import timezone

from accounting.services.exceptions import ReportParameterError
from accounting.services.ledger_reader import LedgerReader
from accounting.services.money import ZERO, currency, q2, to_major_number, to_minor_int


@dataclass(frozen=True)
class GeneralLedgerLine:
    ledger_entry_id: int
    transaction_date: date
    account_id: int
    account_code: str
    account_name: str
    entry_number: str
    reference: str
    description: str
    debit: Decimal
    credit: Decimal
    running_balance: Decimal

    def as_dict(self) -> dict:
        return {
            "id": self.ledger_entry_id,
            "transaction_date": self.transaction_date.isoformat(),
            "account_id": self.account_id,
            "account_code": self.account_code,
            "account_name": self.account_name,
            "entry_number": self.entry_number,
            "reference": self.reference,
            "description": self.description,
            "debit": to_major_number(self.debit),
            "credit": to_major_number(self.credit),
            "running_balance": to_major_number(self.running_balance),
        }


@dataclass
class GeneralLedger:
    start_date: date | None
    end_date: date
    account_id: int | None
    lines: list[GeneralLedgerLine] = field(default_factory=list)

    @property
    def total_debit(self) -> Decimal:
        return q2(sum((line.debit for line in self.lines), ZERO))

    @property
    def total_credit(self) -> Decimal:
        return q2(sum((line.credit for line in self.lines), ZERO))

    def as_dict(self) -> dict:
        return {
            "period": {
                "start_date": self.start_date.isoformat() if self.start_date else None,
                "end_date": self.end_date.isoformat(),
            },
            "account_id": self.account_id,
            "currency": currency(),
            "lines": [line.as_dict() for line in self.lines],
            "totals": {
                "debit": to_major_number(self.total_debit),
                "credit": to_major_number(self.total_credit),
                "debit_minor": to_minor_int(self.total_debit),
                "credit_minor": to_minor_int(self.total_credit),
            },
        }


def general_ledger(
    start_date: date | None = None,
    end_date: date | None = None,
    account_id: int | None = None,
    *,
    reader: LedgerReader | None = None,
) -> GeneralLedger:
    reader = reader or LedgerReader()
    end_date = end_date or timezone.localdate()
    if start_date is not None and start_date > end_date:
        raise ReportParameterError("start_date cannot be after end_date")

    running: dict[int, Decimal] = {}
    if start_date is not None:
        opening = reader.postings_as_of(start_date - timedelta(days=1))
        running = {acc_id: totals.net for acc_id, totals in opening.items()}

    lines = []
    for entry in reader.ledger_lines(end_date, start_date=start_date, account_id=account_id):
        balance = q2(running.get(entry.account_id, ZERO) + entry.debit - entry.credit)
        running[entry.account_id] = balance
        lines.append(
            GeneralLedgerLine(
                ledger_entry_id=entry.id,
                transaction_date=entry.transaction_date,
                account_id=entry.account_id,
                account_code=entry.account.code,
                account_name=entry.account.name,
                entry_number=entry.journal_entry.entry_number,
                reference=entry.reference_number,
                description=entry.description or entry.journal_entry.description,
                debit=q2(entry.debit),
                credit=q2(entry.credit),
                running_balance=balance,
            )
        )

    return GeneralLedger(
        start_date=start_date,
        end_date=end_date,
        account_id=account_id,
        lines=lines,
    )

# accounting/services/ledger_reader.py

"""
LEDGER READER (read-only data access for reports)

Answers "what was posted up to this date?" for the report services:
- per-account debit/credit sums from the General Ledger
- outstanding fee invoices (receivables feed)
- completed fee payments (cash feed)
- individual postings for one account (drill-down)

RULES:
- READ-ONLY: no writes, ever
- Cutoffs are inclusive calendar dates on LedgerEntry.transaction_date /
  Invoice.invoice_date / Payment.payment_date. Later rows are excluded whole.
- An optional start_date (inclusive) narrows any feed to a period.
- Any data-store failure is raised as SourceUnavailableError. A failed read is
  never reported as a zero balance.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date
from decimal import Decimal

from django.db import DatabaseError
from django.db.models import Sum
from django.db.models.functions import Coalesce

from accounting.models.account import Account
from accounting.models.ledger import LedgerEntry
from accounting.services.exceptions import SourceUnavailableError
from accounting.services.money import ZERO, q2
from fees.models import Invoice, Payment

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PostingTotals:
    debit_sum: Decimal
    credit_sum: Decimal

    @property
    def net(self) -> Decimal:
        return q2(self.debit_sum - self.credit_sum)


class LedgerReader:
    def __init__(
        self,
        account_model=Account,
        ledger_model=LedgerEntry,
        invoice_model=Invoice,
        payment_model=Payment,
    ):
        self.Account = account_model
        self.Ledger = ledger_model
        self.Invoice = invoice_model
        self.Payment = payment_model

    def _read(self, source: str, fetch):
        try:
            return fetch()
        except DatabaseError as exc:
            logger.error(
                "Data store read failed",
                extra={"source": source},
                exc_info=True,
            )
            raise SourceUnavailableError(f"Could not read {source}: {exc}") from exc

    @staticmethod
    def _date_range(qs, field: str, cutoff: date, start_date: date | None):
        qs = qs.filter(**{f"{field}__lte": cutoff})
        if start_date is not None:
            qs = qs.filter(**{f"{field}__gte": start_date})
        return qs

    # --------------------------------------------------------
    # Chart of Accounts
    # --------------------------------------------------------

    def accounts(self) -> list:
        """Every account, active or not: historical balances must still show."""
        return self._read(
            "chart of accounts",
            lambda: list(
                self.Account.objects.all()
                .only("id", "code", "name", "account_type", "normal_balance", "is_active")
                .order_by("code")
            ),
        )

    def account(self, account_id):
        """Single account or None."""
        return self._read(
            "chart of accounts",
            lambda: self.Account.objects.filter(pk=account_id)
            .only("id", "code", "name", "account_type", "normal_balance", "is_active")
            .first(),
        )

    # --------------------------------------------------------
    # General Ledger
    # --------------------------------------------------------

    def postings_as_of(
        self, cutoff: date, *, start_date: date | None = None
    ) -> dict[int, PostingTotals]:
        def fetch():
            qs = self._date_range(
                self.Ledger.objects.all(), "transaction_date", cutoff, start_date
            )
            rows = qs.values("account_id").annotate(
                debit_sum=Coalesce(Sum("debit"), ZERO),
                credit_sum=Coalesce(Sum("credit"), ZERO),
            )
            return {
                r["account_id"]: PostingTotals(
                    debit_sum=q2(r["debit_sum"]),
                    credit_sum=q2(r["credit_sum"]),
                )
                for r in rows
            }

        return self._read("general ledger", fetch)

    def transactions_for_account(
        self, account_id, cutoff: date, *, start_date: date | None = None
    ) -> list:
        def fetch():
            qs = self._date_range(
                self.Ledger.objects.filter(account_id=account_id),
                "transaction_date",
                cutoff,
                start_date,
            )
            return list(
                qs.select_related("journal_entry").order_by("transaction_date", "id")
            )

        return self._read("general ledger", fetch)

    def ledger_lines(
        self,
        cutoff: date,
        *,
        start_date: date | None = None,
        account_id=None,
    ) -> list:
        def fetch():
            qs = self._date_range(
                self.Ledger.objects.all(), "transaction_date", cutoff, start_date
            )
            if account_id is not None:
                qs = qs.filter(account_id=account_id)
            return list(
                qs.select_related("journal_entry", "account").order_by(
                    "transaction_date", "id"
                )
            )

        return self._read("general ledger", fetch)

    # --------------------------------------------------------
    # Fee feeds
    # --------------------------------------------------------

    def _outstanding_invoices(self, cutoff: date, start_date: date | None):
        return self._date_range(
            self.Invoice.objects.filter(balance_due__gt=0),
            "invoice_date",
            cutoff,
            start_date,
        )

    def _completed_payments(self, cutoff: date, start_date: date | None):
        return self._date_range(
            self.Payment.objects.filter(status=self.Payment.STATUS_COMPLETED),
            "payment_date",
            cutoff,
            start_date,
        )

    def receivables_as_of(
        self, cutoff: date, *, start_date: date | None = None
    ) -> Decimal:
        return self._read(
            "fee invoices",
            lambda: q2(
                self._outstanding_invoices(cutoff, start_date).aggregate(
                    total=Coalesce(Sum("balance_due"), ZERO)
                )["total"]
            ),
        )

    def completed_payments_as_of(
        self, cutoff: date, *, start_date: date | None = None
    ) -> Decimal:
        return self._read(
            "fee payments",
            lambda: q2(
                self._completed_payments(cutoff, start_date).aggregate(
                    total=Coalesce(Sum("amount"), ZERO)
                )["total"]
            ),
        )

    def invoices_as_of(self, cutoff: date, *, start_date: date | None = None) -> list:
        return self._read(
            "fee invoices",
            lambda: list(
                self._outstanding_invoices(cutoff, start_date).order_by(
                    "invoice_date", "id"
                )
            ),
        )

    def completed_payments(
        self, cutoff: date, *, start_date: date | None = None
    ) -> list:
        return self._read(
            "fee payments",
            lambda: list(
                self._completed_payments(cutoff, start_date).order_by(
                    "payment_date", "id"
                )
            ),
        )

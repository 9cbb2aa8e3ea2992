# accounting/management/commands/check_trial_balance.py

from __future__ import annotations

from datetime import datetime

from django.core.management.base import BaseCommand
from django.db.models import Count, F, Q, Sum

from accounting.models.journal import JournalEntry
from accounting.services.exceptions import AccountingServiceError
from accounting.services.trial_balance_service import TrialBalanceService


def _parse_date(s: str | None):
    """
    Parse YYYY-MM-DD into a date, or None.
    """
    if not s:
        return None
    try:
        return datetime.strptime(s, "%Y-%m-%d").date()
    except ValueError:
        return None


class Command(BaseCommand):
    help = "Print trial balance totals and check that every journal entry balances."

    def add_arguments(self, parser):
        parser.add_argument(
            "--as-of",
            dest="as_of",
            help="Cutoff date YYYY-MM-DD (default: today)",
        )
        parser.add_argument(
            "--strict",
            action="store_true",
            help="Fail (non-zero exit) if any problem is found.",
        )

    def handle(self, *args, **options):
        strict = bool(options.get("strict"))
        as_of = _parse_date(options.get("as_of"))

        if options.get("as_of") and not as_of:
            self.stderr.write(self.style.ERROR("Invalid --as-of date. Use YYYY-MM-DD"))
            return self._exit(strict)

        try:
            tb = TrialBalanceService().generate(as_of=as_of)
        except AccountingServiceError as exc:
            self.stderr.write(self.style.ERROR(f"[FAIL] Trial balance could not be computed: {exc}"))
            return self._exit(True)

        self.stdout.write(self.style.MIGRATE_HEADING(f"Trial Balance as of {tb.as_of.isoformat()}"))
        for row in tb.rows:
            tag = " (synthetic)" if row.is_synthetic else ""
            self.stdout.write(
                f"  {row.code:<10} {row.name[:40]:<40} "
                f"{row.debit_balance:>14} {row.credit_balance:>14}{tag}"
            )
        self.stdout.write("")

        errors = 0

        if tb.is_balanced:
            self.stdout.write(
                self.style.SUCCESS(
                    f"[OK] Trial balance balanced: debits={tb.total_debit} credits={tb.total_credit}"
                )
            )
        else:
            errors += 1
            self.stderr.write(
                self.style.ERROR(
                    f"[FAIL] Trial balance not balanced: debits={tb.total_debit} "
                    f"credits={tb.total_credit} difference={tb.difference}"
                )
            )

        entries = JournalEntry.objects.all()
        if as_of:
            entries = entries.filter(transaction_date__lte=as_of)

        unbalanced = list(
            entries.annotate(
                debits=Sum("ledger_entries__debit"),
                credits=Sum("ledger_entries__credit"),
                line_count=Count("ledger_entries"),
            )
            .filter(Q(line_count__lt=2) | ~Q(debits=F("credits")))
            .values_list("entry_number", "debits", "credits")[:10]
        )

        if unbalanced:
            errors += len(unbalanced)
            self.stderr.write(self.style.ERROR(f"[FAIL] Unbalanced journal entries: {len(unbalanced)}"))
            for entry_number, debits, credits in unbalanced:
                self.stderr.write(f"  {entry_number} debits={debits} credits={credits}")
        else:
            self.stdout.write(self.style.SUCCESS("[OK] Every journal entry balances"))

        self.stdout.write("")
        if errors == 0:
            self.stdout.write(self.style.SUCCESS("CHECK PASSED"))
        else:
            self.stderr.write(self.style.ERROR(f"CHECK FOUND ISSUES: {errors} problem(s)"))

        return self._exit(strict and errors > 0)

    def _exit(self, fail: bool):
        if fail:
            raise SystemExit(1)
        return None

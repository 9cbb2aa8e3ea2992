# accounting/services/journal_entry_service.py

"""
======================================================
PATH: accounting/services/journal_entry_service.py
======================================================
JOURNAL ENTRY SERVICE (POSTING ENGINE)

This module is the ONLY place allowed to:
- Create JournalEntry
- Create LedgerEntry
- Enforce debit == credit
- Guarantee atomicity
- Enforce idempotency via reference (prevents double-posting)

Reports never write; they read what this module posted.
"""

from __future__ import annotations

import logging
import re
from datetime import date, datetime
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation

from django.core.exceptions import ValidationError
from django.db import IntegrityError, transaction

from accounting.models.account import Account
from accounting.models.journal import JournalEntry
from accounting.models.ledger import LedgerEntry
from accounting.services.exceptions import (
    IdempotencyError,
    JournalEntryCreationError,
)

logger = logging.getLogger(__name__)

TWOPLACES = Decimal("0.01")
MIN_LINE_AMOUNT = Decimal("0.01")
ENTRY_NUMBER_PREFIX = "JE-"
_ENTRY_NUMBER_RE = re.compile(r"^JE-(\d+)$")


def _money(value) -> Decimal:
    if value is None or value == "":
        return Decimal("0.00")

    if isinstance(value, Decimal):
        amt = value
    else:
        try:
            amt = Decimal(str(value))
        except (InvalidOperation, ValueError, TypeError) as exc:
            raise JournalEntryCreationError(f"Invalid money value: {value!r}") from exc

    return amt.quantize(TWOPLACES, rounding=ROUND_HALF_UP)


def _resolve_account(line: dict) -> Account:
    account = line.get("account")
    if account is None and line.get("account_id") is not None:
        account = Account.objects.filter(pk=line["account_id"]).first()
        if account is None:
            raise JournalEntryCreationError(f"Account {line['account_id']} not found")
    if account is None:
        raise JournalEntryCreationError("Posting missing account")
    return account


def next_entry_number() -> str:
    """Next sequential JE-###### number; callers hold the posting transaction."""
    highest = 0
    numbers = JournalEntry.objects.filter(
        entry_number__startswith=ENTRY_NUMBER_PREFIX
    ).values_list("entry_number", flat=True)
    for number in numbers:
        match = _ENTRY_NUMBER_RE.match(number)
        if match:
            highest = max(highest, int(match.group(1)))
    return f"{ENTRY_NUMBER_PREFIX}{highest + 1:06d}"


@transaction.atomic
def create_journal_entry(
    *,
    description: str,
    transaction_date: date,
    lines: list,
    reference: str | None = None,
    entry_number: str | None = None,
) -> JournalEntry:
    """
    Post one balanced journal entry.

    Each line is a dict with "account" (an Account) or "account_id", plus
    "debit" or "credit". Optional per-line "description" overrides the header
    narrative on the ledger line.
    """
    if not lines:
        raise JournalEntryCreationError("Journal entry must contain at least one posting")
    if len(lines) < 2:
        raise JournalEntryCreationError("Journal entry needs at least two postings")

    description = (description or "").strip()
    if not description:
        raise JournalEntryCreationError("Journal entry description is required")

    if isinstance(transaction_date, datetime):
        transaction_date = transaction_date.date()
    if not isinstance(transaction_date, date):
        raise JournalEntryCreationError("transaction_date must be a date")

    reference = (reference or "").strip() or None

    total_debits = Decimal("0.00")
    total_credits = Decimal("0.00")
    normalized: list[dict] = []

    for line in lines:
        if not isinstance(line, dict):
            raise JournalEntryCreationError("Each posting must be an object/dict")

        account = _resolve_account(line)
        if not account.is_active:
            raise JournalEntryCreationError(f"Account {account.code} is inactive")

        debit = _money(line.get("debit"))
        credit = _money(line.get("credit"))

        if debit < 0 or credit < 0:
            raise JournalEntryCreationError("Debit or credit cannot be negative")
        if debit > 0 and credit > 0:
            raise JournalEntryCreationError("A posting cannot have both debit and credit")
        if debit == 0 and credit == 0:
            raise JournalEntryCreationError("A posting must have either debit or credit")
        if 0 < debit < MIN_LINE_AMOUNT or 0 < credit < MIN_LINE_AMOUNT:
            raise JournalEntryCreationError("Posting amount too small")

        total_debits += debit
        total_credits += credit
        normalized.append(
            {
                "account": account,
                "debit": debit,
                "credit": credit,
                "description": (line.get("description") or "").strip(),
            }
        )

    if total_debits != total_credits:
        raise JournalEntryCreationError(
            f"Journal entry not balanced: debits={total_debits} credits={total_credits}"
        )

    if reference and JournalEntry.objects.filter(reference=reference).exists():
        raise IdempotencyError(f"Journal entry already exists for reference {reference}")

    entry_number = (entry_number or "").strip() or next_entry_number()

    try:
        with transaction.atomic():
            journal_entry = JournalEntry.objects.create(
                entry_number=entry_number,
                transaction_date=transaction_date,
                description=description,
                reference=reference,
            )
    except IntegrityError as exc:
        if reference and JournalEntry.objects.filter(reference=reference).exists():
            raise IdempotencyError(
                f"Journal entry already exists for reference {reference}"
            ) from exc
        raise JournalEntryCreationError(f"Failed to create journal entry: {exc}") from exc
    except ValidationError as exc:
        raise JournalEntryCreationError(f"Invalid journal entry: {exc}") from exc

    # bulk_create skips save(), so line validation above is the only gate.
    LedgerEntry.objects.bulk_create(
        [
            LedgerEntry(
                journal_entry=journal_entry,
                account=line["account"],
                transaction_date=transaction_date,
                description=(line["description"] or description)[:255],
                reference_number=reference or "",
                debit=line["debit"],
                credit=line["credit"],
            )
            for line in normalized
        ]
    )

    logger.info(
        "Journal entry posted",
        extra={
            "entry_number": journal_entry.entry_number,
            "transaction_date": transaction_date.isoformat(),
            "total": str(total_debits),
            "lines": len(normalized),
        },
    )
    return journal_entry

# accounting/services/money.py

"""
Money helpers shared by the report services.

Amounts are Decimals quantized to 2dp (ROUND_HALF_UP). API payloads carry
major-unit floats for display plus exact minor-unit ints for comparisons.
"""

from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal, InvalidOperation

from django.conf import settings

TWOPLACES = Decimal("0.01")
ZERO = Decimal("0.00")


def q2(amount) -> Decimal:
    if amount is None:
        return ZERO
    if not isinstance(amount, Decimal):
        amount = Decimal(str(amount))
    return amount.quantize(TWOPLACES, rounding=ROUND_HALF_UP)


def to_major_number(amount: Decimal) -> float:
    return float(q2(amount))


def to_minor_int(amount: Decimal) -> int:
    return int((q2(amount) * 100).to_integral_value(rounding=ROUND_HALF_UP))


def balance_tolerance() -> Decimal:
    raw = getattr(settings, "ACCOUNTING_BALANCE_TOLERANCE", "0.01")
    try:
        tolerance = Decimal(str(raw))
    except (InvalidOperation, ValueError) as exc:
        raise ValueError(f"Invalid ACCOUNTING_BALANCE_TOLERANCE: {raw!r}") from exc
    if tolerance <= 0:
        raise ValueError("ACCOUNTING_BALANCE_TOLERANCE must be positive")
    return tolerance


def within_tolerance(left: Decimal, right: Decimal) -> bool:
    return abs(q2(left) - q2(right)) < balance_tolerance()


def currency() -> str:
    return getattr(settings, "ACCOUNTING_CURRENCY", "KES")

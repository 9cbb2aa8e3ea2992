# fees/models/__init__.py

from fees.models.invoice import Invoice
from fees.models.payment import Payment

__all__ = ["Invoice", "Payment"]

# accounting/services/exceptions.py

"""
ACCOUNTING SERVICE ERRORS

Centralized domain errors for accounting services.

Input validation on accounts, groups and sub-groups uses Django's own
django.core.exceptions.ValidationError (raised by model clean() and by the
account registry) so field messages reach the UI unchanged.
"""

from __future__ import annotations


class AccountingServiceError(Exception):
    """Base exception for all accounting service failures."""


class SourceUnavailableError(AccountingServiceError):
    """
    Raised when a read against the data store fails.

    Reports never substitute zero/empty results for a failed read.
    """


class AccountNotFoundError(AccountingServiceError):
    """Raised when an account id (or synthetic account key) cannot be resolved."""


class ReportParameterError(AccountingServiceError):
    """Raised on malformed report dates or an inverted period."""


class JournalEntryCreationError(AccountingServiceError):
    """Raised when a journal entry cannot be created."""


class IdempotencyError(JournalEntryCreationError):
    """Raised when a journal entry already exists for the same reference."""


class UnbalancedReportWarning(UserWarning):
    """
    Not an error: attached to a completed report whose debits and credits
    (or assets and liabilities + equity) disagree beyond tolerance.
    """

    def __init__(self, message: str, *, left, right, difference):
        super().__init__(message)
        self.message = message
        self.left = left
        self.right = right
        self.difference = difference

    def as_dict(self) -> dict:
        return {
            "code": "unbalanced",
            "message": self.message,
            "difference": float(self.difference),
        }

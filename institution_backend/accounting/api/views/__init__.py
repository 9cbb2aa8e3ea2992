# accounting/api/views/__init__.py

"""
accounting.api.views package

Important:
- ViewSets are defined in accounting.api.view (singular) in this codebase.
- Do NOT import accounting.api.urls from here to avoid circular imports.
"""

from accounting.api.views.accounts import (
    AccountChildrenView,
    AccountDetailView,
    AccountListCreateView,
    AccountSetActiveView,
    DefaultNormalBalanceView,
)
from accounting.api.views.balance_sheet import BalanceSheetView
from accounting.api.views.explain import ExplainAccountView
from accounting.api.views.general_ledger import GeneralLedgerView
from accounting.api.views.groups import (
    AccountGroupListCreateView,
    AccountSubGroupListCreateView,
)
from accounting.api.views.income_statement import IncomeStatementView
from accounting.api.views.trial_balance import TrialBalanceView

__all__ = [
    "AccountListCreateView",
    "AccountDetailView",
    "AccountSetActiveView",
    "AccountChildrenView",
    "DefaultNormalBalanceView",
    "AccountGroupListCreateView",
    "AccountSubGroupListCreateView",
    "TrialBalanceView",
    "IncomeStatementView",
    "BalanceSheetView",
    "ExplainAccountView",
    "GeneralLedgerView",
]

# accounting/api/urls.py

from django.urls import include, path
from rest_framework.routers import DefaultRouter

# Canonical ViewSets live in accounting/api/view.py (singular) in this project.
# We import directly to avoid circular imports through views/__init__.py.
from accounting.api.view import JournalEntryViewSet, LedgerEntryViewSet
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

router = DefaultRouter()
router.register("journal-entries", JournalEntryViewSet, basename="journal-entry")
router.register("ledger-entries", LedgerEntryViewSet, basename="ledger-entry")

urlpatterns = [
    # Router endpoints
    path("", include(router.urls)),
    # Reports
    path("trial-balance/", TrialBalanceView.as_view(), name="trial-balance"),
    path("income-statement/", IncomeStatementView.as_view(), name="income-statement"),
    path("balance-sheet/", BalanceSheetView.as_view(), name="balance-sheet"),
    path("general-ledger/", GeneralLedgerView.as_view(), name="general-ledger"),
    path("explain/<str:account_key>/", ExplainAccountView.as_view(), name="explain-account"),
    # Chart of accounts
    path("accounts/", AccountListCreateView.as_view(), name="accounts"),
    path(
        "accounts/default-normal-balance/",
        DefaultNormalBalanceView.as_view(),
        name="account-default-normal-balance",
    ),
    path("accounts/<int:pk>/", AccountDetailView.as_view(), name="account-detail"),
    path(
        "accounts/<int:pk>/set-active/",
        AccountSetActiveView.as_view(),
        name="account-set-active",
    ),
    path(
        "accounts/<int:pk>/children/",
        AccountChildrenView.as_view(),
        name="account-children",
    ),
    path("groups/", AccountGroupListCreateView.as_view(), name="account-groups"),
    path("sub-groups/", AccountSubGroupListCreateView.as_view(), name="account-sub-groups"),
]

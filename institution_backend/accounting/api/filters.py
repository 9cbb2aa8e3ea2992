# accounting/api/filters.py

"""
django-filter FilterSets for the accounting list endpoints.

Examples:
    /api/accounting/accounts/?account_type=ASSET&is_active=true
    /api/accounting/accounts/?parent=12
    /api/accounting/accounts/?search=cash
    /api/accounting/sub-groups/?account_type=EXPENSE&group=3
    /api/accounting/ledger-entries/?account=28&date_from=2026-01-01
"""

import django_filters
from django.db.models import Q

from accounting.models.account import Account
from accounting.models.choices import AccountType
from accounting.models.group import AccountGroup, AccountSubGroup
from accounting.models.journal import JournalEntry
from accounting.models.ledger import LedgerEntry


class AccountFilter(django_filters.FilterSet):
    account_type = django_filters.ChoiceFilter(choices=AccountType.choices)
    search = django_filters.CharFilter(method="filter_search")

    class Meta:
        model = Account
        fields = ["account_type", "parent", "is_active", "group", "sub_group"]

    def filter_search(self, queryset, name, value):
        value = (value or "").strip()
        if not value:
            return queryset
        return queryset.filter(Q(code__icontains=value) | Q(name__icontains=value))


class AccountGroupFilter(django_filters.FilterSet):
    account_type = django_filters.ChoiceFilter(choices=AccountType.choices)

    class Meta:
        model = AccountGroup
        fields = ["account_type"]


class AccountSubGroupFilter(django_filters.FilterSet):
    account_type = django_filters.ChoiceFilter(
        field_name="group__account_type", choices=AccountType.choices
    )

    class Meta:
        model = AccountSubGroup
        fields = ["account_type", "group"]


class JournalEntryFilter(django_filters.FilterSet):
    date_from = django_filters.DateFilter(field_name="transaction_date", lookup_expr="gte")
    date_to = django_filters.DateFilter(field_name="transaction_date", lookup_expr="lte")

    class Meta:
        model = JournalEntry
        fields = ["entry_number", "reference"]


class LedgerEntryFilter(django_filters.FilterSet):
    date_from = django_filters.DateFilter(field_name="transaction_date", lookup_expr="gte")
    date_to = django_filters.DateFilter(field_name="transaction_date", lookup_expr="lte")

    class Meta:
        model = LedgerEntry
        fields = ["journal_entry", "account"]

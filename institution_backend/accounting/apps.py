# accounting/apps.py

"""
ACCOUNTING APP CONFIG

Chart of accounts, journal posting and the derived reports:
- Trial Balance
- Income Statement / Balance Sheet
- Account drill-down
- General Ledger
"""

from django.apps import AppConfig


class AccountingConfig(AppConfig):
    default_auto_field = "django.db.models.BigAutoField"
    name = "accounting"
    verbose_name = "Accounting"

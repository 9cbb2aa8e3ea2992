# fees/apps.py

"""
FEES APP CONFIG

Student fee invoices and fee payments. The accounting reports read these as
auxiliary feeds when fee activity has not been posted through the ledger.
"""

from django.apps import AppConfig


class FeesConfig(AppConfig):
    default_auto_field = "django.db.models.BigAutoField"
    name = "fees"
    verbose_name = "Student Fees"

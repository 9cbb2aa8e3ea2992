# accounting/management/commands/seed_school_chart.py

from django.core.management.base import BaseCommand
from django.db import transaction

from accounting.models.account import Account
from accounting.models.choices import AccountType, default_normal_balance
from accounting.models.group import AccountGroup, AccountSubGroup

# (group name, account type, [sub-group names])
GROUPS = [
    ("Current Assets", AccountType.ASSET, ["Cash and Bank", "Receivables"]),
    ("Non-Current Assets", AccountType.ASSET, ["Property and Equipment"]),
    ("Current Liabilities", AccountType.LIABILITY, ["Payables", "Fees Received in Advance"]),
    ("Capital and Reserves", AccountType.EQUITY, ["Capital", "Reserves"]),
    ("Fee Income", AccountType.INCOME, ["Tuition", "Other Fees"]),
    ("Other Income", AccountType.INCOME, ["Grants and Donations"]),
    ("Operating Expenses", AccountType.EXPENSE, ["Staff Costs", "Administration"]),
    ("Academic Expenses", AccountType.EXPENSE, ["Teaching Materials"]),
]

# (code, name, type, group, sub-group)
ACCOUNTS = [
    # ASSETS
    ("1000", "Cash on Hand", AccountType.ASSET, "Current Assets", "Cash and Bank"),
    ("1010", "Bank Account", AccountType.ASSET, "Current Assets", "Cash and Bank"),
    ("1100", "Student Fees Receivable", AccountType.ASSET, "Current Assets", "Receivables"),
    ("1500", "Furniture and Equipment", AccountType.ASSET, "Non-Current Assets", "Property and Equipment"),
    # LIABILITIES
    ("2000", "Accounts Payable", AccountType.LIABILITY, "Current Liabilities", "Payables"),
    ("2100", "Fees Received in Advance", AccountType.LIABILITY, "Current Liabilities", "Fees Received in Advance"),
    # EQUITY
    ("3000", "Capital Fund", AccountType.EQUITY, "Capital and Reserves", "Capital"),
    ("3100", "Accumulated Surplus", AccountType.EQUITY, "Capital and Reserves", "Reserves"),
    # INCOME
    ("4000", "Tuition Fees", AccountType.INCOME, "Fee Income", "Tuition"),
    ("4100", "Examination Fees", AccountType.INCOME, "Fee Income", "Other Fees"),
    ("4200", "Grants and Donations", AccountType.INCOME, "Other Income", "Grants and Donations"),
    # EXPENSES
    ("5000", "Salaries and Wages", AccountType.EXPENSE, "Operating Expenses", "Staff Costs"),
    ("5100", "Utilities", AccountType.EXPENSE, "Operating Expenses", "Administration"),
    ("5200", "Teaching Materials", AccountType.EXPENSE, "Academic Expenses", "Teaching Materials"),
]


class Command(BaseCommand):
    help = "Seed the default school Chart of Accounts (groups, sub-groups, accounts). Safe to re-run."

    @transaction.atomic
    def handle(self, *args, **options):
        self.stdout.write("Seeding school Chart of Accounts...")

        groups: dict[str, AccountGroup] = {}
        sub_groups: dict[tuple[str, str], AccountSubGroup] = {}

        for group_name, account_type, sub_names in GROUPS:
            group = AccountGroup.objects.filter(
                account_type=account_type, name=group_name
            ).first()
            if group is None:
                group = AccountGroup(account_type=account_type, name=group_name)
                group.save()
            groups[group_name] = group

            for sub_name in sub_names:
                sub_group = AccountSubGroup.objects.filter(group=group, name=sub_name).first()
                if sub_group is None:
                    sub_group = AccountSubGroup(group=group, name=sub_name)
                    sub_group.save()
                sub_groups[(group_name, sub_name)] = sub_group

        created_count = 0
        updated_count = 0

        for code, name, account_type, group_name, sub_name in ACCOUNTS:
            acc = Account.objects.filter(code=code).first()

            if acc is None:
                Account(
                    code=code,
                    name=name,
                    account_type=account_type,
                    normal_balance=default_normal_balance(account_type),
                    group=groups[group_name],
                    sub_group=sub_groups[(group_name, sub_name)],
                ).save()
                created_count += 1
                continue

            # Existing accounts keep their type, normal balance and history.
            if not acc.is_active:
                acc.is_active = True
                acc.save()
                updated_count += 1

        self.stdout.write(
            self.style.SUCCESS(
                f"School chart seeded ({created_count} new accounts, {updated_count} reactivated)."
            )
        )

# accounting/admin.py

from django.contrib import admin

from accounting.models import (
    Account,
    AccountGroup,
    AccountSubGroup,
    JournalEntry,
    LedgerEntry,
)

# ============================================================
# CLASSIFICATION
# ============================================================


class AccountSubGroupInline(admin.TabularInline):
    model = AccountSubGroup
    extra = 0
    fields = ("name", "description")


@admin.register(AccountGroup)
class AccountGroupAdmin(admin.ModelAdmin):
    list_display = ("name", "account_type", "created_at")
    list_filter = ("account_type",)
    search_fields = ("name",)
    ordering = ("account_type", "name")
    inlines = [AccountSubGroupInline]


@admin.register(AccountSubGroup)
class AccountSubGroupAdmin(admin.ModelAdmin):
    list_display = ("name", "group", "created_at")
    list_filter = ("group__account_type",)
    search_fields = ("name", "group__name")


# ============================================================
# ACCOUNT
# ============================================================


@admin.register(Account)
class AccountAdmin(admin.ModelAdmin):
    list_display = (
        "code",
        "name",
        "account_type",
        "normal_balance",
        "group",
        "parent",
        "is_active",
    )
    list_filter = ("account_type", "normal_balance", "is_active")
    search_fields = ("code", "name")
    ordering = ("code",)
    readonly_fields = ("created_at", "updated_at")

    fieldsets = (
        (
            "Account Identity",
            {
                "fields": ("code", "name", "account_type", "normal_balance"),
            },
        ),
        (
            "Classification",
            {
                "fields": ("group", "sub_group", "parent", "description"),
            },
        ),
        (
            "Status",
            {
                "fields": ("is_active",),
            },
        ),
        (
            "System Fields",
            {
                "fields": ("created_at", "updated_at"),
            },
        ),
    )

    def has_delete_permission(self, request, obj=None):
        return False


# ============================================================
# JOURNAL / LEDGER (READ-ONLY)
# ============================================================


class LedgerEntryInline(admin.TabularInline):
    model = LedgerEntry
    extra = 0
    can_delete = False
    fields = ("account", "debit", "credit", "description", "reference_number")
    readonly_fields = fields

    def has_add_permission(self, request, obj=None):
        return False


@admin.register(JournalEntry)
class JournalEntryAdmin(admin.ModelAdmin):
    list_display = (
        "entry_number",
        "transaction_date",
        "description",
        "reference",
        "created_at",
    )
    list_filter = ("transaction_date",)
    search_fields = ("entry_number", "description", "reference")
    ordering = ("-transaction_date", "-id")
    readonly_fields = (
        "entry_number",
        "transaction_date",
        "description",
        "reference",
        "created_at",
    )
    inlines = [LedgerEntryInline]

    def has_add_permission(self, request):
        return False

    def has_change_permission(self, request, obj=None):
        return False

    def has_delete_permission(self, request, obj=None):
        return False


@admin.register(LedgerEntry)
class LedgerEntryAdmin(admin.ModelAdmin):
    list_display = (
        "id",
        "transaction_date",
        "journal_entry",
        "account",
        "debit",
        "credit",
        "reference_number",
    )
    list_filter = ("transaction_date", "account__account_type")
    search_fields = (
        "account__code",
        "account__name",
        "journal_entry__entry_number",
        "reference_number",
    )
    ordering = ("-transaction_date", "-id")
    readonly_fields = (
        "journal_entry",
        "account",
        "transaction_date",
        "description",
        "reference_number",
        "debit",
        "credit",
        "created_at",
    )

    def has_add_permission(self, request):
        return False

    def has_change_permission(self, request, obj=None):
        return False

    def has_delete_permission(self, request, obj=None):
        return False

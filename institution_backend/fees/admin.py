# fees/admin.py

from django.contrib import admin

from fees.models import Invoice, Payment


@admin.register(Invoice)
class InvoiceAdmin(admin.ModelAdmin):
    list_display = (
        "invoice_number",
        "student_id",
        "invoice_date",
        "total_amount",
        "amount_paid",
        "balance_due",
        "status",
    )
    list_filter = ("status", "invoice_date")
    search_fields = ("invoice_number", "student_id")
    readonly_fields = ("balance_due", "created_at", "updated_at")
    ordering = ("-invoice_date",)


@admin.register(Payment)
class PaymentAdmin(admin.ModelAdmin):
    list_display = (
        "receipt_number",
        "student_id",
        "payment_date",
        "amount",
        "status",
        "reference_number",
    )
    list_filter = ("status", "payment_date")
    search_fields = ("receipt_number", "reference_number", "student_id")
    readonly_fields = ("created_at", "updated_at")
    ordering = ("-payment_date",)

"""Admin registration for finance transactions."""

from __future__ import annotations

from django.contrib import admin

from .models import Transaction


@admin.register(Transaction)
class TransactionAdmin(admin.ModelAdmin):
    list_display = (
        "id",
        "user",
        "content_id",
        "subtype",
        "amount",
        "currency",
        "status",
        "payment_reference",
        "created_at",
    )
    list_filter = ("status", "subtype", "currency")
    search_fields = ("content_id", "payment_reference", "user__email")
    readonly_fields = ("created_at", "updated_at", "completed_at")

"""Admin registration for availability rules."""

from __future__ import annotations

from django.contrib import admin

from .models import AvailabilityException, AvailabilityRule


class AvailabilityExceptionInline(admin.TabularInline):
    model = AvailabilityException
    extra = 0
    fields = ("date", "is_available", "custom_capacity", "custom_price", "reason")


@admin.register(AvailabilityRule)
class AvailabilityRuleAdmin(admin.ModelAdmin):
    list_display = (
        "content_id",
        "day_of_week",
        "start_time",
        "end_time",
        "max_capacity",
        "price",
        "currency",
        "is_active",
    )
    list_filter = ("is_active", "day_of_week", "currency")
    search_fields = ("content_id",)
    readonly_fields = ("created_at", "updated_at")
    inlines = [AvailabilityExceptionInline]

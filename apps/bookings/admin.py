"""Admin registration for bookings."""

from __future__ import annotations

from django.contrib import admin

from .models import BookingRequest, RecurringBooking, SlotReservation


@admin.register(BookingRequest)
class BookingRequestAdmin(admin.ModelAdmin):
    list_display = (
        "id",
        "booking_slot_id",
        "user",
        "party_size",
        "status",
        "total_price",
        "currency",
        "created_at",
    )
    list_filter = ("status", "date", "currency")
    search_fields = ("booking_slot_id", "content_id", "user__email", "contact_email")
    # status and places change only through the booking engine
    readonly_fields = (
        "booking_slot_id",
        "content_id",
        "date",
        "start_time",
        "end_time",
        "party_size",
        "status",
        "transaction",
        "confirmed_at",
        "cancelled_at",
        "created_at",
        "updated_at",
    )


@admin.register(SlotReservation)
class SlotReservationAdmin(admin.ModelAdmin):
    list_display = ("slot_id", "reserved", "version", "updated_at")
    search_fields = ("slot_id", "content_id")
    readonly_fields = ("slot_id", "content_id", "date", "start_time", "reserved", "version", "updated_at")


@admin.register(RecurringBooking)
class RecurringBookingAdmin(admin.ModelAdmin):
    list_display = ("id", "content_id", "user", "pattern", "frequency", "start_date", "end_date", "is_active")
    list_filter = ("pattern", "is_active")
    search_fields = ("content_id", "user__email")

"""Booking models: requests, the slot capacity ledger and recurring templates."""

from __future__ import annotations

from decimal import Decimal

from django.conf import settings  # type: ignore
from django.db import models  # type: ignore
from django.utils.translation import gettext_lazy as _  # type: ignore


class BookingRequest(models.Model):
    """A party's booking of one slot."""

    class Status(models.TextChoices):
        PENDING = "pending", _("Pending")
        CONFIRMED = "confirmed", _("Confirmed")
        CANCELLED = "cancelled", _("Cancelled")
        COMPLETED = "completed", _("Completed")
        NO_SHOW = "no_show", _("No-show")

    ACTIVE_STATUSES = (Status.PENDING, Status.CONFIRMED)

    user = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name="booking_requests",
    )
    content_id = models.CharField(max_length=64, db_index=True)
    booking_slot_id = models.CharField(max_length=96, db_index=True)
    date = models.DateField()
    start_time = models.TimeField()
    end_time = models.TimeField()
    party_size = models.PositiveIntegerField(default=1)
    total_price = models.DecimalField(max_digits=12, decimal_places=2, default=Decimal("0.00"))
    currency = models.CharField(max_length=3, default="EUR")
    status = models.CharField(
        max_length=16,
        choices=Status.choices,
        default=Status.PENDING,
    )
    special_requests = models.TextField(blank=True)
    contact_name = models.CharField(max_length=255, blank=True)
    contact_email = models.EmailField(blank=True)
    contact_phone = models.CharField(max_length=32, blank=True)
    recurring_booking = models.ForeignKey(
        "bookings.RecurringBooking",
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="bookings",
    )
    transaction = models.OneToOneField(
        "finances.Transaction",
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="booking_request",
        help_text=_("Payment transaction opened together with the booking."),
    )
    payment_reference = models.CharField(max_length=128, blank=True)
    cancellation_reason = models.CharField(max_length=255, blank=True)
    confirmed_at = models.DateTimeField(null=True, blank=True)
    cancelled_at = models.DateTimeField(null=True, blank=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = "booking_requests"
        verbose_name = _("Booking request")
        verbose_name_plural = _("Booking requests")
        ordering = ["date", "start_time", "id"]
        constraints = [
            models.CheckConstraint(
                condition=models.Q(party_size__gte=1),
                name="booking_request_positive_party",
            ),
        ]
        indexes = [
            models.Index(fields=["booking_slot_id", "status"], name="booking_req_slot_status_idx"),
            models.Index(fields=["content_id", "date"], name="booking_req_content_date_idx"),
            models.Index(fields=["user", "status"], name="booking_req_user_status_idx"),
        ]

    def __str__(self) -> str:
        return f"Booking #{self.pk} {self.booking_slot_id} x{self.party_size} ({self.status})"

    @property
    def holds_capacity(self) -> bool:
        return self.status in self.ACTIVE_STATUSES


class SlotReservation(models.Model):
    """Capacity ledger: reserved party total of one slot.

    Only changed by conditional UPDATE statements inside the same atomic
    block as the booking status change.
    """

    slot_id = models.CharField(max_length=96, unique=True)
    content_id = models.CharField(max_length=64, db_index=True)
    date = models.DateField()
    start_time = models.TimeField()
    reserved = models.PositiveIntegerField(default=0)
    version = models.PositiveIntegerField(default=0)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = "slot_reservations"
        verbose_name = _("Slot reservation")
        verbose_name_plural = _("Slot reservations")
        constraints = [
            models.CheckConstraint(
                condition=models.Q(reserved__gte=0),
                name="slot_reservation_non_negative",
            ),
        ]

    def __str__(self) -> str:
        return f"{self.slot_id}: {self.reserved} reserved (v{self.version})"


class RecurringBooking(models.Model):
    """Template that expands into individual booking requests."""

    class Pattern(models.TextChoices):
        DAILY = "daily", _("Daily")
        WEEKLY = "weekly", _("Weekly")
        MONTHLY = "monthly", _("Monthly")

    user = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name="recurring_bookings",
    )
    content_id = models.CharField(max_length=64, db_index=True)
    pattern = models.CharField(max_length=10, choices=Pattern.choices)
    start_date = models.DateField()
    end_date = models.DateField()
    start_time = models.TimeField()
    end_time = models.TimeField()
    frequency = models.PositiveSmallIntegerField(default=1)
    max_occurrences = models.PositiveIntegerField(null=True, blank=True)
    party_size = models.PositiveIntegerField(default=1)
    special_requests = models.TextField(blank=True)
    is_active = models.BooleanField(default=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = "recurring_bookings"
        verbose_name = _("Recurring booking")
        verbose_name_plural = _("Recurring bookings")
        ordering = ["-created_at"]
        constraints = [
            models.CheckConstraint(
                condition=models.Q(end_date__gte=models.F("start_date")),
                name="recurring_booking_valid_range",
            ),
            models.CheckConstraint(
                condition=models.Q(frequency__gte=1),
                name="recurring_booking_positive_frequency",
            ),
        ]

    def __str__(self) -> str:
        return f"{self.content_id} {self.pattern}/{self.frequency} {self.start_date}..{self.end_date}"

"""Financial transaction model."""

from __future__ import annotations

from decimal import Decimal

from django.conf import settings  # type: ignore
from django.db import models  # type: ignore
from django.utils import timezone  # type: ignore
from django.utils.translation import gettext_lazy as _  # type: ignore


class Transaction(models.Model):
    """Monetary transaction opened for a booking."""

    class Category(models.TextChoices):
        BOOKINGS_RESERVATIONS = "bookings_reservations", _("Bookings & reservations")

    class Subtype(models.TextChoices):
        APPOINTMENT_BOOKING = "appointment_booking", _("Appointment booking")
        RECURRING_BOOKING = "recurring_booking", _("Recurring booking")

    class Status(models.TextChoices):
        PENDING = "pending", _("Pending")
        SUCCEEDED = "succeeded", _("Succeeded")
        FAILED = "failed", _("Failed")
        CANCELLED = "cancelled", _("Cancelled")

    user = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name="finance_transactions",
    )
    content_id = models.CharField(max_length=64, db_index=True)
    category = models.CharField(
        max_length=32,
        choices=Category.choices,
        default=Category.BOOKINGS_RESERVATIONS,
    )
    subtype = models.CharField(
        max_length=32,
        choices=Subtype.choices,
        default=Subtype.APPOINTMENT_BOOKING,
    )
    amount = models.DecimalField(max_digits=12, decimal_places=2, default=Decimal("0.00"))
    currency = models.CharField(max_length=3, default="EUR")
    status = models.CharField(max_length=16, choices=Status.choices, default=Status.PENDING)
    payment_reference = models.CharField(max_length=128, blank=True)
    description = models.CharField(max_length=255, blank=True)
    metadata = models.JSONField(default=dict, blank=True)
    completed_at = models.DateTimeField(null=True, blank=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = "finance_transactions"
        verbose_name = _("Transaction")
        verbose_name_plural = _("Transactions")
        ordering = ["-created_at", "-id"]
        indexes = [
            models.Index(fields=["content_id", "user", "status"], name="finance_txn_lookup_idx"),
        ]

    def __str__(self) -> str:
        return f"Transaction {self.pk} {self.amount} {self.currency} ({self.status})"

    def mark_succeeded(self, payment_reference: str = "") -> None:
        self.status = self.Status.SUCCEEDED
        if payment_reference:
            self.payment_reference = payment_reference
        self.completed_at = timezone.now()
        self.save(update_fields=["status", "payment_reference", "completed_at", "updated_at"])

    def mark_failed(self, reason: str | None = None) -> None:
        self.status = self.Status.FAILED
        if reason:
            self.metadata["failure_reason"] = reason
        self.save(update_fields=["status", "metadata", "updated_at"])

    def mark_cancelled(self, reason: str | None = None) -> None:
        self.status = self.Status.CANCELLED
        if reason:
            self.metadata["cancellation_reason"] = reason
        self.save(update_fields=["status", "metadata", "updated_at"])

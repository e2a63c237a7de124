"""Waitlist models."""

from __future__ import annotations

from django.conf import settings  # type: ignore
from django.db import models  # type: ignore
from django.utils.translation import gettext_lazy as _  # type: ignore


class WaitlistEntryQuerySet(models.QuerySet):
    def for_slot(self, content_id: str, preferred_date, preferred_time):
        return self.filter(
            content_id=content_id,
            preferred_date=preferred_date,
            preferred_time=preferred_time,
        )


class WaitlistEntry(models.Model):
    """A party waiting for places on one slot."""

    user = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name="waitlist_entries",
    )
    content_id = models.CharField(max_length=64)
    preferred_date = models.DateField()
    preferred_time = models.TimeField()
    party_size = models.PositiveIntegerField(default=1)
    position = models.PositiveIntegerField(
        help_text=_("1-based place in the slot's queue (max existing + 1)."),
    )
    contact_email = models.EmailField(blank=True)
    contact_phone = models.CharField(max_length=32, blank=True)
    created_at = models.DateTimeField(auto_now_add=True)

    objects = WaitlistEntryQuerySet.as_manager()

    class Meta:
        db_table = "waitlist"
        verbose_name = _("Waitlist entry")
        verbose_name_plural = _("Waitlist entries")
        ordering = ["content_id", "preferred_date", "preferred_time", "position"]
        constraints = [
            models.UniqueConstraint(
                fields=["user", "content_id", "preferred_date", "preferred_time"],
                name="waitlist_unique_user_slot",
            ),
            models.UniqueConstraint(
                fields=["content_id", "preferred_date", "preferred_time", "position"],
                name="waitlist_unique_slot_position",
            ),
            models.CheckConstraint(
                condition=models.Q(party_size__gte=1),
                name="waitlist_positive_party",
            ),
        ]
        indexes = [
            models.Index(
                fields=["content_id", "preferred_date", "preferred_time", "position"],
                name="waitlist_slot_queue_idx",
            ),
        ]

    def __str__(self) -> str:
        return (
            f"#{self.position} {self.content_id} {self.preferred_date} "
            f"{self.preferred_time:%H:%M} x{self.party_size}"
        )

"""Availability rule models."""

from __future__ import annotations

from decimal import Decimal

from django.core.validators import MaxValueValidator, MinValueValidator  # type: ignore
from django.db import models  # type: ignore
from django.utils.translation import gettext_lazy as _  # type: ignore


class AvailabilityRuleQuerySet(models.QuerySet):
    def active(self):
        return self.filter(is_active=True)

    def for_content(self, content_id: str):
        return self.filter(content_id=content_id)


class AvailabilityRule(models.Model):
    """Weekly opening window of one bookable content item."""

    class Weekday(models.IntegerChoices):
        MONDAY = 0, _("Monday")
        TUESDAY = 1, _("Tuesday")
        WEDNESDAY = 2, _("Wednesday")
        THURSDAY = 3, _("Thursday")
        FRIDAY = 4, _("Friday")
        SATURDAY = 5, _("Saturday")
        SUNDAY = 6, _("Sunday")

    content_id = models.CharField(max_length=64, db_index=True)
    day_of_week = models.PositiveSmallIntegerField(
        choices=Weekday.choices,
        validators=[MinValueValidator(0), MaxValueValidator(6)],
    )
    start_time = models.TimeField()
    end_time = models.TimeField()
    max_capacity = models.PositiveIntegerField(
        help_text=_("Total party size a single slot accepts."),
    )
    price = models.DecimalField(max_digits=10, decimal_places=2, default=Decimal("0.00"))
    currency = models.CharField(max_length=3, default="EUR")
    is_active = models.BooleanField(default=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    objects = AvailabilityRuleQuerySet.as_manager()

    class Meta:
        db_table = "availability_rules"
        verbose_name = _("Availability rule")
        verbose_name_plural = _("Availability rules")
        ordering = ["content_id", "day_of_week", "start_time", "id"]
        constraints = [
            models.CheckConstraint(
                condition=models.Q(start_time__lt=models.F("end_time")),
                name="availability_rule_valid_window",
            ),
            models.CheckConstraint(
                condition=models.Q(day_of_week__gte=0, day_of_week__lte=6),
                name="availability_rule_valid_weekday",
            ),
        ]
        indexes = [
            models.Index(
                fields=["content_id", "day_of_week", "is_active"],
                name="availability_rule_lookup_idx",
            ),
        ]

    def __str__(self) -> str:
        return (
            f"{self.content_id}: {self.get_day_of_week_display()} "
            f"{self.start_time:%H:%M}-{self.end_time:%H:%M}"
        )


class AvailabilityException(models.Model):
    """Per-date override of a rule: closed, or open with other capacity/price."""

    rule = models.ForeignKey(
        AvailabilityRule,
        on_delete=models.CASCADE,
        related_name="exceptions",
    )
    date = models.DateField()
    is_available = models.BooleanField(default=False)
    custom_price = models.DecimalField(max_digits=10, decimal_places=2, null=True, blank=True)
    custom_capacity = models.PositiveIntegerField(null=True, blank=True)
    reason = models.CharField(max_length=255, blank=True)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        db_table = "availability_exceptions"
        verbose_name = _("Availability exception")
        verbose_name_plural = _("Availability exceptions")
        ordering = ["date"]
        constraints = [
            models.UniqueConstraint(fields=["rule", "date"], name="availability_exception_unique_date"),
        ]

    def __str__(self) -> str:
        state = "open" if self.is_available else "closed"
        return f"{self.rule_id} @ {self.date} ({state})"

"""Shared setup for booking tests."""

from __future__ import annotations

from datetime import date, time
from decimal import Decimal

from django.contrib.auth import get_user_model

from apps.availability.models import AvailabilityRule
from apps.bookings.application.command_handlers import BookingDetails, ContactInfo

User = get_user_model()

CONTENT_ID = "studio-1"
MONDAY = date(2025, 3, 10)


def make_user(username: str = "guest", **extra):
    return User.objects.create_user(
        username=username,
        email=f"{username}@example.com",
        password="GuestPass123",
        **extra,
    )


def make_rule(
    day_of_week: int = 0,
    max_capacity: int = 4,
    price: str = "20.00",
    start: time = time(9),
    end: time = time(17),
    content_id: str = CONTENT_ID,
) -> AvailabilityRule:
    return AvailabilityRule.objects.create(
        content_id=content_id,
        day_of_week=day_of_week,
        start_time=start,
        end_time=end,
        max_capacity=max_capacity,
        price=Decimal(price),
    )


def details(
    slot_date: date = MONDAY,
    party_size: int = 1,
    start: time = time(9),
    end: time | None = None,
) -> BookingDetails:
    return BookingDetails(
        date=slot_date,
        start_time=start,
        end_time=end,
        party_size=party_size,
        contact_info=ContactInfo(name="Guest", email="guest@example.com", phone="+15550100"),
    )

"""Read side of availability: slot projection and capacity checks."""

from __future__ import annotations

import logging
from datetime import date, time
from itertools import islice

from django.db.models import Sum  # type: ignore

from shared.application.result import as_result
from shared.domain.errors import InvalidPartySizeError, InvalidRangeError
from shared.domain.value_objects import DateRange

from apps.bookings.conf import engine_setting
from apps.bookings.models import BookingRequest

from .domain.slots import (
    BookingSlot,
    ExceptionSnapshot,
    RuleSnapshot,
    SlotCheck,
    find_slot,
    generate_slots,
)
from .models import AvailabilityException, AvailabilityRule

logger = logging.getLogger(__name__)


def _date_range(start_date: date, end_date: date) -> DateRange:
    if start_date > end_date:
        raise InvalidRangeError(
            f"Start date ({start_date}) must not be after end date ({end_date})"
        )
    dates = DateRange(start_date, end_date)
    max_days = engine_setting("MAX_AVAILABILITY_DAYS")
    if len(dates) > max_days:
        raise InvalidRangeError(f"Availability can be requested for at most {max_days} days at once")
    return dates


def _booked_party_totals(content_id: str, dates: DateRange) -> dict[str, int]:
    rows = (
        BookingRequest.objects.filter(
            content_id=content_id,
            date__gte=dates.start_date,
            date__lte=dates.end_date,
            status__in=BookingRequest.ACTIVE_STATUSES,
        )
        .values("booking_slot_id")
        .annotate(total=Sum("party_size"))
    )
    return {row["booking_slot_id"]: row["total"] or 0 for row in rows}


def load_slots(content_id: str, dates: DateRange) -> list[BookingSlot]:
    """Load rules, exceptions and booking totals, then project the slots."""

    weekdays = {day.weekday() for day in islice(dates.days(), 7)}
    rules = [
        RuleSnapshot.from_model(rule)
        for rule in AvailabilityRule.objects.active()
        .for_content(content_id)
        .filter(day_of_week__in=weekdays)
    ]
    if not rules:
        return []

    exceptions = {
        (exception.rule_id, exception.date): ExceptionSnapshot.from_model(exception)
        for exception in AvailabilityException.objects.filter(
            rule_id__in=[rule.rule_id for rule in rules],
            date__gte=dates.start_date,
            date__lte=dates.end_date,
        )
    }
    booked = _booked_party_totals(content_id, dates)
    return generate_slots(rules, exceptions, booked, dates)


def evaluate_slot(content_id: str, slot_date: date, start_time: time, party_size: int) -> SlotCheck:
    """Capacity check for one party; raises for invalid input."""

    if party_size < 1:
        raise InvalidPartySizeError()

    slot = find_slot(load_slots(content_id, DateRange(slot_date, slot_date)), start_time)
    if slot is None:
        logger.debug(f"No slot for {content_id} on {slot_date} at {start_time}")
        return SlotCheck(available=False, slot=None, party_size=party_size)

    return SlotCheck(available=slot.can_fit(party_size), slot=slot, party_size=party_size)


@as_result
def get_availability(content_id: str, start_date: date, end_date: date) -> list[BookingSlot]:
    """Bookable slots of ``content_id`` for every date in the inclusive range."""

    dates = _date_range(start_date, end_date)
    slots = load_slots(content_id, dates)
    logger.debug(f"Generated {len(slots)} slots for {content_id} over {dates}")
    return slots


@as_result
def check_slot_availability(
    content_id: str,
    slot_date: date,
    start_time: time,
    party_size: int = 1,
) -> SlotCheck:
    return evaluate_slot(content_id, slot_date, start_time, party_size)

"""
Booking engine public operations

Every operation returns a ``shared.application.result.Result``: expected
failures come back as ``Result(success=False, error=..., code=...)``
instead of raising.

    result = create_booking_request(user.pk, "studio-1", BookingDetails(...))
    if not result:
        print(result.code, result.error)
"""

from __future__ import annotations

from typing import Optional

from shared.application.result import Result, as_result
from shared.domain.errors import InvalidStatusError, NotFoundError

from apps.availability.domain.slots import BookingSlot, SlotCheck
from apps.availability.queries import check_slot_availability, get_availability
from apps.availability.services import (
    ExceptionSpec,
    add_rule_exception,
    create_availability_rule,
    deactivate_rule,
    get_active_rules,
    remove_rule_exception,
)
from apps.waitlist.services import add_to_waitlist, get_waitlist, leave_waitlist, notify_waitlist

from .application.command_handlers import (
    BookingDetails,
    CancelBookingCommand,
    CancelBookingHandler,
    CloseBookingCommand,
    CloseBookingHandler,
    ConfirmBookingCommand,
    ConfirmBookingHandler,
    ContactInfo,
    CreateBookingRequestCommand,
    CreateBookingRequestHandler,
    CreateRecurringBookingCommand,
    CreateRecurringBookingHandler,
    RecurringDetails,
    RecurringOutcome,
    TimeSlot,
)
from .domain.entities import BookingStatus, RecurrencePattern
from .models import BookingRequest

__all__ = [
    "BookingDetails",
    "BookingSlot",
    "BookingStatus",
    "ContactInfo",
    "ExceptionSpec",
    "RecurrencePattern",
    "RecurringDetails",
    "RecurringOutcome",
    "Result",
    "SlotCheck",
    "TimeSlot",
    "add_rule_exception",
    "add_to_waitlist",
    "cancel_booking",
    "check_slot_availability",
    "complete_booking",
    "confirm_booking",
    "create_availability_rule",
    "create_booking_request",
    "create_recurring_booking",
    "deactivate_rule",
    "get_active_rules",
    "get_availability",
    "get_booking",
    "get_content_bookings",
    "get_user_bookings",
    "get_waitlist",
    "leave_waitlist",
    "mark_no_show",
    "notify_waitlist",
    "remove_rule_exception",
]


# ===== Commands =====

@as_result
def create_booking_request(user_id: int, content_id: str, details: BookingDetails) -> BookingRequest:
    return CreateBookingRequestHandler().handle(
        CreateBookingRequestCommand(user_id=user_id, content_id=content_id, details=details)
    )


@as_result
def confirm_booking(booking_id: int, payment_reference: str = "") -> BookingRequest:
    return ConfirmBookingHandler().handle(
        ConfirmBookingCommand(booking_id=booking_id, payment_reference=payment_reference or "")
    )


@as_result
def cancel_booking(booking_id: int, reason: str = "") -> BookingRequest:
    return CancelBookingHandler().handle(CancelBookingCommand(booking_id=booking_id, reason=reason or ""))


@as_result
def complete_booking(booking_id: int) -> BookingRequest:
    return CloseBookingHandler().handle(
        CloseBookingCommand(booking_id=booking_id, status=BookingStatus.COMPLETED)
    )


@as_result
def mark_no_show(booking_id: int) -> BookingRequest:
    return CloseBookingHandler().handle(
        CloseBookingCommand(booking_id=booking_id, status=BookingStatus.NO_SHOW)
    )


@as_result
def create_recurring_booking(user_id: int, content_id: str, details: RecurringDetails) -> RecurringOutcome:
    return CreateRecurringBookingHandler().handle(
        CreateRecurringBookingCommand(user_id=user_id, content_id=content_id, details=details)
    )


# ===== Queries =====

def _status_filter(status: Optional[str]) -> Optional[str]:
    if status is None or status == "":
        return None
    try:
        return BookingStatus(status).value
    except ValueError as exc:
        raise InvalidStatusError(f"Unknown booking status: {status}") from exc


def _ordered(queryset, status: Optional[str]) -> list[BookingRequest]:
    status_value = _status_filter(status)
    if status_value is not None:
        queryset = queryset.filter(status=status_value)
    return list(queryset.order_by("date", "start_time", "id"))


@as_result
def get_user_bookings(user_id: int, status: Optional[str] = None) -> list[BookingRequest]:
    return _ordered(BookingRequest.objects.filter(user_id=user_id), status)


@as_result
def get_content_bookings(content_id: str, status: Optional[str] = None) -> list[BookingRequest]:
    return _ordered(BookingRequest.objects.filter(content_id=content_id), status)


@as_result
def get_booking(booking_id: int) -> BookingRequest:
    booking = BookingRequest.objects.filter(pk=booking_id).first()
    if booking is None:
        raise NotFoundError(f"Booking {booking_id} not found")
    return booking


"""
Booking Command Handlers

These are the use cases for the booking domain.
They orchestrate domain operations within transactions.

Commands:
- CreateBookingRequestCommand: Book one slot for a party
- ConfirmBookingCommand: Confirm a pending booking (optionally with payment)
- CancelBookingCommand: Cancel a booking and release its capacity
- CloseBookingCommand: Mark a booking completed or no-show after the slot
- CreateRecurringBookingCommand: Expand a recurring template into bookings

Handlers raise ``BookingEngineError`` subclasses; the public operations in
``apps.bookings.engine`` turn them into ``Result`` values.
"""

from dataclasses import dataclass, field
from datetime import date, time
from typing import Callable, List, Optional
import logging

from django.utils import timezone

from shared.application.result import as_result
from shared.application.uow import DjangoUnitOfWork
from shared.domain.errors import (
    InvalidPartySizeError,
    InvalidTransitionError,
    NotFoundError,
    SlotUnavailableError,
    TransactionFailedError,
    ValidationFailedError,
)
from shared.infrastructure.locking import lock_queryset_if_possible

from apps.availability.queries import evaluate_slot
from apps.bookings.domain.entities import BookingStatus, RecurrencePattern
from apps.bookings.domain.events import (
    BookingCancelled,
    BookingClosed,
    BookingConfirmed,
    BookingRequested,
    RecurringBookingPlanned,
)
from apps.bookings.domain.recurrence import RecurrenceSchedule
from apps.bookings.models import BookingRequest, RecurringBooking
from apps.bookings.services import release_slot_capacity, reserve_slot_capacity
from apps.finances import services as finance_services
from apps.finances.models import Transaction

logger = logging.getLogger(__name__)


# ===== Input values =====

@dataclass(frozen=True)
class ContactInfo:
    name: str = ''
    email: str = ''
    phone: str = ''


@dataclass(frozen=True)
class BookingDetails:
    """What a party asks for when booking one slot"""
    date: date
    start_time: time
    end_time: Optional[time] = None
    party_size: int = 1
    special_requests: str = ''
    contact_info: ContactInfo = field(default_factory=ContactInfo)


@dataclass(frozen=True)
class TimeSlot:
    start_time: time
    end_time: time


@dataclass(frozen=True)
class RecurringDetails:
    """Template of a recurring booking"""
    pattern: RecurrencePattern
    start_date: date
    end_date: date
    time_slot: TimeSlot
    frequency: int = 1
    max_occurrences: Optional[int] = None
    party_size: int = 1
    special_requests: str = ''
    contact_info: Optional[ContactInfo] = None


@dataclass
class RecurringOutcome:
    """Template plus what happened to each generated occurrence"""
    recurring_booking: RecurringBooking
    individual_bookings: List[BookingRequest] = field(default_factory=list)
    attempted_dates: List[date] = field(default_factory=list)
    skipped_dates: List[date] = field(default_factory=list)


# ===== Commands =====

@dataclass
class CreateBookingRequestCommand:
    """
    Command to book one slot

    This is the primary entry point for creating bookings.
    """
    user_id: int
    content_id: str
    details: BookingDetails
    recurring_booking_id: Optional[int] = None


@dataclass
class ConfirmBookingCommand:
    """Command to confirm a pending booking"""
    booking_id: int
    payment_reference: str = ''


@dataclass
class CancelBookingCommand:
    """Command to cancel a booking"""
    booking_id: int
    reason: str = ''


@dataclass
class CloseBookingCommand:
    """Command to end a booking after its slot (completed or no-show)"""
    booking_id: int
    status: BookingStatus = BookingStatus.COMPLETED


@dataclass
class CreateRecurringBookingCommand:
    user_id: int
    content_id: str
    details: RecurringDetails


# ===== Helpers =====

def _get_booking_for_update(booking_id: int) -> BookingRequest:
    booking = lock_queryset_if_possible(
        BookingRequest.objects.filter(pk=booking_id)
    ).first()
    if booking is None:
        raise NotFoundError(f"Booking {booking_id} not found")
    return booking


def _ensure_transition(booking: BookingRequest, target: BookingStatus):
    current = BookingStatus(booking.status)
    if not current.can_transition_to(target):
        raise InvalidTransitionError(
            f"Booking {booking.pk} cannot move from {current.value} to {target.value}"
        )


# ===== Command Handlers =====

class CreateBookingRequestHandler:
    """
    Handler for booking one slot

    Strategy:
    1. Capacity check against the projected slot (fast rejection)
    2. Start database transaction (atomic)
    3. Reserve capacity in the slot ledger (locked row + conditional UPDATE)
    4. Persist the BookingRequest as pending
    5. Open the finance transaction; failure rolls everything back
    6. Commit, then publish BookingRequested and ledger events
    """

    def __init__(
        self,
        slot_checker: Callable = None,
        reserve_capacity: Callable = None,
        open_transaction: Callable = None,
    ):
        self.slot_checker = slot_checker or evaluate_slot
        self.reserve_capacity = reserve_capacity or reserve_slot_capacity
        self.open_transaction = open_transaction or finance_services.open_booking_transaction

    def handle(self, command: CreateBookingRequestCommand) -> BookingRequest:
        details = command.details
        logger.info(
            f"Creating booking for content {command.content_id}, user {command.user_id}, "
            f"slot {details.date} {details.start_time:%H:%M}, party {details.party_size}"
        )

        if details.party_size < 1:
            raise InvalidPartySizeError()

        check = self.slot_checker(
            command.content_id, details.date, details.start_time, details.party_size
        )
        if not check.available or check.slot is None:
            raise SlotUnavailableError()

        slot = check.slot
        if details.end_time is not None and details.end_time != slot.end_time:
            raise ValidationFailedError(
                f"End time must match the slot end time {slot.end_time:%H:%M}"
            )
        total_price = slot.unit_price * details.party_size
        end_time = slot.end_time
        contact = details.contact_info
        subtype = (
            Transaction.Subtype.RECURRING_BOOKING
            if command.recurring_booking_id
            else Transaction.Subtype.APPOINTMENT_BOOKING
        )

        with DjangoUnitOfWork() as uow:
            capacity = self.reserve_capacity(slot, details.party_size)

            booking = BookingRequest.objects.create(
                user_id=command.user_id,
                content_id=command.content_id,
                booking_slot_id=slot.id,
                date=details.date,
                start_time=details.start_time,
                end_time=end_time,
                party_size=details.party_size,
                total_price=total_price.amount,
                currency=total_price.currency,
                status=BookingRequest.Status.PENDING,
                special_requests=details.special_requests,
                contact_name=contact.name,
                contact_email=contact.email,
                contact_phone=contact.phone,
                recurring_booking_id=command.recurring_booking_id,
            )

            try:
                txn = self.open_transaction(
                    command.user_id,
                    command.content_id,
                    total_price.amount,
                    total_price.currency,
                    {
                        'booking_id': booking.pk,
                        'booking_date': details.date.isoformat(),
                        'start_time': details.start_time.strftime('%H:%M'),
                        'end_time': end_time.strftime('%H:%M'),
                        'party_size': details.party_size,
                        'special_requests': details.special_requests,
                    },
                    subtype=subtype,
                )
            except finance_services.TransactionError as e:
                raise TransactionFailedError(f"Booking was not created: {e}") from e

            booking.transaction = txn
            booking.save(update_fields=['transaction', 'updated_at'])

            uow.collect_events(capacity)
            uow.record(BookingRequested(
                booking_id=booking.pk,
                user_id=command.user_id,
                content_id=command.content_id,
                slot_id=slot.id,
                party_size=details.party_size,
                total_price=total_price.amount,
                currency=total_price.currency,
                transaction_id=txn.pk,
                recurring_booking_id=command.recurring_booking_id,
            ))

        logger.info(f"Booking {booking.pk} created on {slot.id} ({total_price})")
        return booking


class ConfirmBookingHandler:
    """Handler for confirming a pending booking"""

    def handle(self, command: ConfirmBookingCommand) -> BookingRequest:
        logger.info(f"Confirming booking {command.booking_id}")

        with DjangoUnitOfWork() as uow:
            booking = _get_booking_for_update(command.booking_id)
            _ensure_transition(booking, BookingStatus.CONFIRMED)

            booking.status = BookingRequest.Status.CONFIRMED
            booking.confirmed_at = timezone.now()
            if command.payment_reference:
                booking.payment_reference = command.payment_reference
            booking.save(update_fields=['status', 'confirmed_at', 'payment_reference', 'updated_at'])

            if command.payment_reference:
                self._settle_payment(booking, command.payment_reference)

            uow.record(BookingConfirmed(
                booking_id=booking.pk,
                user_id=booking.user_id,
                content_id=booking.content_id,
                payment_reference=command.payment_reference,
            ))

        logger.info(f"Booking {booking.pk} confirmed")
        return booking

    def _settle_payment(self, booking: BookingRequest, payment_reference: str):
        transaction_id = booking.transaction_id
        if transaction_id is None:
            txn = finance_services.find_latest_pending_transaction(booking.content_id, booking.user_id)
            if txn is None:
                logger.warning(f"Booking {booking.pk} confirmed without a transaction to settle")
                return
            logger.warning(
                f"Booking {booking.pk} has no linked transaction; settling transaction {txn.pk} "
                f"matched heuristically by content and user"
            )
            transaction_id = txn.pk

        try:
            finance_services.mark_transaction_succeeded(transaction_id, payment_reference)
        except finance_services.TransactionError as e:
            raise TransactionFailedError(str(e)) from e


class CancelBookingHandler:
    """
    Handler for cancelling a booking

    Releases the booking's places in the ledger. Waitlist admission is not
    run here; the BookingCancelled event carries the freed capacity.
    """

    def handle(self, command: CancelBookingCommand) -> BookingRequest:
        logger.info(f"Cancelling booking {command.booking_id}, reason: {command.reason or '-'}")

        with DjangoUnitOfWork() as uow:
            booking = _get_booking_for_update(command.booking_id)
            _ensure_transition(booking, BookingStatus.CANCELLED)

            booking.status = BookingRequest.Status.CANCELLED
            booking.cancellation_reason = command.reason
            booking.cancelled_at = timezone.now()
            booking.save(update_fields=['status', 'cancellation_reason', 'cancelled_at', 'updated_at'])

            capacity = release_slot_capacity(booking)
            if capacity is not None:
                uow.collect_events(capacity)
            if booking.transaction_id:
                finance_services.cancel_pending_transaction(booking.transaction_id, command.reason)

            uow.record(BookingCancelled(
                booking_id=booking.pk,
                user_id=booking.user_id,
                content_id=booking.content_id,
                slot_date=booking.date,
                start_time=booking.start_time,
                freed_capacity=booking.party_size,
                reason=command.reason,
            ))

        logger.info(f"Booking {booking.pk} cancelled, {booking.party_size} places freed")
        return booking


class CloseBookingHandler:
    """Handler for completed / no-show transitions after the slot"""

    def handle(self, command: CloseBookingCommand) -> BookingRequest:
        if command.status not in (BookingStatus.COMPLETED, BookingStatus.NO_SHOW):
            raise ValidationFailedError(f"{command.status.value} is not a closing status")

        with DjangoUnitOfWork() as uow:
            booking = _get_booking_for_update(command.booking_id)
            _ensure_transition(booking, command.status)

            booking.status = command.status.value
            booking.save(update_fields=['status', 'updated_at'])

            capacity = release_slot_capacity(booking)
            if capacity is not None:
                uow.collect_events(capacity)

            uow.record(BookingClosed(
                booking_id=booking.pk,
                content_id=booking.content_id,
                status=command.status.value,
            ))

        logger.info(f"Booking {booking.pk} closed as {command.status.value}")
        return booking


class CreateRecurringBookingHandler:
    """
    Handler for recurring bookings

    The template is stored first. Each occurrence is then booked on its
    own; a failed occurrence is skipped and the expansion continues.
    ``max_occurrences`` caps the attempted dates, not the successful ones.
    """

    def __init__(self, create_handler: CreateBookingRequestHandler = None):
        self.create_handler = create_handler or CreateBookingRequestHandler()

    def handle(self, command: CreateRecurringBookingCommand) -> RecurringOutcome:
        details = command.details
        if details.party_size < 1:
            raise InvalidPartySizeError()
        if details.time_slot.start_time >= details.time_slot.end_time:
            raise ValidationFailedError("Start time must be before end time")
        try:
            pattern = RecurrencePattern(details.pattern)
        except ValueError as e:
            raise ValidationFailedError(f"Unknown recurrence pattern: {details.pattern}") from e

        schedule = RecurrenceSchedule(
            pattern=pattern,
            start_date=details.start_date,
            end_date=details.end_date,
            frequency=details.frequency,
            max_occurrences=details.max_occurrences,
        )

        template = RecurringBooking.objects.create(
            user_id=command.user_id,
            content_id=command.content_id,
            pattern=schedule.pattern.value,
            start_date=details.start_date,
            end_date=details.end_date,
            start_time=details.time_slot.start_time,
            end_time=details.time_slot.end_time,
            frequency=details.frequency,
            max_occurrences=details.max_occurrences,
            party_size=details.party_size,
            special_requests=details.special_requests,
        )
        logger.info(
            f"Recurring booking {template.pk} for {command.content_id}: "
            f"{schedule.pattern.value}/{details.frequency} {details.start_date}..{details.end_date}"
        )

        outcome = RecurringOutcome(recurring_booking=template)
        create_booking = as_result(self.create_handler.handle)
        contact = details.contact_info or ContactInfo()

        for occurrence in schedule:
            outcome.attempted_dates.append(occurrence)
            result = create_booking(CreateBookingRequestCommand(
                user_id=command.user_id,
                content_id=command.content_id,
                details=BookingDetails(
                    date=occurrence,
                    start_time=details.time_slot.start_time,
                    end_time=details.time_slot.end_time,
                    party_size=details.party_size,
                    special_requests=details.special_requests,
                    contact_info=contact,
                ),
                recurring_booking_id=template.pk,
            ))
            if result.success:
                outcome.individual_bookings.append(result.value)
            else:
                logger.info(f"Skipping occurrence {occurrence} of recurring booking {template.pk}: {result.error}")
                outcome.skipped_dates.append(occurrence)

        with DjangoUnitOfWork() as uow:
            uow.record(RecurringBookingPlanned(
                recurring_booking_id=template.pk,
                user_id=command.user_id,
                content_id=command.content_id,
                attempted=len(outcome.attempted_dates),
                booked=len(outcome.individual_bookings),
            ))

        logger.info(
            f"Recurring booking {template.pk}: {len(outcome.individual_bookings)} booked, "
            f"{len(outcome.skipped_dates)} skipped"
        )
        return outcome

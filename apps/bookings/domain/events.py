"""
Booking Domain Events

Events that represent things that have happened in the booking domain.
These are published after successful transaction commits.
"""

from dataclasses import dataclass
from datetime import date, time
from decimal import Decimal
from typing import Optional

from shared.domain.base import DomainEvent


# ===== Booking Events =====

@dataclass(kw_only=True)
class BookingRequested(DomainEvent):
    """A booking request was accepted and holds capacity (status pending)"""
    booking_id: int
    user_id: int
    content_id: str
    slot_id: str
    party_size: int
    total_price: Decimal
    currency: str
    transaction_id: Optional[int] = None
    recurring_booking_id: Optional[int] = None


@dataclass(kw_only=True)
class BookingConfirmed(DomainEvent):
    """PENDING -> CONFIRMED"""
    booking_id: int
    user_id: int
    content_id: str
    payment_reference: str = ''


@dataclass(kw_only=True)
class BookingCancelled(DomainEvent):
    """
    A booking was cancelled and its capacity released

    Carries the slot coordinates and the freed party size so a subscriber
    (or the caller) can decide to run waitlist admission for the slot.
    """
    booking_id: int
    user_id: int
    content_id: str
    slot_date: date
    start_time: time
    freed_capacity: int
    reason: str = ''


@dataclass(kw_only=True)
class BookingClosed(DomainEvent):
    """The slot took place: the booking ended as completed or no-show"""
    booking_id: int
    content_id: str
    status: str


@dataclass(kw_only=True)
class RecurringBookingPlanned(DomainEvent):
    """A recurring template was expanded into individual bookings"""
    recurring_booking_id: int
    user_id: int
    content_id: str
    attempted: int
    booked: int


# ===== Capacity Ledger Events =====

@dataclass(kw_only=True)
class SlotCapacityReserved(DomainEvent):
    """Ledger reservation for a slot increased"""
    slot_id: str
    party_size: int
    reserved: int
    max_capacity: int


@dataclass(kw_only=True)
class SlotCapacityReleased(DomainEvent):
    """Ledger reservation for a slot decreased"""
    slot_id: str
    party_size: int
    reserved: int

"""
Booking Domain Enumerations

Closed sets used by the booking domain:
- BookingStatus: lifecycle states of a booking request and their transitions
- RecurrencePattern: stepping patterns of a recurring booking template
"""

from enum import Enum
from typing import FrozenSet


class BookingStatus(Enum):
    """
    Booking request lifecycle

    State transitions:
    - PENDING -> CONFIRMED (payment or explicit confirmation)
    - PENDING / CONFIRMED -> CANCELLED (user or operator cancelled)
    - PENDING / CONFIRMED -> COMPLETED (slot took place)
    - PENDING / CONFIRMED -> NO_SHOW (party did not turn up)
    """
    PENDING = 'pending'          # Holds capacity, waiting for payment
    CONFIRMED = 'confirmed'      # Paid / confirmed
    CANCELLED = 'cancelled'
    COMPLETED = 'completed'
    NO_SHOW = 'no_show'

    @classmethod
    def active(cls) -> FrozenSet['BookingStatus']:
        """Statuses that occupy slot capacity"""
        return frozenset({cls.PENDING, cls.CONFIRMED})

    @classmethod
    def terminal(cls) -> FrozenSet['BookingStatus']:
        return frozenset({cls.CANCELLED, cls.COMPLETED, cls.NO_SHOW})

    @property
    def is_terminal(self) -> bool:
        return self in self.terminal()

    @property
    def holds_capacity(self) -> bool:
        return self in self.active()

    def can_transition_to(self, target: 'BookingStatus') -> bool:
        return target in _TRANSITIONS[self]


_TRANSITIONS = {
    BookingStatus.PENDING: frozenset({
        BookingStatus.CONFIRMED,
        BookingStatus.CANCELLED,
        BookingStatus.COMPLETED,
        BookingStatus.NO_SHOW,
    }),
    BookingStatus.CONFIRMED: frozenset({
        BookingStatus.CANCELLED,
        BookingStatus.COMPLETED,
        BookingStatus.NO_SHOW,
    }),
    BookingStatus.CANCELLED: frozenset(),
    BookingStatus.COMPLETED: frozenset(),
    BookingStatus.NO_SHOW: frozenset(),
}


class RecurrencePattern(Enum):
    """How a recurring booking steps from one occurrence to the next"""
    DAILY = 'daily'        # every `frequency` days
    WEEKLY = 'weekly'      # every 7 * `frequency` days
    MONTHLY = 'monthly'    # every `frequency` calendar months

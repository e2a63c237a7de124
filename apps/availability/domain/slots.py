"""
Slot projection

Pure functions that turn weekly availability rules, per-date exceptions
and the current booking totals into concrete ``BookingSlot`` values.
Nothing in this module touches the database; the query layer loads the
inputs and hands them in, so the same inputs always give the same slots.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, time
from decimal import Decimal
from typing import Iterable, List, Mapping, Optional, Tuple

from shared.domain.base import ValueObject
from shared.domain.value_objects import DateRange, Money


def make_slot_id(content_id: str, slot_date: date, start_time: time) -> str:
    """Stable slot identifier, e.g. ``"studio-1:2025-03-10:09:00"``."""
    return f"{content_id}:{slot_date.isoformat()}:{start_time:%H:%M}"


@dataclass(frozen=True)
class RuleSnapshot(ValueObject):
    """Plain copy of an active availability rule."""
    rule_id: int
    content_id: str
    day_of_week: int
    start_time: time
    end_time: time
    max_capacity: int
    price: Decimal
    currency: str = 'EUR'

    @classmethod
    def from_model(cls, rule) -> 'RuleSnapshot':
        return cls(
            rule_id=rule.pk,
            content_id=rule.content_id,
            day_of_week=rule.day_of_week,
            start_time=rule.start_time,
            end_time=rule.end_time,
            max_capacity=rule.max_capacity,
            price=rule.price,
            currency=rule.currency,
        )


@dataclass(frozen=True)
class ExceptionSnapshot(ValueObject):
    """Plain copy of a per-date rule exception."""
    rule_id: int
    date: date
    is_available: bool
    custom_price: Optional[Decimal] = None
    custom_capacity: Optional[int] = None

    @classmethod
    def from_model(cls, exception) -> 'ExceptionSnapshot':
        return cls(
            rule_id=exception.rule_id,
            date=exception.date,
            is_available=exception.is_available,
            custom_price=exception.custom_price,
            custom_capacity=exception.custom_capacity,
        )


@dataclass(frozen=True)
class BookingSlot(ValueObject):
    """
    One bookable time window on one date

    Derived on every read and never stored. ``current_bookings`` is the
    summed party size of the pending and confirmed bookings on the slot.
    """
    id: str
    content_id: str
    rule_id: int
    date: date
    start_time: time
    end_time: time
    max_capacity: int
    current_bookings: int
    price: Decimal
    currency: str

    @property
    def is_available(self) -> bool:
        return self.current_bookings < self.max_capacity

    @property
    def remaining_capacity(self) -> int:
        return max(self.max_capacity - self.current_bookings, 0)

    @property
    def unit_price(self) -> Money:
        return Money(self.price, self.currency)

    def can_fit(self, party_size: int) -> bool:
        return self.is_available and self.current_bookings + party_size <= self.max_capacity


@dataclass(frozen=True)
class SlotCheck(ValueObject):
    """Answer of the capacity checker for one party on one slot."""
    available: bool
    slot: Optional[BookingSlot] = None
    party_size: int = 1


ExceptionKey = Tuple[int, date]


def generate_slots(
    rules: Iterable[RuleSnapshot],
    exceptions: Mapping[ExceptionKey, ExceptionSnapshot],
    booked: Mapping[str, int],
    dates: DateRange,
) -> List[BookingSlot]:
    """
    Materialise the slots of ``rules`` for every date in ``dates``

    A closed exception removes the rule from that date; an open one may
    replace its capacity and/or price. Output is ordered by
    ``(date, start_time, rule_id)``.
    """
    rules_by_weekday: dict[int, List[RuleSnapshot]] = {}
    for rule in rules:
        rules_by_weekday.setdefault(rule.day_of_week, []).append(rule)

    slots: List[BookingSlot] = []
    for day in dates.days():
        for rule in rules_by_weekday.get(day.weekday(), []):
            exception = exceptions.get((rule.rule_id, day))
            if exception is not None and not exception.is_available:
                continue

            max_capacity = rule.max_capacity
            price = rule.price
            if exception is not None:
                if exception.custom_capacity is not None:
                    max_capacity = exception.custom_capacity
                if exception.custom_price is not None:
                    price = exception.custom_price

            slot_id = make_slot_id(rule.content_id, day, rule.start_time)
            slots.append(BookingSlot(
                id=slot_id,
                content_id=rule.content_id,
                rule_id=rule.rule_id,
                date=day,
                start_time=rule.start_time,
                end_time=rule.end_time,
                max_capacity=max_capacity,
                current_bookings=booked.get(slot_id, 0),
                price=price,
                currency=rule.currency,
            ))

    slots.sort(key=lambda slot: (slot.date, slot.start_time, slot.rule_id))
    return slots


def find_slot(slots: Iterable[BookingSlot], start_time: time) -> Optional[BookingSlot]:
    """First slot starting exactly at ``start_time``."""
    return next((slot for slot in slots if slot.start_time == start_time), None)

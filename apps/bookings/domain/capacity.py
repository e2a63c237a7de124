"""
Slot Capacity Aggregate

Consistency boundary for per-slot capacity. Every reservation of slot
capacity goes through this aggregate and through the ``SlotReservation``
ledger row that backs it.

Strategy:
1. Domain validation: ``can_reserve()`` against the loaded ledger state
2. Pessimistic locking: SELECT FOR UPDATE on the ledger row (PostgreSQL)
3. Conditional UPDATE: ``reserved + n <= max_capacity`` in the WHERE clause,
   zero updated rows means the slot filled up in between
"""

from dataclasses import dataclass

from shared.domain.base import Aggregate
from shared.domain.errors import InvalidPartySizeError, SlotUnavailableError

from apps.bookings.domain.events import SlotCapacityReleased, SlotCapacityReserved


@dataclass(eq=False)
class SlotCapacity(Aggregate):
    """
    Slot Capacity Aggregate Root

    Key invariants:
    - 0 <= reserved <= max_capacity after every accepted reservation
    - party sizes are positive

    Usage:
        capacity = SlotCapacity(slot_id=slot.id, max_capacity=4, reserved=3)
        capacity.can_reserve(2)   # False
        capacity.reserve(1)       # reserved == 4, SlotCapacityReserved queued
    """

    slot_id: str = ''
    max_capacity: int = 0
    reserved: int = 0
    version: int = 0

    def __post_init__(self):
        if self.reserved < 0:
            raise ValueError("Reserved capacity cannot be negative")

    @property
    def remaining(self) -> int:
        return max(self.max_capacity - self.reserved, 0)

    def can_reserve(self, party_size: int) -> bool:
        return party_size >= 1 and self.reserved + party_size <= self.max_capacity

    def reserve(self, party_size: int):
        """
        Take ``party_size`` places from the slot

        Raises:
            InvalidPartySizeError: party_size < 1
            SlotUnavailableError: the slot has fewer than party_size places left
        """
        if party_size < 1:
            raise InvalidPartySizeError()
        if not self.can_reserve(party_size):
            raise SlotUnavailableError()

        self.reserved += party_size
        self.version += 1
        self.add_event(SlotCapacityReserved(
            slot_id=self.slot_id,
            party_size=party_size,
            reserved=self.reserved,
            max_capacity=self.max_capacity,
        ))

    def release(self, party_size: int) -> int:
        """Give places back, never below zero. Returns the amount released."""
        released = min(party_size, self.reserved)
        self.reserved -= released
        self.version += 1
        self.add_event(SlotCapacityReleased(
            slot_id=self.slot_id,
            party_size=released,
            reserved=self.reserved,
        ))
        return released

    def __str__(self):
        return f"SlotCapacity({self.slot_id}: {self.reserved}/{self.max_capacity})"

"""Slot capacity aggregate and ledger."""

from __future__ import annotations

from datetime import time
from decimal import Decimal

import pytest
from django.db import transaction

from shared.domain.errors import InvalidPartySizeError, SlotUnavailableError

from apps.availability.domain.slots import BookingSlot, make_slot_id
from apps.bookings.domain.capacity import SlotCapacity
from apps.bookings.domain.events import SlotCapacityReleased, SlotCapacityReserved
from apps.bookings.models import BookingRequest, SlotReservation
from apps.bookings.services import ledger_reserved, release_slot_capacity, reserve_slot_capacity

from .helpers import CONTENT_ID, MONDAY, make_user


def make_booking(user, slot: BookingSlot, party_size: int = 1, **extra) -> BookingRequest:
    return BookingRequest.objects.create(
        user=user,
        content_id=CONTENT_ID,
        booking_slot_id=slot.id,
        date=MONDAY,
        start_time=time(9),
        end_time=time(17),
        party_size=party_size,
        **extra,
    )


def make_ledger_row(slot: BookingSlot, reserved: int) -> SlotReservation:
    return SlotReservation.objects.create(
        slot_id=slot.id,
        content_id=CONTENT_ID,
        date=MONDAY,
        start_time=time(9),
        reserved=reserved,
    )


def make_slot(max_capacity: int = 4) -> BookingSlot:
    return BookingSlot(
        id=make_slot_id(CONTENT_ID, MONDAY, time(9)),
        content_id=CONTENT_ID,
        rule_id=1,
        date=MONDAY,
        start_time=time(9),
        end_time=time(17),
        max_capacity=max_capacity,
        current_bookings=0,
        price=Decimal("20.00"),
        currency="EUR",
    )


def test_reserve_up_to_capacity():
    capacity = SlotCapacity(slot_id="s", max_capacity=4, reserved=3)

    assert not capacity.can_reserve(2)
    capacity.reserve(1)

    assert capacity.reserved == 4
    assert capacity.remaining == 0
    assert isinstance(capacity.events[-1], SlotCapacityReserved)


def test_reserve_rejects_overflow_and_empty_party():
    capacity = SlotCapacity(slot_id="s", max_capacity=2)

    with pytest.raises(SlotUnavailableError):
        capacity.reserve(3)
    with pytest.raises(InvalidPartySizeError):
        capacity.reserve(0)
    assert capacity.events == []


def test_release_never_goes_below_zero():
    capacity = SlotCapacity(slot_id="s", max_capacity=4, reserved=1)

    released = capacity.release(3)

    assert released == 1
    assert capacity.reserved == 0
    assert isinstance(capacity.events[-1], SlotCapacityReleased)


@pytest.mark.django_db
def test_ledger_row_is_seeded_from_existing_bookings():
    user = make_user()
    slot = make_slot()
    make_booking(user, slot, party_size=3)

    with transaction.atomic():
        reserve_slot_capacity(slot, 1)
        make_booking(user, slot)
        with pytest.raises(SlotUnavailableError):
            reserve_slot_capacity(slot, 1)

    assert ledger_reserved(slot.id) == 4
    assert SlotReservation.objects.get(slot_id=slot.id).version == 1


@pytest.mark.django_db
def test_release_without_ledger_row_is_a_no_op():
    user = make_user()
    booking = BookingRequest.objects.create(
        user=user,
        content_id=CONTENT_ID,
        booking_slot_id="unknown:2025-03-10:09:00",
        date=MONDAY,
        start_time=time(9),
        end_time=time(17),
    )

    assert release_slot_capacity(booking) is None


@pytest.mark.django_db
def test_overcounted_ledger_row_is_realigned_before_reserving():
    slot = make_slot(max_capacity=1)
    make_ledger_row(slot, reserved=1)
    make_booking(make_user(), slot, status=BookingRequest.Status.CANCELLED)

    with transaction.atomic():
        capacity = reserve_slot_capacity(slot, 1)

    assert capacity.reserved == 1
    assert ledger_reserved(slot.id) == 1


@pytest.mark.django_db
def test_undercounted_ledger_row_still_rejects_full_slot():
    slot = make_slot(max_capacity=2)
    make_ledger_row(slot, reserved=0)
    make_booking(make_user(), slot, party_size=2)

    with transaction.atomic():
        with pytest.raises(SlotUnavailableError):
            reserve_slot_capacity(slot, 1)

    assert ledger_reserved(slot.id) == 2


@pytest.mark.django_db
def test_release_rewrites_row_to_active_total():
    user = make_user()
    slot = make_slot()
    make_ledger_row(slot, reserved=4)
    make_booking(user, slot, party_size=1)
    cancelled = make_booking(user, slot, party_size=2, status=BookingRequest.Status.CANCELLED)

    with transaction.atomic():
        capacity = release_slot_capacity(cancelled)

    assert capacity.reserved == 1
    assert ledger_reserved(slot.id) == 1

"""Capacity ledger services for booking workflows."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from django.db import IntegrityError, transaction  # type: ignore
from django.db.models import F, Sum  # type: ignore

from shared.domain.errors import SlotUnavailableError
from shared.infrastructure.locking import lock_queryset_if_possible

from .domain.capacity import SlotCapacity
from .models import BookingRequest, SlotReservation

if TYPE_CHECKING:  # pragma: no cover - type checking only
    from apps.availability.domain.slots import BookingSlot

logger = logging.getLogger(__name__)


def _active_party_total(slot_id: str) -> int:
    total = BookingRequest.objects.filter(
        booking_slot_id=slot_id,
        status__in=BookingRequest.ACTIVE_STATUSES,
    ).aggregate(total=Sum("party_size"))["total"]
    return total or 0


def _locked_ledger_row(slot: "BookingSlot") -> SlotReservation:
    """Fetch the slot's ledger row under lock, creating it on first use.

    A new row starts from the party total of the bookings already on the
    slot. Losing the creation race to another request re-reads the winner.
    """

    row = lock_queryset_if_possible(SlotReservation.objects.filter(slot_id=slot.id)).first()
    if row is not None:
        return row

    try:
        with transaction.atomic():
            return SlotReservation.objects.create(
                slot_id=slot.id,
                content_id=slot.content_id,
                date=slot.date,
                start_time=slot.start_time,
                reserved=_active_party_total(slot.id),
            )
    except IntegrityError:
        logger.debug(f"Ledger row for {slot.id} created concurrently, re-reading")
        return lock_queryset_if_possible(SlotReservation.objects.filter(slot_id=slot.id)).get()


def _reconcile(row: SlotReservation) -> SlotReservation:
    """Align the locked ledger row with the active bookings on its slot.

    Status or party size changed outside the booking handlers leaves the
    stored counter behind; the booking rows are authoritative.
    """

    actual = _active_party_total(row.slot_id)
    if actual != row.reserved:
        logger.warning(
            f"Ledger for {row.slot_id} drifted: stored {row.reserved}, active bookings hold {actual}"
        )
        SlotReservation.objects.filter(pk=row.pk).update(reserved=actual, version=F("version") + 1)
        row.reserved = actual
        row.version += 1
    return row


def reserve_slot_capacity(slot: "BookingSlot", party_size: int) -> SlotCapacity:
    """Reserve ``party_size`` places of ``slot`` in the ledger.

    Must run inside ``transaction.atomic()`` together with the write of
    the booking that holds the places.

    Raises:
        SlotUnavailableError: the ledger has fewer than party_size places left
    """

    row = _reconcile(_locked_ledger_row(slot))
    capacity = SlotCapacity(
        slot_id=slot.id,
        max_capacity=slot.max_capacity,
        reserved=row.reserved,
        version=row.version,
    )
    capacity.reserve(party_size)

    updated = SlotReservation.objects.filter(
        pk=row.pk,
        reserved__lte=slot.max_capacity - party_size,
    ).update(reserved=F("reserved") + party_size, version=F("version") + 1)
    if updated == 0:
        logger.info(f"Slot {slot.id} filled up before party of {party_size} could be reserved")
        raise SlotUnavailableError()

    logger.debug(f"Reserved {party_size} on {slot.id}: {capacity.reserved}/{slot.max_capacity}")
    return capacity


def release_slot_capacity(booking: BookingRequest) -> SlotCapacity | None:
    """Give a booking's places back to the ledger. No ledger row, nothing to release.

    Called after the booking was saved with its non-active status, so the
    row is rewritten to the active total of the slot.
    """

    row = lock_queryset_if_possible(
        SlotReservation.objects.filter(slot_id=booking.booking_slot_id)
    ).first()
    if row is None:
        return None

    capacity = SlotCapacity(
        slot_id=row.slot_id,
        reserved=row.reserved,
        version=row.version,
    )
    released = capacity.release(booking.party_size)
    actual = _active_party_total(row.slot_id)
    if actual != capacity.reserved:
        logger.warning(
            f"Ledger for {row.slot_id} drifted: {capacity.reserved} after release, "
            f"active bookings hold {actual}"
        )
        capacity.reserved = actual
    SlotReservation.objects.filter(pk=row.pk).update(
        reserved=actual,
        version=F("version") + 1,
    )
    logger.debug(f"Released {released} on {row.slot_id}: {capacity.reserved} reserved")
    return capacity


def ledger_reserved(slot_id: str) -> int:
    """Reserved total currently recorded for ``slot_id`` (0 without a row)."""

    return (
        SlotReservation.objects.filter(slot_id=slot_id).values_list("reserved", flat=True).first()
        or 0
    )

"""Waitlist manager."""

from __future__ import annotations

import logging
from datetime import date, time

from django.db import IntegrityError, transaction  # type: ignore
from django.db.models import Max  # type: ignore

from shared.application.result import as_result
from shared.application.uow import DjangoUnitOfWork
from shared.domain.errors import (
    DuplicateWaitlistEntryError,
    InvalidPartySizeError,
    NotFoundError,
    ValidationFailedError,
)
from shared.infrastructure.locking import lock_queryset_if_possible

from .domain.admission import QueuedParty, plan_admission
from .domain.events import WaitlistAdmitted
from .models import WaitlistEntry

logger = logging.getLogger(__name__)


@as_result
def add_to_waitlist(
    user_id: int,
    content_id: str,
    preferred_date: date,
    preferred_time: time,
    party_size: int = 1,
    contact_email: str = "",
    contact_phone: str = "",
) -> int:
    """Queue a party at the back of the slot's waitlist and return its position."""

    if party_size < 1:
        raise InvalidPartySizeError()

    slot_entries = WaitlistEntry.objects.for_slot(content_id, preferred_date, preferred_time)
    try:
        with transaction.atomic():
            locked = list(lock_queryset_if_possible(slot_entries).order_by("position"))
            if any(entry.user_id == user_id for entry in locked):
                raise DuplicateWaitlistEntryError()

            last_position = slot_entries.aggregate(last=Max("position"))["last"] or 0
            entry = WaitlistEntry.objects.create(
                user_id=user_id,
                content_id=content_id,
                preferred_date=preferred_date,
                preferred_time=preferred_time,
                party_size=party_size,
                position=last_position + 1,
                contact_email=contact_email,
                contact_phone=contact_phone,
            )
    except IntegrityError as exc:
        if slot_entries.filter(user_id=user_id).exists():
            raise DuplicateWaitlistEntryError() from exc
        raise

    logger.info(
        f"User {user_id} joined waitlist for {content_id} {preferred_date} "
        f"{preferred_time:%H:%M} at position {entry.position} (party {party_size})"
    )
    return entry.position


@as_result
def notify_waitlist(
    content_id: str,
    preferred_date: date,
    preferred_time: time,
    available_capacity: int,
) -> int:
    """Admit the waiting parties that fit into ``available_capacity`` places.

    Admitted entries leave the queue; the others keep their positions.
    Notifications go out after the admission has committed.
    """

    if available_capacity < 0:
        raise ValidationFailedError("available_capacity cannot be negative")

    with DjangoUnitOfWork() as uow:
        entries = {
            entry.pk: entry
            for entry in lock_queryset_if_possible(
                WaitlistEntry.objects.for_slot(content_id, preferred_date, preferred_time)
            ).order_by("position")
        }
        plan = plan_admission(
            (QueuedParty(entry_id=e.pk, position=e.position, party_size=e.party_size) for e in entries.values()),
            available_capacity,
        )

        admitted_ids = [party.entry_id for party in plan.admitted]
        if admitted_ids:
            WaitlistEntry.objects.filter(pk__in=admitted_ids).delete()

        for party in plan.admitted:
            entry = entries[party.entry_id]
            uow.record(WaitlistAdmitted(
                user_id=entry.user_id,
                content_id=content_id,
                slot_date=preferred_date,
                slot_time=preferred_time,
                party_size=entry.party_size,
                position=entry.position,
                contact_email=entry.contact_email,
                contact_phone=entry.contact_phone,
            ))

    logger.info(
        f"Waitlist {content_id} {preferred_date} {preferred_time:%H:%M}: "
        f"admitted {plan.admitted_count} of {len(entries)} with {available_capacity} places"
    )
    return plan.admitted_count


@as_result
def leave_waitlist(user_id: int, content_id: str, preferred_date: date, preferred_time: time) -> bool:
    deleted, _ = (
        WaitlistEntry.objects.for_slot(content_id, preferred_date, preferred_time)
        .filter(user_id=user_id)
        .delete()
    )
    if not deleted:
        raise NotFoundError("You are not on the waitlist for this time slot")
    logger.info(f"User {user_id} left waitlist for {content_id} {preferred_date} {preferred_time:%H:%M}")
    return True


@as_result
def get_waitlist(content_id: str, preferred_date: date, preferred_time: time) -> list[WaitlistEntry]:
    return list(
        WaitlistEntry.objects.for_slot(content_id, preferred_date, preferred_time).order_by("position")
    )

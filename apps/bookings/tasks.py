"""Celery tasks for the booking domain."""

from __future__ import annotations

import logging
from datetime import datetime

from celery import shared_task  # type: ignore
from django.utils import timezone  # type: ignore

from shared.domain.errors import BookingEngineError

from .application.command_handlers import CloseBookingCommand, CloseBookingHandler
from .domain.entities import BookingStatus
from .models import BookingRequest

logger = logging.getLogger(__name__)


def _slot_end(booking: BookingRequest) -> datetime:
    naive = datetime.combine(booking.date, booking.end_time)
    return timezone.make_aware(naive, timezone.get_current_timezone())


# ============================================================================
# PERIODIC TASKS (Celery Beat)
# ============================================================================

@shared_task(name="bookings.complete_past_bookings")
def complete_past_bookings() -> dict[str, int]:
    """
    Close bookings whose slot has ended.

    Confirmed bookings become completed, bookings still pending become
    no-show. Both release their places in the slot ledger.

    Returns:
        dict: {"completed": ..., "no_show": ..., "failed": ...}
    """
    now = timezone.now()
    today = timezone.localdate(now)
    handler = CloseBookingHandler()
    counts = {"completed": 0, "no_show": 0, "failed": 0}

    candidates = BookingRequest.objects.filter(
        status__in=BookingRequest.ACTIVE_STATUSES,
        date__lte=today,
    ).order_by("date", "end_time", "id")

    for booking in candidates:
        if _slot_end(booking) > now:
            continue

        target = (
            BookingStatus.COMPLETED
            if booking.status == BookingRequest.Status.CONFIRMED
            else BookingStatus.NO_SHOW
        )
        try:
            handler.handle(CloseBookingCommand(booking_id=booking.pk, status=target))
        except BookingEngineError as e:
            logger.error(f"Failed to close booking {booking.pk}: {e}")
            counts["failed"] += 1
            continue
        counts[target.value] += 1

    if counts["completed"] or counts["no_show"]:
        logger.info(
            f"Closed past bookings: {counts['completed']} completed, {counts['no_show']} no-show"
        )
    return counts

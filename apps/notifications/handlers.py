"""Message bus handlers of the notifications app."""

from __future__ import annotations

import logging

from apps.bookings.conf import engine_setting
from apps.waitlist.domain.events import WaitlistAdmitted

from .services import notify_slot_available
from .tasks import send_slot_available

logger = logging.getLogger(__name__)


def on_waitlist_admitted(event: WaitlistAdmitted) -> None:
    """Queue the slot-available message for an admitted party (fire-and-forget)."""

    contact = {"email": event.contact_email, "phone": event.contact_phone}
    slot_details = event.slot_details()

    if engine_setting("WAITLIST_NOTIFY_ASYNC"):
        send_slot_available.delay(event.user_id, contact, slot_details)
        logger.debug(f"Queued slot-available message for user {event.user_id}")
    else:
        notify_slot_available(contact, slot_details, user_id=event.user_id)

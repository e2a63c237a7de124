"""Notification services for slot-available messages."""

from __future__ import annotations

import logging
from typing import Any

from .models import Notification
from .senders import BaseSender, EmailSender, get_sms_sender

logger = logging.getLogger(__name__)


def _slot_message(slot_details: dict[str, Any]) -> tuple[str, str]:
    title = "A spot opened up for your booking"
    message = (
        f"Good news! Places for a party of {slot_details.get('party_size', 1)} are free on "
        f"{slot_details.get('date')} at {slot_details.get('time')} "
        f"({slot_details.get('content_id')}). Book now before someone else does."
    )
    return title, message


def _deliver(
    sender: BaseSender,
    channel: str,
    recipient: str,
    title: str,
    message: str,
    *,
    user_id: int | None,
    context: dict[str, Any],
) -> bool:
    notification = Notification.objects.create(
        user_id=user_id,
        channel=channel,
        recipient=recipient,
        title=title,
        message=message,
        context=context,
    )
    outcome = sender.send(notification)
    notification.is_sent = bool(outcome.get("success"))
    notification.error = outcome.get("error", "") or ""
    notification.save(update_fields=["is_sent", "error"])

    if notification.is_sent:
        logger.info(f"Slot-available {channel} sent to {recipient}")
    else:
        logger.warning(f"Slot-available {channel} to {recipient} failed: {notification.error}")
    return notification.is_sent


def notify_slot_available(
    contact: dict[str, str],
    slot_details: dict[str, Any],
    *,
    user_id: int | None = None,
) -> dict[str, bool]:
    """Tell a waitlisted party that places are free on their slot.

    Sends on every channel the contact has an address for and returns
    the outcome per channel.
    """

    title, message = _slot_message(slot_details)
    results: dict[str, bool] = {}

    email = (contact or {}).get("email")
    if email:
        results[Notification.Channel.EMAIL] = _deliver(
            EmailSender(), Notification.Channel.EMAIL, email, title, message,
            user_id=user_id, context=slot_details,
        )

    phone = (contact or {}).get("phone")
    if phone:
        results[Notification.Channel.SMS] = _deliver(
            get_sms_sender(), Notification.Channel.SMS, phone, title, message,
            user_id=user_id, context=slot_details,
        )

    if not results:
        logger.warning(f"No contact address for user {user_id}; slot-available message not sent")
    return results

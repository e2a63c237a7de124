"""Celery tasks for notifications."""

from __future__ import annotations

from celery import shared_task  # type: ignore

from .services import notify_slot_available


@shared_task(name="notifications.send_slot_available")
def send_slot_available(user_id: int | None, contact: dict, slot_details: dict) -> dict[str, bool]:
    """Deliver a slot-available message outside the request cycle."""

    results = notify_slot_available(contact, slot_details, user_id=user_id)
    return {str(channel): sent for channel, sent in results.items()}

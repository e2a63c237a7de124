"""Channel senders.

A sender takes a ``Notification`` and returns ``{"success": bool, ...}``
with an ``error`` entry on failure; it never raises.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod

from django.conf import settings  # type: ignore
from django.core.mail import send_mail  # type: ignore
from django.utils.module_loading import import_string  # type: ignore

from apps.bookings.conf import engine_setting

logger = logging.getLogger(__name__)


class BaseSender(ABC):
    """Base class for channel senders"""

    @abstractmethod
    def send(self, notification) -> dict:
        pass


class EmailSender(BaseSender):
    """Delivery through Django's configured email backend"""

    def send(self, notification) -> dict:
        if not notification.recipient:
            return {"success": False, "error": "No email"}
        try:
            send_mail(
                subject=notification.title,
                message=notification.message,
                from_email=settings.DEFAULT_FROM_EMAIL,
                recipient_list=[notification.recipient],
                fail_silently=False,
            )
            return {"success": True, "message": "Sent via Email"}
        except Exception as e:
            logger.error(f"Failed to send email to {notification.recipient}: {e}", exc_info=True)
            return {"success": False, "error": str(e)}


class LoggingSMSSender(BaseSender):
    """SMS sender used until a provider is configured: logs the message"""

    def send(self, notification) -> dict:
        if not notification.recipient:
            return {"success": False, "error": "No phone number"}
        logger.info(f"[SMS] to {notification.recipient}: {notification.message[:80]}")
        return {"success": True, "message": "Logged SMS"}


def get_sms_sender() -> BaseSender:
    """Instantiate the sender named by ``BOOKING_ENGINE["SMS_BACKEND"]``"""
    return import_string(engine_setting("SMS_BACKEND"))()

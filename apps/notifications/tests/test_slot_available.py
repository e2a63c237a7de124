"""Tests for slot-available notifications."""

from __future__ import annotations

from datetime import date, time

from django.core import mail
from django.test import TestCase, override_settings

from apps.notifications.handlers import on_waitlist_admitted
from apps.notifications.models import Notification
from apps.notifications.senders import BaseSender
from apps.notifications.services import notify_slot_available
from apps.waitlist.domain.events import WaitlistAdmitted

SLOT_DETAILS = {"content_id": "studio-1", "date": "2025-03-10", "time": "09:00", "party_size": 2}


class FailingSMSSender(BaseSender):
    def send(self, notification) -> dict:
        return {"success": False, "error": "gateway down"}


class NotifySlotAvailableTests(TestCase):
    def test_email_and_sms_are_sent(self) -> None:
        results = notify_slot_available({"email": "guest@example.com", "phone": "+15550100"}, SLOT_DETAILS)

        self.assertEqual(results, {Notification.Channel.EMAIL: True, Notification.Channel.SMS: True})
        self.assertEqual(len(mail.outbox), 1)
        self.assertIn("2025-03-10 at 09:00", mail.outbox[0].body)
        self.assertIn("party of 2", mail.outbox[0].body)

    def test_missing_contact_sends_nothing(self) -> None:
        self.assertEqual(notify_slot_available({}, SLOT_DETAILS), {})
        self.assertFalse(Notification.objects.exists())

    @override_settings(
        BOOKING_ENGINE={"SMS_BACKEND": "apps.notifications.tests.test_slot_available.FailingSMSSender"}
    )
    def test_sender_failure_is_recorded(self) -> None:
        results = notify_slot_available({"phone": "+15550100"}, SLOT_DETAILS)

        self.assertEqual(results, {Notification.Channel.SMS: False})
        notification = Notification.objects.get()
        self.assertFalse(notification.is_sent)
        self.assertEqual(notification.error, "gateway down")

    def test_admitted_event_goes_through_the_task(self) -> None:
        event = WaitlistAdmitted(
            user_id=None,
            content_id="studio-1",
            slot_date=date(2025, 3, 10),
            slot_time=time(9),
            party_size=2,
            position=1,
            contact_email="guest@example.com",
        )

        on_waitlist_admitted(event)

        self.assertEqual(len(mail.outbox), 1)
        self.assertEqual(Notification.objects.get().context, SLOT_DETAILS)

"""Tests for the waitlist manager."""

from __future__ import annotations

from datetime import date, time

from django.contrib.auth import get_user_model
from django.core import mail
from django.test import TestCase, override_settings

from apps.notifications.models import Notification
from apps.waitlist.models import WaitlistEntry
from apps.waitlist.services import add_to_waitlist, get_waitlist, leave_waitlist, notify_waitlist

User = get_user_model()

SLOT = ("studio-1", date(2025, 3, 10), time(9))


class WaitlistServiceTests(TestCase):
    def setUp(self) -> None:
        self.users = [
            User.objects.create_user(username=f"guest{index}", email=f"guest{index}@example.com", password="pass")
            for index in range(3)
        ]

    def _join(self, user, party_size: int = 1, **contact):
        return add_to_waitlist(user.pk, *SLOT, party_size=party_size, **contact)

    def test_positions_increase_per_slot(self) -> None:
        positions = [self._join(user).value for user in self.users]
        other_slot = add_to_waitlist(self.users[0].pk, "studio-1", date(2025, 3, 10), time(14))

        self.assertEqual(positions, [1, 2, 3])
        self.assertEqual(other_slot.value, 1)

    def test_duplicate_entry_is_rejected(self) -> None:
        self._join(self.users[0])

        result = self._join(self.users[0], party_size=2)

        self.assertFalse(result.success)
        self.assertEqual(result.code, "duplicate_waitlist")
        self.assertEqual(result.error, "You are already on the waitlist for this time slot")
        self.assertEqual(WaitlistEntry.objects.count(), 1)

    def test_empty_party_is_rejected(self) -> None:
        self.assertEqual(self._join(self.users[0], party_size=0).code, "invalid_party_size")

    def test_admission_skips_parties_that_do_not_fit(self) -> None:
        for user, size in zip(self.users, (3, 2, 1)):
            self._join(user, party_size=size)

        result = notify_waitlist(*SLOT, 2)

        self.assertTrue(result.success, result.error)
        self.assertEqual(result.value, 1)
        remaining = get_waitlist(*SLOT).value
        self.assertEqual([entry.party_size for entry in remaining], [3, 1])
        self.assertEqual([entry.position for entry in remaining], [1, 3])

    def test_negative_capacity_is_rejected(self) -> None:
        self.assertEqual(notify_waitlist(*SLOT, -1).code, "validation_error")

    def test_notify_on_empty_queue(self) -> None:
        self.assertEqual(notify_waitlist(*SLOT, 5).value, 0)

    def test_admitted_parties_are_notified_after_commit(self) -> None:
        self._join(self.users[0], contact_email="first@example.com", contact_phone="+15550101")
        self._join(self.users[1], party_size=4, contact_email="second@example.com")

        with self.captureOnCommitCallbacks(execute=True):
            count = notify_waitlist(*SLOT, 2).value

        self.assertEqual(count, 1)
        self.assertEqual(len(mail.outbox), 1)
        self.assertEqual(mail.outbox[0].to, ["first@example.com"])
        self.assertEqual(mail.outbox[0].subject, "A spot opened up for your booking")
        self.assertEqual(
            set(Notification.objects.values_list("channel", flat=True)),
            {Notification.Channel.EMAIL, Notification.Channel.SMS},
        )
        self.assertTrue(all(Notification.objects.values_list("is_sent", flat=True)))

    @override_settings(BOOKING_ENGINE={"WAITLIST_NOTIFY_ASYNC": False})
    def test_synchronous_notification(self) -> None:
        self._join(self.users[0], contact_email="first@example.com")

        with self.captureOnCommitCallbacks(execute=True):
            notify_waitlist(*SLOT, 1)

        self.assertEqual(len(mail.outbox), 1)

    def test_nothing_is_sent_before_commit(self) -> None:
        self._join(self.users[0], contact_email="first@example.com")

        with self.captureOnCommitCallbacks(execute=False) as callbacks:
            notify_waitlist(*SLOT, 1)

        self.assertEqual(len(callbacks), 1)
        self.assertEqual(len(mail.outbox), 0)
        self.assertFalse(WaitlistEntry.objects.exists())

    def test_leave_waitlist(self) -> None:
        self._join(self.users[0])

        self.assertTrue(leave_waitlist(self.users[0].pk, *SLOT).value)
        self.assertEqual(leave_waitlist(self.users[0].pk, *SLOT).code, "not_found")

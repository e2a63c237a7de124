"""Integration tests for booking API endpoints."""

from __future__ import annotations

from django.urls import reverse
from rest_framework import status
from rest_framework.test import APITestCase

from apps.bookings import engine
from apps.bookings.models import BookingRequest, RecurringBooking

from .helpers import CONTENT_ID, details, make_rule, make_user


class BookingAPITests(APITestCase):
    """Covers creation, capacity conflicts, confirmation and cancellation."""

    def setUp(self) -> None:
        self.guest = make_user()
        self.other = make_user("other")
        self.staff = make_user("operator", is_staff=True)
        make_rule(max_capacity=4)
        self.client.force_authenticate(self.guest)
        self.list_url = reverse("booking-list")

    def _payload(self, party_size: int = 2) -> dict:
        return {
            "content_id": CONTENT_ID,
            "date": "2025-03-10",
            "start_time": "09:00",
            "party_size": party_size,
            "special_requests": "Window seat",
        }

    def test_guest_can_create_booking(self) -> None:
        response = self.client.post(self.list_url, self._payload(), format="json")

        self.assertEqual(response.status_code, status.HTTP_201_CREATED, response.data)
        self.assertEqual(response.data["status"], "pending")
        self.assertEqual(response.data["booking_slot_id"], "studio-1:2025-03-10:09:00")
        self.assertEqual(response.data["total_price"], "40.00")
        booking = BookingRequest.objects.get()
        self.assertEqual(booking.user, self.guest)
        self.assertEqual(booking.contact_email, "guest@example.com")

    def test_prevent_overbooking(self) -> None:
        first = self.client.post(self.list_url, self._payload(3), format="json")
        self.assertEqual(first.status_code, status.HTTP_201_CREATED, first.data)

        conflict = self.client.post(self.list_url, self._payload(2), format="json")

        self.assertEqual(conflict.status_code, status.HTTP_409_CONFLICT, conflict.data)
        self.assertEqual(conflict.data["code"], "slot_unavailable")

    def test_invalid_payload(self) -> None:
        payload = self._payload()
        payload["party_size"] = 0

        response = self.client.post(self.list_url, payload, format="json")

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)

    def test_end_time_must_match_slot(self) -> None:
        payload = self._payload()
        payload["end_time"] = "09:05"

        response = self.client.post(self.list_url, payload, format="json")

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST, response.data)
        self.assertEqual(response.data["code"], "validation_error")
        self.assertFalse(BookingRequest.objects.exists())

    def test_guest_sees_only_own_bookings(self) -> None:
        engine.create_booking_request(self.guest.pk, CONTENT_ID, details())
        engine.create_booking_request(self.other.pk, CONTENT_ID, details())

        response = self.client.get(self.list_url)

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(len(response.data), 1)
        self.assertEqual(response.data[0]["user_id"], self.guest.pk)

    def test_cannot_touch_foreign_booking(self) -> None:
        foreign = engine.create_booking_request(self.other.pk, CONTENT_ID, details()).unwrap()

        response = self.client.post(reverse("booking-cancel", kwargs={"pk": foreign.pk}))

        self.assertEqual(response.status_code, status.HTTP_404_NOT_FOUND)

    def test_confirm_and_cancel(self) -> None:
        booking = engine.create_booking_request(self.guest.pk, CONTENT_ID, details()).unwrap()

        confirmed = self.client.post(
            reverse("booking-confirm", kwargs={"pk": booking.pk}),
            {"payment_reference": "PAY-1"},
            format="json",
        )
        self.assertEqual(confirmed.status_code, status.HTTP_200_OK, confirmed.data)
        self.assertEqual(confirmed.data["status"], "confirmed")

        cancelled = self.client.post(
            reverse("booking-cancel", kwargs={"pk": booking.pk}),
            {"reason": "Sick"},
            format="json",
        )
        self.assertEqual(cancelled.status_code, status.HTTP_200_OK, cancelled.data)
        self.assertEqual(cancelled.data["cancellation_reason"], "Sick")

        again = self.client.post(reverse("booking-cancel", kwargs={"pk": booking.pk}))
        self.assertEqual(again.status_code, status.HTTP_409_CONFLICT)
        self.assertEqual(again.data["code"], "invalid_transition")

    def test_content_bookings_are_staff_only(self) -> None:
        engine.create_booking_request(self.guest.pk, CONTENT_ID, details())
        url = reverse("booking-content", kwargs={"content_id": CONTENT_ID})

        forbidden = self.client.get(url)
        self.client.force_authenticate(self.staff)
        allowed = self.client.get(url, {"status": "pending"})
        invalid = self.client.get(url, {"status": "archived"})

        self.assertEqual(forbidden.status_code, status.HTTP_403_FORBIDDEN)
        self.assertEqual(allowed.status_code, status.HTTP_200_OK)
        self.assertEqual(len(allowed.data), 1)
        self.assertEqual(invalid.status_code, status.HTTP_400_BAD_REQUEST)

    def test_recurring_booking(self) -> None:
        payload = {
            "content_id": CONTENT_ID,
            "pattern": "weekly",
            "start_date": "2025-03-03",
            "end_date": "2025-03-31",
            "start_time": "09:00",
            "end_time": "17:00",
            "max_occurrences": 3,
        }

        response = self.client.post(reverse("booking-recurring"), payload, format="json")

        self.assertEqual(response.status_code, status.HTTP_201_CREATED, response.data)
        self.assertEqual(len(response.data["individual_bookings"]), 3)
        self.assertEqual(response.data["skipped_dates"], [])
        self.assertEqual(RecurringBooking.objects.count(), 1)

    def test_requires_authentication(self) -> None:
        self.client.force_authenticate(None)

        response = self.client.get(self.list_url)

        self.assertIn(response.status_code, (status.HTTP_401_UNAUTHORIZED, status.HTTP_403_FORBIDDEN))

"""API tests for availability endpoints."""

from __future__ import annotations

from datetime import date, time
from decimal import Decimal

from django.contrib.auth import get_user_model
from django.urls import reverse
from rest_framework import status
from rest_framework.test import APITestCase

from apps.availability.models import AvailabilityException, AvailabilityRule

User = get_user_model()


class AvailabilityAPITests(APITestCase):
    def setUp(self) -> None:
        self.guest = User.objects.create_user(username="guest", email="guest@example.com", password="GuestPass123")
        self.staff = User.objects.create_user(
            username="operator",
            email="operator@example.com",
            password="StaffPass123",
            is_staff=True,
        )
        self.rule = AvailabilityRule.objects.create(
            content_id="studio-1",
            day_of_week=0,
            start_time=time(9),
            end_time=time(17),
            max_capacity=4,
            price=Decimal("20.00"),
        )
        self.client.force_authenticate(self.guest)

    def _rule_payload(self) -> dict:
        return {
            "content_id": "studio-2",
            "day_of_week": 2,
            "start_time": "10:00",
            "end_time": "12:00",
            "max_capacity": 6,
            "price": "15.00",
            "exceptions": [{"date": "2025-01-15", "reason": "Maintenance"}],
        }

    def test_slot_listing(self) -> None:
        url = reverse("availability-slots", kwargs={"content_id": "studio-1"})

        response = self.client.get(url, {"start": "2025-03-03", "end": "2025-03-16"})

        self.assertEqual(response.status_code, status.HTTP_200_OK, response.data)
        self.assertEqual(len(response.data), 2)
        self.assertEqual(response.data[0]["id"], "studio-1:2025-03-03:09:00")
        self.assertEqual(response.data[0]["start_time"], "09:00")
        self.assertEqual(response.data[0]["remaining_capacity"], 4)

    def test_slot_listing_rejects_inverted_range(self) -> None:
        url = reverse("availability-slots", kwargs={"content_id": "studio-1"})

        response = self.client.get(url, {"start": "2025-03-16", "end": "2025-03-03"})

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(response.data["code"], "invalid_range")

    def test_slot_check(self) -> None:
        url = reverse("availability-check", kwargs={"content_id": "studio-1"})

        fits = self.client.get(url, {"date": "2025-03-03", "start_time": "09:00", "party_size": 4})
        too_big = self.client.get(url, {"date": "2025-03-03", "start_time": "09:00", "party_size": 5})

        self.assertTrue(fits.data["available"])
        self.assertFalse(too_big.data["available"])
        self.assertTrue(too_big.data["slot"]["is_available"])

    def test_guest_cannot_create_rules(self) -> None:
        response = self.client.post(reverse("availability-rule-list"), self._rule_payload(), format="json")

        self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN)

    def test_staff_creates_rule_with_exceptions(self) -> None:
        self.client.force_authenticate(self.staff)

        response = self.client.post(reverse("availability-rule-list"), self._rule_payload(), format="json")

        self.assertEqual(response.status_code, status.HTTP_201_CREATED, response.data)
        self.assertEqual(response.data["content_id"], "studio-2")
        self.assertEqual(len(response.data["exceptions"]), 1)

    def test_duplicate_slot_rule_conflicts(self) -> None:
        self.client.force_authenticate(self.staff)
        payload = self._rule_payload()
        payload.update(content_id="studio-1", day_of_week=0, start_time="09:00", exceptions=[])

        response = self.client.post(reverse("availability-rule-list"), payload, format="json")

        self.assertEqual(response.status_code, status.HTTP_409_CONFLICT, response.data)
        self.assertEqual(response.data["code"], "duplicate_rule")

    def test_staff_manages_exceptions(self) -> None:
        self.client.force_authenticate(self.staff)
        add_url = reverse("availability-rule-exceptions", kwargs={"pk": self.rule.pk})

        created = self.client.post(add_url, {"date": "2025-03-10"}, format="json")
        duplicate = self.client.post(add_url, {"date": "2025-03-10"}, format="json")

        self.assertEqual(created.status_code, status.HTTP_201_CREATED, created.data)
        self.assertEqual(duplicate.status_code, status.HTTP_409_CONFLICT)
        self.assertEqual(duplicate.data["code"], "duplicate_exception")

        remove_url = reverse(
            "availability-rule-remove-exception",
            kwargs={"pk": self.rule.pk, "exception_date": "2025-03-10"},
        )
        removed = self.client.delete(remove_url)

        self.assertEqual(removed.status_code, status.HTTP_204_NO_CONTENT)
        self.assertFalse(AvailabilityException.objects.filter(rule=self.rule, date=date(2025, 3, 10)).exists())

    def test_staff_deactivates_rule(self) -> None:
        self.client.force_authenticate(self.staff)

        response = self.client.post(reverse("availability-rule-deactivate", kwargs={"pk": self.rule.pk}))

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.rule.refresh_from_db()
        self.assertFalse(self.rule.is_active)

    def test_rules_are_listed_for_signed_in_users(self) -> None:
        response = self.client.get(reverse("availability-rule-list"), {"content_id": "studio-1"})

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(len(response.data), 1)

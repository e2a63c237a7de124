from __future__ import annotations

from django.contrib import admin
from django.test import RequestFactory, TestCase

from apps.bookings import engine
from apps.bookings.models import BookingRequest

from .helpers import CONTENT_ID, details, make_rule, make_user


class BookingRequestAdminTests(TestCase):
    def setUp(self) -> None:
        make_rule()
        self.staff = make_user("operator", is_staff=True, is_superuser=True)
        self.booking = engine.create_booking_request(self.staff.pk, CONTENT_ID, details()).unwrap()
        self.model_admin = admin.site._registry[BookingRequest]

    def test_status_and_party_size_are_read_only(self) -> None:
        request = RequestFactory().get("/")
        request.user = self.staff

        readonly = self.model_admin.get_readonly_fields(request, self.booking)
        form = self.model_admin.get_form(request, self.booking)

        self.assertIn("status", readonly)
        self.assertIn("party_size", readonly)
        self.assertNotIn("status", form.base_fields)
        self.assertNotIn("party_size", form.base_fields)

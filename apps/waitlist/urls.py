"""URL routing for the waitlist."""

from __future__ import annotations

from django.urls import path  # type: ignore

from .views import NotifyWaitlistView, WaitlistView

urlpatterns = [
    path("", WaitlistView.as_view(), name="waitlist"),
    path("notify/", NotifyWaitlistView.as_view(), name="waitlist-notify"),
]

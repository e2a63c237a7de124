"""URL routing for availability."""

from __future__ import annotations

from django.urls import include, path  # type: ignore
from rest_framework.routers import DefaultRouter  # type: ignore

from .views import AvailabilityRuleViewSet, SlotCheckView, SlotListView

router = DefaultRouter()
router.register(r"rules", AvailabilityRuleViewSet, basename="availability-rule")

urlpatterns = [
    path("", include(router.urls)),
    path("<str:content_id>/slots/", SlotListView.as_view(), name="availability-slots"),
    path("<str:content_id>/check/", SlotCheckView.as_view(), name="availability-check"),
]

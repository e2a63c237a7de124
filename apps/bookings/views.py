"""API views for the booking domain."""

from __future__ import annotations

from rest_framework import mixins, permissions, status, viewsets  # type: ignore
from rest_framework.decorators import action  # type: ignore

from shared.infrastructure.http import result_to_response

from . import engine
from .models import BookingRequest
from .serializers import (
    BookingCreateSerializer,
    BookingRequestSerializer,
    CancelBookingSerializer,
    ConfirmBookingSerializer,
    RecurringBookingCreateSerializer,
    RecurringOutcomeSerializer,
)


class BookingRequestViewSet(
    mixins.ListModelMixin,
    mixins.RetrieveModelMixin,
    viewsets.GenericViewSet,
):
    """Users see and manage their own bookings; staff see all of them."""

    queryset = BookingRequest.objects.all()
    serializer_class = BookingRequestSerializer
    permission_classes = [permissions.IsAuthenticated]
    lookup_value_regex = r"\d+"
    filterset_fields = ["status", "content_id", "date"]

    def get_queryset(self):  # type: ignore
        user = self.request.user
        qs = super().get_queryset().order_by("date", "start_time", "id")
        if getattr(user, "is_staff", False):
            return qs
        return qs.filter(user=user)

    def get_serializer_class(self):  # type: ignore
        if self.action == "create":
            return BookingCreateSerializer
        if self.action == "recurring":
            return RecurringBookingCreateSerializer
        return BookingRequestSerializer

    def _serialize(self, booking):
        return BookingRequestSerializer(booking, context=self.get_serializer_context()).data

    def create(self, request, *args, **kwargs):  # type: ignore
        serializer = BookingCreateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        result = engine.create_booking_request(
            request.user.pk,
            serializer.validated_data["content_id"],
            serializer.to_details(request.user),
        )
        return result_to_response(result, self._serialize, success_status=status.HTTP_201_CREATED)

    @action(detail=True, methods=["post"])
    def confirm(self, request, pk=None):  # type: ignore
        booking = self.get_object()
        serializer = ConfirmBookingSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        result = engine.confirm_booking(booking.pk, serializer.validated_data["payment_reference"])
        return result_to_response(result, self._serialize)

    @action(detail=True, methods=["post"])
    def cancel(self, request, pk=None):  # type: ignore
        booking = self.get_object()
        serializer = CancelBookingSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        result = engine.cancel_booking(booking.pk, serializer.validated_data["reason"])
        return result_to_response(result, self._serialize)

    @action(
        detail=False,
        methods=["get"],
        url_path=r"content/(?P<content_id>[^/]+)",
        url_name="content",
        permission_classes=[permissions.IsAdminUser],
    )
    def content(self, request, content_id=None):  # type: ignore
        result = engine.get_content_bookings(content_id, request.query_params.get("status"))
        return result_to_response(
            result,
            lambda bookings: BookingRequestSerializer(bookings, many=True).data,
        )

    @action(detail=False, methods=["post"])
    def recurring(self, request):  # type: ignore
        serializer = RecurringBookingCreateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        result = engine.create_recurring_booking(
            request.user.pk,
            serializer.validated_data["content_id"],
            serializer.to_details(request.user),
        )
        return result_to_response(
            result,
            lambda outcome: RecurringOutcomeSerializer(outcome).data,
            success_status=status.HTTP_201_CREATED,
        )

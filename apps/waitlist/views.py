"""API views for the waitlist."""

from __future__ import annotations

from rest_framework import permissions, status  # type: ignore
from rest_framework.views import APIView  # type: ignore

from shared.infrastructure.http import result_to_response

from . import services
from .serializers import (
    JoinWaitlistSerializer,
    NotifyWaitlistSerializer,
    SlotReferenceSerializer,
    WaitlistEntrySerializer,
)


class WaitlistView(APIView):
    """GET lists a slot's queue, POST joins it, DELETE leaves it."""

    permission_classes = [permissions.IsAuthenticated]

    def get(self, request):  # type: ignore
        params = SlotReferenceSerializer(data=request.query_params)
        params.is_valid(raise_exception=True)
        data = params.validated_data
        result = services.get_waitlist(data["content_id"], data["date"], data["time"])
        return result_to_response(result, lambda entries: WaitlistEntrySerializer(entries, many=True).data)

    def post(self, request):  # type: ignore
        serializer = JoinWaitlistSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = serializer.validated_data
        result = services.add_to_waitlist(
            request.user.pk,
            data["content_id"],
            data["date"],
            data["time"],
            party_size=data["party_size"],
            contact_email=data["contact_email"] or request.user.email,
            contact_phone=data["contact_phone"],
        )
        return result_to_response(
            result,
            lambda position: {"position": position},
            success_status=status.HTTP_201_CREATED,
        )

    def delete(self, request):  # type: ignore
        params = SlotReferenceSerializer(data=request.query_params)
        params.is_valid(raise_exception=True)
        data = params.validated_data
        result = services.leave_waitlist(request.user.pk, data["content_id"], data["date"], data["time"])
        return result_to_response(result, lambda _: None, success_status=status.HTTP_204_NO_CONTENT)


class NotifyWaitlistView(APIView):
    """Staff hand freed places on a slot to the waiting parties."""

    permission_classes = [permissions.IsAdminUser]

    def post(self, request):  # type: ignore
        serializer = NotifyWaitlistSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = serializer.validated_data
        result = services.notify_waitlist(
            data["content_id"],
            data["date"],
            data["time"],
            data["available_capacity"],
        )
        return result_to_response(result, lambda count: {"notified_count": count})

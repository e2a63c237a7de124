"""API views for availability rules and slots."""

from __future__ import annotations

from datetime import date

from rest_framework import mixins, permissions, status, viewsets  # type: ignore
from rest_framework.decorators import action  # type: ignore
from rest_framework.exceptions import ValidationError  # type: ignore
from rest_framework.views import APIView  # type: ignore

from shared.infrastructure.http import result_to_response

from . import queries, services
from .models import AvailabilityRule
from .serializers import (
    AvailabilityExceptionSerializer,
    AvailabilityRuleCreateSerializer,
    AvailabilityRuleSerializer,
    BookingSlotSerializer,
    ExceptionInputSerializer,
    SlotCheckQuerySerializer,
    SlotCheckSerializer,
    SlotRangeQuerySerializer,
)


class AvailabilityRuleViewSet(
    mixins.ListModelMixin,
    mixins.RetrieveModelMixin,
    viewsets.GenericViewSet,
):
    """Rules are read by any signed-in user and managed by staff."""

    queryset = AvailabilityRule.objects.prefetch_related("exceptions").all()
    serializer_class = AvailabilityRuleSerializer
    lookup_value_regex = r"\d+"
    filterset_fields = ["content_id", "day_of_week", "is_active"]

    def get_permissions(self):  # type: ignore
        if self.action in ("list", "retrieve"):
            return [permissions.IsAuthenticated()]
        return [permissions.IsAdminUser()]

    def get_serializer_class(self):  # type: ignore
        if self.action == "create":
            return AvailabilityRuleCreateSerializer
        if self.action == "exceptions":
            return ExceptionInputSerializer
        return AvailabilityRuleSerializer

    def create(self, request, *args, **kwargs):  # type: ignore
        serializer = AvailabilityRuleCreateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = serializer.validated_data
        result = services.create_availability_rule(
            content_id=data["content_id"],
            day_of_week=data["day_of_week"],
            start_time=data["start_time"],
            end_time=data["end_time"],
            max_capacity=data["max_capacity"],
            price=data["price"],
            currency=data.get("currency"),
            exceptions=[services.ExceptionSpec(**item) for item in data.get("exceptions", [])],
        )
        return result_to_response(
            result,
            lambda rule: AvailabilityRuleSerializer(rule).data,
            success_status=status.HTTP_201_CREATED,
        )

    @action(detail=True, methods=["post"])
    def exceptions(self, request, pk=None):  # type: ignore
        serializer = ExceptionInputSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = serializer.validated_data
        result = services.add_rule_exception(
            int(pk),
            data["date"],
            is_available=data["is_available"],
            custom_price=data.get("custom_price"),
            custom_capacity=data.get("custom_capacity"),
            reason=data.get("reason", ""),
        )
        return result_to_response(
            result,
            lambda exception: AvailabilityExceptionSerializer(exception).data,
            success_status=status.HTTP_201_CREATED,
        )

    @action(
        detail=True,
        methods=["delete"],
        url_path=r"exceptions/(?P<exception_date>\d{4}-\d{2}-\d{2})",
        url_name="remove-exception",
    )
    def remove_exception(self, request, pk=None, exception_date=None):  # type: ignore
        try:
            parsed = date.fromisoformat(exception_date)
        except ValueError as exc:
            raise ValidationError({"date": [str(exc)]}) from exc
        result = services.remove_rule_exception(int(pk), parsed)
        return result_to_response(result, lambda _: None, success_status=status.HTTP_204_NO_CONTENT)

    @action(detail=True, methods=["post"])
    def deactivate(self, request, pk=None):  # type: ignore
        result = services.deactivate_rule(int(pk))
        return result_to_response(result, lambda rule: AvailabilityRuleSerializer(rule).data)


class SlotListView(APIView):
    """GET /{content_id}/slots/?start=YYYY-MM-DD&end=YYYY-MM-DD"""

    permission_classes = [permissions.IsAuthenticated]

    def get(self, request, content_id):  # type: ignore
        params = SlotRangeQuerySerializer(data=request.query_params)
        params.is_valid(raise_exception=True)
        result = queries.get_availability(
            content_id,
            params.validated_data["start"],
            params.validated_data["end"],
        )
        return result_to_response(result, lambda slots: BookingSlotSerializer(slots, many=True).data)


class SlotCheckView(APIView):
    """GET /{content_id}/check/?date=&start_time=&party_size="""

    permission_classes = [permissions.IsAuthenticated]

    def get(self, request, content_id):  # type: ignore
        params = SlotCheckQuerySerializer(data=request.query_params)
        params.is_valid(raise_exception=True)
        data = params.validated_data
        result = queries.check_slot_availability(
            content_id,
            data["date"],
            data["start_time"],
            data["party_size"],
        )
        return result_to_response(result, lambda check: SlotCheckSerializer(check).data)

"""Serializers for availability rules and slots."""

from __future__ import annotations

from rest_framework import serializers  # type: ignore

from .models import AvailabilityException, AvailabilityRule


class AvailabilityExceptionSerializer(serializers.ModelSerializer):
    class Meta:
        model = AvailabilityException
        fields = [
            "id",
            "date",
            "is_available",
            "custom_price",
            "custom_capacity",
            "reason",
            "created_at",
        ]
        read_only_fields = fields


class AvailabilityRuleSerializer(serializers.ModelSerializer):
    day_of_week_display = serializers.ReadOnlyField(source="get_day_of_week_display")
    exceptions = AvailabilityExceptionSerializer(many=True, read_only=True)

    class Meta:
        model = AvailabilityRule
        fields = [
            "id",
            "content_id",
            "day_of_week",
            "day_of_week_display",
            "start_time",
            "end_time",
            "max_capacity",
            "price",
            "currency",
            "is_active",
            "exceptions",
            "created_at",
            "updated_at",
        ]
        read_only_fields = fields


class ExceptionInputSerializer(serializers.Serializer):
    date = serializers.DateField()
    is_available = serializers.BooleanField(default=False)
    custom_price = serializers.DecimalField(
        max_digits=10, decimal_places=2, min_value=0, required=False, allow_null=True
    )
    custom_capacity = serializers.IntegerField(min_value=0, required=False, allow_null=True)
    reason = serializers.CharField(max_length=255, required=False, allow_blank=True, default="")


class AvailabilityRuleCreateSerializer(serializers.Serializer):
    content_id = serializers.CharField(max_length=64)
    day_of_week = serializers.IntegerField(min_value=0, max_value=6)
    start_time = serializers.TimeField()
    end_time = serializers.TimeField()
    max_capacity = serializers.IntegerField(min_value=0)
    price = serializers.DecimalField(max_digits=10, decimal_places=2, min_value=0)
    currency = serializers.CharField(min_length=3, max_length=3, required=False)
    exceptions = ExceptionInputSerializer(many=True, required=False)

    def validate(self, attrs):  # type: ignore
        if attrs["start_time"] >= attrs["end_time"]:
            raise serializers.ValidationError("Start time must be before end time.")
        return attrs


class SlotRangeQuerySerializer(serializers.Serializer):
    start = serializers.DateField()
    end = serializers.DateField()


class SlotCheckQuerySerializer(serializers.Serializer):
    date = serializers.DateField()
    start_time = serializers.TimeField()
    party_size = serializers.IntegerField(default=1)


class BookingSlotSerializer(serializers.Serializer):
    """Read-only rendering of a derived slot."""

    id = serializers.CharField()
    content_id = serializers.CharField()
    rule_id = serializers.IntegerField()
    date = serializers.DateField()
    start_time = serializers.TimeField(format="%H:%M")
    end_time = serializers.TimeField(format="%H:%M")
    max_capacity = serializers.IntegerField()
    current_bookings = serializers.IntegerField()
    remaining_capacity = serializers.IntegerField()
    price = serializers.DecimalField(max_digits=10, decimal_places=2)
    currency = serializers.CharField()
    is_available = serializers.BooleanField()


class SlotCheckSerializer(serializers.Serializer):
    available = serializers.BooleanField()
    party_size = serializers.IntegerField()
    slot = BookingSlotSerializer(allow_null=True)

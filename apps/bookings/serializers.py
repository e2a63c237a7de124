"""Serializers for the booking domain."""

from __future__ import annotations

from rest_framework import serializers  # type: ignore

from .application.command_handlers import (
    BookingDetails,
    ContactInfo,
    RecurringDetails,
    TimeSlot,
)
from .domain.entities import RecurrencePattern
from .models import BookingRequest, RecurringBooking


class ContactInfoSerializer(serializers.Serializer):
    name = serializers.CharField(max_length=255, required=False, allow_blank=True, default="")
    email = serializers.EmailField(required=False, allow_blank=True, default="")
    phone = serializers.CharField(max_length=32, required=False, allow_blank=True, default="")


class BookingCreateSerializer(serializers.Serializer):
    """Booking of one slot by the signed-in user."""

    content_id = serializers.CharField(max_length=64)
    date = serializers.DateField()
    start_time = serializers.TimeField()
    end_time = serializers.TimeField(required=False, allow_null=True)
    party_size = serializers.IntegerField(min_value=1, default=1)
    special_requests = serializers.CharField(required=False, allow_blank=True, default="")
    contact_info = ContactInfoSerializer(required=False)

    def validate(self, attrs):  # type: ignore
        end_time = attrs.get("end_time")
        if end_time is not None and attrs["start_time"] >= end_time:
            raise serializers.ValidationError("Start time must be before end time.")
        return attrs

    def to_details(self, user) -> BookingDetails:
        data = self.validated_data
        contact = data.get("contact_info") or {}
        return BookingDetails(
            date=data["date"],
            start_time=data["start_time"],
            end_time=data.get("end_time"),
            party_size=data["party_size"],
            special_requests=data.get("special_requests", ""),
            contact_info=ContactInfo(
                name=contact.get("name") or user.get_full_name() or user.get_username(),
                email=contact.get("email") or user.email,
                phone=contact.get("phone", ""),
            ),
        )


class BookingRequestSerializer(serializers.ModelSerializer):
    user_id = serializers.ReadOnlyField(source="user.id")
    start_time = serializers.TimeField(format="%H:%M")
    end_time = serializers.TimeField(format="%H:%M")

    class Meta:
        model = BookingRequest
        fields = [
            "id",
            "user_id",
            "content_id",
            "booking_slot_id",
            "date",
            "start_time",
            "end_time",
            "party_size",
            "total_price",
            "currency",
            "status",
            "special_requests",
            "contact_name",
            "contact_email",
            "contact_phone",
            "recurring_booking",
            "transaction",
            "payment_reference",
            "cancellation_reason",
            "confirmed_at",
            "cancelled_at",
            "created_at",
            "updated_at",
        ]
        read_only_fields = fields


class ConfirmBookingSerializer(serializers.Serializer):
    payment_reference = serializers.CharField(max_length=128, required=False, allow_blank=True, default="")


class CancelBookingSerializer(serializers.Serializer):
    reason = serializers.CharField(max_length=255, required=False, allow_blank=True, default="")


class RecurringBookingCreateSerializer(serializers.Serializer):
    content_id = serializers.CharField(max_length=64)
    pattern = serializers.ChoiceField(choices=RecurringBooking.Pattern.choices)
    start_date = serializers.DateField()
    end_date = serializers.DateField()
    start_time = serializers.TimeField()
    end_time = serializers.TimeField()
    frequency = serializers.IntegerField(min_value=1, default=1)
    max_occurrences = serializers.IntegerField(min_value=1, required=False, allow_null=True)
    party_size = serializers.IntegerField(min_value=1, default=1)
    special_requests = serializers.CharField(required=False, allow_blank=True, default="")
    contact_info = ContactInfoSerializer(required=False)

    def validate(self, attrs):  # type: ignore
        if attrs["start_date"] > attrs["end_date"]:
            raise serializers.ValidationError("Start date must not be after end date.")
        if attrs["start_time"] >= attrs["end_time"]:
            raise serializers.ValidationError("Start time must be before end time.")
        return attrs

    def to_details(self, user) -> RecurringDetails:
        data = self.validated_data
        contact = data.get("contact_info") or {}
        return RecurringDetails(
            pattern=RecurrencePattern(data["pattern"]),
            start_date=data["start_date"],
            end_date=data["end_date"],
            time_slot=TimeSlot(start_time=data["start_time"], end_time=data["end_time"]),
            frequency=data["frequency"],
            max_occurrences=data.get("max_occurrences"),
            party_size=data["party_size"],
            special_requests=data.get("special_requests", ""),
            contact_info=ContactInfo(
                name=contact.get("name") or user.get_full_name() or user.get_username(),
                email=contact.get("email") or user.email,
                phone=contact.get("phone", ""),
            ),
        )


class RecurringBookingSerializer(serializers.ModelSerializer):
    class Meta:
        model = RecurringBooking
        fields = [
            "id",
            "content_id",
            "pattern",
            "start_date",
            "end_date",
            "start_time",
            "end_time",
            "frequency",
            "max_occurrences",
            "party_size",
            "special_requests",
            "is_active",
            "created_at",
        ]
        read_only_fields = fields


class RecurringOutcomeSerializer(serializers.Serializer):
    recurring_booking = RecurringBookingSerializer()
    individual_bookings = BookingRequestSerializer(many=True)
    attempted_dates = serializers.ListField(child=serializers.DateField())
    skipped_dates = serializers.ListField(child=serializers.DateField())

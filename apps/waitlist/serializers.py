"""Serializers for the waitlist API."""

from __future__ import annotations

from rest_framework import serializers  # type: ignore

from .models import WaitlistEntry


class SlotReferenceSerializer(serializers.Serializer):
    content_id = serializers.CharField(max_length=64)
    date = serializers.DateField()
    time = serializers.TimeField()


class JoinWaitlistSerializer(SlotReferenceSerializer):
    party_size = serializers.IntegerField(min_value=1, default=1)
    contact_email = serializers.EmailField(required=False, allow_blank=True, default="")
    contact_phone = serializers.CharField(max_length=32, required=False, allow_blank=True, default="")


class NotifyWaitlistSerializer(SlotReferenceSerializer):
    available_capacity = serializers.IntegerField(min_value=0)


class WaitlistEntrySerializer(serializers.ModelSerializer):
    user_id = serializers.ReadOnlyField(source="user.id")
    preferred_time = serializers.TimeField(format="%H:%M")

    class Meta:
        model = WaitlistEntry
        fields = [
            "id",
            "user_id",
            "content_id",
            "preferred_date",
            "preferred_time",
            "party_size",
            "position",
            "created_at",
        ]
        read_only_fields = fields

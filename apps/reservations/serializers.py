"""Serializers for the reservation domain."""

from __future__ import annotations

from decimal import Decimal

from rest_framework import serializers  # type: ignore

from shared.infrastructure.fields import CalendarDateField

from .models import Reservation

# Dates per calendar request, both ends included
MAX_CALENDAR_DAYS = 366


class StayDatesMixin:
    """Shared departure-after-arrival check."""

    def validate(self, attrs):  # type: ignore
        if attrs["departure_date"] <= attrs["arrival_date"]:
            raise serializers.ValidationError("Invalid date range")
        return attrs


class AvailabilityCheckSerializer(StayDatesMixin, serializers.Serializer):
    room_type_id = serializers.IntegerField()
    arrival_date = CalendarDateField()
    departure_date = CalendarDateField()


class AvailabilityCalendarQuerySerializer(serializers.Serializer):
    """Query string of the calendar view; both dates are included."""

    from_date = CalendarDateField()
    to_date = CalendarDateField()

    def validate(self, attrs):  # type: ignore
        if attrs["to_date"] < attrs["from_date"]:
            raise serializers.ValidationError("to_date must not be before from_date")
        if (attrs["to_date"] - attrs["from_date"]).days >= MAX_CALENDAR_DAYS:
            raise serializers.ValidationError(f"Calendar range cannot exceed {MAX_CALENDAR_DAYS} days")
        return attrs


class ReservationCreateSerializer(StayDatesMixin, serializers.Serializer):
    """Input of an admission request. Dates may be plain dates or ISO datetimes."""

    property_id = serializers.IntegerField()
    guest_id = serializers.IntegerField()
    room_type_id = serializers.IntegerField()
    rate_plan_id = serializers.IntegerField(required=False, allow_null=True)
    arrival_date = CalendarDateField()
    departure_date = CalendarDateField()
    adults = serializers.IntegerField(min_value=1, default=1)
    children = serializers.IntegerField(min_value=0, default=0)
    total_amount = serializers.DecimalField(
        max_digits=12,
        decimal_places=2,
        min_value=Decimal("0.00"),
        required=False,
        allow_null=True,
    )
    special_requests = serializers.CharField(required=False, allow_blank=True, default="")
    source = serializers.CharField(required=False, max_length=30, default="direct")
    notes = serializers.CharField(required=False, allow_blank=True, default="")


class ReservationSerializer(serializers.ModelSerializer):
    guest_name = serializers.CharField(source="guest.full_name", read_only=True)
    room_type_name = serializers.CharField(source="room_type.name", read_only=True)
    room_number = serializers.CharField(source="room.room_number", read_only=True, default=None)

    class Meta:
        model = Reservation
        fields = [
            "id",
            "confirmation_number",
            "property",
            "guest",
            "guest_name",
            "room_type",
            "room_type_name",
            "room",
            "room_number",
            "rate_plan",
            "arrival_date",
            "departure_date",
            "nights",
            "adults",
            "children",
            "total_amount",
            "deposit_amount",
            "deposit_paid",
            "status",
            "source",
            "special_requests",
            "notes",
            "check_in_time",
            "check_out_time",
            "created_at",
            "updated_at",
        ]
        read_only_fields = fields


class CheckInSerializer(serializers.Serializer):
    room_id = serializers.IntegerField()


class CancelSerializer(serializers.Serializer):
    reason = serializers.CharField(required=False, allow_blank=True, default="")

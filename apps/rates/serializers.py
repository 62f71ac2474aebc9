"""Serializers for the rates domain."""

from __future__ import annotations

from decimal import Decimal

from rest_framework import serializers  # type: ignore

from apps.properties.models import RoomType
from shared.infrastructure.fields import CalendarDateField

from .models import DailyRate, RatePlan


class RateCalculateSerializer(serializers.Serializer):
    """Input for the best available rate lookup."""

    room_type_id = serializers.IntegerField()
    arrival_date = CalendarDateField()
    departure_date = CalendarDateField()
    rate_plan_id = serializers.IntegerField(required=False, allow_null=True)

    def validate(self, attrs):  # type: ignore
        nights = (attrs["departure_date"] - attrs["arrival_date"]).days
        if nights <= 0:
            raise serializers.ValidationError("Invalid date range")
        attrs["nights"] = nights
        return attrs


class DailyRateUpsertSerializer(serializers.Serializer):
    """Loads one rate and restriction set for every date in [start_date, end_date]."""

    room_type = serializers.PrimaryKeyRelatedField(queryset=RoomType.objects.all())
    rate_plan = serializers.PrimaryKeyRelatedField(queryset=RatePlan.objects.all())
    start_date = CalendarDateField()
    end_date = CalendarDateField()
    rate = serializers.DecimalField(max_digits=10, decimal_places=2, min_value=Decimal("0.00"))
    stop_sell = serializers.BooleanField(default=False)
    close_to_arrival = serializers.BooleanField(default=False)
    close_to_departure = serializers.BooleanField(default=False)

    def validate(self, attrs):  # type: ignore
        property_obj = self.context["property"]
        if attrs["end_date"] < attrs["start_date"]:
            raise serializers.ValidationError("end_date must not be before start_date")
        if attrs["room_type"].property_id != property_obj.pk:
            raise serializers.ValidationError({"room_type": "Room type belongs to another property."})
        if attrs["rate_plan"].property_id != property_obj.pk:
            raise serializers.ValidationError({"rate_plan": "Rate plan belongs to another property."})
        return attrs


class DailyRateSerializer(serializers.ModelSerializer):
    class Meta:
        model = DailyRate
        fields = [
            "id",
            "room_type",
            "rate_plan",
            "date",
            "rate",
            "stop_sell",
            "close_to_arrival",
            "close_to_departure",
        ]
        read_only_fields = fields

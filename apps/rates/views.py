"""API views for the rates domain."""

from __future__ import annotations

from datetime import timedelta

from django.shortcuts import get_object_or_404  # type: ignore
from rest_framework import permissions, status  # type: ignore
from rest_framework.response import Response  # type: ignore
from rest_framework.views import APIView  # type: ignore

from apps.properties.models import Property

from .serializers import DailyRateSerializer, DailyRateUpsertSerializer, RateCalculateSerializer
from .services import RateSelector, upsert_daily_rates


class RateCalculateView(APIView):
    """Best available rate for a room type and stay."""

    permission_classes = [permissions.IsAuthenticated]
    selector_class = RateSelector

    def post(self, request, property_id):  # type: ignore
        property_obj = get_object_or_404(Property, pk=property_id)
        serializer = RateCalculateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = serializer.validated_data

        quote = self.selector_class().best_rate(
            property_obj.pk,
            data["room_type_id"],
            data["arrival_date"],
            data["departure_date"],
            data["nights"],
            rate_plan_id=data.get("rate_plan_id"),
        )
        if quote is None:
            return Response(
                {"reason": "no_rates", "error": "No available rates found for the specified criteria"},
                status=status.HTTP_404_NOT_FOUND,
            )
        return Response({"rate": quote.to_dict()})


class DailyRateUpsertView(APIView):
    """Bulk load of daily rates and restriction flags for a date span."""

    permission_classes = [permissions.IsAuthenticated]

    def post(self, request, property_id):  # type: ignore
        property_obj = get_object_or_404(Property, pk=property_id)
        serializer = DailyRateUpsertSerializer(data=request.data, context={"property": property_obj})
        serializer.is_valid(raise_exception=True)
        data = serializer.validated_data

        span = (data["end_date"] - data["start_date"]).days
        dates = [data["start_date"] + timedelta(days=offset) for offset in range(span + 1)]
        rows = upsert_daily_rates(
            data["room_type"],
            data["rate_plan"],
            dates,
            data["rate"],
            stop_sell=data["stop_sell"],
            close_to_arrival=data["close_to_arrival"],
            close_to_departure=data["close_to_departure"],
        )
        return Response(
            {"count": len(rows), "daily_rates": DailyRateSerializer(rows, many=True).data},
            status=status.HTTP_201_CREATED,
        )

"""FilterSet definitions for reservation listing."""

from __future__ import annotations

import django_filters  # type: ignore

from .models import Reservation


class ReservationFilterSet(django_filters.FilterSet):
    property = django_filters.NumberFilter(field_name="property_id", lookup_expr="exact")
    room_type = django_filters.NumberFilter(field_name="room_type_id", lookup_expr="exact")
    guest = django_filters.NumberFilter(field_name="guest_id", lookup_expr="exact")
    status = django_filters.MultipleChoiceFilter(choices=Reservation.Status.choices)

    arrival_from = django_filters.DateFilter(field_name="arrival_date", lookup_expr="gte")
    arrival_to = django_filters.DateFilter(field_name="arrival_date", lookup_expr="lte")
    departure_from = django_filters.DateFilter(field_name="departure_date", lookup_expr="gte")
    departure_to = django_filters.DateFilter(field_name="departure_date", lookup_expr="lte")

    # Stays that cover this night
    in_house_on = django_filters.DateFilter(method="filter_in_house_on")

    class Meta:
        model = Reservation
        fields = ["property", "room_type", "guest", "status"]

    def filter_in_house_on(self, queryset, name, value):  # type: ignore
        return queryset.occupying_night(value)

"""URL routing for the reservation domain."""

from __future__ import annotations

from django.urls import include, path  # type: ignore
from rest_framework.routers import DefaultRouter  # type: ignore

from .views import AvailabilityCalendarView, AvailabilityCheckView, ReservationViewSet

router = DefaultRouter()
router.register(r"reservations", ReservationViewSet, basename="reservation")

urlpatterns = [
    path(
        "properties/<int:property_id>/availability/check/",
        AvailabilityCheckView.as_view(),
        name="availability-check",
    ),
    path(
        "properties/<int:property_id>/room-types/<int:room_type_id>/availability/",
        AvailabilityCalendarView.as_view(),
        name="availability-calendar",
    ),
    path("", include(router.urls)),
]
